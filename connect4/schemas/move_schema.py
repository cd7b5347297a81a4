from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List

from connect4.engine.constants import ROWS, COLS, EMPTY, PLAYER, AI
from connect4.models.enums import Difficulty

class MoveRequest(BaseModel):
    # Ignore unknown envelope fields so callers can add tracing data
    model_config = ConfigDict(extra='ignore')

    board: List[List[int]]
    difficulty: Difficulty = Difficulty.MEDIUM
    piece: int = AI
    # Correlation id: a response only counts if it matches the latest request
    move_id: int

    @field_validator("board")
    @classmethod
    def check_shape(cls, board: List[List[int]]) -> List[List[int]]:
        if len(board) != ROWS or any(len(row) != COLS for row in board):
            raise ValueError(f"board must be {ROWS}x{COLS}")
        if any(cell not in (EMPTY, PLAYER, AI) for row in board for cell in row):
            raise ValueError("cells must be 0, 1 or 2")
        return board

    @field_validator("piece")
    @classmethod
    def check_piece(cls, piece: int) -> int:
        if piece not in (PLAYER, AI):
            raise ValueError("piece must be 1 or 2")
        return piece

class MoveResponse(BaseModel):
    col: int = Field(ge=0, lt=COLS)
    move_id: int
