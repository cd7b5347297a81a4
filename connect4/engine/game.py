import logging
from typing import List, Optional, Dict, Any, Union

from connect4.models.enums import Difficulty
from .ai import ConnectFourAI
from .board import Board, Square, empty_board, get_drop_row, check_win, is_draw, format_board
from .constants import COLS, PLAYER, AI

# Logger setup
logger = logging.getLogger(__name__)

class ConnectFour:
    def __init__(self, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                 ai: Optional[ConnectFourAI] = None):
        """
        Turn-state for one game against the engine.
        Board uses (row, col) indexing, row 0 is the TOP.
        Values: 0=Empty, 1=Player1, 2=Player2
        """
        self.ai = ai or ConnectFourAI()
        self.difficulty = Difficulty(difficulty)
        self.board: Board = empty_board()
        self.current_turn = PLAYER
        self.winner: Optional[int] = None
        self.winning_cells: List[Square] = []
        self.history: List[Dict[str, Any]] = []

    def new_game(self):
        """Resets the board. Old cache entries are irrelevant to the new game."""
        self.board = empty_board()
        self.current_turn = PLAYER
        self.winner = None
        self.winning_cells = []
        self.history = []
        self.ai.clear_cache()
        logger.info("New game at %s difficulty", self.difficulty)

    def set_difficulty(self, difficulty: Union[Difficulty, str]):
        """Cached scores belong to one evaluator, so a tier change drops them."""
        self.difficulty = Difficulty(difficulty)
        self.ai.clear_cache()
        logger.info("Difficulty set to %s", self.difficulty)

    def get_valid_moves(self) -> List[int]:
        """Returns a list of column indices that are not full."""
        return [c for c in range(COLS) if self.board[0][c] == 0]

    def is_valid_move(self, col: int) -> bool:
        if col < 0 or col >= COLS:
            return False
        return self.board[0][col] == 0

    def is_over(self) -> bool:
        return self.winner is not None or self.is_draw()

    def drop_piece(self, col: int) -> bool:
        """
        Drops a piece into the specified column.
        Returns True if successful, False if invalid or game over.
        """
        if self.winner is not None or not self.is_valid_move(col):
            return False

        r = get_drop_row(self.board, col)
        self.board[r][col] = self.current_turn
        self.history.append({
            "player": self.current_turn,
            "column": col
        })

        win = check_win(self.board)
        if win is not None:
            self.winner = win.winner
            self.winning_cells = win.cells
        else:
            self.switch_turn()
        return True

    def play_ai_turn(self) -> Optional[int]:
        """Lets the engine move for whoever's turn it is. Returns the column played."""
        if self.is_over():
            return None
        col = self.ai.select_move(self.board, self.difficulty, piece=self.current_turn)
        self.drop_piece(col)
        return col

    def switch_turn(self):
        self.current_turn = AI if self.current_turn == PLAYER else PLAYER

    def is_draw(self) -> bool:
        """Returns True if board is full and no winner."""
        return self.winner is None and is_draw(self.board)

    def get_visual_board(self) -> str:
        return format_board(self.board)
