from typing import Sequence

from .board import Board, WINDOWS, opponent
from .constants import (
    ROWS, CENTER_COL, EMPTY,
    SCORE_WIN, SCORE_THREE, SCORE_TWO, SCORE_OPP_THREE, SCORE_CENTER,
)


def score_window(window: Sequence[int], piece: int) -> int:
    opp = opponent(piece)
    mine = window.count(piece)
    theirs = window.count(opp)
    empty = window.count(EMPTY)

    if mine == 4:
        return SCORE_WIN
    if mine == 3 and empty == 1:
        return SCORE_THREE
    if mine == 2 and empty == 2:
        return SCORE_TWO
    if theirs == 3 and empty == 1:
        return SCORE_OPP_THREE
    return 0


def score_board(board: Board, piece: int) -> int:
    """Heuristic value of a non-terminal position; higher favours `piece`."""
    score = 0

    # Center column bonus
    for r in range(ROWS):
        if board[r][CENTER_COL] == piece:
            score += SCORE_CENTER

    # Horizontal, vertical and both diagonal windows
    for window in WINDOWS:
        score += score_window([board[r][c] for r, c in window], piece)

    return score
