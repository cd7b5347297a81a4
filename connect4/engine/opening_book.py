"""
Opening book for the top tiers.

In Connect Four the centre column is objectively strongest for both players,
so the book steers the engine toward the centre while fewer than
OPENING_BOOK_MAX_PIECES pieces are on the board. Specific answers for the
second mover's first two turns are stored by exact position; anything else
in the opening falls back to the first open column, centre-out.
"""

from typing import Dict, Optional, Tuple

from connect4.core.tier_registry import TierConfig
from .board import Board, empty_board, drop_piece, valid_cols
from .constants import COLS, EMPTY, PLAYER, AI, CENTER_COL, MOVE_ORDER, OPENING_BOOK_MAX_PIECES

BookKey = Tuple[int, ...]


def encode(board: Board) -> BookKey:
    """Flat tuple of cell values, top-to-bottom, left-to-right."""
    return tuple(cell for row in board for cell in row)


def _first_open(board: Board) -> Optional[int]:
    cols = valid_cols(board)
    return cols[0] if cols else None


def _build_book() -> Dict[BookKey, int]:
    book = {}

    # AI turn 1 -- player has made exactly 1 move: take the centre
    for player_col in range(COLS):
        board, _ = drop_piece(empty_board(), player_col, PLAYER)
        book[encode(board)] = _first_open(board)

    # AI turn 2 -- player, AI centre, player: keep building the centre stack,
    # otherwise the free column closest to it
    for p1 in range(COLS):
        for p2 in range(COLS):
            board, _ = drop_piece(empty_board(), p1, PLAYER)
            board, _ = drop_piece(board, CENTER_COL, AI)
            board, _ = drop_piece(board, p2, PLAYER)
            book[encode(board)] = _first_open(board)

    return book


BOOK = _build_book()


def get_opening_book_move(board: Board, tier: TierConfig) -> Optional[int]:
    """
    Look up the current position in the opening book.
    Returns the best column, or None when the tier has no book or the
    position is past the opening.
    """
    if not tier.opening_book:
        return None

    total_pieces = sum(1 for row in board for cell in row if cell != EMPTY)
    if total_pieces > OPENING_BOOK_MAX_PIECES:
        return None

    # 1. Exact match
    book_col = BOOK.get(encode(board))
    if book_col is not None and board[0][book_col] == EMPTY:
        return book_col

    # 2. Centre-first heuristic (instant, no search)
    for col in MOVE_ORDER:
        if board[0][col] == EMPTY:
            return col

    return None
