"""
Zobrist hashing.

One 64-bit key per (row, col, piece). Keys come from a fixed seed so hash
values are reproducible across runs and test sessions.
ZOBRIST[row][col][piece - 1]  (PLAYER=1 -> 0, AI=2 -> 1)

Cache keys also fold in the side to move: the same placement scores
differently for PLAYER and AI, and either side may search the same cache.
"""

import random
from typing import List, Tuple

from .board import Board
from .constants import ROWS, COLS, EMPTY, AI, ZOBRIST_SEED

KeyTable = List[List[List[int]]]


def generate_keys(seed: int = ZOBRIST_SEED) -> Tuple[KeyTable, int]:
    """Draws ROWS x COLS x 2 distinct, non-zero piece keys, then one side-to-move key."""
    rng = random.Random(seed)
    seen = set()

    def draw() -> int:
        # A duplicate key would silently merge two different cells
        while True:
            key = rng.getrandbits(64)
            if key and key not in seen:
                seen.add(key)
                return key

    table = [[[draw(), draw()] for _ in range(COLS)] for _ in range(ROWS)]
    return table, draw()


ZOBRIST, SIDE_TO_MOVE = generate_keys()


def compute_board_hash(board: Board) -> int:
    """Compute the Zobrist hash for a full board from scratch."""
    h = 0
    for r in range(ROWS):
        for c in range(COLS):
            cell = board[r][c]
            if cell != EMPTY:
                h ^= ZOBRIST[r][c][cell - 1]
    return h


def update_hash(h: int, row: int, col: int, piece: int) -> int:
    """Adds or removes one piece: XOR is its own inverse."""
    return h ^ ZOBRIST[row][col][piece - 1]


def cache_key(h: int, piece: int) -> int:
    """Placement hash plus the side to move."""
    return h ^ SIDE_TO_MOVE if piece == AI else h
