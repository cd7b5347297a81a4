"""
Victor Allis's strategic rules for Connect Four.

Implements 6 of the 9 rules from Allis's 1988 thesis
"A Knowledge-Based Approach of Connect-Four":
  1. Claimeven   -- the controller of a parity claims every square of it
  2. Baseinverse -- two playable squares guarantee one
  3. Vertical    -- stacked empties with an odd upper square
  4. Before      -- gravity ensures a group completes first
  5. Aftereven   -- groups secured entirely via Claimeven
  6. Lowinverse  -- paired column low squares

Used by the Victor tier on top of the window-based evaluation.

Allis row numbering is 1-indexed from the bottom:
  board row 5 = Allis row 1 (odd) ... board row 0 = Allis row 6 (even)
The first player controls odd squares, the second player even squares.
Who moved first is inferred from piece counts so the rules stay correct
when the board is presented from either side's perspective.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .board import Board, Square, WINDOWS, get_drop_row, count_pieces, opponent, center_distance
from .constants import (
    ROWS, COLS, EMPTY, PLAYER, AI, CENTER_COL,
    VICTOR_CLAIMEVEN_3, VICTOR_CLAIMEVEN_2, VICTOR_CLAIMEVEN_1,
    VICTOR_BASEINVERSE,
    VICTOR_VERTICAL_3, VICTOR_VERTICAL_2,
    VICTOR_BEFORE_3, VICTOR_BEFORE_2,
    VICTOR_AFTEREVEN_3, VICTOR_AFTEREVEN_2,
    VICTOR_LOWINVERSE,
)


@dataclass
class Group:
    """A potential four-in-a-row that is still live (pieces from one side only)."""
    squares: Tuple[Square, ...]
    owner: int
    empty_squares: List[Square]
    filled_count: int

    def lowest_empty(self) -> Square:
        # Highest row index = lowest on the board
        return max(self.empty_squares)


# --- Parity helpers ---

def is_odd_square(row: int) -> bool:
    return (ROWS - row) % 2 == 1


def is_even_square(row: int) -> bool:
    return (ROWS - row) % 2 == 0


def get_first_player(board: Board) -> int:
    """The first player always has equal or more pieces than the second player."""
    player_count, ai_count = count_pieces(board)
    return PLAYER if player_count >= ai_count else AI


def is_favorable_parity(row: int, piece: int, first_player: int) -> bool:
    if piece == first_player:
        return is_odd_square(row)
    return is_even_square(row)


def is_playable(board: Board, row: int, col: int) -> bool:
    """Empty and sitting on the bottom row or on a filled square."""
    if board[row][col] != EMPTY:
        return False
    return row == ROWS - 1 or board[row + 1][col] != EMPTY


# --- Group enumeration ---

def enumerate_groups(board: Board) -> List[Group]:
    """All live groups that at least one side has started."""
    groups = []
    for line in WINDOWS:
        player_count = 0
        ai_count = 0
        empty_squares = []
        for r, c in line:
            cell = board[r][c]
            if cell == PLAYER:
                player_count += 1
            elif cell == AI:
                ai_count += 1
            else:
                empty_squares.append((r, c))

        # Dead group, or nobody has claimed it yet
        if player_count and ai_count:
            continue
        if not player_count and not ai_count:
            continue

        owner = PLAYER if player_count else AI
        groups.append(Group(line, owner, empty_squares, player_count or ai_count))
    return groups


def _by_filled(filled: int, three: int, two: int, one: int = 0) -> int:
    if filled == 3:
        return three
    if filled == 2:
        return two
    return one


# --- Rule 1: Claimeven ---

def score_claimeven(groups: List[Group], piece: int, first_player: int) -> int:
    score = 0
    for g in groups:
        if not g.empty_squares:
            continue
        # Each side is tested against its own parity
        if all(is_favorable_parity(r, g.owner, first_player) for r, _ in g.empty_squares):
            value = _by_filled(g.filled_count, VICTOR_CLAIMEVEN_3, VICTOR_CLAIMEVEN_2, VICTOR_CLAIMEVEN_1)
            score += value if g.owner == piece else -value
    return score


# --- Rule 2: Baseinverse ---

def score_baseinverse(board: Board, groups: List[Group], piece: int) -> int:
    opp = opponent(piece)
    playable = set()
    for c in range(COLS):
        r = get_drop_row(board, c)
        if r >= 0:
            playable.add((r, c))

    if len(playable) < 2:
        return 0

    score = 0
    for g in groups:
        if g.owner != opp or g.filled_count < 2:
            continue
        # The controller is guaranteed one of two playable squares,
        # so a group needing both is disrupted
        if sum(1 for sq in g.empty_squares if sq in playable) >= 2:
            score += VICTOR_BASEINVERSE
    return score


# --- Rule 3: Vertical ---

def score_vertical(board: Board, groups: List[Group], piece: int, first_player: int) -> int:
    opp = opponent(piece)
    score = 0

    for c in range(COLS):
        for r in range(ROWS - 1):
            # r is the upper square, r + 1 the lower one
            if board[r][c] != EMPTY or board[r + 1][c] != EMPTY:
                continue
            if not is_odd_square(r):
                continue

            # Gravity hands the odd upper square to the first player
            for g in groups:
                if (r, c) not in g.squares or (r + 1, c) not in g.squares:
                    continue
                neutralized = g.owner == opp and opp != first_player
                secured = g.owner == piece and piece == first_player
                if neutralized or secured:
                    score += _by_filled(g.filled_count, VICTOR_VERTICAL_3, VICTOR_VERTICAL_2)
    return score


# --- Rule 4: Before ---

def score_before(board: Board, groups: List[Group], piece: int) -> int:
    opp = opponent(piece)
    mine = [g for g in groups if g.owner == piece and g.filled_count >= 2 and g.empty_squares]
    theirs = [g for g in groups if g.owner == opp and g.filled_count >= 2 and g.empty_squares]

    score = 0
    for g in mine:
        my_row, my_col = g.lowest_empty()
        if not is_playable(board, my_row, my_col):
            continue

        for h in theirs:
            their_row, _ = h.lowest_empty()
            # At or below the opponent's lowest need -> resolved first
            if my_row >= their_row:
                score += VICTOR_BEFORE_3 if g.filled_count == 3 else VICTOR_BEFORE_2
    return score


# --- Rule 5: Aftereven ---

def score_aftereven(groups: List[Group], piece: int, first_player: int) -> int:
    score = 0
    for g in groups:
        if g.owner != piece or not g.empty_squares:
            continue
        if not all(is_favorable_parity(r, piece, first_player) for r, _ in g.empty_squares):
            continue
        # Claimeven needs the square below as the follow-up partner
        if any(r == ROWS - 1 for r, _ in g.empty_squares):
            continue
        score += _by_filled(g.filled_count, VICTOR_AFTEREVEN_3, VICTOR_AFTEREVEN_2)
    return score


# --- Rule 6: Lowinverse ---

def score_lowinverse(board: Board, groups: List[Group], piece: int) -> int:
    opp = opponent(piece)

    low_squares = []
    for c in range(COLS):
        empties = [r for r in range(ROWS) if board[r][c] == EMPTY]
        if len(empties) >= 2:
            low_squares.append((max(empties), c))

    if len(low_squares) < 2:
        return 0

    threats = [g for g in groups if g.owner == opp and g.filled_count >= 2]
    score = 0
    for i, low_a in enumerate(low_squares):
        for low_b in low_squares[i + 1:]:
            for g in threats:
                if low_a in g.empty_squares and low_b in g.empty_squares:
                    score += VICTOR_LOWINVERSE
    return score


def victor_evaluate(board: Board, piece: int) -> int:
    """
    Rule-based score for `piece`, added to (not replacing) the window score.
    """
    groups = enumerate_groups(board)
    first_player = get_first_player(board)

    return (
        score_claimeven(groups, piece, first_player)
        + score_baseinverse(board, groups, piece)
        + score_vertical(board, groups, piece, first_player)
        + score_before(board, groups, piece)
        + score_aftereven(groups, piece, first_player)
        + score_lowinverse(board, groups, piece)
    )


def victor_move_order(board: Board, piece: int, cols: List[int]) -> List[int]:
    """
    Reorder root columns by threat-based priority, best first.
    Ties keep their incoming order.
    """
    first_player = get_first_player(board)
    groups = enumerate_groups(board)
    opp = opponent(piece)

    scored = []
    for col in cols:
        row = get_drop_row(board, col)
        if row < 0:
            scored.append((col, float("-inf")))
            continue

        # Center preference
        move_score = (CENTER_COL - center_distance(col)) * 2
        if is_favorable_parity(row, piece, first_player):
            move_score += 4

        for g in groups:
            if (row, col) not in g.empty_squares:
                continue
            if g.owner == piece:
                move_score += _by_filled(g.filled_count, 50, 8, 2)
            elif g.owner == opp:
                move_score += _by_filled(g.filled_count, 40, 5)

        scored.append((col, move_score))

    scored.sort(key=lambda item: item[1], reverse=True)
    return [col for col, _ in scored]
