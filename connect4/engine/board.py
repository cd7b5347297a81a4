"""
Board model helpers.

Board uses (row, col) indexing.
Row 0 is the TOP of the board, row ROWS - 1 is the BOTTOM.
Values: 0=Empty, 1=Player, 2=AI

Every function here treats the board as immutable; the only code allowed to
write into a board in place is the searcher's private working copy.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from .constants import ROWS, COLS, CONNECT, EMPTY, PLAYER, AI, MOVE_ORDER, CENTER_COL
from .exceptions import InvalidBoardError

Board = List[List[int]]
Square = Tuple[int, int]

# Directions: Horizontal, Vertical, Diagonal \, Diagonal /
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]


class WinResult(NamedTuple):
    winner: int
    cells: List[Square]


def _build_windows() -> List[Tuple[Square, ...]]:
    windows = []
    for r in range(ROWS):
        for c in range(COLS):
            for dr, dc in DIRECTIONS:
                end_r = r + dr * (CONNECT - 1)
                end_c = c + dc * (CONNECT - 1)
                if 0 <= end_r < ROWS and 0 <= end_c < COLS:
                    windows.append(tuple((r + dr * i, c + dc * i) for i in range(CONNECT)))
    return windows


# Every four-cell line on the board (69 on a 6x7 board)
WINDOWS = _build_windows()


def empty_board() -> Board:
    return [[EMPTY for _ in range(COLS)] for _ in range(ROWS)]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


def opponent(piece: int) -> int:
    return PLAYER if piece == AI else AI


def get_drop_row(board: Board, col: int) -> int:
    """Returns the row index where a piece would land in `col`, or -1 if full."""
    for r in range(ROWS - 1, -1, -1):
        if board[r][col] == EMPTY:
            return r
    return -1


def drop_piece(board: Board, col: int, piece: int) -> Tuple[Board, int]:
    """
    Returns a NEW board with `piece` dropped into `col` plus the landing row.
    On a full column the original board comes back with row -1.
    """
    row = get_drop_row(board, col)
    if row == -1:
        return board, -1
    next_board = copy_board(board)
    next_board[row][col] = piece
    return next_board, row


def check_win_at(board: Board, r: int, c: int) -> bool:
    """Checks for 4-in-a-row originating from the placed piece."""
    player = board[r][c]
    if player == EMPTY:
        return False

    for dr, dc in DIRECTIONS:
        count = 1
        # Check positive direction
        for i in range(1, CONNECT):
            nr, nc = r + dr * i, c + dc * i
            if 0 <= nr < ROWS and 0 <= nc < COLS and board[nr][nc] == player:
                count += 1
            else:
                break
        # Check negative direction
        for i in range(1, CONNECT):
            nr, nc = r - dr * i, c - dc * i
            if 0 <= nr < ROWS and 0 <= nc < COLS and board[nr][nc] == player:
                count += 1
            else:
                break

        if count >= CONNECT:
            return True
    return False


def check_win(board: Board) -> Optional[WinResult]:
    """Scans every line for four equal marks. Returns winner + winning cells, or None."""
    for window in WINDOWS:
        r0, c0 = window[0]
        piece = board[r0][c0]
        if piece == EMPTY:
            continue
        if all(board[r][c] == piece for r, c in window[1:]):
            return WinResult(piece, list(window))
    return None


def is_draw(board: Board) -> bool:
    """Returns True if the top row is full."""
    return all(cell != EMPTY for cell in board[0])


def valid_cols(board: Board) -> List[int]:
    """Open columns in center-out order."""
    return [c for c in MOVE_ORDER if board[0][c] == EMPTY]


def count_pieces(board: Board) -> Tuple[int, int]:
    """Returns (player_count, ai_count)."""
    player_count = 0
    ai_count = 0
    for row in board:
        for cell in row:
            if cell == PLAYER:
                player_count += 1
            elif cell == AI:
                ai_count += 1
    return player_count, ai_count


def invert_board(board: Board) -> Board:
    """Swaps PLAYER and AI marks so the engine can play from the other side."""
    swap = {EMPTY: EMPTY, PLAYER: AI, AI: PLAYER}
    return [[swap[cell] for cell in row] for row in board]


def board_from_rows(rows: Sequence[str]) -> Board:
    """
    Builds a board from top-to-bottom strings.
    'P'/'X' = Player, 'A'/'O' = AI, anything else is empty.
    """
    symbols = {"P": PLAYER, "X": PLAYER, "A": AI, "O": AI}
    return [[symbols.get(ch, EMPTY) for ch in row] for row in rows]


def format_board(board: Board) -> str:
    """Generates an ASCII grid representation."""
    symbols = {EMPTY: ".", PLAYER: "X", AI: "O"}
    header = " " + " ".join(str(i) for i in range(COLS))
    rows_str = ["|" + "|".join(symbols[cell] for cell in row) + "|" for row in board]
    return header + "\n" + "\n".join(rows_str)


def validate_board(board: Board) -> None:
    """
    Rejects snapshots that cannot come from a legal, unfinished game.
    Either side may have moved first, so the counts may differ by one.
    """
    if len(board) != ROWS or any(len(row) != COLS for row in board):
        raise InvalidBoardError(f"Board must be {ROWS}x{COLS}")

    for r, row in enumerate(board):
        for c, cell in enumerate(row):
            if cell not in (EMPTY, PLAYER, AI):
                raise InvalidBoardError(f"Unknown cell value {cell!r} at ({r}, {c})")
            # Gravity: nothing may float above an empty cell
            if cell != EMPTY and r < ROWS - 1 and board[r + 1][c] == EMPTY:
                raise InvalidBoardError(f"Floating piece at ({r}, {c})")

    player_count, ai_count = count_pieces(board)
    if abs(player_count - ai_count) > 1:
        raise InvalidBoardError(
            f"Impossible piece counts: player={player_count}, ai={ai_count}"
        )

    win = check_win(board)
    if win is not None:
        raise InvalidBoardError(f"Game already won by {win.winner}")


def center_distance(col: int) -> int:
    return abs(col - CENTER_COL)
