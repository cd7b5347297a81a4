import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from connect4.models.enums import TTFlag
from .board import Board, copy_board, check_win_at, get_drop_row, opponent
from .constants import MOVE_ORDER, EMPTY, WIN_SCORE, INFINITY
from .transposition import TranspositionTable, TTEntry
from .zobrist import compute_board_hash, update_hash, cache_key

logger = logging.getLogger(__name__)

ScoreFn = Callable[[Board, int], int]

# Terminal scores start here; heuristics never reach it
WIN_THRESHOLD = WIN_SCORE


@dataclass
class SearchResult:
    best_move: int
    best_score: int
    depth: int
    nodes: int

    @property
    def outcome(self) -> str:
        if self.best_score >= WIN_THRESHOLD:
            return "WIN"
        if self.best_score <= -WIN_THRESHOLD:
            return "LOSS"
        return "UNKNOWN"


class Searcher:
    """
    Negamax with alpha-beta pruning over a private working copy of the board.
    The transposition table is injected so it can outlive a single search.
    """

    def __init__(self, tt: TranspositionTable, score_fn: ScoreFn):
        self.tt = tt
        self.score_fn = score_fn
        self.nodes = 0
        self._work: Board = []

    def iterative_deepening(self, board: Board, max_depth: int, piece: int,
                            root_cols: List[int]) -> SearchResult:
        """
        Search depth 1..max_depth. Each completed depth primes the TT and puts
        its best column first for the next depth.
        """
        self.nodes = 0
        self._work = copy_board(board)
        root_hash = compute_board_hash(board)
        opp = opponent(piece)

        best_col = root_cols[0]
        best_score = 0
        completed = 0

        for depth in range(1, max_depth + 1):
            ordered = [best_col] + [c for c in root_cols if c != best_col]
            alpha = -INFINITY
            iter_score = -INFINITY
            iter_col = ordered[0]

            for col in ordered:
                row = self._make(self._work, col, piece)
                child_hash = update_hash(root_hash, row, col, piece)
                score = -self.negamax(self._work, depth - 1, -INFINITY, -alpha, opp, child_hash, (row, col))
                self._unmake(self._work, row, col)

                if score > iter_score:
                    iter_score = score
                    iter_col = col
                if iter_score > alpha:
                    alpha = iter_score

            best_col, best_score, completed = iter_col, iter_score, depth
            self.tt.set(cache_key(root_hash, piece), TTEntry(depth, iter_score, TTFlag.EXACT, iter_col))
            logger.debug("depth=%d best=%d score=%d nodes=%d", depth, iter_col, iter_score, self.nodes)

            # Nothing deeper can beat a proven fastest win
            if iter_score >= WIN_THRESHOLD:
                break

        return SearchResult(best_col, best_score, completed, self.nodes)

    def negamax(self, board: Board, depth: int, alpha: int, beta: int, piece: int,
                h: int, last_move: Optional[Tuple[int, int]] = None) -> int:
        """
        Score of `board` for the side to move (`piece`). Children are applied
        in place on `board` and undone before returning.
        """
        self.nodes += 1

        # 1. Did the move that produced this node win? Shallower losses weigh more.
        if last_move is not None and check_win_at(board, *last_move):
            return -(WIN_SCORE + depth)

        # 2. Full board -> draw
        if all(cell != EMPTY for cell in board[0]):
            return 0

        if depth == 0:
            return self.score_fn(board, piece)

        # 3. Transposition Table Cache
        # Bounds only from same-depth entries; deeper ones just order moves
        orig_alpha = alpha
        key = cache_key(h, piece)
        entry = self.tt.get(key)
        hint = None
        if entry is not None:
            hint = entry.best_move
            if entry.depth == depth:
                if entry.flag == TTFlag.EXACT:
                    return entry.score
                if entry.flag == TTFlag.LOWER:
                    alpha = max(alpha, entry.score)
                elif entry.flag == TTFlag.UPPER:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score

        # 4. Recursive Search (TT move first, then center-out)
        opp = opponent(piece)
        best = -INFINITY
        best_move = None
        for col in self._ordered_moves(board, hint):
            row = self._make(board, col, piece)
            score = -self.negamax(board, depth - 1, -beta, -alpha, opp, update_hash(h, row, col, piece), (row, col))
            self._unmake(board, row, col)

            if score > best:
                best = score
                best_move = col
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break  # Beta Cutoff

        if best <= orig_alpha:
            flag = TTFlag.UPPER
        elif best >= beta:
            flag = TTFlag.LOWER
        else:
            flag = TTFlag.EXACT
        self.tt.set(key, TTEntry(depth, best, flag, best_move))
        return best

    def _ordered_moves(self, board: Board, hint: Optional[int]) -> List[int]:
        cols = [c for c in MOVE_ORDER if board[0][c] == EMPTY]
        if hint is not None and hint in cols:
            cols.remove(hint)
            cols.insert(0, hint)
        return cols

    def _make(self, board: Board, col: int, piece: int) -> int:
        row = get_drop_row(board, col)
        board[row][col] = piece
        return row

    def _unmake(self, board: Board, row: int, col: int):
        board[row][col] = EMPTY
