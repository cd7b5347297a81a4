import logging
import random
from typing import List, Optional, Union

from connect4.core import settings
from connect4.core.tier_registry import TierConfig, TierRegistry, tier_registry
from connect4.models.enums import Difficulty
from .board import Board, drop_piece, check_win_at, valid_cols, validate_board, opponent
from .constants import AI
from .evaluation import score_board
from .exceptions import NoLegalMoveError
from .opening_book import get_opening_book_move
from .search import ScoreFn, Searcher, SearchResult
from .transposition import TranspositionTable
from .victor_rules import victor_evaluate, victor_move_order

logger = logging.getLogger(__name__)


def strategic_score(board: Board, piece: int) -> int:
    """Window score plus Victor Allis rule analysis."""
    return score_board(board, piece) + victor_evaluate(board, piece)


class ConnectFourAI:
    """
    Move selection across the skill tiers.

    The transposition table lives as long as this object so positions explored
    on move N benefit move N+1. Entries are keyed by placement and side to
    move; switching between the plain and strategic evaluators clears them.
    Not thread-safe; run one select_move at a time.
    """

    def __init__(self, tiers: Optional[TierRegistry] = None,
                 tt: Optional[TranspositionTable] = None,
                 rng: Optional[random.Random] = None,
                 seed: Optional[int] = None):
        self.tiers = tiers or tier_registry
        self.tt = tt if tt is not None else TranspositionTable()
        if rng is None:
            rng = random.Random(seed if seed is not None else settings.ENGINE_SEED)
        self.rng = rng
        self.last_result: Optional[SearchResult] = None
        # Evaluator the cached scores came from (strategic or not)
        self._cached_strategic: Optional[bool] = None

    def clear_cache(self):
        logger.info("Clearing transposition table (%d entries)", self.tt.size)
        self.tt.clear()

    @property
    def cache_size(self) -> int:
        return self.tt.size

    def select_move(self, board: Board, difficulty: Union[Difficulty, str], piece: int = AI) -> int:
        """
        Returns the column `piece` plays. Never mutates `board`.

        A full board is a legal, drawn position (validation accepts it), but
        there is no column to return: it raises NoLegalMoveError, which callers
        should check for with is_draw() first.
        """
        validate_board(board)
        tier = self.tiers.get(difficulty)
        opp = opponent(piece)
        self.last_result = None

        cols = valid_cols(board)
        if not cols:
            raise NoLegalMoveError("Board is full")

        # 1. Play winning move immediately (all difficulties)
        for col in cols:
            if self._wins(board, col, piece):
                logger.debug("[%s] immediate win in column %d", difficulty, col)
                return col

        # 2. Block opponent's immediate win (all difficulties)
        for col in cols:
            if self._wins(board, col, opp):
                logger.debug("[%s] blocking column %d", difficulty, col)
                return col

        # 3. Opening book (instant, no search needed for early game)
        book_move = get_opening_book_move(board, tier)
        if book_move is not None:
            logger.debug("[%s] opening book move %d", difficulty, book_move)
            return book_move

        # 4. Simulated blunder
        if tier.blunder_chance > 0 and self.rng.random() < tier.blunder_chance:
            col = self.rng.choice(cols)
            logger.debug("[%s] random blunder into column %d", difficulty, col)
            return col

        # 5. Iterative-deepening negamax
        best_col = self._search(board, tier, piece, cols)

        # 6. Gift-avoidance
        if tier.gift_avoidance:
            best_col = self._avoid_gift(board, best_col, cols, piece)

        return best_col

    def _search(self, board: Board, tier: TierConfig, piece: int, cols: List[int]) -> int:
        if self._cached_strategic is not None and self._cached_strategic != tier.strategic:
            self.clear_cache()
        self._cached_strategic = tier.strategic

        score_fn: ScoreFn = strategic_score if tier.strategic else score_board
        root_cols = victor_move_order(board, piece, cols) if tier.strategic else cols

        searcher = Searcher(self.tt, score_fn)
        result = searcher.iterative_deepening(board, tier.depth, piece, root_cols)
        self.last_result = result
        logger.debug(
            "[%s] search: column=%d score=%d depth=%d nodes=%d outcome=%s",
            tier.label, result.best_move, result.best_score, result.depth, result.nodes, result.outcome,
        )
        return result.best_move

    def _avoid_gift(self, board: Board, best_col: int, cols: List[int], piece: int) -> int:
        """
        If dropping in `best_col` lets the opponent win by dropping on top of
        it, switch to the first column without that problem. When every
        alternative gifts a win too, play `best_col` anyway.
        """
        if not self._gives_away_win(board, best_col, piece):
            return best_col

        for col in cols:
            if col != best_col and not self._gives_away_win(board, col, piece):
                logger.debug("Gift-avoidance: switching column %d -> %d", best_col, col)
                return col
        return best_col

    @staticmethod
    def _wins(board: Board, col: int, piece: int) -> bool:
        next_board, row = drop_piece(board, col, piece)
        return row >= 0 and check_win_at(next_board, row, col)

    @staticmethod
    def _gives_away_win(board: Board, col: int, piece: int) -> bool:
        """True when the opponent wins by dropping directly on top of our piece."""
        after, _ = drop_piece(board, col, piece)
        # A column we just filled can't be played on top of
        return ConnectFourAI._wins(after, col, opponent(piece))
