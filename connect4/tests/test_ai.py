import random
import unittest
from connect4.core.tier_registry import TierRegistry
from connect4.engine.ai import ConnectFourAI, strategic_score
from connect4.engine.board import (
    empty_board, board_from_rows, copy_board, drop_piece, check_win, valid_cols,
    is_draw, validate_board,
)
from connect4.engine.constants import ROWS, COLS, EMPTY, PLAYER, AI, CENTER_COL
from connect4.engine.evaluation import score_board
from connect4.engine.exceptions import InvalidBoardError, NoLegalMoveError
from connect4.engine.transposition import TranspositionTable
from connect4.models.enums import Difficulty

EMPTY_ROW = "......."
ALL_TIERS = list(Difficulty)
CHEAP_TIERS = [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]

MIDGAME = [
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    "..PA...",
    "..AP...",
    ".APAP..",
]

SECOND_MIDGAME = [
    EMPTY_ROW,
    EMPTY_ROW,
    "...P...",
    "...A...",
    "..PPA..",
    ".AAPP.A",
]


def only_center_open():
    """Every column full except the centre; no four-in-a-row anywhere."""
    board = [[PLAYER if (r // 3 + c) % 2 == 0 else AI for c in range(COLS)] for r in range(ROWS)]
    for r in range(ROWS):
        board[r][CENTER_COL] = EMPTY
    return board


class AlwaysBlunder(random.Random):
    def random(self):
        return 0.0

    def choice(self, seq):
        return seq[-1]


class NeverBlunder(random.Random):
    def random(self):
        return 0.99


class TestImmediateTactics(unittest.TestCase):
    def setUp(self):
        self.ai = ConnectFourAI(tt=TranspositionTable(max_size=100_000), seed=7)

    def test_takes_win_every_tier(self):
        """
        Scenario: AI has three in a row with exactly one completing square.
        Every tier plays it, even the ones that blunder.
        """
        board = board_from_rows([
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            "PP.....",
            "AAA.P..",
        ])
        for difficulty in ALL_TIERS:
            col = self.ai.select_move(board, difficulty)
            self.assertEqual(col, 3, difficulty)
            next_board, _ = drop_piece(board, col, AI)
            self.assertEqual(check_win(next_board).winner, AI)

    def test_blocks_every_tier(self):
        board = board_from_rows([
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            "AA.....",
            "PPP....",
        ])
        for difficulty in ALL_TIERS:
            self.assertEqual(self.ai.select_move(board, difficulty), 3, difficulty)

    def test_win_preferred_over_block(self):
        board = board_from_rows([
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            "......A",
            "......A",
            "PPP...A",
        ])
        for difficulty in ALL_TIERS:
            self.assertEqual(self.ai.select_move(board, difficulty), 6, difficulty)

    def test_plays_for_either_side(self):
        board = board_from_rows([
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            "AA.....",
            "PPP....",
        ])
        self.assertEqual(self.ai.select_move(board, Difficulty.HARD, piece=PLAYER), 3)


class TestSelectMove(unittest.TestCase):
    def setUp(self):
        self.ai = ConnectFourAI(tt=TranspositionTable(max_size=100_000), seed=7)

    def test_book_answers_center(self):
        """
        Scenario: empty board plus any single opening move.
        The top tiers answer in the centre without searching.
        """
        for col in range(COLS):
            board, _ = drop_piece(empty_board(), col, PLAYER)
            for difficulty in (Difficulty.GURU, Difficulty.VICTOR):
                self.assertEqual(self.ai.select_move(board, difficulty), CENTER_COL)
                self.assertIsNone(self.ai.last_result)

    def test_one_column_left(self):
        board = only_center_open()
        for difficulty in ALL_TIERS:
            self.assertEqual(self.ai.select_move(board, difficulty), CENTER_COL, difficulty)

    def test_legal_column(self):
        board = board_from_rows(MIDGAME)
        for difficulty in CHEAP_TIERS:
            col = self.ai.select_move(board, difficulty)
            self.assertIn(col, valid_cols(board))

    def test_strategic_tier_searches(self):
        tiers = TierRegistry()
        tiers.override(Difficulty.VICTOR, depth=3)
        ai = ConnectFourAI(tiers=tiers, tt=TranspositionTable(max_size=100_000))
        board = board_from_rows(MIDGAME)

        col = ai.select_move(board, Difficulty.VICTOR)
        self.assertIn(col, valid_cols(board))
        self.assertIsNotNone(ai.last_result)
        self.assertGreater(ai.cache_size, 0)

    def test_does_not_mutate_board(self):
        board = board_from_rows(MIDGAME)
        snapshot = copy_board(board)
        self.ai.select_move(board, Difficulty.HARD)
        self.assertEqual(board, snapshot)

    def test_deterministic_across_engines(self):
        board = board_from_rows(MIDGAME)
        first = ConnectFourAI(seed=1).select_move(board, Difficulty.HARD)
        second = ConnectFourAI(seed=2).select_move(board, Difficulty.HARD)
        self.assertEqual(first, second)

    def test_repeated_shortcut_moves_stable(self):
        board, _ = drop_piece(empty_board(), 0, PLAYER)
        cols = {self.ai.select_move(board, Difficulty.GURU) for _ in range(3)}
        self.assertEqual(cols, {CENTER_COL})

    def test_seeded_blunders_reproducible(self):
        board = board_from_rows(MIDGAME)
        a = ConnectFourAI(seed=42)
        b = ConnectFourAI(seed=42)
        moves_a = [a.select_move(board, Difficulty.EASY) for _ in range(5)]
        moves_b = [b.select_move(board, Difficulty.EASY) for _ in range(5)]
        self.assertEqual(moves_a, moves_b)

    def test_blunder_path(self):
        ai = ConnectFourAI(rng=AlwaysBlunder())
        board = empty_board()
        self.assertEqual(ai.select_move(board, Difficulty.EASY), valid_cols(board)[-1])
        self.assertIsNone(ai.last_result)

    def test_no_blunder_for_strong_tiers(self):
        ai = ConnectFourAI(rng=AlwaysBlunder(), tt=TranspositionTable(max_size=100_000))
        board = board_from_rows(MIDGAME)
        ai.select_move(board, Difficulty.HARD)
        self.assertIsNotNone(ai.last_result)

    def test_search_path_when_dice_spare_us(self):
        ai = ConnectFourAI(rng=NeverBlunder())
        ai.select_move(empty_board(), Difficulty.EASY)
        self.assertIsNotNone(ai.last_result)
        self.assertEqual(ai.last_result.depth, 3)

    def test_cache_lifecycle(self):
        board = board_from_rows(MIDGAME)
        self.ai.select_move(board, Difficulty.HARD)
        self.assertGreater(self.ai.cache_size, 0)
        self.ai.clear_cache()
        self.assertEqual(self.ai.cache_size, 0)


class TestWarmCache(unittest.TestCase):
    """One engine reused across calls answers like a fresh engine."""

    def setUp(self):
        self.boards = [board_from_rows(MIDGAME), board_from_rows(SECOND_MIDGAME)]
        self.tiers = TierRegistry()
        self.tiers.override(Difficulty.VICTOR, depth=4)

    def test_repeated_calls_same_column(self):
        for board in self.boards:
            for difficulty in (Difficulty.HARD, Difficulty.VICTOR):
                ai = ConnectFourAI(tiers=self.tiers, seed=0)
                first = ai.select_move(board, difficulty)
                first_score = ai.last_result.best_score if ai.last_result else None
                second = ai.select_move(board, difficulty)
                second_score = ai.last_result.best_score if ai.last_result else None

                fresh = ConnectFourAI(tiers=self.tiers, seed=0).select_move(board, difficulty)
                self.assertEqual(first, second, difficulty)
                self.assertEqual(first_score, second_score, difficulty)
                self.assertEqual(second, fresh, difficulty)

    def test_sides_do_not_share_scores(self):
        """
        Scenario: equal piece counts, so either side may be asked to move.
        PLAYER searches first on a warm engine, then AI. AI's answer matches a
        fresh engine's.
        """
        for board in self.boards:
            warm = ConnectFourAI(seed=0)
            warm.select_move(board, Difficulty.HARD, piece=PLAYER)
            col = warm.select_move(board, Difficulty.HARD, piece=AI)
            warm_score = warm.last_result.best_score if warm.last_result else None

            fresh = ConnectFourAI(seed=0)
            self.assertEqual(col, fresh.select_move(board, Difficulty.HARD, piece=AI))
            fresh_score = fresh.last_result.best_score if fresh.last_result else None
            self.assertEqual(warm_score, fresh_score)

    def test_evaluator_switch_clears_cache(self):
        self.tiers.override(Difficulty.VICTOR, depth=3)
        board = self.boards[0]
        ai = ConnectFourAI(tiers=self.tiers, seed=0)
        ai.select_move(board, Difficulty.HARD)
        col = ai.select_move(board, Difficulty.VICTOR)
        score = ai.last_result.best_score

        fresh = ConnectFourAI(tiers=self.tiers, seed=0)
        self.assertEqual(col, fresh.select_move(board, Difficulty.VICTOR))
        self.assertEqual(score, fresh.last_result.best_score)


class TestErrors(unittest.TestCase):
    def setUp(self):
        self.ai = ConnectFourAI(seed=0)

    def test_full_board(self):
        board = only_center_open()
        for r in range(ROWS):
            board[r][CENTER_COL] = AI if r < 3 else PLAYER
        # A drawn board is legal input, it just has no column to offer
        validate_board(board)
        self.assertTrue(is_draw(board))
        with self.assertRaises(NoLegalMoveError):
            self.ai.select_move(board, Difficulty.MEDIUM)

    def test_invalid_board(self):
        board = board_from_rows([EMPTY_ROW] * 4 + ["P......", "......."])
        with self.assertRaises(InvalidBoardError):
            self.ai.select_move(board, Difficulty.MEDIUM)

    def test_unknown_difficulty(self):
        with self.assertRaises(ValueError):
            self.ai.select_move(empty_board(), "impossible")


class TestGiftAvoidance(unittest.TestCase):
    def setUp(self):
        # PLAYER's row-4 three needs (4,3); playing column 3 hands it over
        self.board = board_from_rows([
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            "PPP....",
            "AAP.A..",
        ])
        self.cols = valid_cols(self.board)

    def test_detects_gift(self):
        self.assertTrue(ConnectFourAI._gives_away_win(self.board, 3, AI))
        self.assertFalse(ConnectFourAI._gives_away_win(self.board, 2, AI))

    def test_switches_away(self):
        ai = ConnectFourAI(seed=0)
        col = ai._avoid_gift(self.board, 3, self.cols, AI)
        self.assertNotEqual(col, 3)
        self.assertFalse(ConnectFourAI._gives_away_win(self.board, col, AI))

    def test_safe_move_kept(self):
        ai = ConnectFourAI(seed=0)
        self.assertEqual(ai._avoid_gift(self.board, 5, self.cols, AI), 5)

    def test_all_alternatives_gift(self):
        ai = ConnectFourAI(seed=0)
        self.assertEqual(ai._avoid_gift(self.board, 3, [3], AI), 3)

    def test_selected_move_is_not_a_gift(self):
        ai = ConnectFourAI(rng=NeverBlunder(), tt=TranspositionTable(max_size=100_000))
        for difficulty in (Difficulty.MEDIUM, Difficulty.HARD):
            self.assertNotEqual(ai.select_move(self.board, difficulty), 3, difficulty)


class TestStrategicScore(unittest.TestCase):
    def test_adds_rule_score(self):
        board = board_from_rows([EMPTY_ROW] * 5 + ["P.....A"])
        self.assertNotEqual(strategic_score(board, PLAYER), score_board(board, PLAYER))
        self.assertEqual(strategic_score(empty_board(), PLAYER), 0)


if __name__ == '__main__':
    unittest.main()
