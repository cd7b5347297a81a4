#!/usr/bin/env python3
"""
Tier vs Tier Simulation Script

Plays full games between two difficulty tiers to measure their relative
strength (by default Guru against Victor, the only difference being Victor's
Allis-rule evaluation and root ordering).

Each series opens with a forced first move into every column in turn, so a
series of COLS games covers COLS distinct starting positions. The second
series swaps who moves first.

Features:
- Depth override so a game finishes in seconds instead of minutes
- A separate engine (and transposition table) per contestant, cleared per game
- Per-game result lines plus a win/draw/loss summary

Exit Codes:
  0: Challenger scored at least as many points as the baseline
  1: Challenger scored fewer points
"""

import argparse
import sys
import os
import logging
from typing import Dict, Tuple

# Add project root to path so we can import from connect4
sys.path.append(os.path.join(os.path.dirname(__file__), '../'))

from connect4.core import settings
from connect4.core.tier_registry import TierRegistry
from connect4.engine.ai import ConnectFourAI
from connect4.engine.constants import COLS, PLAYER, AI
from connect4.engine.game import ConnectFour
from connect4.models.enums import Difficulty


def play_game(first: Tuple[str, ConnectFourAI], second: Tuple[str, ConnectFourAI],
              opening_col: int) -> Tuple[int, int]:
    """
    Plays one game. `first` moves first (PLAYER), after a forced opening move.

    Returns:
        Tuple of (winner piece or 0 for a draw, total half-moves)
    """
    first_tier, first_ai = first
    second_tier, second_ai = second
    first_ai.clear_cache()
    second_ai.clear_cache()

    game = ConnectFour(difficulty=first_tier, ai=first_ai)
    game.drop_piece(opening_col)

    while not game.is_over():
        if game.current_turn == PLAYER:
            col = first_ai.select_move(game.board, first_tier, piece=PLAYER)
        else:
            col = second_ai.select_move(game.board, second_tier, piece=AI)
        game.drop_piece(col)

    return (game.winner or 0), len(game.history)


def run_series(label: str, first: Tuple[str, ConnectFourAI], second: Tuple[str, ConnectFourAI],
               challenger: str, totals: Dict[str, float]):
    print(f"\n{label}")
    print("-" * 60)
    for opening_col in range(COLS):
        winner, moves = play_game(first, second, opening_col)
        if winner == 0:
            outcome = "DRAW"
            totals[first[0]] += 0.5
            totals[second[0]] += 0.5
        else:
            winning_tier = first[0] if winner == PLAYER else second[0]
            totals[winning_tier] += 1
            outcome = f"{winning_tier.upper()} WINS"
        marker = "*" if (winner == PLAYER and first[0] == challenger) or (winner == AI and second[0] == challenger) else " "
        print(f"{marker} opening col {opening_col} | {outcome:<14} | {moves} moves")


def main():
    parser = argparse.ArgumentParser(description="Play tier vs tier Connect Four games.")
    parser.add_argument("--baseline", default=Difficulty.GURU.value, choices=[d.value for d in Difficulty])
    parser.add_argument("--challenger", default=Difficulty.VICTOR.value, choices=[d.value for d in Difficulty])
    parser.add_argument("--depth", type=int, default=4, help="Search depth override for both tiers")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.baseline == args.challenger:
        parser.error("baseline and challenger must differ")

    # Private registry so overrides don't leak into the shared singleton
    tiers = TierRegistry()
    for tier in (args.baseline, args.challenger):
        tiers.override(tier, depth=args.depth, blunder_chance=0.0)

    baseline = (args.baseline, ConnectFourAI(tiers=tiers, seed=0))
    challenger = (args.challenger, ConnectFourAI(tiers=tiers, seed=1))
    totals = {args.baseline: 0.0, args.challenger: 0.0}

    print(f"Simulating {args.challenger} vs {args.baseline} at depth {args.depth}")
    run_series(f"Series 1: {args.baseline} first, {args.challenger} second", baseline, challenger, args.challenger, totals)
    run_series(f"Series 2: {args.challenger} first, {args.baseline} second", challenger, baseline, args.challenger, totals)

    print("-" * 60)
    print(f"Summary: {args.challenger} {totals[args.challenger]:.1f} - {totals[args.baseline]:.1f} {args.baseline}")

    sys.exit(0 if totals[args.challenger] >= totals[args.baseline] else 1)


if __name__ == "__main__":
    main()
