import sys
import os
import logging

# Ensure app module is in path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from connect4.core import settings
from connect4.engine.game import ConnectFour
from connect4.engine.constants import PLAYER
from connect4.models.enums import Difficulty

def choose_difficulty() -> Difficulty:
    options = [d.value for d in Difficulty]
    while True:
        choice = input(f"Difficulty {options} [medium]: ").strip().lower() or "medium"
        if choice in options:
            return Difficulty(choice)
        print("Unknown difficulty. Try again.")

def main():
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    print("=======================================")
    print("   CONNECT FOUR: Human vs Engine")
    print("=======================================")

    game = ConnectFour(difficulty=choose_difficulty())

    print(game.get_visual_board())

    while not game.is_over():

        # --- Human Turn (Player 1) ---
        if game.current_turn == PLAYER:
            valid_moves = game.get_valid_moves()
            try:
                user_input = input(f"\nYour Move (Columns {valid_moves}): ")
                col = int(user_input)
                if col not in valid_moves:
                    print("Invalid column. Try again.")
                    continue

                game.drop_piece(col)
            except ValueError:
                print("Please enter a valid number.")
                continue

        # --- Engine Turn (Player 2) ---
        else:
            print("\nEngine is thinking...")
            col = game.play_ai_turn()
            print(f"Engine plays Column: {col}")
            result = game.ai.last_result
            if result is not None:
                print(f"  (searched {result.nodes} nodes to depth {result.depth}, outcome {result.outcome})")

        # Show Board
        print("\n" + game.get_visual_board())

    # --- End Game ---
    if game.winner:
        winner_name = "Human" if game.winner == PLAYER else "Engine"
        print(f"\nGame Over! Winner: {winner_name}")
    else:
        print("\nGame Over! It's a Draw.")

if __name__ == "__main__":
    main()
