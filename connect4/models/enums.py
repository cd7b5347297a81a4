from enum import StrEnum

class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    GURU = "guru"
    VICTOR = "victor"

    @property
    def rank(self) -> int:
        """0 for the weakest tier, 4 for the strongest."""
        return list(Difficulty).index(self)

class TTFlag(StrEnum):
    EXACT = "exact"
    LOWER = "lower"  # fail-high: true score >= stored score
    UPPER = "upper"  # fail-low: true score <= stored score
