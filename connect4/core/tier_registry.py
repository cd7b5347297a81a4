import yaml
from pydantic import BaseModel, Field
from typing import Dict, Optional, Union

from connect4.core import settings
from connect4.models.enums import Difficulty

class TierConfig(BaseModel):
    label: str
    depth: int = Field(ge=1)
    blunder_chance: float = Field(default=0.0, ge=0.0, le=1.0)
    opening_book: bool = False
    strategic: bool = False
    gift_avoidance: bool = True

class TierRegistry:
    def __init__(self, config_path: Optional[str] = None):
        self.tiers: Dict[Difficulty, TierConfig] = {}
        self._load(config_path or settings.TIERS_CONFIG_PATH)

    def _load(self, path: str):
        with open(path, "r") as f:
            data = yaml.safe_load(f)
            for key, val in data.get("tiers", {}).items():
                self.tiers[Difficulty(key)] = TierConfig(**val)

        missing = [d.value for d in Difficulty if d not in self.tiers]
        if missing:
            raise ValueError(f"Tier config {path} is missing tiers: {missing}")

    def get(self, difficulty: Union[Difficulty, str]) -> TierConfig:
        try:
            return self.tiers[Difficulty(difficulty)]
        except ValueError:
            raise ValueError(f"Unknown difficulty: {difficulty}") from None

    def override(self, difficulty: Union[Difficulty, str], **changes) -> TierConfig:
        """Replaces fields of one tier in place (e.g. a shallower depth for simulations)."""
        key = Difficulty(difficulty)
        self.tiers[key] = self.tiers[key].model_copy(update=changes)
        return self.tiers[key]

    def list_all(self) -> Dict[Difficulty, TierConfig]:
        return self.tiers

# Singleton instance
tier_registry = TierRegistry()
