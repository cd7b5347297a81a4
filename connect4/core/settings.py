import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from connect4.engine.constants import DEFAULT_TT_MAX_SIZE

load_dotenv()

DEFAULT_TIERS_CONFIG = Path(__file__).resolve().parent.parent / "config" / "tiers.yaml"


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw, 0)


TIERS_CONFIG_PATH = os.getenv("CONNECT4_TIERS_CONFIG", str(DEFAULT_TIERS_CONFIG))
TT_MAX_SIZE = _optional_int("CONNECT4_TT_MAX_SIZE") or DEFAULT_TT_MAX_SIZE
# Seeds the blunder RNG; unset means fresh entropy per engine
ENGINE_SEED = _optional_int("CONNECT4_SEED")
LOG_LEVEL = os.getenv("CONNECT4_LOG_LEVEL", "INFO").upper()
