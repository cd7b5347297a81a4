# connect4/engine/transposition.py
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from connect4.core import settings
from connect4.models.enums import TTFlag

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TTEntry:
    depth: int
    score: int
    flag: TTFlag
    best_move: Optional[int] = None  # Ordering hint only


class TranspositionTable:
    """
    Hash map from Zobrist hash -> search result.
    Stores the score found for a position plus the bound type so that
    alpha-beta cutoffs can be applied on a cache hit.
    """

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size if max_size is not None else settings.TT_MAX_SIZE
        self.table: Dict[int, TTEntry] = {}
        self.hits = 0

    def get(self, key: int) -> Optional[TTEntry]:
        entry = self.table.get(key)
        if entry is not None:
            self.hits += 1
        return entry

    def set(self, key: int, entry: TTEntry):
        """
        Store an entry, but only overwrite an existing entry if the new search
        was at least as deep. A NEW key at capacity wipes the whole table first.
        """
        existing = self.table.get(key)
        if existing is not None:
            if existing.depth <= entry.depth:
                self.table[key] = entry
            return

        if len(self.table) >= self.max_size:
            logger.info("Transposition table full (%d entries), clearing", len(self.table))
            self.table.clear()
        self.table[key] = entry

    def clear(self):
        self.table.clear()
        self.hits = 0

    @property
    def size(self) -> int:
        return len(self.table)

    def __len__(self) -> int:
        return len(self.table)
