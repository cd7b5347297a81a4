"""
Move Worker - Off-Thread Search

Runs engine searches on a dedicated background thread so the caller's event
loop stays responsive while the engine thinks (a deep search can block for
seconds). It handles:
- Serializing searches (the engine and its cache are not thread-safe)
- Correlating responses with requests via move_id
- Discarding responses superseded by a newer request
- Cache clears on the same thread as the searches

The worker is kept alive between moves so the engine's transposition table
persists across searches, giving later moves a warm cache.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from connect4.engine.ai import ConnectFourAI
from connect4.schemas.move_schema import MoveRequest, MoveResponse

logger = logging.getLogger(__name__)


class MoveWorker:
    def __init__(self, ai: Optional[ConnectFourAI] = None):
        self.ai = ai or ConnectFourAI()
        # One thread: searches run strictly one after another
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="connect4-search")
        self.latest_move_id: Optional[int] = None

    async def request_move(self, request: MoveRequest) -> Optional[MoveResponse]:
        """
        Search for a move off the event loop.

        Returns:
            MoveResponse, or None if a newer request arrived while this one
            was being searched (the caller should ignore the stale result).
        """
        self.latest_move_id = request.move_id
        loop = asyncio.get_running_loop()

        col = await loop.run_in_executor(
            self._executor,
            self.ai.select_move,
            request.board,
            request.difficulty,
            request.piece,
        )

        if request.move_id != self.latest_move_id:
            logger.warning(
                "Discarding stale response for move %d (latest is %s)",
                request.move_id, self.latest_move_id,
            )
            return None

        return MoveResponse(col=col, move_id=request.move_id)

    async def clear_cache(self):
        """Clear the engine cache on the search thread, after any queued search."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, self.ai.clear_cache)

    def shutdown(self):
        self._executor.shutdown(wait=True)
