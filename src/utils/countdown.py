"""
Asyncio driver for a quiz session's per-question countdown.

The session itself only exposes ``tick()``; hosts running an event loop can
use CountdownTicker to call it once per interval.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..models.quiz_session import QuizSession

logger = logging.getLogger(__name__)


class CountdownTicker:
    """
    Calls ``session.tick()`` every ``interval`` seconds until the session ends.

    Usage:
        ticker = CountdownTicker(session)
        ticker.start()      # inside a running event loop
        ...
        ticker.cancel()
    """

    def __init__(self, session: QuizSession, interval: float = 1.0):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.session = session
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start ticking, replacing any countdown already running."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    def cancel(self) -> None:
        if self.running:
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        try:
            while not self.session.is_over:
                await asyncio.sleep(self.interval)
                if self.session.tick():
                    logger.debug("Session %s: time expired", self.session.session_id)
        except asyncio.CancelledError:
            logger.debug("Countdown for session %s cancelled", self.session.session_id)
            raise
