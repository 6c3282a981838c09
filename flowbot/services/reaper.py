"""
Session Reaper.

Background sweep that evicts sessions idle longer than the timeout. Runs on
a fixed interval independent of message traffic and takes the same per-user
lock as message processing before deleting anything.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

from ..repositories.session import SessionRepository
from ..state.locks import KeyedLocks

logger = logging.getLogger(__name__)


class SessionReaper:
    def __init__(
        self,
        session_repository: SessionRepository,
        locks: KeyedLocks,
        session_timeout: timedelta,
        interval: float = 60.0,
    ):
        self.session_repo = session_repository
        self.locks = locks
        self.session_timeout = session_timeout
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="session-reaper")
        logger.info(f"Session reaper started (interval={self.interval}s)")

    async def stop(self):
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Session reaper stopped")

    async def sweep(self) -> int:
        """
        Evicts every expired session. Returns the number evicted.
        """
        evicted = 0
        for session in self.session_repo.list_sessions():
            user_id = session.user_id
            async with self.locks.hold(user_id):
                # Re-read under the lock: the user may have moved on meanwhile.
                current = self.session_repo.get(user_id)
                if current is None:
                    continue
                if not self.session_repo.is_expired(
                    current, self.session_repo.clock(), self.session_timeout
                ):
                    continue
                self.session_repo.delete(user_id)
                evicted += 1
                logger.debug(f"Cleaned up expired session for user {user_id}")

        if evicted:
            logger.info(f"Reaper evicted {evicted} expired session(s)")
        return evicted

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.sweep()
            except Exception:
                logger.exception("Session sweep failed")
