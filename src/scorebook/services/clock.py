import asyncio
import logging
from typing import Optional

from scorebook.domain.commands import TimerTick
from scorebook.services.session import ScoringSession

logger = logging.getLogger(__name__)


class GameClock:
    """
    External clock for a session: delivers TimerTick roughly once per
    `interval` seconds while the game clock is running. Drift is tolerated.
    Without an explicit interval the session's configured tick interval is used.
    """
    def __init__(self, session: ScoringSession, interval: Optional[float] = None):
        self.session = session
        self.interval = session.config.tick_interval if interval is None else interval
        self._stopped = asyncio.Event()

    def tick_once(self) -> bool:
        """Dispatch one tick if the clock is running. Returns whether a tick was sent."""
        if not self.session.current_snapshot().timer_running:
            return False
        self.session.dispatch(TimerTick())
        return True

    async def run(self) -> None:
        logger.info(f"Clock started for {self.session.match_id} (every {self.interval}s)")
        self._stopped.clear()
        while not self._stopped.is_set():
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                self.tick_once()
        logger.info(f"Clock stopped for {self.session.match_id}")

    def stop(self) -> None:
        self._stopped.set()
