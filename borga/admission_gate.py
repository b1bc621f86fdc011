import asyncio
import logging
import threading
import time
from typing import Callable, Optional, Awaitable

from .errors import GateOverloaded

logger = logging.getLogger(__name__)

# Seconds each waiting caller adds to the next entrant's delay
BASE_DELAY = 2


class AdmissionGate:
    """
    Global pacing gate in front of the game catalog.

    Each entrant bumps a shared counter to k and waits k * base_delay before
    proceeding. The counter drops when the wait ends, not when the caller's
    downstream work ends, so this limits entry rate rather than work in flight.
    The lock only covers the counter updates; waits run in parallel.
    """

    def __init__(
        self,
        base_delay: float = BASE_DELAY,
        max_depth: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_delay = base_delay
        self.max_depth = max_depth
        self._sleep = sleep
        self._async_sleep = async_sleep
        self._lock = threading.Lock()
        self._in_queue = 0

    @property
    def depth(self) -> int:
        """Number of callers currently waiting."""
        return self._in_queue

    def _join(self) -> float:
        with self._lock:
            if self.max_depth is not None and self._in_queue >= self.max_depth:
                raise GateOverloaded(
                    f"{self._in_queue} request(s) already waiting (max {self.max_depth})"
                )
            self._in_queue += 1
            position = self._in_queue
        delay = position * self.base_delay
        logger.debug(f"Admission queue position {position}, waiting {delay}s")
        return delay

    def _leave(self):
        with self._lock:
            self._in_queue -= 1

    def enter(self) -> float:
        """Block until admitted. Returns the delay that was applied."""
        delay = self._join()
        try:
            self._sleep(delay)
        finally:
            self._leave()
        return delay

    async def enter_async(self) -> float:
        """Cooperative variant of enter() for asyncio callers."""
        delay = self._join()
        try:
            await self._async_sleep(delay)
        finally:
            self._leave()
        return delay
