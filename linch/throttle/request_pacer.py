import time
import asyncio
import logging
from collections import defaultdict
from typing import Dict

logger = logging.getLogger(__name__)


class RequestPacer:
    """Keeps a minimum gap between consecutive probe starts to the same host"""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.last_request_time: Dict[str, float] = {}
        self.host_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def wait_for_turn(self, host: str):
        """Wait until the host's delay has elapsed, then claim the slot"""
        if self.delay <= 0:
            return

        host = host.lower()
        async with self.host_locks[host]:
            last = self.last_request_time.get(host)
            time_since_last = time.monotonic() - last if last is not None else self.delay
            if time_since_last < self.delay:
                wait_time = self.delay - time_since_last
                logger.debug(f"Pacing {host}: waiting {wait_time:.2f}s")
                await asyncio.sleep(wait_time)

            self.last_request_time[host] = time.monotonic()
