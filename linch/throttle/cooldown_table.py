import time
import logging
import threading
from typing import Callable, Dict

logger = logging.getLogger(__name__)


class HostCooldownTable:
    """Per-host "do not contact until" timestamps

    Timestamps come from a monotonic clock. An entry whose timestamp has
    passed is treated as absent and dropped on the next read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.cooldowns: Dict[str, float] = {}
        self._lock = threading.Lock()

    @staticmethod
    def normalize_host(host: str) -> str:
        return host.lower()

    def set_cooldown(self, host: str, until: float):
        """Block a host until the given clock time

        A later call always overwrites an earlier one; concurrent 429s for
        the same host at worst shift the window by a few milliseconds.
        """
        host = self.normalize_host(host)
        with self._lock:
            self.cooldowns[host] = until
        logger.info(f"Host {host} cooling down for {max(0.0, until - self.clock()):.1f}s")

    def cool_down_for(self, host: str, seconds: float) -> float:
        """Block a host for a number of seconds from now and return the deadline"""
        until = self.clock() + max(0.0, seconds)
        self.set_cooldown(host, until)
        return until

    def remaining(self, host: str) -> float:
        """Seconds left before a host may be contacted again (0 when free)"""
        host = self.normalize_host(host)
        with self._lock:
            until = self.cooldowns.get(host)
            if until is None:
                return 0.0

            left = until - self.clock()
            if left <= 0:
                del self.cooldowns[host]
                return 0.0
            return left

    def is_cooling_down(self, host: str) -> bool:
        return self.remaining(host) > 0

    def active_hosts(self) -> Dict[str, float]:
        """Snapshot of hosts still cooling down, with seconds remaining"""
        now = self.clock()
        with self._lock:
            return {
                host: until - now
                for host, until in self.cooldowns.items()
                if until > now
            }
