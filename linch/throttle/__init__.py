"""
Host throttling - rate-limit cooldowns and request pacing
"""

from .cooldown_table import HostCooldownTable
from .request_pacer import RequestPacer

__all__ = [
    'HostCooldownTable',
    'RequestPacer'
]
