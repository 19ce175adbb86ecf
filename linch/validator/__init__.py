"""
Validator - concurrent link validation engine
"""

from .action import (
    Action,
    OutcomeKind,
    Success,
    PermanentRedirect,
    TemporaryRedirect,
    LinkError,
    RateLimited,
)
from .config import ValidatorConfig
from .pending import PendingWork
from .prober import LinkProber, parse_link_url, resolve_redirect, parse_retry_after
from .pool import ValidatorPool, SharedState

__all__ = [
    'Action',
    'OutcomeKind',
    'Success',
    'PermanentRedirect',
    'TemporaryRedirect',
    'LinkError',
    'RateLimited',
    'ValidatorConfig',
    'PendingWork',
    'LinkProber',
    'parse_link_url',
    'resolve_redirect',
    'parse_retry_after',
    'ValidatorPool',
    'SharedState'
]
