"""
Validation outcomes - one closed set of result types per probed link
"""

from enum import Enum
from dataclasses import dataclass
from typing import ClassVar, Union
from ..extraction.link import Link
from ..error_handler import ErrorType


class OutcomeKind(Enum):
    SUCCESS = "success"
    REDIRECT_PERMANENT = "redirect_permanent"
    REDIRECT_TEMPORARY = "redirect_temporary"
    ERROR = "error"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class Success:
    link: Link
    status: int

    kind: ClassVar[OutcomeKind] = OutcomeKind.SUCCESS


@dataclass(frozen=True)
class PermanentRedirect:
    """301/308 with a resolved absolute target"""
    link: Link
    status: int
    target: str

    kind: ClassVar[OutcomeKind] = OutcomeKind.REDIRECT_PERMANENT


@dataclass(frozen=True)
class TemporaryRedirect:
    """302/307 with a resolved absolute target"""
    link: Link
    status: int
    target: str

    kind: ClassVar[OutcomeKind] = OutcomeKind.REDIRECT_TEMPORARY


@dataclass(frozen=True)
class LinkError:
    """Terminal failure; status is 0 when no response was received"""
    link: Link
    error_type: ErrorType
    message: str
    status: int = 0

    kind: ClassVar[OutcomeKind] = OutcomeKind.ERROR

    @property
    def is_internal(self) -> bool:
        return self.error_type.is_internal


@dataclass(frozen=True)
class RateLimited:
    """Internal only: the host answered 429 and the link must be retried"""
    link: Link
    retry_after: float
    status: int = 429

    kind: ClassVar[OutcomeKind] = OutcomeKind.RATE_LIMITED


# Everything the pool may hand to its consumer
Action = Union[Success, PermanentRedirect, TemporaryRedirect, LinkError]

# Everything a single probe may produce
ProbeOutcome = Union[Success, PermanentRedirect, TemporaryRedirect, LinkError, RateLimited]
