import ssl
import asyncio
from enum import Enum
from typing import Optional
import aiohttp


class ErrorType(Enum):
    """Classification of per-link failures"""
    PARSE_ERROR = "parse_error"                  # malformed URL text, never probed
    TRANSPORT_ERROR = "transport_error"          # timeout, connection or TLS failure
    HTTP_STATUS = "http_status"                  # server answered with a failing status
    REDIRECT_MALFORMED = "redirect_malformed"    # 3xx without a usable Location
    RATE_LIMITED = "rate_limited"                # 429 retries exhausted

    @property
    def is_internal(self) -> bool:
        """Errors raised on our side rather than reported by the server"""
        return self is not ErrorType.HTTP_STATUS and self is not ErrorType.RATE_LIMITED


class SetupError(Exception):
    """The run cannot start or continue, e.g. the path stream is unreadable"""


class InvalidLinkError(ValueError):
    """A link's text is not a probe-able http(s) URL"""


class RedirectError(ValueError):
    """A redirect response carries no usable Location header"""


def describe_transport_error(error: BaseException) -> str:
    """Build a short human-readable description of a transport failure"""
    if isinstance(error, asyncio.TimeoutError):
        return "request timed out"
    if isinstance(error, aiohttp.ClientSSLError):
        return f"TLS failure: {error}"
    if isinstance(error, aiohttp.ClientConnectorError):
        return f"connection failed: {error}"
    if isinstance(error, ssl.SSLError):
        return f"TLS failure: {error}"

    message = str(error) or error.__class__.__name__
    return message


def classify_status(status_code: Optional[int]) -> Optional[str]:
    """Name the outcome class a bare status code falls into"""
    if status_code is None or status_code == 0:
        return None
    if status_code < 300:
        return "success"
    if status_code in (301, 308):
        return "redirect_permanent"
    if status_code in (302, 307):
        return "redirect_temporary"
    if status_code == 429:
        return "rate_limited"
    return "error"
