"""
Link Prober - single HEAD request per link, classified without following redirects
"""

import time
import asyncio
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Tuple
from urllib.parse import urlsplit, urljoin, SplitResult
import aiohttp
from ..extraction.link import Link
from ..error_handler import (
    ErrorType,
    InvalidLinkError,
    RedirectError,
    classify_status,
    describe_transport_error,
)
from .action import (
    ProbeOutcome,
    Success,
    PermanentRedirect,
    TemporaryRedirect,
    LinkError,
    RateLimited,
)
from .config import ValidatorConfig

logger = logging.getLogger(__name__)

PROBE_SCHEMES = ('http', 'https')


def parse_link_url(url: str) -> SplitResult:
    """
    Validate that a link is an absolute http(s) URL

    Args:
        url: Raw link text

    Returns:
        The split URL

    Raises:
        InvalidLinkError: if the text cannot be probed
    """
    try:
        parsed = urlsplit(url.strip())
        # Accessing port validates it
        parsed.port
    except ValueError as e:
        raise InvalidLinkError(f"invalid URL '{url}': {e}") from e

    if parsed.scheme.lower() not in PROBE_SCHEMES:
        raise InvalidLinkError(f"unsupported scheme in '{url}'")
    if not parsed.hostname:
        raise InvalidLinkError(f"missing host in '{url}'")

    return parsed


def get_host(url: str) -> str:
    """Host key used for cooldowns and pacing"""
    return parse_link_url(url).netloc.lower()


def resolve_redirect(original_url: str, location: Optional[str]) -> str:
    """
    Resolve a Location header against the original request URL

    A relative or scheme-relative Location inherits scheme and host from
    the original URL.

    Raises:
        RedirectError: if the header is missing or cannot be resolved
    """
    if location is None or not location.strip():
        raise RedirectError("missing location in redirection")

    location = location.strip()
    try:
        target = urlsplit(urljoin(original_url, location))
        target.port
    except ValueError:
        raise RedirectError(f"invalid location in redirection: '{location}'")

    if not target.scheme or not target.netloc:
        raise RedirectError(f"invalid location in redirection: '{location}'")

    return target.geturl()


def parse_retry_after(value: Optional[str], default: float) -> float:
    """Seconds to wait from a Retry-After header (delta-seconds or HTTP-date)"""
    if value is None:
        return default

    value = value.strip()
    if value.isascii() and value.isdigit():
        return float(int(value))

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return default
    if retry_at is None:
        return default
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)

    return max(0.0, (retry_at - datetime.now(timezone.utc)).total_seconds())


class LinkProber:
    """Issues one HEAD request per link over a shared session"""

    def __init__(self, session: aiohttp.ClientSession, config: ValidatorConfig = None):
        self.session = session
        self.config = config or ValidatorConfig()
        self.timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self.headers = {'User-Agent': self.config.user_agent}

    async def probe(self, link: Link) -> Tuple[ProbeOutcome, float]:
        """
        Probe a link once

        Returns:
            (outcome, response_time) - transport failures become LinkError
            outcomes, nothing is raised for a single bad link
        """
        start_time = time.monotonic()

        try:
            async with self.session.head(
                link.url,
                headers=self.headers,
                timeout=self.timeout,
                allow_redirects=False,
            ) as response:
                response_time = time.monotonic() - start_time
                return self.classify(link, response.status, response.headers), response_time

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            response_time = time.monotonic() - start_time
            logger.debug(f"Probe failed for {link.url}: {e!r}")
            return LinkError(
                link=link,
                error_type=ErrorType.TRANSPORT_ERROR,
                message=describe_transport_error(e),
            ), response_time

    def classify(self, link: Link, status: int, headers) -> ProbeOutcome:
        """Map a raw response to an outcome"""
        outcome = classify_status(status)

        if outcome == "success":
            return Success(link=link, status=status)

        if outcome in ("redirect_permanent", "redirect_temporary"):
            try:
                target = resolve_redirect(link.url, headers.get('Location'))
            except RedirectError as e:
                return LinkError(
                    link=link,
                    error_type=ErrorType.REDIRECT_MALFORMED,
                    message=str(e),
                    status=status,
                )

            if outcome == "redirect_permanent":
                return PermanentRedirect(link=link, status=status, target=target)
            return TemporaryRedirect(link=link, status=status, target=target)

        if outcome == "rate_limited":
            retry_after = parse_retry_after(
                headers.get('Retry-After'), self.config.default_retry_after
            )
            return RateLimited(link=link, retry_after=retry_after, status=status)

        return LinkError(
            link=link,
            error_type=ErrorType.HTTP_STATUS,
            message=f"HTTP {status}",
            status=status,
        )
