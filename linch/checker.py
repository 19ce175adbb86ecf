"""
Link Checker - wires extraction, the shared HTTP session and the validator pool
"""

import logging
from typing import AsyncIterable, AsyncIterator, Optional
import aiohttp
from .extraction import Link, extract_links
from .monitoring import MetricsCollector, ProgressReporter
from .validator import Action, LinkProber, ValidatorConfig, ValidatorPool, SharedState

logger = logging.getLogger(__name__)


class LinkChecker:
    """
    Validates every link found in a stream of file paths

    Owns the HTTP session for the duration of a run. Built-in capabilities:
    deduplication, host cooldowns, request pacing and progress reporting.
    """

    def __init__(self, config: ValidatorConfig = None, report_interval: float = 0.0,
                 state: Optional[SharedState] = None):
        self.config = config or ValidatorConfig()
        self.state = state or SharedState.create()
        self.metrics_collector = MetricsCollector()
        self.report_interval = report_interval
        self.pool: Optional[ValidatorPool] = None

    def _create_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(
            limit=self.config.concurrency,
            ssl=self.config.verify_tls,
        )
        return aiohttp.ClientSession(connector=connector)

    async def check_paths(self, paths: AsyncIterable[str]) -> AsyncIterator[Action]:
        """Extract links from each path and validate them"""
        async for action in self.check_links(extract_links(paths)):
            yield action

    async def check_links(self, links: AsyncIterable[Link]) -> AsyncIterator[Action]:
        """Validate already-extracted links, yielding actions as they complete"""
        async with self._create_session() as session:
            prober = LinkProber(session, self.config)
            self.pool = ValidatorPool(
                prober,
                config=self.config,
                state=self.state,
                metrics=self.metrics_collector,
            )
            progress_reporter = ProgressReporter(
                self.metrics_collector,
                report_interval=self.report_interval,
                queue_depth=lambda: self.pool.queue_depth,
                state=self.state,
            )

            await progress_reporter.start_reporting()
            try:
                async for action in self.pool.run(links):
                    yield action
            finally:
                await progress_reporter.stop_reporting()
                progress_reporter.log_summary()
