"""
Validator Pool - bounded workers draining the dispatch queue into the result channel
"""

import random
import asyncio
import logging
from dataclasses import dataclass, replace
from typing import AsyncIterable, AsyncIterator, Optional, Set
from ..extraction.link import Link
from ..deduplication import DeduplicationGate
from ..throttle import HostCooldownTable, RequestPacer
from ..error_handler import ErrorType, InvalidLinkError
from ..monitoring import MetricsCollector
from .action import Action, LinkError, RateLimited
from .config import ValidatorConfig
from .pending import PendingWork
from .prober import get_host

logger = logging.getLogger(__name__)

_DONE = object()


@dataclass
class SharedState:
    """State shared by every worker of a pool"""
    gate: DeduplicationGate
    cooldowns: HostCooldownTable

    @classmethod
    def create(cls) -> 'SharedState':
        return cls(gate=DeduplicationGate(), cooldowns=HostCooldownTable())


@dataclass(frozen=True)
class _Job:
    """A link on its way through the dispatch queue"""
    link: Link
    claimed: bool = False   # passed the deduplication gate
    retries: int = 0        # rate-limit retries so far


class ValidatorPool:
    """
    Validates a stream of links with a fixed number of concurrent workers

    Each distinct URL yields exactly one action. Rate-limited links go back
    into the dispatch queue after the host's cooldown; the result stream
    ends once extraction is finished and no link is queued, in flight or
    waiting out a cooldown.
    """

    def __init__(self, prober, config: ValidatorConfig = None,
                 state: SharedState = None, metrics: MetricsCollector = None):
        self.prober = prober
        self.config = config or ValidatorConfig()
        self.state = state or SharedState.create()
        self.metrics = metrics or MetricsCollector()
        self.pacer = RequestPacer(delay=self.config.wait)

        self._dispatch: Optional[asyncio.Queue] = None
        self._results: Optional[asyncio.Queue] = None
        self._pending: Optional[PendingWork] = None
        self._retry_tasks: Set[asyncio.Task] = set()

    @property
    def queue_depth(self) -> int:
        return self._dispatch.qsize() if self._dispatch else 0

    @property
    def pending_count(self) -> int:
        return self._pending.count if self._pending else 0

    async def run(self, links: AsyncIterable[Link]) -> AsyncIterator[Action]:
        """
        Validate links and yield actions in completion order

        Args:
            links: Source of candidate links, consumed exactly once

        Yields:
            One terminal action per distinct URL
        """
        self._dispatch = asyncio.Queue(maxsize=self.config.queue_size)
        self._results = asyncio.Queue(maxsize=self.config.result_buffer)
        self._pending = PendingWork()

        workers = [
            asyncio.create_task(self._worker(worker_id))
            for worker_id in range(self.config.concurrency)
        ]
        feeder = asyncio.create_task(self._feed(links))
        closer = asyncio.create_task(self._close_when_idle())
        logger.debug(f"Started {len(workers)} validator workers")

        try:
            while True:
                action = await self._results.get()
                if action is _DONE:
                    break
                yield action

            # Surface extraction failures after draining what was dispatched
            await feeder
        finally:
            background = [feeder, closer, *workers, *self._retry_tasks]
            for task in background:
                task.cancel()
            await asyncio.gather(*background, return_exceptions=True)
            self._retry_tasks.clear()

    async def _feed(self, links: AsyncIterable[Link]):
        """Move extracted links into the dispatch queue, blocking when it is full"""
        try:
            async for link in links:
                self._pending.add()
                self.metrics.record_dispatched(link.url)
                await self._dispatch.put(_Job(link=link))
        finally:
            self._pending.close()

    async def _close_when_idle(self):
        await self._pending.wait()
        await self._results.put(_DONE)

    async def _worker(self, worker_id: int):
        while True:
            job = await self._dispatch.get()
            try:
                await self._handle(job)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"Worker {worker_id} failed on {job.link.url}")
                await self._emit(LinkError(
                    link=job.link,
                    error_type=ErrorType.TRANSPORT_ERROR,
                    message=f"internal failure: {e}",
                ))
            finally:
                self._dispatch.task_done()

    async def _handle(self, job: _Job):
        link = job.link

        if not job.claimed:
            if not self.state.gate.try_claim(link.url):
                logger.debug(f"Skipping duplicate URL: {link.url}")
                self.metrics.record_duplicate_skipped(link.url)
                self._pending.done()
                return
            job = replace(job, claimed=True)

        try:
            host = get_host(link.url)
        except InvalidLinkError as e:
            await self._emit(LinkError(
                link=link,
                error_type=ErrorType.PARSE_ERROR,
                message=str(e),
            ))
            return

        if self._defer_if_cooling(job, host):
            return

        # A 429 may land while this worker waits for its pacing slot
        await self.pacer.wait_for_turn(host)
        if self._defer_if_cooling(job, host):
            return

        outcome, response_time = await self.prober.probe(link)
        self.metrics.record_probe(link.url, response_time)

        if isinstance(outcome, RateLimited):
            await self._handle_rate_limited(job, host, outcome)
            return

        await self._emit(outcome)

    def _defer_if_cooling(self, job: _Job, host: str) -> bool:
        """Requeue the job for after the host's cooldown; False when the host is free"""
        remaining = self.state.cooldowns.remaining(host)
        if remaining <= 0:
            return False

        logger.debug(f"Deferring {job.link.url}: {host} cooling down for {remaining:.1f}s")
        self.metrics.record_cooldown_deferral(job.link.url)
        self._schedule_retry(job, remaining + self._jitter())
        return True

    async def _handle_rate_limited(self, job: _Job, host: str, outcome: RateLimited):
        """Record the host's cooldown and requeue the link, or give up"""
        link = job.link
        self.metrics.record_rate_limited(link.url)
        self.state.cooldowns.cool_down_for(host, outcome.retry_after)

        max_retries = self.config.max_retries
        if max_retries is not None and job.retries >= max_retries:
            logger.warning(f"Giving up on {link.url} after {job.retries} rate-limit retries")
            self.metrics.record_retries_exhausted(link.url)
            await self._emit(LinkError(
                link=link,
                error_type=ErrorType.RATE_LIMITED,
                message=f"still rate limited after {job.retries} retries",
                status=outcome.status,
            ))
            return

        delay = outcome.retry_after + self._jitter()
        logger.info(f"Rate limited on {link.url}, retrying in {delay:.1f}s")
        self._schedule_retry(replace(job, retries=job.retries + 1), delay)

    def _jitter(self) -> float:
        return random.uniform(0.0, self.config.retry_jitter) if self.config.retry_jitter else 0.0

    def _schedule_retry(self, job: _Job, delay: float):
        task = asyncio.create_task(self._requeue_later(job, delay))
        self._retry_tasks.add(task)
        task.add_done_callback(self._retry_tasks.discard)

    async def _requeue_later(self, job: _Job, delay: float):
        await asyncio.sleep(delay)
        await self._dispatch.put(job)

    async def _emit(self, action: Action):
        """Hand a terminal action to the consumer and retire its link"""
        self.metrics.record_outcome(action)
        await self._results.put(action)
        self._pending.done()
