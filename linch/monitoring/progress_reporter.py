import asyncio
import logging
from typing import Callable, Optional
from .metrics_collector import MetricsCollector

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Logs run progress periodically and a summary at the end"""

    def __init__(self, metrics_collector: MetricsCollector, report_interval: float = 30.0,
                 queue_depth: Optional[Callable[[], int]] = None, state=None):
        self.metrics = metrics_collector
        # Shared pool state (dedup gate and host cooldowns), optional
        self.state = state
        self.report_interval = report_interval
        self.queue_depth = queue_depth
        self.reporting_task = None

    async def start_reporting(self):
        """Start periodic progress reporting"""
        if self.report_interval > 0:
            self.reporting_task = asyncio.create_task(self._reporting_loop())

    async def stop_reporting(self):
        """Stop progress reporting"""
        if self.reporting_task:
            self.reporting_task.cancel()
            try:
                await self.reporting_task
            except asyncio.CancelledError:
                pass
            self.reporting_task = None

    async def _reporting_loop(self):
        while True:
            await asyncio.sleep(self.report_interval)
            self.log_progress()

    def log_progress(self):
        snapshot = self.metrics.get_current_snapshot()
        run_metrics = snapshot['run_metrics']
        queued = self.queue_depth() if self.queue_depth else 0
        cooling = self.state.cooldowns.active_hosts() if self.state else {}

        logger.info(
            f"Progress: {snapshot['completed']}/{run_metrics['links_dispatched']} links done, "
            f"{queued} queued, {run_metrics['rate_limited']} rate limited, "
            f"{len(cooling)} hosts cooling down, "
            f"{run_metrics['probes_per_second']:.2f} probes/s"
        )

    def log_summary(self):
        """Log the final run summary"""
        snapshot = self.metrics.get_current_snapshot()
        run_metrics = snapshot['run_metrics']

        logger.info(
            f"Checked {snapshot['completed']} unique links in {snapshot['uptime_seconds']:.1f}s: "
            f"{run_metrics['successes']} ok, "
            f"{run_metrics['permanent_redirects'] + run_metrics['temporary_redirects']} redirected, "
            f"{run_metrics['errors']} failed"
        )
        logger.info(
            f"Skipped {run_metrics['duplicates_skipped']} duplicates; "
            f"{run_metrics['rate_limited']} rate-limit responses, "
            f"{run_metrics['cooldown_deferrals']} cooldown deferrals, "
            f"avg response {run_metrics['avg_response_time']:.2f}s"
        )

        if self.state:
            gate_stats = self.state.gate.get_stats()
            logger.info(
                f"Deduplication gate: {gate_stats['unique_urls']} unique of "
                f"{gate_stats['urls_processed']} URLs seen"
            )
            for host, seconds in sorted(self.state.cooldowns.active_hosts().items()):
                logger.info(f"Host {host} still cooling down for {seconds:.1f}s")
