import time
import threading
from collections import deque
from dataclasses import asdict
from datetime import datetime
from typing import Dict, Any
from .run_metrics import RunMetrics


class MetricsCollector:
    """Collects counters from the validator pool"""

    # Outcome kind value -> RunMetrics counter
    OUTCOME_COUNTERS = {
        'success': 'successes',
        'redirect_permanent': 'permanent_redirects',
        'redirect_temporary': 'temporary_redirects',
        'error': 'errors',
    }

    def __init__(self):
        self.start_time = time.time()
        self.run_metrics = RunMetrics()

        # Keep the last 100 response times for the running average
        self.response_times: deque = deque(maxlen=100)

        # Thread-safe locks
        self._lock = threading.Lock()

    def record_dispatched(self, url: str):
        with self._lock:
            self.run_metrics.links_dispatched += 1

    def record_duplicate_skipped(self, url: str):
        """Record a duplicate URL that was skipped"""
        with self._lock:
            self.run_metrics.duplicates_skipped += 1

    def record_probe(self, url: str, response_time: float):
        """Record a completed HEAD request, whatever its outcome"""
        with self._lock:
            self.run_metrics.probes_sent += 1
            self.response_times.append(response_time)
            self._update_calculated_metrics()

    def record_rate_limited(self, url: str):
        with self._lock:
            self.run_metrics.rate_limited += 1

    def record_cooldown_deferral(self, url: str):
        with self._lock:
            self.run_metrics.cooldown_deferrals += 1

    def record_retries_exhausted(self, url: str):
        with self._lock:
            self.run_metrics.retries_exhausted += 1

    def record_outcome(self, action):
        """Count a terminal action by kind"""
        counter = self.OUTCOME_COUNTERS[action.kind.value]
        with self._lock:
            setattr(self.run_metrics, counter, getattr(self.run_metrics, counter) + 1)

    def _update_calculated_metrics(self):
        elapsed_time = time.time() - self.start_time

        if elapsed_time > 0:
            self.run_metrics.probes_per_second = self.run_metrics.probes_sent / elapsed_time

        if self.response_times:
            self.run_metrics.avg_response_time = sum(self.response_times) / len(self.response_times)

    def get_current_snapshot(self) -> Dict[str, Any]:
        """Get current metrics snapshot"""
        with self._lock:
            return {
                'timestamp': datetime.now().isoformat(),
                'uptime_seconds': time.time() - self.start_time,
                'run_metrics': asdict(self.run_metrics),
                'completed': self.run_metrics.completed,
            }
