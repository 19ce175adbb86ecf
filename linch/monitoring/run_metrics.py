from dataclasses import dataclass


@dataclass
class RunMetrics:
    """Core link-validation metrics"""
    links_dispatched: int = 0
    duplicates_skipped: int = 0
    probes_sent: int = 0
    rate_limited: int = 0
    cooldown_deferrals: int = 0
    retries_exhausted: int = 0
    successes: int = 0
    permanent_redirects: int = 0
    temporary_redirects: int = 0
    errors: int = 0
    avg_response_time: float = 0.0
    probes_per_second: float = 0.0

    @property
    def completed(self) -> int:
        return self.successes + self.permanent_redirects + self.temporary_redirects + self.errors
