from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidatorConfig:
    """Configuration for the validator pool and its probes"""
    concurrency: int = 10              # simultaneous probes
    timeout: float = 3.0               # seconds per HEAD request
    wait: float = 0.0                  # minimum gap between probes to one host
    max_retries: Optional[int] = 10    # rate-limit retries per URL, None = unbounded
    default_retry_after: float = 15.0  # cooldown when Retry-After is missing or bad
    retry_jitter: float = 1.0          # upper bound of random delay added to retries
    queue_size: int = 1000
    result_buffer: int = 100
    verify_tls: bool = False
    user_agent: str = "linch/0.1"

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.wait < 0:
            raise ValueError(f"wait must not be negative, got {self.wait}")
        if self.max_retries is not None and self.max_retries < 0:
            raise ValueError(f"max_retries must not be negative, got {self.max_retries}")
        if self.default_retry_after < 0 or self.retry_jitter < 0:
            raise ValueError("retry delays must not be negative")
        if self.queue_size < 1 or self.result_buffer < 1:
            raise ValueError("queue sizes must be at least 1")
