"""
Monitoring and observability modules
"""

from .metrics_collector import MetricsCollector
from .progress_reporter import ProgressReporter
from .log_manager import LogManager
from .run_metrics import RunMetrics

__all__ = [
    'MetricsCollector',
    'ProgressReporter',
    'LogManager',
    'RunMetrics'
]
