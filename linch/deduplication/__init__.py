"""
Deduplication module for run-scoped URL claims
"""

from .dedup_gate import DeduplicationGate

__all__ = [
    'DeduplicationGate'
]
