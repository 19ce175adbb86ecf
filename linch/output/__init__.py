"""
Output formatting for validation results
"""

from .formatter import PrettyFormatter, FixFormatter, build_formatter

__all__ = [
    'PrettyFormatter',
    'FixFormatter',
    'build_formatter'
]
