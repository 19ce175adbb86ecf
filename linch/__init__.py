"""
Linch - a non-recursive link validator
"""

__version__ = '0.1.0'

from .checker import LinkChecker
from .extraction import Link
from .validator import (
    Action,
    Success,
    PermanentRedirect,
    TemporaryRedirect,
    LinkError,
    ValidatorConfig,
    ValidatorPool,
)
from .error_handler import ErrorType, SetupError

__all__ = [
    'LinkChecker',
    'Link',
    'Action',
    'Success',
    'PermanentRedirect',
    'TemporaryRedirect',
    'LinkError',
    'ValidatorConfig',
    'ValidatorPool',
    'ErrorType',
    'SetupError'
]
