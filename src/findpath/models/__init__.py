"""
Data models for findpath.

This module contains the option, target and configuration structures used
throughout the package.
"""

from .options import EntryType, Strategy, FindUpOptions, FindDownOptions
from .target import SearchTarget, Signal, FIND_UP_STOP
from .config import FinderConfig

__all__ = [
    'EntryType',
    'Strategy',
    'FindUpOptions',
    'FindDownOptions',
    'SearchTarget',
    'Signal',
    'FIND_UP_STOP',
    'FinderConfig',
]
