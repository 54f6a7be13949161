"""
findpath - Core Package

Locates files and directories by walking the filesystem upward through a
directory's ancestors or downward into its subdirectories.
"""

from .errors import ConfigurationError
from .models import EntryType, Strategy, FinderConfig, FIND_UP_STOP
from .finder import (
    Finder,
    find_up,
    find_up_async,
    find_up_multiple,
    find_up_multiple_async,
    find_down,
    find_down_async
)

__version__ = "0.1.0"
__author__ = "findpath Team"

__all__ = [
    'ConfigurationError',
    'EntryType',
    'Strategy',
    'FinderConfig',
    'FIND_UP_STOP',
    'Finder',
    'find_up',
    'find_up_async',
    'find_up_multiple',
    'find_up_multiple_async',
    'find_down',
    'find_down_async'
]
