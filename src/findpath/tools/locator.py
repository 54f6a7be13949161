"""
Existence checks for candidate names.

Given candidate names and a directory, these functions return the first
candidate that exists there as the requested kind of entry. Symlinks are
followed unless disallowed, in which case a link is never a match.
"""

import os
import stat
import asyncio
from typing import Iterable, Optional, Union

from ..errors import ConfigurationError
from ..models.options import EntryType
from .paths import PathNormalizer


default_normalizer = PathNormalizer()


def _entry_type(type: Union[EntryType, str]) -> EntryType:
    if isinstance(type, EntryType):
        return type
    try:
        return EntryType(type)
    except ValueError:
        raise ConfigurationError(f"Invalid type specified: {type}")


def _matches_type(mode: int, type: EntryType) -> bool:
    if type == EntryType.FILE:
        return stat.S_ISREG(mode)
    if type == EntryType.DIRECTORY:
        return stat.S_ISDIR(mode)
    return stat.S_ISREG(mode) or stat.S_ISDIR(mode)


def entry_exists(path: str, type: EntryType = EntryType.FILE, allow_symlinks: bool = True) -> bool:
    """
    Check whether a path exists as the requested kind of entry.

    Args:
        path: Absolute path to check
        type: Kind of entry required
        allow_symlinks: Follow symlinks when True, inspect the link itself otherwise

    Returns:
        True if the entry exists and has the requested kind
    """
    try:
        st = os.stat(path) if allow_symlinks else os.lstat(path)
    except (OSError, ValueError):
        return False
    return _matches_type(st.st_mode, type)


def locate_path_sync(
    names: Iterable[str],
    cwd: str,
    type: Union[EntryType, str] = EntryType.FILE,
    allow_symlinks: bool = True,
    normalizer: Optional[PathNormalizer] = None,
) -> Optional[str]:
    """
    Find the first candidate that exists in a directory.

    Args:
        names: Candidate names, relative to cwd or absolute, in priority order
        cwd: Directory candidates are resolved against
        type: Kind of entry required
        allow_symlinks: Whether symlinked candidates are followed
        normalizer: Path normalizer to resolve candidates with

    Returns:
        The first matching name exactly as given, or None

    Raises:
        ConfigurationError: If type is not a known entry type
    """
    type = _entry_type(type)
    normalizer = normalizer or default_normalizer

    for name in names:
        if entry_exists(normalizer.resolve(cwd, name), type, allow_symlinks):
            return name
    return None


async def locate_path(
    names: Iterable[str],
    cwd: str,
    type: Union[EntryType, str] = EntryType.FILE,
    allow_symlinks: bool = True,
    normalizer: Optional[PathNormalizer] = None,
) -> Optional[str]:
    """
    Async version of locate_path_sync.

    Candidates are checked one at a time, in order, each stat call running in
    a worker thread.
    """
    type = _entry_type(type)
    normalizer = normalizer or default_normalizer

    for name in names:
        path = normalizer.resolve(cwd, name)
        if await asyncio.to_thread(entry_exists, path, type, allow_symlinks):
            return name
    return None
