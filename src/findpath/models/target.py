"""
Search target model for findpath.

A search target is either an ordered list of candidate names, where the first
candidate that exists in a directory wins, or a custom matcher callable that
is invoked once per visited directory.
"""

import os
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from ..errors import ConfigurationError


class Signal(Enum):
    """Control values a custom matcher may return."""
    STOP = "stop"


# Returned by a matcher to end an upward search, keeping earlier matches.
FIND_UP_STOP = Signal.STOP


def _as_name(value: Any) -> str:
    try:
        name = os.fspath(value)
    except TypeError:
        raise ConfigurationError(f"Invalid search name: {value!r}")
    if not isinstance(name, str):
        raise ConfigurationError(f"Search names must be text paths, got {type(name).__name__}")
    return name


@dataclass(frozen=True)
class SearchTarget:
    """
    What to look for in each visited directory.

    Attributes:
        names: Candidate names in priority order (empty for matcher targets)
        matcher: Callable invoked with the current directory, or None
    """
    names: Tuple[str, ...] = ()
    matcher: Optional[Callable[[str], Any]] = None

    @classmethod
    def from_name(cls, name: Any) -> 'SearchTarget':
        """
        Build a target from a name, an iterable of names, or a callable.

        Raises:
            ConfigurationError: If no usable name is given
        """
        if isinstance(name, (str, os.PathLike)):
            return cls(names=(_as_name(name),))

        if callable(name):
            return cls(matcher=name)

        if isinstance(name, (bytes, bytearray)):
            raise ConfigurationError("Search names must be text paths, got bytes")

        try:
            names = tuple(_as_name(item) for item in name)
        except TypeError:
            raise ConfigurationError(f"Unsupported search target: {name!r}")

        if not names:
            raise ConfigurationError("At least one search name must be given")

        return cls(names=names)

    @property
    def is_matcher(self) -> bool:
        """Check if this target delegates to a custom matcher."""
        return self.matcher is not None

    def is_async_matcher(self) -> bool:
        """Check if the matcher must be awaited to produce a result."""
        if self.matcher is None:
            return False
        if inspect.iscoroutinefunction(self.matcher):
            return True
        call = getattr(self.matcher, '__call__', None)
        return inspect.iscoroutinefunction(call)

    def __str__(self) -> str:
        if self.is_matcher:
            return f"matcher {getattr(self.matcher, '__name__', repr(self.matcher))}"
        return ", ".join(self.names)
