"""
Public search API for findpath.

The Finder class binds a FinderConfig to the upward and downward walkers.
Per-call keyword options override the configured defaults and are validated
before any directory is visited. The module-level functions use a shared
Finder built from the default configuration.
"""

from typing import Any, Dict, List, Optional, Tuple
from pydantic import ValidationError

from .errors import ConfigurationError
from .models.config import FinderConfig
from .models.options import FindUpOptions, FindDownOptions
from .models.target import SearchTarget
from .tools.paths import PathNormalizer
from .tools.walk_up import UpwardWalker
from .tools.walk_down import DownwardWalker


class Finder:
    """
    Locates files and directories relative to a starting directory.

    Upward searches accept a name, an iterable of names or a custom matcher
    callable. Downward searches accept a name or an iterable of names.
    """

    def __init__(self, config: Optional[FinderConfig] = None):
        """
        Initialize the finder.

        Args:
            config: Default options and cache settings (built-in defaults when None)
        """
        self.config = config or FinderConfig()
        self.normalizer = PathNormalizer(max_size=self.config.cache_size)
        self.up_walker = UpwardWalker(self.normalizer)
        self.down_walker = DownwardWalker(self.normalizer)

    def find_up(self, name: Any, **options: Any) -> Optional[str]:
        """
        Find the nearest match in the start directory or its ancestors.

        Args:
            name: Name, iterable of names, or matcher callable
            **options: cwd, stop_at, type, allow_symlinks

        Returns:
            Absolute path of the nearest match, or None

        Raises:
            ConfigurationError: If the target or options are invalid
        """
        target, up_options = self._prepare_up(name, options)
        return self.up_walker.find_first_sync(target, up_options)

    async def find_up_async(self, name: Any, **options: Any) -> Optional[str]:
        """Async version of find_up; matchers may be coroutine functions."""
        target, up_options = self._prepare_up(name, options)
        return await self.up_walker.find_first(target, up_options)

    def find_up_multiple(self, name: Any, **options: Any) -> List[str]:
        """
        Find every match from the start directory upward.

        Args:
            name: Name, iterable of names, or matcher callable
            **options: cwd, stop_at, limit, type, allow_symlinks

        Returns:
            Absolute paths of the matches, nearest first

        Raises:
            ConfigurationError: If the target or options are invalid
        """
        target, up_options = self._prepare_up(name, options)
        return self.up_walker.find_all_sync(target, up_options)

    async def find_up_multiple_async(self, name: Any, **options: Any) -> List[str]:
        """Async version of find_up_multiple."""
        target, up_options = self._prepare_up(name, options)
        return await self.up_walker.find_all(target, up_options)

    def find_down(self, name: Any, **options: Any) -> Optional[str]:
        """
        Find the first match in the start directory or below it.

        Args:
            name: Name or iterable of names
            **options: cwd, depth, type, allow_symlinks, strategy

        Returns:
            Absolute path of the first match in traversal order, or None

        Raises:
            ConfigurationError: If the target or options are invalid
        """
        target, down_options = self._prepare_down(name, options)
        return self.down_walker.find_sync(target, down_options)

    async def find_down_async(self, name: Any, **options: Any) -> Optional[str]:
        """Async version of find_down."""
        target, down_options = self._prepare_down(name, options)
        return await self.down_walker.find(target, down_options)

    def _prepare_up(self, name: Any, options: Dict[str, Any]) -> Tuple[SearchTarget, FindUpOptions]:
        target = SearchTarget.from_name(name)
        try:
            return target, self.config.up_options(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid upward search options: {e}") from e

    def _prepare_down(self, name: Any, options: Dict[str, Any]) -> Tuple[SearchTarget, FindDownOptions]:
        target = SearchTarget.from_name(name)
        if target.is_matcher:
            raise ConfigurationError("Custom matchers are only supported in upward searches")
        try:
            return target, self.config.down_options(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid downward search options: {e}") from e


_default_finder = Finder()


def find_up(name: Any, **options: Any) -> Optional[str]:
    """
    Convenience function to find the nearest match upward.

    Args:
        name: Name, iterable of names, or matcher callable
        **options: cwd, stop_at, type, allow_symlinks

    Returns:
        Absolute path of the nearest match, or None
    """
    return _default_finder.find_up(name, **options)


async def find_up_async(name: Any, **options: Any) -> Optional[str]:
    """Async version of find_up."""
    return await _default_finder.find_up_async(name, **options)


def find_up_multiple(name: Any, **options: Any) -> List[str]:
    """
    Convenience function to find every match upward, nearest first.

    Args:
        name: Name, iterable of names, or matcher callable
        **options: cwd, stop_at, limit, type, allow_symlinks

    Returns:
        Absolute paths of the matches
    """
    return _default_finder.find_up_multiple(name, **options)


async def find_up_multiple_async(name: Any, **options: Any) -> List[str]:
    """Async version of find_up_multiple."""
    return await _default_finder.find_up_multiple_async(name, **options)


def find_down(name: Any, **options: Any) -> Optional[str]:
    """
    Convenience function to find the first match downward.

    Args:
        name: Name or iterable of names
        **options: cwd, depth, type, allow_symlinks, strategy

    Returns:
        Absolute path of the first match, or None
    """
    return _default_finder.find_down(name, **options)


async def find_down_async(name: Any, **options: Any) -> Optional[str]:
    """Async version of find_down."""
    return await _default_finder.find_down_async(name, **options)
