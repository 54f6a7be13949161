"""
Downward walker for findpath.

Searches a start directory and its subdirectories, up to a maximum depth, for
the first of a list of candidate names. Two traversal orders are supported:

- breadth-first, which always returns the shallowest match;
- depth-first, which checks each directory before descending and explores
  sibling subtrees in directory-listing order.

Directory-listing order comes straight from the filesystem and is not sorted,
so among equally deep matches the winner is platform dependent.
"""

import os
import asyncio
import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from ..errors import ConfigurationError
from ..models.options import FindDownOptions, Strategy
from ..models.target import SearchTarget
from .locator import locate_path, locate_path_sync, default_normalizer
from .paths import PathNormalizer


logger = logging.getLogger(__name__)


def list_subdirectories_sync(directory: str) -> List[str]:
    """
    List the immediate subdirectories of a directory.

    Symlinked directories are not included. Unreadable or vanished
    directories have no subdirectories.

    Args:
        directory: Directory to list

    Returns:
        Paths of the subdirectories in directory-listing order
    """
    try:
        with os.scandir(directory) as entries:
            return [
                os.path.join(directory, entry.name)
                for entry in entries
                if entry.is_dir(follow_symlinks=False)
            ]
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return []


async def list_subdirectories(directory: str) -> List[str]:
    """Async version of list_subdirectories_sync, run in a worker thread."""
    return await asyncio.to_thread(list_subdirectories_sync, directory)


class DownwardWalker:
    """
    Searches a directory tree below a start directory for candidate names.
    """

    def __init__(self, normalizer: Optional[PathNormalizer] = None):
        """
        Initialize the downward walker.

        Args:
            normalizer: Path normalizer shared with the existence checks
        """
        self.normalizer = normalizer or default_normalizer

    def find_sync(self, target: SearchTarget, options: FindDownOptions) -> Optional[str]:
        """
        Find the first match below the start directory.

        Args:
            target: Candidate names to look for
            options: Validated downward search options

        Returns:
            Absolute path of the first match in traversal order, or None

        Raises:
            ConfigurationError: If the target is a custom matcher
        """
        start, names = self._prepare(target, options)
        logger.debug(
            f"Searching downward for {target} from {start} "
            f"({options.strategy.value}-first, depth {options.depth})"
        )

        if options.strategy == Strategy.DEPTH:
            return self._depth_first_sync(start, names, options, 0)
        return self._breadth_first_sync(start, names, options)

    async def find(self, target: SearchTarget, options: FindDownOptions) -> Optional[str]:
        """Async version of find_sync."""
        start, names = self._prepare(target, options)
        logger.debug(
            f"Searching downward for {target} from {start} "
            f"({options.strategy.value}-first, depth {options.depth})"
        )

        if options.strategy == Strategy.DEPTH:
            return await self._depth_first(start, names, options, 0)
        return await self._breadth_first(start, names, options)

    def _prepare(self, target: SearchTarget, options: FindDownOptions) -> Tuple[str, Sequence[str]]:
        if target.is_matcher:
            raise ConfigurationError("Custom matchers are only supported in upward searches")
        return self.normalizer.resolve(options.cwd or ''), target.names

    def _breadth_first_sync(self, start: str, names: Sequence[str], options: FindDownOptions) -> Optional[str]:
        queue: Deque[Tuple[str, int]] = deque([(start, 0)])

        while queue:
            directory, depth = queue.popleft()

            found = locate_path_sync(
                names, directory,
                type=options.type,
                allow_symlinks=options.allow_symlinks,
                normalizer=self.normalizer,
            )
            if found:
                return self.normalizer.resolve(directory, found)

            if depth >= options.depth:
                continue

            for subdirectory in list_subdirectories_sync(directory):
                queue.append((subdirectory, depth + 1))

        return None

    async def _breadth_first(self, start: str, names: Sequence[str], options: FindDownOptions) -> Optional[str]:
        queue: Deque[Tuple[str, int]] = deque([(start, 0)])

        while queue:
            directory, depth = queue.popleft()

            found = await locate_path(
                names, directory,
                type=options.type,
                allow_symlinks=options.allow_symlinks,
                normalizer=self.normalizer,
            )
            if found:
                return self.normalizer.resolve(directory, found)

            if depth >= options.depth:
                continue

            for subdirectory in await list_subdirectories(directory):
                queue.append((subdirectory, depth + 1))

        return None

    def _depth_first_sync(self, directory: str, names: Sequence[str],
                          options: FindDownOptions, current_depth: int) -> Optional[str]:
        found = locate_path_sync(
            names, directory,
            type=options.type,
            allow_symlinks=options.allow_symlinks,
            normalizer=self.normalizer,
        )
        if found:
            return self.normalizer.resolve(directory, found)

        if current_depth >= options.depth:
            return None

        for subdirectory in list_subdirectories_sync(directory):
            result = self._depth_first_sync(subdirectory, names, options, current_depth + 1)
            if result:
                return result

        return None

    async def _depth_first(self, directory: str, names: Sequence[str],
                           options: FindDownOptions, current_depth: int) -> Optional[str]:
        found = await locate_path(
            names, directory,
            type=options.type,
            allow_symlinks=options.allow_symlinks,
            normalizer=self.normalizer,
        )
        if found:
            return self.normalizer.resolve(directory, found)

        if current_depth >= options.depth:
            return None

        for subdirectory in await list_subdirectories(directory):
            result = await self._depth_first(subdirectory, names, options, current_depth + 1)
            if result:
                return result

        return None
