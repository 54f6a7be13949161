"""
Upward walker for findpath.

Walks from a start directory through its ancestors, checking each one for a
search target, until a match limit, a stop boundary, a stop signal from a
custom matcher, or the filesystem root ends the walk. Matches are returned
nearest ancestor first.
"""

import os
import inspect
import logging
from typing import Any, List, Optional, Tuple

from ..errors import ConfigurationError
from ..models.options import FindUpOptions
from ..models.target import SearchTarget, FIND_UP_STOP
from .locator import locate_path, locate_path_sync, default_normalizer
from .paths import PathNormalizer


logger = logging.getLogger(__name__)


class UpwardWalker:
    """
    Searches a directory and its ancestors for a target.

    Both the synchronous and the asynchronous walks visit directories strictly
    one after another and produce identical results for the same filesystem.
    """

    def __init__(self, normalizer: Optional[PathNormalizer] = None):
        """
        Initialize the upward walker.

        Args:
            normalizer: Path normalizer shared with the existence checks
        """
        self.normalizer = normalizer or default_normalizer

    def find_all_sync(self, target: SearchTarget, options: FindUpOptions) -> List[str]:
        """
        Collect matches from the start directory upward.

        Args:
            target: Names or custom matcher to look for
            options: Validated upward search options

        Returns:
            Absolute paths of the matches, nearest first, at most options.limit

        Raises:
            ConfigurationError: If the matcher needs to be awaited
        """
        if target.is_async_matcher():
            raise ConfigurationError(
                f"Asynchronous {target} cannot be used in a synchronous search"
            )

        matches: List[str] = []
        if options.limit == 0:
            return matches

        directory, stop_at = self._prepare(options)
        logger.debug(f"Searching upward for {target} from {directory} (stop at {stop_at})")

        while True:
            found = self._evaluate_sync(target, directory, options)

            if found is FIND_UP_STOP:
                break

            if found:
                matches.append(self.normalizer.resolve(directory, found))
                if not options.is_unbounded() and len(matches) >= options.limit:
                    break

            if directory == stop_at:
                break

            parent = self.normalizer.parent_of(directory)
            if parent == directory:
                break

            directory = parent

        logger.debug(f"Upward search for {target} found {len(matches)} match(es)")
        return matches

    async def find_all(self, target: SearchTarget, options: FindUpOptions) -> List[str]:
        """Async version of find_all_sync; matchers may be coroutine functions."""
        matches: List[str] = []
        if options.limit == 0:
            return matches

        directory, stop_at = self._prepare(options)
        logger.debug(f"Searching upward for {target} from {directory} (stop at {stop_at})")

        while True:
            found = await self._evaluate(target, directory, options)

            if found is FIND_UP_STOP:
                break

            if found:
                matches.append(self.normalizer.resolve(directory, found))
                if not options.is_unbounded() and len(matches) >= options.limit:
                    break

            if directory == stop_at:
                break

            parent = self.normalizer.parent_of(directory)
            if parent == directory:
                break

            directory = parent

        logger.debug(f"Upward search for {target} found {len(matches)} match(es)")
        return matches

    def find_first_sync(self, target: SearchTarget, options: FindUpOptions) -> Optional[str]:
        """Return the nearest match, or None."""
        matches = self.find_all_sync(target, options.model_copy(update={'limit': 1}))
        return matches[0] if matches else None

    async def find_first(self, target: SearchTarget, options: FindUpOptions) -> Optional[str]:
        """Async version of find_first_sync."""
        matches = await self.find_all(target, options.model_copy(update={'limit': 1}))
        return matches[0] if matches else None

    def _prepare(self, options: FindUpOptions) -> Tuple[str, str]:
        """Resolve the start directory and the stop boundary."""
        directory = self.normalizer.resolve(options.cwd or '')
        stop_at = self.normalizer.resolve(
            directory, options.stop_at or self.normalizer.root_of(directory)
        )
        return directory, stop_at

    def _evaluate_sync(self, target: SearchTarget, directory: str, options: FindUpOptions) -> Any:
        if not target.is_matcher:
            return self._locate_sync(target.names, directory, options)

        result = target.matcher(directory)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise ConfigurationError(
                f"{target} returned an awaitable in a synchronous search"
            )

        candidate = self._interpret(result)
        if isinstance(candidate, str):
            return self._locate_sync((candidate,), directory, options)
        return candidate

    async def _evaluate(self, target: SearchTarget, directory: str, options: FindUpOptions) -> Any:
        if not target.is_matcher:
            return await self._locate(target.names, directory, options)

        result = target.matcher(directory)
        if inspect.isawaitable(result):
            result = await result

        candidate = self._interpret(result)
        if isinstance(candidate, str):
            return await self._locate((candidate,), directory, options)
        return candidate

    def _interpret(self, result: Any) -> Any:
        """Map a matcher result to a candidate path, the stop signal, or None."""
        if result is FIND_UP_STOP:
            return result
        if not result:
            return None
        if isinstance(result, (str, os.PathLike)):
            candidate = os.fspath(result)
            if isinstance(candidate, str):
                return candidate
        raise ConfigurationError(
            f"Matcher must return a path, None or FIND_UP_STOP, got {result!r}"
        )

    def _locate_sync(self, names, directory: str, options: FindUpOptions) -> Optional[str]:
        return locate_path_sync(
            names, directory,
            type=options.type,
            allow_symlinks=options.allow_symlinks,
            normalizer=self.normalizer,
        )

    async def _locate(self, names, directory: str, options: FindUpOptions) -> Optional[str]:
        return await locate_path(
            names, directory,
            type=options.type,
            allow_symlinks=options.allow_symlinks,
            normalizer=self.normalizer,
        )
