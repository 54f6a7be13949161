"""
Unit tests for the downward walker.

Directory-listing order is not sorted, so tests with several equally deep
matches accept any of them.
"""

import os
import math
import asyncio
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch
import pytest

from findpath.errors import ConfigurationError
from findpath.models.options import FindDownOptions, Strategy
from findpath.models.target import SearchTarget
from findpath.tools.paths import PathNormalizer
from findpath.tools import walk_down
from findpath.tools.walk_down import DownwardWalker, list_subdirectories, list_subdirectories_sync


TARGET = 'target.txt'

STRATEGIES = pytest.mark.parametrize(
    'strategy', [Strategy.BREADTH, Strategy.DEPTH], ids=['breadth', 'depth']
)

needs_symlinks = pytest.mark.skipif(not hasattr(os, 'symlink'), reason="symlinks not supported")


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text('x')
    return path


class WalkDownTestCase:
    """Temporary tree and walker shared by the downward walker tests."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)
        self.walker = DownwardWalker(PathNormalizer())

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _find(self, start=None, name=TARGET, **kwargs):
        options = FindDownOptions(cwd=str(start or self.root), **kwargs)
        return self.walker.find_sync(SearchTarget.from_name(name), options)


class TestListSubdirectories(WalkDownTestCase):
    """Test cases for the subdirectory listing."""

    def test_lists_only_directories(self):
        """Test that files are excluded from the listing."""
        (self.root / 'x').mkdir()
        (self.root / 'y').mkdir()
        _touch(self.root / 'file.txt')

        found = list_subdirectories_sync(self.temp_dir)

        assert sorted(found) == [str(self.root / 'x'), str(self.root / 'y')]

    def test_missing_directory_is_empty(self):
        """Test that a vanished directory has no subdirectories."""
        assert list_subdirectories_sync(str(self.root / 'missing')) == []

    def test_file_is_empty(self):
        """Test that listing a file yields no subdirectories."""
        assert list_subdirectories_sync(str(_touch(self.root / 'f'))) == []

    def test_permission_error_is_empty(self):
        """Test that listing failures are swallowed."""
        with patch('findpath.tools.walk_down.os.scandir', side_effect=PermissionError("denied")):
            assert list_subdirectories_sync(self.temp_dir) == []

    @needs_symlinks
    def test_symlinked_directories_skipped(self):
        """Test that symlinks to directories are not listed."""
        (self.root / 'real').mkdir()
        os.symlink(self.root / 'real', self.root / 'link', target_is_directory=True)

        assert list_subdirectories_sync(self.temp_dir) == [str(self.root / 'real')]

    def test_async_listing(self):
        """Test that the async listing matches the sync one."""
        (self.root / 'x').mkdir()

        assert asyncio.run(list_subdirectories(self.temp_dir)) == [str(self.root / 'x')]


class TestDownwardWalker(WalkDownTestCase):
    """Test cases shared by both strategies."""

    @STRATEGIES
    def test_match_in_start_directory(self, strategy):
        """Test that the start directory itself is checked first."""
        _touch(self.root / TARGET)
        _touch(self.root / 'x' / TARGET)

        assert self._find(strategy=strategy) == str(self.root / TARGET)

    @STRATEGIES
    def test_match_one_level_down(self, strategy):
        """Test the default depth of 1."""
        _touch(self.root / 'x' / TARGET)

        assert self._find(strategy=strategy) == str(self.root / 'x' / TARGET)

    @STRATEGIES
    def test_default_depth_misses_deeper_match(self, strategy):
        """Test that a target two levels down is out of reach at depth 1."""
        _touch(self.root / 'x' / 'y' / TARGET)

        assert self._find(strategy=strategy) is None
        assert self._find(strategy=strategy, depth=2) == str(self.root / 'x' / 'y' / TARGET)

    @STRATEGIES
    def test_unlimited_depth_reaches_deep_match(self, strategy):
        """Test that an infinite depth searches the whole subtree."""
        expected = _touch(self.root / 'a' / 'b' / 'c' / TARGET)

        assert self._find(strategy=strategy, depth=math.inf) == str(expected)
        assert self._find(strategy=strategy, depth=float('inf'), name='absent.txt') is None

    @STRATEGIES
    def test_depth_zero_never_lists(self, strategy):
        """Test that depth=0 checks the start directory only."""
        _touch(self.root / 'x' / TARGET)

        with patch('findpath.tools.walk_down.list_subdirectories_sync') as mock_list:
            assert self._find(strategy=strategy, depth=0) is None

        mock_list.assert_not_called()

    @STRATEGIES
    def test_negative_depth_is_zero(self, strategy):
        """Test that negative depths behave like depth 0."""
        _touch(self.root / 'x' / TARGET)

        assert self._find(strategy=strategy, depth=-3) is None
        assert self._find(strategy=strategy, depth=-math.inf) is None

    def test_single_match_same_for_both_strategies(self):
        """Test that both strategies agree when only one match exists."""
        (self.root / 'a' / 'b').mkdir(parents=True)
        (self.root / 'c' / 'd').mkdir(parents=True)
        expected = _touch(self.root / 'c' / 'd' / TARGET)

        breadth = self._find(strategy=Strategy.BREADTH, depth=3)
        depth = self._find(strategy=Strategy.DEPTH, depth=3)

        assert breadth == depth == str(expected)

    @STRATEGIES
    def test_directory_type(self, strategy):
        """Test searching for a directory."""
        (self.root / 'x' / 'node_modules').mkdir(parents=True)

        found = self._find(strategy=strategy, name='node_modules', type='directory')

        assert found == str(self.root / 'x' / 'node_modules')

    @STRATEGIES
    def test_name_list(self, strategy):
        """Test that a list of names matches any of them."""
        _touch(self.root / 'x' / 'setup.cfg')

        found = self._find(strategy=strategy, name=['pyproject.toml', 'setup.cfg'])

        assert found == str(self.root / 'x' / 'setup.cfg')

    @STRATEGIES
    def test_listing_failures_are_swallowed(self, strategy):
        """Test that unreadable directories do not abort the search."""
        _touch(self.root / 'x' / TARGET)

        with patch('findpath.tools.walk_down.os.scandir', side_effect=PermissionError("denied")):
            assert self._find(strategy=strategy, depth=2) is None

    @STRATEGIES
    def test_unreadable_sibling_does_not_hide_match(self, strategy):
        """Test that one failing directory does not stop its siblings."""
        (self.root / 'locked').mkdir()
        _touch(self.root / 'open' / 'inner' / TARGET)
        real_scandir = os.scandir

        def scandir(path):
            if os.path.basename(path) == 'locked':
                raise PermissionError("denied")
            return real_scandir(path)

        with patch('findpath.tools.walk_down.os.scandir', side_effect=scandir):
            found = self._find(strategy=strategy, depth=2)

        assert found == str(self.root / 'open' / 'inner' / TARGET)

    @needs_symlinks
    @STRATEGIES
    def test_does_not_descend_into_symlinked_directories(self, strategy):
        """Test that symlinked directories are not explored."""
        _touch(self.root / 'elsewhere' / TARGET)
        start = self.root / 'start'
        start.mkdir()
        os.symlink(self.root / 'elsewhere', start / 'link', target_is_directory=True)

        assert self._find(start, strategy=strategy) is None

    def test_matcher_target_rejected(self):
        """Test that custom matchers are refused for downward searches."""
        with pytest.raises(ConfigurationError, match="upward"):
            self.walker.find_sync(
                SearchTarget.from_name(lambda d: None), FindDownOptions(cwd=self.temp_dir)
            )


class TestStrategyOrder(WalkDownTestCase):
    """Test cases for the differences between the two strategies."""

    def test_breadth_first_returns_shallowest(self):
        """Test that breadth-first prefers a shallower match in any subtree."""
        _touch(self.root / 'x' / 'deep' / TARGET)
        _touch(self.root / 'y' / TARGET)

        found = self._find(strategy=Strategy.BREADTH, depth=2)

        assert found == str(self.root / 'y' / TARGET)

    def test_depth_first_returns_first_listed_subtree(self):
        """Test that depth-first returns the match of the first listed subtree."""
        _touch(self.root / 'x' / 'deep' / TARGET)
        _touch(self.root / 'y' / TARGET)
        first_listed = os.path.basename(list_subdirectories_sync(self.temp_dir)[0])

        found = self._find(strategy=Strategy.DEPTH, depth=2)

        if first_listed == 'x':
            assert found == str(self.root / 'x' / 'deep' / TARGET)
        else:
            assert found == str(self.root / 'y' / TARGET)

    @STRATEGIES
    def test_equal_depth_matches(self, strategy):
        """Test that one of several equally deep matches is returned."""
        _touch(self.root / 'x' / TARGET)
        _touch(self.root / 'y' / TARGET)

        found = self._find(strategy=strategy)

        assert found in (str(self.root / 'x' / TARGET), str(self.root / 'y' / TARGET))

    def test_breadth_first_visits_level_by_level(self):
        """Test that every directory of a level is checked before the next level."""
        (self.root / 'x' / 'x1').mkdir(parents=True)
        (self.root / 'y' / 'y1').mkdir(parents=True)
        visited = []
        real_locate = walk_down.locate_path_sync

        def locate(names, directory, **kwargs):
            visited.append(directory)
            return real_locate(names, directory, **kwargs)

        with patch('findpath.tools.walk_down.locate_path_sync', side_effect=locate):
            self._find(strategy=Strategy.BREADTH, depth=2)

        depths = [len(Path(directory).relative_to(self.root).parts) for directory in visited]
        assert depths == sorted(depths)
        assert len(visited) == 5


class TestDownwardWalkerAsync(WalkDownTestCase):
    """Test cases for the async downward walk."""

    @STRATEGIES
    def test_matches_sync_walk(self, strategy):
        """Test that async and sync walks return identical results."""
        _touch(self.root / 'x' / 'y' / TARGET)
        target = SearchTarget.from_name(TARGET)
        options = FindDownOptions(cwd=self.temp_dir, depth=2, strategy=strategy)

        assert asyncio.run(self.walker.find(target, options)) == self.walker.find_sync(target, options)
        assert self.walker.find_sync(target, options) == str(self.root / 'x' / 'y' / TARGET)

    @STRATEGIES
    def test_unlimited_depth(self, strategy):
        """Test that the async walk also honors an infinite depth."""
        expected = _touch(self.root / 'a' / 'b' / 'c' / TARGET)
        options = FindDownOptions(cwd=self.temp_dir, depth=math.inf, strategy=strategy)

        assert asyncio.run(self.walker.find(SearchTarget.from_name(TARGET), options)) == str(expected)

    @STRATEGIES
    def test_no_match(self, strategy):
        """Test that an async search with no match returns None."""
        (self.root / 'x').mkdir()
        options = FindDownOptions(cwd=self.temp_dir, strategy=strategy)

        assert asyncio.run(self.walker.find(SearchTarget.from_name(TARGET), options)) is None

    @STRATEGIES
    def test_listing_failures_are_swallowed(self, strategy):
        """Test that async listing failures are treated as empty."""
        _touch(self.root / 'x' / TARGET)
        options = FindDownOptions(cwd=self.temp_dir, strategy=strategy)

        with patch('findpath.tools.walk_down.os.scandir', side_effect=OSError("io error")):
            assert asyncio.run(self.walker.find(SearchTarget.from_name(TARGET), options)) is None
