"""Tests for discovery exclusion lists."""

import pytest

from proplint.core.excludes import DEFAULT_PRUNABLE_DIRS, HARDCODED_DIRS, PRUNABLE_DIRS


class TestPrunableDirs:
    """Directory pruning set tests."""

    @pytest.mark.parametrize("name", [".git", "node_modules", "dist", "coverage", ".next"])
    def test_given_dependency_or_vcs_dir_when_checked_then_pruned(self, name: str) -> None:
        """Dependency, build and VCS directories are never descended into."""
        assert name in PRUNABLE_DIRS

    def test_given_sets_when_combined_then_union_of_both(self) -> None:
        """PRUNABLE_DIRS is exactly the hardcoded plus default sets."""
        assert PRUNABLE_DIRS == HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS

    @pytest.mark.parametrize("name", ["src", "components", "lib"])
    def test_given_source_dir_when_checked_then_not_pruned(self, name: str) -> None:
        """Ordinary source directories are kept."""
        assert name not in PRUNABLE_DIRS
