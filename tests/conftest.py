"""Shared pytest fixtures for Chronicle tests.

This module provides common fixtures used across unit and integration
tests. Fixtures are organized by category:
- Path fixtures: Locations of data and template fixtures
- Configuration fixtures: Config dictionaries for loader tests
- Release fixtures: Pre-built commits and releases for renderer tests
"""

import logging
from pathlib import Path
from typing import Any

import pytest

from chronicle.models import Commit, Release
from chronicle.utils.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def restore_chronicle_logger():
    """Restore the chronicle logger after tests that configure logging."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def releases_path(fixtures_dir: Path) -> Path:
    """Return the path to the sample release data file."""
    return fixtures_dir / "releases.yaml"


@pytest.fixture
def templates_dir(fixtures_dir: Path) -> Path:
    """Return the path to template fixtures."""
    return fixtures_dir / "templates"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid Chronicle configuration."""
    return {
        "changelog": {
            "groups": ["feat", "fix"],
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete Chronicle configuration with all options."""
    return {
        "template": {
            "trim_blocks": True,
            "lstrip_blocks": True,
            "keep_trailing_newline": False,
            "strict_undefined": False,
        },
        "changelog": {
            "header": "# Changelog\n",
            "body": "## {{ version }}\n",
            "footer": "<!-- end -->\n",
            "trim": False,
            "groups": ["feat", "fix", "docs"],
        },
    }


# =============================================================================
# Release Fixtures
# =============================================================================


@pytest.fixture
def mixed_commits() -> list[Commit]:
    """Return commits whose groups interleave: fix, feat, fix, feat, chore."""
    return [
        Commit(id="a1", message="fix A", group="fix"),
        Commit(id="b2", message="feat B", group="feat"),
        Commit(id="c3", message="fix C", group="fix"),
        Commit(id="d4", message="feat D", group="feat"),
        Commit(id="e5", message="chore E", group="chore"),
    ]


@pytest.fixture
def previous_release() -> Release:
    """Return the release preceding sample_release."""
    return Release(
        version="0.9.0",
        commit_id="0000aaa",
        timestamp=1690000000,
        commits=(Commit(id="0000aaa", message="first commit", group="feat"),),
    )


@pytest.fixture
def sample_release(mixed_commits: list[Commit], previous_release: Release) -> Release:
    """Return a tagged release with mixed commit groups."""
    return Release(
        version="1.0.0",
        commit_id="d4",
        timestamp=1700000000,
        previous=previous_release,
        commits=tuple(mixed_commits),
    )


@pytest.fixture
def empty_release() -> Release:
    """Return a release with no version and no commits."""
    return Release()
