"""Release data loading.

Release data files are YAML (or JSON, which YAML accepts) documents holding
a list of releases, newest first, either at the top level or under a
`releases:` key:

    releases:
      - version: "1.1.0"
        timestamp: 1700000000
        commits:
          - id: "a1b2c3"
            message: "add xyz"
            group: "feat"
      - version: "1.0.0"
        ...

Commits are expected to be classified already; nothing here inspects
commit messages.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from chronicle.errors import ReleaseDataError
from chronicle.models.release import Release

logger = logging.getLogger(__name__)


def releases_from_data(data: Any, source: str = "<data>") -> list[Release]:
    """Build linked releases from parsed release data.

    Each release's `previous` points at the next (older) entry.

    Args:
        data: Parsed document (list of release mappings or a mapping with
            a `releases` key)
        source: Name of the data source for error messages

    Returns:
        Releases in the same order as the input (newest first)

    Raises:
        ReleaseDataError: If the data has the wrong shape
    """
    if isinstance(data, dict):
        data = data.get("releases")

    if data is None:
        return []

    if not isinstance(data, list):
        raise ReleaseDataError(source, "expected a list of releases")

    # Build oldest first so every release can link to its predecessor
    releases: list[Release] = []
    previous: Release | None = None
    for index, entry in enumerate(reversed(data)):
        try:
            release = Release.from_dict(entry, previous=previous)
        except ValueError as e:
            position = len(data) - 1 - index
            raise ReleaseDataError(source, f"release #{position}: {e}") from e
        releases.append(release)
        previous = release

    releases.reverse()
    return releases


def load_releases(path: Path) -> list[Release]:
    """Load releases from a YAML or JSON file.

    Args:
        path: Path to the release data file

    Returns:
        Releases, newest first

    Raises:
        ReleaseDataError: If the file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ReleaseDataError(str(path), str(e)) from e
    except yaml.YAMLError as e:
        raise ReleaseDataError(str(path), f"not valid YAML/JSON ({e})") from e

    releases = releases_from_data(data, source=str(path))
    logger.debug("Loaded %d releases from %s", len(releases), path)
    return releases
