"""Commit and release entities.

These are the values a changelog is rendered from:
- Commit: a single change record, optionally classified into a group
- Release: a versioned, timestamped collection of commits

Both are immutable. They are built by the caller (or loaded from a data
file) before any rendering happens, and the renderer only reads them.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


def _optional_str(data: Mapping[str, Any], key: str, owner: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{owner} field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Commit:
    """Single change record.

    Attributes:
        id: Commit identifier (usually a SHA)
        message: Commit message
        group: Classification used for grouping (e.g., "feat", "fix")
    """

    id: str
    message: str
    group: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "message": self.message,
            "group": self.group,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Commit":
        """Create a Commit from a mapping.

        Args:
            data: Mapping with string 'id' and 'message' and optional 'group'

        Returns:
            Commit instance

        Raises:
            ValueError: If a required field is missing or mistyped
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Commit must be a mapping, got {type(data).__name__}")

        for key in ("id", "message"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Commit field '{key}' is required and must be a string")

        return cls(
            id=data["id"],
            message=data["message"],
            group=_optional_str(data, "group", "Commit"),
        )


@dataclass(frozen=True)
class Release:
    """Versioned collection of commits.

    Attributes:
        version: Release version (None for unreleased changes)
        commit_id: Commit the release points at (e.g., the tagged commit)
        timestamp: Release time in seconds since the epoch
        previous: Prior release in the changelog history (lookup only)
        commits: Commits in the release, in history order
    """

    version: str | None = None
    commit_id: str | None = None
    timestamp: int = 0
    previous: "Release | None" = field(default=None, repr=False, compare=False)
    commits: tuple[Commit, ...] = ()

    def __post_init__(self) -> None:
        """Store commits as a tuple so the release stays immutable."""
        if not isinstance(self.commits, tuple):
            object.__setattr__(self, "commits", tuple(self.commits))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for template contexts.

        The previous release is included one level deep; its own
        back-reference is emitted as None.
        """
        return {
            "version": self.version,
            "commit_id": self.commit_id,
            "timestamp": self.timestamp,
            "previous": self.previous._to_dict_shallow() if self.previous else None,
            "commits": [commit.to_dict() for commit in self.commits],
        }

    def _to_dict_shallow(self) -> dict[str, Any]:
        data = self.to_dict()
        data["previous"] = None
        return data

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        previous: "Release | None" = None,
    ) -> "Release":
        """Create a Release from a mapping.

        Args:
            data: Mapping with optional 'version', 'commit_id', 'timestamp'
                and 'commits' keys
            previous: Prior release to link as the back-reference

        Returns:
            Release instance

        Raises:
            ValueError: If a field has the wrong type
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Release must be a mapping, got {type(data).__name__}")

        timestamp = data.get("timestamp", 0)
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise ValueError("Release field 'timestamp' must be an integer")

        commits = data.get("commits") or []
        if isinstance(commits, (str, bytes)) or not isinstance(commits, Sequence):
            raise ValueError("Release field 'commits' must be a list")

        return cls(
            version=_optional_str(data, "version", "Release"),
            commit_id=_optional_str(data, "commit_id", "Release"),
            timestamp=timestamp,
            previous=previous,
            commits=tuple(Commit.from_dict(commit) for commit in commits),
        )
