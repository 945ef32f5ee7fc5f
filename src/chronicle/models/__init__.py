"""Chronicle data models.

This module exports the entities a changelog is rendered from:
- Commit: Single change record with an optional group
- Release: Versioned collection of commits linked to its predecessor
"""

from chronicle.models.release import Commit, Release

__all__ = [
    "Commit",
    "Release",
]
