"""Chronicle template filters.

- upper_first: uppercase the first character of a string
- commit_groups: group commits in a caller-declared group order
"""

from chronicle.renderers.filters import FILTERS, commit_groups, group_commits, upper_first

__all__ = ["FILTERS", "commit_groups", "group_commits", "upper_first"]
