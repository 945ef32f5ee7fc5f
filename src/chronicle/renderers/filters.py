"""Jinja2 filters for changelog templates.

This module provides the two filters every Chronicle template can use:
- upper_first: uppercase the first character of a string
- commit_groups: bucket commits by group, in a caller-declared group order

Filters validate the shape of what the template passes them before doing
any work. Bad input raises a FilterError subclass, which the renderer
reports as a TemplateRenderError.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from jinja2 import Undefined, pass_context
from jinja2.runtime import Context

from chronicle.errors import FilterArgumentError, FilterValueError
from chronicle.models.release import Commit

logger = logging.getLogger(__name__)

UPPER_FIRST = "upper_first"
COMMIT_GROUPS = "commit_groups"

# Context key consulted by commit_groups when the template gives no `groups`
COMMIT_GROUPS_CONTEXT_KEY = "commit_groups_filter"


# =============================================================================
# Typed extraction
# =============================================================================


def _type_name(value: Any) -> str:
    return type(value).__name__


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def extract_string(filter_name: str, arg: str, value: Any) -> str:
    """Return value if it is a string, otherwise raise FilterValueError."""
    if not isinstance(value, str):
        raise FilterValueError(
            filter_name,
            f"received an incorrect type for `{arg}`: got {_type_name(value)}, expected a string",
        )
    return value


def extract_strings(filter_name: str, arg: str, value: Any) -> list[str]:
    """Return value as a list of strings, otherwise raise FilterValueError."""
    if not _is_sequence(value) or not all(isinstance(item, str) for item in value):
        raise FilterValueError(
            filter_name,
            f"received an incorrect type for `{arg}`: expected a list of strings",
        )
    return list(value)


def extract_commits(filter_name: str, arg: str, value: Any) -> list[Commit]:
    """Return value as a list of commits, otherwise raise FilterValueError.

    Accepts Commit instances and commit mappings (the shape commits take
    inside a template context).
    """
    if not _is_sequence(value):
        raise FilterValueError(
            filter_name,
            f"received an incorrect type for `{arg}`: got {_type_name(value)}, expected a list of commits",
        )

    commits: list[Commit] = []
    for item in value:
        if isinstance(item, Commit):
            commits.append(item)
        elif isinstance(item, Mapping):
            try:
                commits.append(Commit.from_dict(item))
            except ValueError as e:
                raise FilterValueError(filter_name, f"received an invalid commit in `{arg}`: {e}") from None
        else:
            raise FilterValueError(
                filter_name,
                f"received an incorrect type for `{arg}`: list item is {_type_name(item)}, expected a commit",
            )
    return commits


# =============================================================================
# upper_first
# =============================================================================


def upper_first(value: Any) -> str:
    """Uppercase the first character of a string.

    The first character is mapped with str.upper(), so characters whose
    uppercase form is several characters long keep the full expansion.

    Args:
        value: String to transform

    Returns:
        The string with its first character uppercased

    Raises:
        FilterValueError: If value is not a string

    Examples:
        >>> upper_first("add xyz")
        'Add xyz'
        >>> upper_first("ßeta")
        'SSeta'
        >>> upper_first("")
        ''
    """
    text = extract_string(UPPER_FIRST, "value", value)
    return text[:1].upper() + text[1:]


# =============================================================================
# commit_groups
# =============================================================================


def group_commits(
    commits: Sequence[Commit],
    groups: Sequence[str],
) -> dict[str, list[Commit]]:
    """Bucket commits by group, ordered by the position of each group in groups.

    Commits whose group is not listed are dropped. Commits keep their input
    order within a bucket.

    Args:
        commits: Commits to group; every commit must carry a group
        groups: Group names, in presentation order

    Returns:
        Ordered mapping of group name to commits

    Raises:
        FilterValueError: If a commit has no group
    """
    buckets: dict[str, list[Commit]] = {}
    for commit in commits:
        if not commit.group:
            raise FilterValueError(
                COMMIT_GROUPS,
                f"requires every commit to have a group (commit {commit.id!r} has none)",
            )
        if commit.group in groups:
            buckets.setdefault(commit.group, []).append(commit)

    # A group listed twice sorts by its first position
    order: dict[str, int] = {}
    for index, name in enumerate(groups):
        order.setdefault(name, index)
    return {name: buckets[name] for name in sorted(buckets, key=order.__getitem__)}


@pass_context
def commit_groups(
    context: Context,
    value: Any,
    groups: Any = None,
) -> dict[str, list[dict[str, Any]]]:
    """Group commits for iteration in a template.

    Usage:
        {% for group, members in (commits | commit_groups(groups=["feat", "fix"])).items() %}

    When `groups` is omitted, the `commit_groups_filter` context value is
    used instead (set by Template.render_with_groups).

    Args:
        context: Active template context
        value: Commits to group
        groups: Group names, in presentation order

    Returns:
        Ordered mapping of group name to serialized commits

    Raises:
        FilterValueError: If value or groups have the wrong shape
        FilterArgumentError: If no groups were supplied at all
    """
    commits = extract_commits(COMMIT_GROUPS, "value", value)

    if groups is None or isinstance(groups, Undefined):
        groups = context.get(COMMIT_GROUPS_CONTEXT_KEY)
    if groups is None:
        raise FilterArgumentError(COMMIT_GROUPS, "groups")
    ordered = extract_strings(COMMIT_GROUPS, "groups", groups)

    grouped = group_commits(commits, ordered)

    result: dict[str, list[dict[str, Any]]] = {}
    for name, members in grouped.items():
        logger.debug("Group %s: %d commits", name, len(members))
        result[name] = [commit.to_dict() for commit in members]
    return result


FILTERS = {
    UPPER_FIRST: upper_first,
    COMMIT_GROUPS: commit_groups,
}
