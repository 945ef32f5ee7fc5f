"""Test fixtures for Chronicle.

Release data:
- releases.yaml: Two tagged releases and an unreleased section, newest first

Templates:
- templates/grouped.md.j2: Release body grouped with commit_groups
- templates/unclosed_for.md.j2: A loop that is never closed
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

RELEASES_PATH = FIXTURES_DIR / "releases.yaml"

TEMPLATES_DIR = FIXTURES_DIR / "templates"
GROUPED_TEMPLATE_PATH = TEMPLATES_DIR / "grouped.md.j2"
UNCLOSED_TEMPLATE_PATH = TEMPLATES_DIR / "unclosed_for.md.j2"


def get_template(name: str) -> Path:
    """Get path to a fixture template.

    Args:
        name: File name of the template

    Returns:
        Path to the template

    Raises:
        ValueError: If the template doesn't exist
    """
    template_path = TEMPLATES_DIR / name
    if not template_path.exists():
        raise ValueError(f"Fixture template not found: {name}")
    return template_path
