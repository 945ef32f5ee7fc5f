"""Unit tests for changelog assembly."""

from pathlib import Path

import pytest

from chronicle.changelog import Changelog
from chronicle.config import ChangelogConfig
from chronicle.data import load_releases
from chronicle.errors import TemplateParseError, TemplateRenderError
from chronicle.models import Commit, Release


@pytest.fixture
def releases() -> list[Release]:
    """Return two releases, newest first."""
    older = Release(
        version="1.0.0",
        timestamp=1700000000,
        commits=(Commit(id="a1", message="initial release", group="feat"),),
    )
    newer = Release(
        version="1.1.0",
        timestamp=1700100000,
        previous=older,
        commits=(
            Commit(id="b2", message="handle empty releases", group="fix"),
            Commit(id="c3", message="add commit grouping", group="feat"),
            Commit(id="d4", message="bump deps", group="chore"),
        ),
    )
    return [newer, older]


class TestChangelog:
    """Tests for Changelog."""

    def test_default_layout(self, releases: list[Release]) -> None:
        """Test the default body template."""
        content = Changelog(releases).generate()

        assert content == (
            "## 1.1.0\n"
            "\n"
            "### Feat\n"
            "\n"
            "- Add commit grouping\n"
            "\n"
            "### Fix\n"
            "\n"
            "- Handle empty releases\n"
            "\n"
            "## 1.0.0\n"
            "\n"
            "### Feat\n"
            "\n"
            "- Initial release\n"
        )

    def test_unlisted_groups_excluded(self, releases: list[Release]) -> None:
        """Test that commits outside the configured groups are left out."""
        content = Changelog(releases).generate()

        assert "Bump deps" not in content

    def test_header_and_footer(self, releases: list[Release]) -> None:
        """Test that header and footer wrap the release bodies."""
        config = ChangelogConfig(
            header="# Changelog\n",
            body="## {{ version }}",
            footer="<!-- generated -->",
        )

        content = Changelog(releases, config).generate()

        assert content == "# Changelog\n\n## 1.1.0\n\n## 1.0.0\n\n<!-- generated -->\n"

    def test_group_order_from_config(self, releases: list[Release]) -> None:
        """Test that the configured group order reaches commit_groups."""
        config = ChangelogConfig(
            body="{% for g in commits | commit_groups %}{{ g }} {% endfor %}",
            groups=["fix", "feat", "chore"],
        )

        content = Changelog(releases[:1], config).generate()

        assert content == "fix feat chore\n"

    def test_no_trim(self, releases: list[Release]) -> None:
        """Test that trim=False keeps whitespace around bodies."""
        config = ChangelogConfig(body="  {{ version }}  ", trim=False)

        content = Changelog(releases, config).generate()

        assert content == "  1.1.0  \n\n  1.0.0  \n"

    def test_previous_release_available(self, releases: list[Release]) -> None:
        """Test that bodies can refer to the previous release."""
        config = ChangelogConfig(
            body="{{ version }}{% if previous %} (since {{ previous.version }}){% endif %}",
        )

        content = Changelog(releases, config).generate()

        assert content == "1.1.0 (since 1.0.0)\n\n1.0.0\n"

    def test_no_releases(self) -> None:
        """Test that an empty changelog without header renders empty."""
        assert Changelog([]).generate() == ""

    def test_invalid_body_raises_parse_error(self) -> None:
        """Test that template errors surface at construction."""
        with pytest.raises(TemplateParseError):
            Changelog([], ChangelogConfig(body="{% if version %}"))

    def test_render_error_propagates(self, releases: list[Release]) -> None:
        """Test that render failures are raised, not swallowed."""
        config = ChangelogConfig(body="{{ undefined_thing }}")

        with pytest.raises(TemplateRenderError, match="undefined_thing"):
            Changelog(releases, config).generate()

    def test_write(self, releases: list[Release], tmp_path: Path) -> None:
        """Test writing the changelog to a file."""
        output_path = tmp_path / "docs" / "CHANGELOG.md"

        result_path = Changelog(releases).write(output_path)

        assert result_path == output_path
        assert output_path.read_text().startswith("## 1.1.0")

    def test_fixture_data(self, releases_path: Path) -> None:
        """Test rendering the sample release data file."""
        content = Changelog(load_releases(releases_path)).generate()

        assert content.startswith("## Unreleased\n\n### Feat\n\n- Support custom footers\n")
        assert "Update contributing guide" not in content
        assert content.index("## 1.1.0") < content.index("## 1.0.0")
