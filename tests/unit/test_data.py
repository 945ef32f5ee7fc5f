"""Unit tests for release data loading."""

from pathlib import Path

import pytest

from chronicle.data import load_releases, releases_from_data
from chronicle.errors import ReleaseDataError


class TestReleasesFromData:
    """Tests for building releases from parsed data."""

    def test_top_level_list(self) -> None:
        """Test a bare list of releases."""
        releases = releases_from_data([{"version": "2.0.0"}, {"version": "1.0.0"}])

        assert [r.version for r in releases] == ["2.0.0", "1.0.0"]

    def test_releases_key(self) -> None:
        """Test releases under a top-level key."""
        releases = releases_from_data({"releases": [{"version": "1.0.0"}]})

        assert len(releases) == 1

    def test_previous_links_to_older_release(self) -> None:
        """Test that each release points at the next entry."""
        newest, middle, oldest = releases_from_data(
            [{"version": "3"}, {"version": "2"}, {"version": "1"}]
        )

        assert newest.previous is middle
        assert middle.previous is oldest
        assert oldest.previous is None

    def test_empty_document(self) -> None:
        """Test that empty data yields no releases."""
        assert releases_from_data(None) == []
        assert releases_from_data({}) == []

    def test_wrong_shape(self) -> None:
        """Test that a scalar document is rejected."""
        with pytest.raises(ReleaseDataError, match="expected a list"):
            releases_from_data("1.0.0", source="inline")

    def test_error_names_release_position(self) -> None:
        """Test that field errors point at the offending release."""
        with pytest.raises(ReleaseDataError, match="release #1"):
            releases_from_data([{"version": "2"}, {"timestamp": "bad"}])


class TestLoadReleases:
    """Tests for loading release files."""

    def test_load_fixture(self, releases_path: Path) -> None:
        """Test loading the sample release data."""
        releases = load_releases(releases_path)

        assert [r.version for r in releases] == [None, "1.1.0", "1.0.0"]
        assert releases[1].commits[1].group == "feat"
        assert releases[0].previous is releases[1]

    def test_load_json(self, tmp_path: Path) -> None:
        """Test that JSON files load as well."""
        path = tmp_path / "releases.json"
        path.write_text('[{"version": "1.0.0", "commits": [{"id": "a", "message": "m"}]}]')

        releases = load_releases(path)

        assert releases[0].commits[0].id == "a"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that unreadable files raise ReleaseDataError."""
        with pytest.raises(ReleaseDataError):
            load_releases(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that malformed documents raise ReleaseDataError."""
        path = tmp_path / "broken.yaml"
        path.write_text("releases: [unclosed\n")

        with pytest.raises(ReleaseDataError, match="not valid"):
            load_releases(path)
