"""Tests for next_tag.tags."""

from __future__ import annotations

from next_tag.models import Tag
from next_tag.tags import latest_main_tag, latest_tag, tag_exists, versioned_tags
from next_tag.versions import clean_version


def _tags(*names: str) -> list[Tag]:
    return [Tag(name=name, sha=f"sha-{name}") for name in names]


class TestLatestTag:
    """Tests for latest_tag()."""

    def test_semver_order_not_lexicographic(self) -> None:
        """Versions compare numerically."""
        tags = _tags("v1.10.0", "v1.9.0", "v1.2.0")
        assert latest_tag(tags).name == "v1.10.0"

    def test_includes_prereleases(self) -> None:
        """A newer prerelease counts as latest."""
        tags = _tags("v1.2.0", "v1.2.1-rc.1")
        assert latest_tag(tags).name == "v1.2.1-rc.1"

    def test_release_beats_its_prerelease(self) -> None:
        """A release sorts above its own prerelease."""
        tags = _tags("v1.3.0", "v1.3.0-rc.2")
        assert latest_tag(tags).name == "v1.3.0"

    def test_ignores_invalid_tags(self) -> None:
        """Tags that are not versions are skipped."""
        tags = _tags("latest", "v1.0.0", "nightly", "v2")
        assert latest_tag(tags).name == "v1.0.0"

    def test_none_when_nothing_qualifies(self) -> None:
        """No version tags gives None."""
        assert latest_tag(_tags("latest", "stable")) is None
        assert latest_tag([]) is None

    def test_duplicate_versions_do_not_crash(self) -> None:
        """Two tags for one version still give a result."""
        tags = _tags("v1.0.0", "1.0.0")
        assert latest_tag(tags).name in {"v1.0.0", "1.0.0"}

    def test_latest_is_greatest_of_all(self) -> None:
        """No qualifying tag is above the latest."""
        tags = _tags("v0.1.0", "v3.0.0-alpha.1", "v2.5.9", "v3.0.0-alpha.0", "junk")
        top = clean_version(latest_tag(tags).name)
        for version, _tag in versioned_tags(tags):
            assert top >= version


class TestLatestMainTag:
    """Tests for latest_main_tag()."""

    def test_skips_prereleases(self) -> None:
        """Prerelease tags are never the latest main tag."""
        tags = _tags("v1.2.0", "v1.2.1-rc.1", "v1.3.0-feature.x.0")
        assert latest_main_tag(tags).name == "v1.2.0"

    def test_none_when_only_prereleases(self) -> None:
        """Only prereleases gives None."""
        assert latest_main_tag(_tags("v1.0.0-rc.1")) is None

    def test_never_a_prerelease(self) -> None:
        """The result carries no prerelease part."""
        tags = _tags("v0.9.0", "v1.0.0-rc.1", "v1.0.0-rc.2", "v0.9.1")
        result = latest_main_tag(tags)
        assert result.name == "v0.9.1"
        assert clean_version(result.name).prerelease is None


class TestTagExists:
    """Tests for tag_exists()."""

    def test_exact_match(self) -> None:
        """A tag with the same name exists."""
        assert tag_exists(_tags("v9.9.9"), "v9.9.9")

    def test_invalid_semver_still_counts(self) -> None:
        """Non-version tags count for existence."""
        assert tag_exists(_tags("release-candidate"), "release-candidate")

    def test_missing(self) -> None:
        """Names must match exactly, prefix included."""
        assert not tag_exists(_tags("v9.9.9"), "9.9.9")
