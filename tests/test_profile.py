"""Unit tests for ServiceProfile."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tender_match.models.profile import (
    DEFAULT_PROFILE_PATH,
    PROFILE_ENV_VAR,
    ProfileConfigError,
    ServiceCategory,
    ServiceProfile,
    load_profile,
)


class TestServiceCategory:
    """Tests for ServiceCategory validation."""

    def test_keywords_lowercased(self) -> None:
        """Keywords are stored stripped and lowercase."""
        cat = ServiceCategory(name="Software", keywords=[" API ", "CRM"], weight=0.95)
        assert cat.keywords == ("api", "crm")

    def test_zero_weight_rejected(self) -> None:
        """A weight of zero would make a match worthless."""
        with pytest.raises(ValidationError, match="weight must be positive"):
            ServiceCategory(name="Web", keywords=["web"], weight=0)

    def test_negative_weight_rejected(self) -> None:
        """Negative weights are rejected."""
        with pytest.raises(ValueError):
            ServiceCategory(name="Web", keywords=["web"], weight=-0.5)

    def test_empty_keywords_rejected(self) -> None:
        """A category needs at least one keyword."""
        with pytest.raises(ValidationError, match="at least one keyword"):
            ServiceCategory(name="Web", keywords=[], weight=1.0)

    def test_duplicate_keywords_rejected(self) -> None:
        """Duplicates after lowercasing indicate a data-entry error."""
        with pytest.raises(ValidationError, match="duplicate keywords"):
            ServiceCategory(name="Software", keywords=["API", "api"], weight=1.0)

    def test_blank_keyword_rejected(self) -> None:
        """Blank phrases would match every text."""
        with pytest.raises(ValidationError):
            ServiceCategory(name="Software", keywords=["api", "  "], weight=1.0)


class TestServiceProfile:
    """Tests for ServiceProfile model and loading."""

    def test_needs_a_service(self) -> None:
        """Scores are normalized by service count, so zero services is invalid."""
        with pytest.raises(ValidationError):
            ServiceProfile(services=[])

    def test_frozen(self, small_profile: ServiceProfile) -> None:
        """Profiles cannot be mutated after construction."""
        with pytest.raises(ValidationError):
            small_profile.exclude_keywords = ("anything",)
        assert isinstance(small_profile.services, tuple)

    def test_from_yaml_nested_filters(self, profile_yaml: Path) -> None:
        """from_yaml reads services plus exclusions/sectors under filters."""
        profile = ServiceProfile.from_yaml(profile_yaml)
        assert profile.profile_id == "test"
        assert profile.company == "Test Studio"
        assert profile.service_names == ["Web Development", "Mobile App Development"]
        assert profile.services[0].keywords == ("website", "web portal", "portal", "cms")
        assert profile.services[1].weight == 0.9
        assert profile.exclude_keywords == ("construction works", "cleaning services")
        assert profile.preferred_sectors == ("government", "ministry of ict")
        assert profile.total_keyword_count == 6

    def test_from_yaml_flat_structure(self, tmp_path: Path) -> None:
        """exclude_keywords / preferred_sectors may sit at top level."""
        path = tmp_path / "flat.yaml"
        path.write_text("""
services:
  - name: Video
    keywords: [animation]
exclude_keywords: [catering services]
preferred_sectors: [NGO]
""")
        profile = ServiceProfile.from_yaml(path)
        assert profile.profile_id == "default"
        assert profile.services[0].weight == 1.0
        assert profile.exclude_keywords == ("catering services",)
        assert profile.preferred_sectors == ("ngo",)

    def test_from_yaml_bad_weight_is_config_error(self, tmp_path: Path) -> None:
        """Misconfiguration fails at load time with the file named."""
        path = tmp_path / "bad.yaml"
        path.write_text("""
services:
  - name: Web
    weight: 0
    keywords: [web]
""")
        with pytest.raises(ProfileConfigError, match="bad.yaml"):
            ServiceProfile.from_yaml(path)

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        """Missing profile is a configuration error."""
        with pytest.raises(ProfileConfigError, match="Cannot read profile"):
            ServiceProfile.from_yaml(tmp_path / "nope.yaml")

    def test_from_yaml_not_a_mapping(self, tmp_path: Path) -> None:
        """A YAML list is not a profile."""
        path = tmp_path / "list.yaml"
        path.write_text("- web\n- mobile\n")
        with pytest.raises(ProfileConfigError, match="must be a mapping"):
            ServiceProfile.from_yaml(path)

    def test_from_yaml_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML is reported as a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("services: [unclosed\n")
        with pytest.raises(ProfileConfigError, match="invalid YAML"):
            ServiceProfile.from_yaml(path)


class TestLoadProfile:
    """Tests for load_profile resolution."""

    def test_default_profile(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Bundled profile loads with seven services in declaration order."""
        monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
        profile = load_profile()
        assert DEFAULT_PROFILE_PATH.exists()
        assert profile.profile_id == "kuwex"
        assert profile.service_names == [
            "Web Development",
            "Mobile App Development",
            "Branding & Design",
            "Digital Marketing",
            "UI/UX Design",
            "Software Development",
            "Video & Multimedia",
        ]
        assert len(profile.exclude_keywords) == 25
        assert len(profile.preferred_sectors) == 14
        assert "ministry of ict" in profile.preferred_sectors
        assert "hvac installation" in profile.exclude_keywords

    def test_env_var_override(self, profile_yaml: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """TENDER_MATCH_PROFILE points at another profile."""
        monkeypatch.setenv(PROFILE_ENV_VAR, str(profile_yaml))
        assert load_profile().profile_id == "test"

    def test_explicit_path_wins(self, profile_yaml: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """An explicit path takes precedence over the env var."""
        monkeypatch.setenv(PROFILE_ENV_VAR, "/does/not/exist.yaml")
        assert load_profile(profile_yaml).profile_id == "test"
