"""Service provider profile: service categories, exclusions and preferred sectors."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for profile loading. Run: pip install -e ."
    ) from e
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "TENDER_MATCH_PROFILE"
DEFAULT_PROFILE_PATH = Path(__file__).resolve().parent.parent / "profiles" / "default.yaml"


class ProfileConfigError(ValueError):
    """Raised when a provider profile cannot be loaded or is misconfigured."""


def _normalize_phrases(values: Any, *, field_name: str) -> Any:
    """Strip and lowercase phrases; blank entries are a configuration error."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, (list, tuple, set, frozenset)):
        return values
    out: list[str] = []
    for v in values:
        phrase = str(v).strip().lower()
        if not phrase:
            raise ValueError(f"{field_name} must not contain blank entries")
        out.append(phrase)
    return tuple(out)


class ServiceCategory(BaseModel):
    """One line of business with its keyword fingerprint and importance weight."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    keywords: tuple[str, ...] = Field(..., description="Lowercase phrases, unique")
    weight: float = Field(default=1.0, description="Relative importance, must be > 0")

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, v: Any) -> Any:
        return _normalize_phrases(v, field_name="keywords")

    @field_validator("keywords")
    @classmethod
    def _check_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("service category needs at least one keyword")
        seen: set[str] = set()
        dupes: set[str] = set()
        for kw in v:
            if kw in seen:
                dupes.add(kw)
            seen.add(kw)
        if dupes:
            raise ValueError(f"duplicate keywords: {sorted(dupes)}")
        return v

    @field_validator("weight")
    @classmethod
    def _check_weight(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"weight must be positive, got {v}")
        return v


class ServiceProfile(BaseModel):
    """
    Immutable description of a service provider used for matching.
    Category declaration order is significant: matched services are reported in it.
    """

    model_config = ConfigDict(frozen=True)

    profile_id: str = "default"
    company: Optional[str] = None
    location: Optional[str] = None

    services: tuple[ServiceCategory, ...] = Field(..., min_length=1)
    exclude_keywords: tuple[str, ...] = Field(default=(), description="Deal-breakers")
    preferred_sectors: tuple[str, ...] = Field(default=(), description="Sectors earning +10 each")

    @field_validator("exclude_keywords", "preferred_sectors", mode="before")
    @classmethod
    def _normalize_lists(cls, v: Any, info: ValidationInfo) -> Any:
        return _normalize_phrases(v, field_name=info.field_name)

    @property
    def service_names(self) -> list[str]:
        return [s.name for s in self.services]

    @property
    def total_keyword_count(self) -> int:
        return sum(len(s.keywords) for s in self.services)

    @classmethod
    def from_dict(cls, data: dict, *, origin: str = "<dict>") -> "ServiceProfile":
        """Build profile from a mapping. Supports nested (filters) or flat structure."""
        if not isinstance(data, dict):
            raise ProfileConfigError(f"{origin}: profile must be a mapping, got {type(data).__name__}")
        filters = data.get("filters") or {}

        def _get(key: str, default=None):
            return filters.get(key, data.get(key, default))

        flat: dict = {
            "profile_id": data.get("profile_id", "default"),
            "company": data.get("company"),
            "location": data.get("location"),
            "services": data.get("services") or [],
            "exclude_keywords": _get("exclude_keywords") or [],
            "preferred_sectors": _get("preferred_sectors") or [],
        }
        try:
            return cls.model_validate(flat)
        except ValidationError as e:
            raise ProfileConfigError(f"{origin}: invalid provider profile\n{e}") from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ServiceProfile":
        """Load profile from YAML file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ProfileConfigError(f"Cannot read profile {path}: {e}") from e
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ProfileConfigError(f"{path}: invalid YAML: {e}") from e
        profile = cls.from_dict(data, origin=str(path))
        logger.debug(
            "Loaded profile %s from %s (%d services, %d keywords)",
            profile.profile_id,
            path,
            len(profile.services),
            profile.total_keyword_count,
        )
        return profile


def load_profile(path: Optional[str | Path] = None) -> ServiceProfile:
    """
    Load the provider profile. Resolution order:
    explicit path, TENDER_MATCH_PROFILE env var, packaged default profile.
    """
    resolved = path or os.environ.get(PROFILE_ENV_VAR) or DEFAULT_PROFILE_PATH
    return ServiceProfile.from_yaml(resolved)
