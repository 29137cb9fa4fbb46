"""Raw opportunity representation as handed over by a source."""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_CURRENCY = "USD"


class RawOpportunity(BaseModel):
    """
    One procurement notice before relevance judgment.
    Accepts camelCase keys (publishedDate, sourceId) as produced by the feeds,
    or snake_case. Immutable once created.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., description="Caller-assigned ID, unique per batch only")
    title: str = ""
    description: str = ""
    organization: str = ""

    value: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    currency: str = DEFAULT_CURRENCY

    deadline: Optional[str] = Field(default=None, description="Submission cutoff as supplied")
    published_date: Optional[str] = None
    category: Optional[str] = None

    source_id: str = ""
    source_url: Optional[str] = None

    requirements: tuple[str, ...] = ()
    location: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        # Feeds sometimes hand over numeric ids
        return str(v) if isinstance(v, int) else v

    @field_validator("title", "description", "organization", "location", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("currency", mode="before")
    @classmethod
    def _normalize_currency(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CURRENCY
        if isinstance(v, str):
            code = v.strip().upper()
            if len(code) != 3 or not code.isalpha():
                raise ValueError(f"currency must be a 3-letter code, got {v!r}")
            return code
        return v

    @field_validator("deadline", "published_date", mode="before")
    @classmethod
    def _date_to_text(cls, v: Any) -> Any:
        if isinstance(v, date):
            return v.isoformat()
        return v

    @field_validator("requirements", mode="before")
    @classmethod
    def _requirements_list(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,) if v.strip() else ()
        return v

    @property
    def is_matchable(self) -> bool:
        """A record without a title cannot be scored."""
        return bool(self.title.strip())
