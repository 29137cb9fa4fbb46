"""Abstract base class for opportunity sources."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from tender_match.models.raw import RawOpportunity
from tender_match.normalize import future_date

logger = logging.getLogger(__name__)

MISSING_DEADLINE_DAYS = 30


class RecordFailure(BaseModel):
    """One input record that could not become a RawOpportunity."""

    index: int
    record_id: Optional[str] = None
    error: str


class SourceResult(BaseModel):
    """Outcome of one source fetch: valid records plus what was rejected."""

    source: str
    ok: bool = True
    opportunities: list[RawOpportunity] = Field(default_factory=list)
    failures: list[RecordFailure] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Set when the whole source failed")


class BaseSource(ABC):
    """
    Standard interface for anything that supplies raw opportunity records.
    The matching core only sees the resulting RawOpportunity list.
    """

    source_id: str = ""
    # True when the source cannot be built without a file path
    needs_path: bool = False

    def __init__(self, *, fill_missing_deadline: bool = False):
        self.fill_missing_deadline = fill_missing_deadline

    @abstractmethod
    def load_records(self) -> list[dict[str, Any]]:
        """
        Return raw record mappings from the source.
        """
        pass

    def to_opportunity(self, record: dict[str, Any], index: int) -> RawOpportunity:
        """Validate one record, filling provenance and a fallback id."""
        data = dict(record)
        if not data.get("id"):
            data["id"] = f"{self.source_id}:{index}"
        if not (data.get("sourceId") or data.get("source_id")):
            data["source_id"] = self.source_id
        if self.fill_missing_deadline and not data.get("deadline"):
            data["deadline"] = future_date(MISSING_DEADLINE_DAYS)
        return RawOpportunity.model_validate(data)

    def fetch(self) -> SourceResult:
        """
        Load and validate every record. A bad record is reported in failures;
        a source that cannot be read at all returns ok=False.
        """
        try:
            records = self.load_records()
        except Exception as e:
            logger.warning("Source %s failed: %s", self.source_id, e)
            return SourceResult(source=self.source_id, ok=False, error=str(e))

        result = SourceResult(source=self.source_id)
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                result.failures.append(
                    RecordFailure(index=index, error=f"expected object, got {type(record).__name__}")
                )
                continue
            try:
                result.opportunities.append(self.to_opportunity(record, index))
            except ValidationError as e:
                result.failures.append(
                    RecordFailure(index=index, record_id=str(record.get("id") or ""), error=str(e))
                )
        if result.failures:
            logger.warning(
                "Source %s: %d invalid records skipped", self.source_id, len(result.failures)
            )
        return result
