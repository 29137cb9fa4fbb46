"""Matched opportunity model produced by the scoring engine."""

from typing import Literal

from pydantic import Field, computed_field

from tender_match.models.raw import RawOpportunity

Priority = Literal["high", "medium", "low"]

HIGH_PRIORITY_MIN = 80
MEDIUM_PRIORITY_MIN = 50


def priority_for_score(match_score: int) -> Priority:
    """Bucket a match score; lower bounds are inclusive."""
    if match_score >= HIGH_PRIORITY_MIN:
        return "high"
    if match_score >= MEDIUM_PRIORITY_MIN:
        return "medium"
    return "low"


class MatchedOpportunity(RawOpportunity):
    """RawOpportunity augmented with relevance against a ServiceProfile."""

    match_score: int = Field(..., ge=0, le=100)
    matched_services: tuple[str, ...] = ()
    matched_keywords: tuple[str, ...] = ()
    relevance_reason: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def priority(self) -> Priority:
        return priority_for_score(self.match_score)
