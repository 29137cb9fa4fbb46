"""Batch scoring, ranking and aggregate statistics."""

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from tender_match.models.opportunity import MatchedOpportunity
from tender_match.models.profile import ServiceProfile
from tender_match.models.raw import RawOpportunity
from tender_match.normalize import days_until_deadline, deadline_date, format_value, is_deadline_valid
from tender_match.scoring import score

logger = logging.getLogger(__name__)

URGENT_WITHIN_DAYS = 14


class RankResult(BaseModel):
    """Outcome of ranking one batch."""

    matches: list[MatchedOpportunity] = Field(default_factory=list)
    input_count: int = 0
    failed_ids: list[str] = Field(default_factory=list, description="Records whose scoring raised")

    @property
    def discarded(self) -> int:
        return self.input_count - len(self.matches)


class BatchStats(BaseModel):
    """Aggregate counters over a ranked batch."""

    total: int = Field(..., description="Records considered")
    matched: int
    discarded: int
    high: int = 0
    medium: int = 0
    low: int = 0
    urgent: int = Field(default=0, description=f"Deadline within {URGENT_WITHIN_DAYS} days")
    total_value: float = 0.0


def rank_key(match: MatchedOpportunity) -> tuple[int, date]:
    """
    Score descending, then soonest deadline. Unparseable or missing deadlines
    sort as date.max, after every dated match with the same score.
    """
    return (-match.match_score, deadline_date(match.deadline) or date.max)


class MatchEngine:
    """
    Scores opportunities against one profile and ranks the matches.
    Holds no per-batch state, so one engine can serve concurrent callers.
    """

    def __init__(self, profile: ServiceProfile):
        self.profile = profile

    def score(self, opp: RawOpportunity) -> Optional[MatchedOpportunity]:
        return score(opp, self.profile)

    def rank(self, opportunities: Sequence[RawOpportunity]) -> RankResult:
        """Score every record, drop non-matches and sort survivors."""
        matches: list[MatchedOpportunity] = []
        failed: list[str] = []
        for opp in opportunities:
            try:
                matched = self.score(opp)
            except Exception:
                logger.exception("Scoring failed for %s, skipping", getattr(opp, "id", "<unknown>"))
                failed.append(str(getattr(opp, "id", "")))
                continue
            if matched is not None:
                matches.append(matched)

        # sorted() is stable: full ties keep input order
        matches = sorted(matches, key=rank_key)
        return RankResult(matches=matches, input_count=len(opportunities), failed_ids=failed)


def rank_batch(
    opportunities: Sequence[RawOpportunity],
    profile: ServiceProfile,
) -> list[MatchedOpportunity]:
    """Ranked matches for a batch; non-matches and failing records are dropped."""
    return MatchEngine(profile).rank(opportunities).matches


def compute_stats(
    matches: Iterable[MatchedOpportunity],
    input_count: int,
    *,
    today: Optional[date] = None,
) -> BatchStats:
    """Counts by priority, urgent deadlines and total value over ranked matches."""
    matches = list(matches)
    by_priority = {"high": 0, "medium": 0, "low": 0}
    urgent = 0
    total_value = 0.0
    for m in matches:
        by_priority[m.priority] += 1
        days = days_until_deadline(m.deadline, today)
        if days is not None and days <= URGENT_WITHIN_DAYS:
            urgent += 1
        total_value += m.value or 0
    return BatchStats(
        total=input_count,
        matched=len(matches),
        discarded=input_count - len(matches),
        urgent=urgent,
        total_value=total_value,
        **by_priority,
    )


def display_fields(match: MatchedOpportunity, today: Optional[date] = None) -> dict:
    """Per-record fields a presentation layer derives at the boundary."""
    days = days_until_deadline(match.deadline, today)
    return {
        "days_until_deadline": days,
        "is_urgent": days is not None and days <= URGENT_WITHIN_DAYS,
        "is_deadline_valid": is_deadline_valid(match.deadline, today),
        "formatted_value": format_value(match.value, match.currency),
    }
