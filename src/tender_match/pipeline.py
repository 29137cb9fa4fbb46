"""Pipeline orchestration: collect sources → dedupe → score and rank → stats."""

import logging
from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from tender_match.dedupe import dedupe
from tender_match.models.opportunity import MatchedOpportunity
from tender_match.models.profile import ServiceProfile
from tender_match.models.raw import RawOpportunity
from tender_match.ranking import BatchStats, MatchEngine, compute_stats
from tender_match.sources.base import BaseSource, SourceResult

logger = logging.getLogger(__name__)


class CollectResult(BaseModel):
    """Records merged from every source that could be read."""

    opportunities: list[RawOpportunity] = Field(default_factory=list)
    source_results: list[SourceResult] = Field(default_factory=list)

    @property
    def successful_sources(self) -> int:
        return sum(1 for r in self.source_results if r.ok)

    @property
    def failed_sources(self) -> list[str]:
        return [r.source for r in self.source_results if not r.ok]

    @property
    def invalid_records(self) -> int:
        return sum(len(r.failures) for r in self.source_results)


class PipelineResult(BaseModel):
    """Ranked matches plus operator-facing counters."""

    matches: list[MatchedOpportunity] = Field(default_factory=list)
    stats: BatchStats
    source_results: list[SourceResult] = Field(default_factory=list)
    duplicates_removed: int = 0
    failed_ids: list[str] = Field(default_factory=list)

    @property
    def failed_sources(self) -> list[str]:
        return [r.source for r in self.source_results if not r.ok]

    def summary(self) -> dict:
        """Counters in the shape the tracking dashboard consumes."""
        return {
            "total_scraped": self.stats.total,
            "matched": self.stats.matched,
            "filtered_out": self.stats.discarded,
            "successful_sources": sum(1 for r in self.source_results if r.ok),
            "failed_sources": self.failed_sources,
            "invalid_records": sum(len(r.failures) for r in self.source_results),
            "duplicates_removed": self.duplicates_removed,
        }


def collect(sources: Iterable[BaseSource]) -> CollectResult:
    """Fetch every source in order; failed sources contribute nothing."""
    result = CollectResult()
    for source in sources:
        fetched = source.fetch()
        result.source_results.append(fetched)
        if fetched.ok:
            result.opportunities.extend(fetched.opportunities)
    logger.info(
        "Collected %d records from %d sources (%d failed)",
        len(result.opportunities),
        result.successful_sources,
        len(result.failed_sources),
    )
    return result


def run_batch(
    opportunities: list[RawOpportunity],
    profile: ServiceProfile,
    *,
    today: Optional[date] = None,
    source_results: Optional[list[SourceResult]] = None,
) -> PipelineResult:
    """Dedupe, rank and summarize an already collected batch."""
    unique = dedupe(opportunities)
    ranked = MatchEngine(profile).rank(unique)
    stats = compute_stats(ranked.matches, len(unique), today=today)
    return PipelineResult(
        matches=ranked.matches,
        stats=stats,
        source_results=source_results or [],
        duplicates_removed=len(opportunities) - len(unique),
        failed_ids=ranked.failed_ids,
    )


def run_pipeline(
    sources: Iterable[BaseSource],
    profile: ServiceProfile,
    *,
    today: Optional[date] = None,
) -> PipelineResult:
    """
    Run the full pipeline over the given sources.
    Returns matches sorted by score descending, then soonest deadline.
    """
    collected = collect(sources)
    return run_batch(
        collected.opportunities,
        profile,
        today=today,
        source_results=collected.source_results,
    )
