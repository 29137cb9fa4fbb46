"""Tender matching engine: dedupe, score and rank procurement opportunities for a provider profile."""

from tender_match.dedupe import dedupe
from tender_match.models import MatchedOpportunity, RawOpportunity, ServiceCategory, ServiceProfile
from tender_match.ranking import MatchEngine, rank_batch
from tender_match.scoring import score

__all__ = [
    "MatchEngine",
    "MatchedOpportunity",
    "RawOpportunity",
    "ServiceCategory",
    "ServiceProfile",
    "dedupe",
    "rank_batch",
    "score",
]
