"""Relevance scoring of a single opportunity against a provider profile."""

import logging
import math
from typing import Optional

from tender_match.matching import build_haystack, first_excluded, matched_keywords, matching_sectors
from tender_match.models.opportunity import MatchedOpportunity
from tender_match.models.profile import ServiceProfile
from tender_match.models.raw import RawOpportunity

logger = logging.getLogger(__name__)

MIN_MATCH_SCORE = 20
SECTOR_BONUS = 10
MAX_REASON_KEYWORDS = 5


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def relevance_reason(services: list[str], keywords: list[str]) -> str:
    """One-line summary of matched services and up to five keywords."""
    shown = ", ".join(keywords[:MAX_REASON_KEYWORDS])
    more = "..." if len(keywords) > MAX_REASON_KEYWORDS else ""
    return f"Matches {', '.join(services)} services with keywords: {shown}{more}"


def score(opp: RawOpportunity, profile: ServiceProfile) -> Optional[MatchedOpportunity]:
    """
    Score one opportunity. Returns None when the record is not a match:
    no title, an exclusion phrase present, no service category hit,
    or a normalized score under MIN_MATCH_SCORE.
    """
    if not opp.is_matchable:
        logger.debug("Skipping %s: empty title", opp.id)
        return None

    haystack = build_haystack(opp)

    excluded = first_excluded(haystack, profile.exclude_keywords)
    if excluded:
        logger.debug("Excluded %s: deal-breaker keyword '%s'", opp.id, excluded)
        return None

    total = 0.0
    services: list[str] = []
    keywords: list[str] = []
    for service in profile.services:
        hits = matched_keywords(haystack, service.keywords)
        if not hits:
            continue
        total += (len(hits) / len(service.keywords)) * 100 * service.weight
        services.append(service.name)
        for kw in hits:
            if kw not in keywords:
                keywords.append(kw)

    # Uncapped: every matching sector adds its bonus
    sectors = matching_sectors(haystack, opp.organization.lower(), profile.preferred_sectors)
    total += SECTOR_BONUS * len(sectors)

    match_score = max(0, min(100, _round_half_up(total / len(profile.services))))

    if match_score < MIN_MATCH_SCORE or not services:
        logger.debug("Rejected %s: score %d, %d services", opp.id, match_score, len(services))
        return None

    return MatchedOpportunity(
        **opp.model_dump(include=set(RawOpportunity.model_fields)),
        match_score=match_score,
        matched_services=tuple(services),
        matched_keywords=tuple(keywords),
        relevance_reason=relevance_reason(services, keywords),
    )
