"""Collapse the same tender reported by several sources."""

import logging
import re
from typing import Iterable

from tender_match.models.raw import RawOpportunity

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 50
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def fingerprint(title: str) -> str:
    """Lowercased title with non-alphanumerics stripped, first 50 characters."""
    return _NON_ALNUM_RE.sub("", (title or "").lower())[:FINGERPRINT_LENGTH]


def dedupe(opportunities: Iterable[RawOpportunity]) -> list[RawOpportunity]:
    """
    Drop records whose title fingerprint was already seen. First seen wins;
    later duplicates are discarded, not merged.
    """
    seen: set[str] = set()
    unique: list[RawOpportunity] = []
    dropped = 0
    for opp in opportunities:
        key = fingerprint(opp.title)
        if key in seen:
            dropped += 1
            continue
        seen.add(key)
        unique.append(opp)
    if dropped:
        logger.info("Removed %d duplicate opportunities", dropped)
    return unique
