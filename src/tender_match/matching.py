"""Shared keyword matching utilities for exclusion, scoring and sector bonuses."""

from typing import Iterable, Optional

from tender_match.models.raw import RawOpportunity
from tender_match.normalize import categorize_by_title


def build_haystack(opp: RawOpportunity) -> str:
    """
    Lowercased text searched by every rule: title, description, category
    (derived from the title when absent) and all requirements.
    """
    category = opp.category or categorize_by_title(opp.title)
    return " ".join(
        [
            opp.title,
            opp.description,
            category,
            " ".join(opp.requirements),
        ]
    ).lower()


def keyword_matches(text: str, keyword: str) -> bool:
    """
    Case-insensitive substring containment. No word boundaries:
    'app' matches inside 'application'.
    """
    if not keyword or not text:
        return False
    return keyword.lower() in text.lower()


def matched_keywords(text: str, keywords: Iterable[str]) -> list[str]:
    """Keywords found in text, in the order given."""
    return [kw for kw in keywords if keyword_matches(text, kw)]


def first_excluded(text: str, exclude_keywords: Iterable[str]) -> Optional[str]:
    """First exclusion phrase present in text, or None."""
    for kw in exclude_keywords:
        if keyword_matches(text, kw):
            return kw
    return None


def matching_sectors(text: str, organization: str, sectors: Iterable[str]) -> list[str]:
    """Preferred sectors named in the text or the issuing organization."""
    return [s for s in sectors if keyword_matches(text, s) or keyword_matches(organization, s)]
