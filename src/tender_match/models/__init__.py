"""Data models for raw opportunities, matches and provider profiles."""

from tender_match.models.opportunity import MatchedOpportunity, Priority
from tender_match.models.profile import (
    ProfileConfigError,
    ServiceCategory,
    ServiceProfile,
    load_profile,
)
from tender_match.models.raw import RawOpportunity

__all__ = [
    "MatchedOpportunity",
    "Priority",
    "ProfileConfigError",
    "RawOpportunity",
    "ServiceCategory",
    "ServiceProfile",
    "load_profile",
]
