"""Sources supplying raw opportunity records to the matching engine."""

from tender_match.sources.base import BaseSource, RecordFailure, SourceResult
from tender_match.sources.json_file import JsonFileSource
from tender_match.sources.registry import SourceRegistry
from tender_match.sources.sample import SampleSource

__all__ = [
    "BaseSource",
    "JsonFileSource",
    "RecordFailure",
    "SampleSource",
    "SourceRegistry",
    "SourceResult",
]
