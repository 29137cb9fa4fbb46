"""Registry for discovering and instantiating sources."""

from typing import Type

from tender_match.sources.base import BaseSource
from tender_match.sources.json_file import JsonFileSource
from tender_match.sources.sample import SampleSource


class SourceRegistry:
    """Discovers and provides opportunity sources."""

    _sources: dict[str, Type[BaseSource]] = {
        "sample": SampleSource,
        "json": JsonFileSource,
    }

    @classmethod
    def get(cls, source_id: str, **kwargs) -> BaseSource:
        """Get a source instance. kwargs passed to source __init__."""
        source_cls = cls._sources.get(source_id.lower())
        if not source_cls:
            raise ValueError(f"Unknown source: {source_id}. Available: {list(cls._sources.keys())}")
        return source_cls(**kwargs)

    @classmethod
    def available_sources(cls) -> list[str]:
        """Return list of available source identifiers."""
        return list(cls._sources.keys())

    @classmethod
    def builtin_sources(cls) -> list[str]:
        """Sources usable without arguments, e.g. from the CLI."""
        return [name for name, source_cls in cls._sources.items() if not source_cls.needs_path]
