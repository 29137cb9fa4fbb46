"""Source reading opportunity records from a JSON file."""

import json
from pathlib import Path
from typing import Any

from tender_match.sources.base import BaseSource


def records_from_payload(payload: Any) -> list[Any]:
    """Accept a bare array or an object wrapping one under 'tenders'."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        tenders = payload.get("tenders", [])
        if isinstance(tenders, list):
            return tenders
    raise ValueError("expected a JSON array or an object with a 'tenders' array")


class JsonFileSource(BaseSource):
    """Records exported by an upstream scraper or extractor as JSON."""

    source_id = "json"
    needs_path = True

    def __init__(self, path: str | Path, *, source_id: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.path = Path(path)
        if source_id:
            self.source_id = source_id

    def load_records(self) -> list[dict[str, Any]]:
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        return records_from_payload(payload)
