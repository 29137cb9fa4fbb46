"""Static sample feed bundled with the package."""

from pathlib import Path

from tender_match.sources.json_file import JsonFileSource

SAMPLE_PATH = Path(__file__).parent / "sample_tenders.json"


class SampleSource(JsonFileSource):
    """Fixed set of Zimbabwe tender notices for demos and offline runs."""

    source_id = "sample"
    needs_path = False

    def __init__(self, **kwargs):
        super().__init__(SAMPLE_PATH, **kwargs)
