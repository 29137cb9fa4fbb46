"""Pytest fixtures for tender-match tests."""

import json
from pathlib import Path

import pytest

from tender_match.models.profile import ServiceCategory, ServiceProfile


@pytest.fixture
def small_profile() -> ServiceProfile:
    """Two services, one exclusion, two preferred sectors."""
    return ServiceProfile(
        profile_id="small",
        services=[
            ServiceCategory(
                name="Web Development",
                keywords=["website", "web portal", "portal", "cms"],
                weight=1.0,
            ),
            ServiceCategory(
                name="Mobile App Development",
                keywords=["mobile app", "android"],
                weight=1.0,
            ),
        ],
        exclude_keywords=["construction works"],
        preferred_sectors=["Government", "Ministry of ICT"],
    )


@pytest.fixture
def profile_yaml(tmp_path: Path) -> Path:
    """Profile YAML in the nested filters layout."""
    path = tmp_path / "profile.yaml"
    path.write_text("""
profile_id: test
company: Test Studio
services:
  - name: Web Development
    weight: 1.0
    keywords: [Website, web portal, portal, CMS]
  - name: Mobile App Development
    weight: 0.9
    keywords: [mobile app, android]
filters:
  exclude_keywords: [construction works, Cleaning Services]
  preferred_sectors: [Government, Ministry of ICT]
""")
    return path


@pytest.fixture
def feed_file(tmp_path: Path) -> Path:
    """JSON feed as an upstream scraper would export it (camelCase keys)."""
    path = tmp_path / "feed.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "F-1",
                    "title": "Government Web Portal Upgrade",
                    "description": "Upgrade of the CMS behind the citizen portal.",
                    "organization": "Ministry of ICT",
                    "value": 50000,
                    "deadline": "2026-03-10",
                    "sourceUrl": "https://example.org/f-1",
                    "publishedDate": "2026-02-01",
                },
                {
                    "id": "F-2",
                    "title": "Construction of Rural Health Clinics",
                    "description": "Construction works for a website-listed clinic network.",
                    "organization": "Ministry of Health",
                    "deadline": "2026-04-01",
                },
            ]
        )
    )
    return path
