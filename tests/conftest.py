"""
Pytest configuration and shared fixtures for firm_research tests.

The fakes here stand in for the browser, place-search and geocoding
adapters so the pipeline can be exercised without network access.
"""

import os

import pytest

from firm_research.models import Location, LocationSource
from firm_research.sources.base import (
    Geocoder,
    GeocodeResult,
    LookupFailure,
    PageRenderer,
    PlaceResult,
    PlaceSearch,
    RenderedPage,
)

# Keep real keys from a developer's .env out of the tests
for _key in ("GOOGLE_PLACES_API_KEY", "OPENCAGE_API_KEY", "OPENAI_API_KEY"):
    os.environ.setdefault(_key, "")


def make_page(url: str, text: str = "", html: str | None = None, title: str = "") -> RenderedPage:
    """Build a rendered page; HTML defaults to the text wrapped in a body."""
    if html is None:
        html = f"<html><head><title>{title}</title></head><body>{text}</body></html>"
    return RenderedPage(requested_url=url, final_url=url, html=html, text=text, title=title)


class FakeRenderer(PageRenderer):
    """Serves canned pages by URL; anything else fails to load."""

    def __init__(self, pages: dict | None = None):
        self.pages = dict(pages or {})
        self.calls: list[str] = []

    def render(self, url: str):
        self.calls.append(url)
        page = self.pages.get(url) or self.pages.get(url.rstrip("/"))
        if page is None:
            return LookupFailure("browser", f"no page at {url}")
        return page


class FakePlaces(PlaceSearch):
    """Returns canned results per query substring, or a fixed failure."""

    def __init__(self, results: dict | None = None, failure: LookupFailure | None = None):
        self.results = dict(results or {})
        self.failure = failure
        self.calls: list[tuple[str, str]] = []

    def search(self, query: str, location: str):
        self.calls.append((query, location))
        if self.failure is not None:
            return self.failure
        for key, results in self.results.items():
            if key.lower() in query.lower():
                return list(results)
        return []


class FakeGeocoder(Geocoder):
    """Maps lower-cased input cities to canned results."""

    def __init__(self, results: dict | None = None, failure: LookupFailure | None = None):
        self.results = {k.lower(): v for k, v in (results or {}).items()}
        self.failure = failure
        self.calls: list[tuple[str, str, str]] = []

    def validate(self, city: str, region: str, country: str):
        self.calls.append((city, region, country))
        if self.failure is not None:
            return self.failure
        result = self.results.get(city.lower())
        if result is None:
            return LookupFailure("geocoder", f"no match for {city!r}")
        return result


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def places():
    return FakePlaces()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def mclean_geocode():
    return GeocodeResult(
        city="McLean",
        region="VA",
        country="US",
        formatted_address="McLean, VA, United States of America",
        confidence=7,
    )


@pytest.fixture
def mclean():
    return Location(city="McLean", region="VA", country="US", source=LocationSource.EXTERNAL_VALIDATED)


@pytest.fixture
def place():
    """Factory for place-search results."""

    def _make(name, reviews=10, rating=4.5, address="123 Main St, McLean, VA 22101, USA"):
        return PlaceResult(name=name, review_count=reviews, rating=rating, formatted_address=address)

    return _make


@pytest.fixture
def page_for():
    """Factory for rendered pages (see make_page)."""
    return make_page
