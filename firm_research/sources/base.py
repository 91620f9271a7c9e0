"""
Adapter contracts for the external services the pipeline depends on.

Each adapter issues one request with its own timeout and returns either a
parsed result or a LookupFailure. Transport errors never propagate as
exceptions; callers branch on the returned value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class LookupFailure:
    """A failed external call (transport error, timeout, bad status)."""

    source: str
    reason: str
    timed_out: bool = False

    def __str__(self) -> str:
        prefix = "timed out" if self.timed_out else "failed"
        return f"{self.source} {prefix}: {self.reason}"


def make_soup(html: str) -> BeautifulSoup:
    """Parse HTML with lxml, falling back to the stdlib parser."""
    try:
        return BeautifulSoup(html, "lxml")
    except Exception:
        return BeautifulSoup(html, "html.parser")


@dataclass
class RenderedPage:
    """A fully rendered page."""

    requested_url: str
    final_url: str
    html: str = ""
    text: str = ""
    title: str = ""

    def links(self) -> list[str]:
        """Absolute hrefs of every anchor on the page, fragments removed."""
        if not self.html:
            return []
        links = []
        for anchor in make_soup(self.html).find_all("a", href=True):
            href = anchor["href"].strip()
            if not href or href.startswith(("mailto:", "tel:", "javascript:")):
                continue
            links.append(urldefrag(urljoin(self.final_url, href))[0])
        return links


@dataclass(frozen=True)
class PlaceResult:
    """One business listing returned by a place search."""

    name: str
    review_count: int = 0
    rating: float | None = None
    formatted_address: str = ""


@dataclass(frozen=True)
class GeocodeResult:
    """Normalized location returned by the geocoding service."""

    city: str
    region: str
    country: str
    formatted_address: str = ""
    confidence: int = 0
    raw: dict = field(default_factory=dict, compare=False, repr=False)


class PageRenderer(ABC):
    """Renders a URL to its final URL, HTML and visible text."""

    @abstractmethod
    def render(self, url: str) -> RenderedPage | LookupFailure: ...


class PlaceSearch(ABC):
    """Free-text business listing search."""

    @abstractmethod
    def search(self, query: str, location: str) -> list[PlaceResult] | LookupFailure: ...


class Geocoder(ABC):
    """Validates and normalizes a city/region/country triple."""

    @abstractmethod
    def validate(self, city: str, region: str, country: str) -> GeocodeResult | LookupFailure: ...
