"""
Adapters for the external services used during research.

- browser: page rendering (Playwright)
- sitemap: sitemap feed fetching (requests)
- places: business listing search (Google Places)
- geocoding: location validation (OpenCage)
- text_extraction: optional question answering over page text (OpenAI)
"""

from firm_research.sources.base import (
    Geocoder,
    GeocodeResult,
    LookupFailure,
    PageRenderer,
    PlaceResult,
    PlaceSearch,
    RenderedPage,
)

__all__ = [
    "Geocoder",
    "GeocodeResult",
    "LookupFailure",
    "PageRenderer",
    "PlaceResult",
    "PlaceSearch",
    "RenderedPage",
]
