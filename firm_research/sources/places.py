"""
Google Places Text Search adapter.

Returns ranked business listings for a free-text query biased to a
location string. ZERO_RESULTS is an empty list; every other non-OK status
or transport error is a LookupFailure.
"""

import logging
from dataclasses import asdict

import requests

from firm_research.cache import AppCache
from firm_research.constants import CACHE_TTL_PLACES, PLACES_RATE_LIMIT, PLACES_TIMEOUT
from firm_research.sources.base import LookupFailure, PlaceResult, PlaceSearch
from firm_research.utils.rate_limiting import get_rate_limiter

logger = logging.getLogger(__name__)

TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
CACHE_NAMESPACE = "places"

_rate_limiter = get_rate_limiter("google_places", PLACES_RATE_LIMIT)


def parse_place(raw: dict) -> PlaceResult | None:
    """Convert one Text Search result into a PlaceResult."""
    name = (raw.get("name") or "").strip()
    if not name:
        return None
    rating = raw.get("rating")
    return PlaceResult(
        name=name,
        review_count=int(raw.get("user_ratings_total") or 0),
        rating=float(rating) if rating is not None else None,
        formatted_address=raw.get("formatted_address") or "",
    )


class GooglePlacesClient(PlaceSearch):
    """Place search over the Google Places Text Search API."""

    source_name = "google_places"

    def __init__(
        self,
        session: requests.Session,
        api_key: str | None,
        timeout: float = PLACES_TIMEOUT,
        cache: AppCache | None = None,
    ):
        self.session = session
        self.api_key = api_key
        self.timeout = timeout
        self.cache = cache

    def search(self, query: str, location: str) -> list[PlaceResult] | LookupFailure:
        """
        Search for listings.

        Args:
            query: Free-text query (firm name, or "<practice area> lawyer")
            location: Human-readable location appended to the query

        Returns:
            Listings in the order the service ranked them, or LookupFailure
        """
        if not self.api_key:
            return LookupFailure(self.source_name, "GOOGLE_PLACES_API_KEY not configured")

        full_query = f"{query} {location}".strip()
        if self.cache is not None:
            cached = self.cache.get(CACHE_NAMESPACE, full_query)
            if cached is not None:
                logger.debug(f"Places cache hit: {full_query}")
                return [PlaceResult(**item) for item in cached]

        if _rate_limiter is not None:
            _rate_limiter()

        try:
            response = self.session.get(
                TEXT_SEARCH_URL,
                params={"query": full_query, "key": self.api_key},
                timeout=self.timeout,
            )
        except requests.Timeout:
            return LookupFailure(self.source_name, f"timed out searching {full_query!r}", True)
        except requests.RequestException as e:
            logger.debug(f"Places request failed for {full_query!r}: {e}")
            return LookupFailure(self.source_name, str(e))

        if response.status_code != 200:
            return LookupFailure(self.source_name, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            return LookupFailure(self.source_name, f"invalid JSON: {e}")

        status = payload.get("status")
        if status == "ZERO_RESULTS":
            results: list[PlaceResult] = []
        elif status == "OK":
            results = [
                place
                for place in (parse_place(raw) for raw in payload.get("results", []))
                if place is not None
            ]
        else:
            message = payload.get("error_message") or status or "unknown status"
            return LookupFailure(self.source_name, str(message))

        if self.cache is not None:
            self.cache.set(
                CACHE_NAMESPACE,
                full_query,
                [asdict(result) for result in results],
                ttl_days=CACHE_TTL_PLACES,
            )
        logger.debug(f"Places returned {len(results)} results for {full_query!r}")
        return results
