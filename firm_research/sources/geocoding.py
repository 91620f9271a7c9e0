"""
OpenCage geocoding adapter.

Validates a city/region/country triple and returns the normalized form of
the best result. OpenCage's confidence (1-10) describes how tight the
result's bounding box is; callers decide what threshold to accept.
"""

import logging

import requests

from firm_research.cache import AppCache
from firm_research.constants import CACHE_TTL_GEOCODE, GEOCODE_RATE_LIMIT, GEOCODE_TIMEOUT
from firm_research.sources.base import Geocoder, GeocodeResult, LookupFailure
from firm_research.utils.rate_limiting import get_rate_limiter

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://api.opencagedata.com/geocode/v1/json"
CACHE_NAMESPACE = "geocode"

_rate_limiter = get_rate_limiter("opencage", GEOCODE_RATE_LIMIT)


def parse_geocode(raw: dict) -> GeocodeResult | None:
    """Normalize one OpenCage result."""
    components = raw.get("components") or {}
    city = (
        components.get("city")
        or components.get("town")
        or components.get("village")
        or components.get("municipality")
        or ""
    )
    if not city:
        return None
    return GeocodeResult(
        city=city,
        region=components.get("state_code") or components.get("state") or "",
        country=(components.get("country_code") or "").upper(),
        formatted_address=raw.get("formatted") or "",
        confidence=int(raw.get("confidence") or 0),
        raw=components,
    )


class OpenCageGeocoder(Geocoder):
    """Location validation over the OpenCage forward geocoding API."""

    source_name = "opencage"

    def __init__(
        self,
        session: requests.Session,
        api_key: str | None,
        timeout: float = GEOCODE_TIMEOUT,
        cache: AppCache | None = None,
    ):
        self.session = session
        self.api_key = api_key
        self.timeout = timeout
        self.cache = cache

    def validate(self, city: str, region: str, country: str) -> GeocodeResult | LookupFailure:
        if not self.api_key:
            return LookupFailure(self.source_name, "OPENCAGE_API_KEY not configured")

        query = ", ".join(part for part in (city, region, country) if part)
        if not query:
            return LookupFailure(self.source_name, "empty location")

        if self.cache is not None:
            cached = self.cache.get(CACHE_NAMESPACE, query)
            if cached is not None:
                logger.debug(f"Geocode cache hit: {query}")
                return GeocodeResult(**cached)

        if _rate_limiter is not None:
            _rate_limiter()

        params = {"q": query, "key": self.api_key, "limit": 1, "no_annotations": 1}
        if country and len(country) == 2:
            params["countrycode"] = country.lower()

        try:
            response = self.session.get(GEOCODE_URL, params=params, timeout=self.timeout)
        except requests.Timeout:
            return LookupFailure(self.source_name, f"timed out validating {query!r}", True)
        except requests.RequestException as e:
            logger.debug(f"Geocode request failed for {query!r}: {e}")
            return LookupFailure(self.source_name, str(e))

        if response.status_code != 200:
            return LookupFailure(self.source_name, f"HTTP {response.status_code}")

        try:
            results = response.json().get("results") or []
        except ValueError as e:
            return LookupFailure(self.source_name, f"invalid JSON: {e}")

        result = parse_geocode(results[0]) if results else None
        if result is None:
            return LookupFailure(self.source_name, f"no match for {query!r}")

        if self.cache is not None:
            self.cache.set(
                CACHE_NAMESPACE,
                query,
                {
                    "city": result.city,
                    "region": result.region,
                    "country": result.country,
                    "formatted_address": result.formatted_address,
                    "confidence": result.confidence,
                },
                ttl_days=CACHE_TTL_GEOCODE,
            )
        return result
