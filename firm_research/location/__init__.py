"""Canonical location resolution and region vocabularies."""

from firm_research.location.regions import normalize_country, search_location
from firm_research.location.resolver import LocationResolution, LocationResolver

__all__ = ["LocationResolution", "LocationResolver", "normalize_country", "search_location"]
