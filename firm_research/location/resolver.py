"""
Location Resolver.

Decides the canonical location. Outcomes, in precedence order:

1. Supplied hint: validated -> externally-supplied-validated (10),
   otherwise kept verbatim -> externally-supplied (6)
2. Scraped candidates: the first is validated -> scraped-validated (8),
   otherwise kept -> scraped (5)
3. Nothing -> unresolved (0), a critical data-quality issue

A geocoding failure of any kind counts the same as a low-confidence result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from firm_research.constants import GEOCODE_MIN_CONFIDENCE
from firm_research.location.regions import normalize_country
from firm_research.models import Location, LocationHint, LocationSource
from firm_research.sources.base import Geocoder, GeocodeResult, LookupFailure

logger = logging.getLogger(__name__)

UNRESOLVED_WARNING = "CRITICAL: No location found on website or in supplied hints"


@dataclass
class LocationResolution:
    """The canonical location plus everything the resolver wants recorded."""

    location: Location
    all_candidates: list[Location] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    missing_fields: list[str] = field(default_factory=list)


class LocationResolver:
    """Reconciles a location hint and scraped candidates through geocode validation."""

    def __init__(self, geocoder: Geocoder, min_confidence: int = GEOCODE_MIN_CONFIDENCE):
        self.geocoder = geocoder
        self.min_confidence = min_confidence

    def validate(self, city: str, region: str, country: str) -> tuple[GeocodeResult | None, str]:
        """
        Validate one location.

        Returns:
            (result, reason) where result is None when the location was not
            accepted and reason says why
        """
        outcome = self.geocoder.validate(city, region, country)
        if isinstance(outcome, LookupFailure):
            logger.debug(f"Geocode validation failed: {outcome}")
            return None, str(outcome)
        if outcome.confidence < self.min_confidence:
            return None, f"confidence: {outcome.confidence}"
        return outcome, ""

    def resolve(
        self,
        hint: LocationHint | None,
        candidates: list[Location] | None = None,
    ) -> LocationResolution:
        candidates = list(candidates or [])
        if hint is not None and hint.city:
            resolution = self._from_hint(hint)
        elif candidates:
            resolution = self._from_candidate(candidates[0])
        else:
            resolution = LocationResolution(
                location=Location.unresolved(),
                warnings=[UNRESOLVED_WARNING],
                missing_fields=["location"],
            )
        resolution.all_candidates = candidates
        logger.info(
            f"Location: {resolution.location.label() or 'unresolved'} "
            f"({resolution.location.source.value}, confidence {resolution.location.confidence})"
        )
        return resolution

    def _from_hint(self, hint: LocationHint) -> LocationResolution:
        result, reason = self.validate(hint.city, hint.region, hint.country)
        if result is None:
            location = Location(
                city=hint.city,
                region=hint.region,
                country=normalize_country(hint.country),
                source=LocationSource.EXTERNAL,
            )
            label = ", ".join(part for part in (hint.city, hint.region) if part)
            return LocationResolution(
                location=location,
                warnings=[f'Location "{label}" could not be validated ({reason})'],
            )

        location = self._validated(result, hint.region, hint.country, LocationSource.EXTERNAL_VALIDATED)
        warnings = []
        if location.city.casefold() != hint.city.casefold():
            warnings.append(f'Location corrected: "{hint.city}" -> "{location.city}"')
        return LocationResolution(location=location, warnings=warnings)

    def _from_candidate(self, candidate: Location) -> LocationResolution:
        result, reason = self.validate(candidate.city, candidate.region, candidate.country)
        if result is None:
            logger.debug(f"Scraped location {candidate.label()} not validated ({reason})")
            return LocationResolution(
                location=Location(
                    city=candidate.city,
                    region=candidate.region,
                    country=normalize_country(candidate.country),
                    source=LocationSource.SCRAPED,
                    formatted_address=candidate.formatted_address,
                )
            )

        location = self._validated(
            result, candidate.region, candidate.country, LocationSource.SCRAPED_VALIDATED
        )
        warnings = []
        if location.city.casefold() != candidate.city.casefold():
            warnings.append(f'Scraped location corrected: "{candidate.city}" -> "{location.city}"')
        return LocationResolution(location=location, warnings=warnings)

    @staticmethod
    def _validated(
        result: GeocodeResult,
        fallback_region: str,
        fallback_country: str,
        source: LocationSource,
    ) -> Location:
        return Location(
            city=result.city,
            region=result.region or fallback_region,
            country=result.country or normalize_country(fallback_country),
            source=source,
            formatted_address=result.formatted_address or None,
        )
