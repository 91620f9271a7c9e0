"""
Entity Resolver Module.

Finds the firm's own business listing and a set of nearby competitors
through the place-search adapter:

1. Self listing: query "<firm name> <location>", best name match among the
   top results, rejected below a minimum score
2. Competitors: query "<primary practice area> lawyer <location>", keeping
   results that are not the firm, not a bare generic name, and located in
   the expected country

Adapter failures become warnings and empty results; nothing here raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from firm_research.constants import (
    COMPETITOR_ROLE_NOUN,
    MAX_COMPETITORS,
    SELF_LISTING_MIN_SCORE,
    SELF_LISTING_TOP_N,
)
from firm_research.entity_resolution.matchers import (
    DEFAULT_MATCHER,
    MatchType,
    NameMatch,
    NameMatcher,
)
from firm_research.location.regions import address_matches_country, search_location
from firm_research.models import CompetitorListing, Location, SelfListing
from firm_research.sources.base import LookupFailure, PlaceResult, PlaceSearch

logger = logging.getLogger(__name__)

GENERIC_LISTING_NAME = re.compile(
    r"^(?:the\s+)?(?:law\s+firms?|legal|attorneys?|lawyers?|law\s+offices?|abogados?)$",
    re.IGNORECASE,
)


@dataclass
class ListingOutcome:
    """Result of the self-listing lookup."""

    listing: SelfListing | None = None
    match: NameMatch | None = None
    query: str | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "listing": self.listing.to_dict() if self.listing else None,
            "matchType": self.match.match_type.value if self.match else None,
            "query": self.query,
            "warnings": list(self.warnings),
        }


@dataclass
class CompetitorOutcome:
    """Result of the competitor search."""

    competitors: list[CompetitorListing] = field(default_factory=list)
    query: str | None = None
    warnings: list[str] = field(default_factory=list)
    skipped: dict[str, int] = field(default_factory=dict)

    def _skip(self, reason: str) -> None:
        self.skipped[reason] = self.skipped.get(reason, 0) + 1


class EntityResolver:
    """
    Resolves business listings for a firm.

    Configurable with any PlaceSearch adapter and NameMatcher strategy.
    """

    def __init__(
        self,
        places: PlaceSearch,
        matcher: NameMatcher | None = None,
        min_score: float = SELF_LISTING_MIN_SCORE,
        max_competitors: int = MAX_COMPETITORS,
        top_n: int = SELF_LISTING_TOP_N,
        role_noun: str = COMPETITOR_ROLE_NOUN,
    ):
        """
        Args:
            places: Place-search adapter
            matcher: Name matching strategy (default: containment matcher)
            min_score: Minimum score for a non-exact self-listing match
            max_competitors: Competitor cap
            top_n: Number of results considered for the self listing
            role_noun: Generic role appended to the practice area in competitor queries
        """
        self.places = places
        self.matcher = matcher or DEFAULT_MATCHER
        self.min_score = min_score
        self.max_competitors = max_competitors
        self.top_n = top_n
        self.role_noun = role_noun

    def best_match(
        self, subject: str, results: list[PlaceResult]
    ) -> tuple[PlaceResult, NameMatch] | None:
        """Best-matching listing among the top results, or None if none is acceptable."""
        best: tuple[PlaceResult, NameMatch] | None = None
        for place in results[: self.top_n]:
            match = self.matcher.match(place.name, subject)
            if match.match_type is MatchType.EXACT:
                return place, match
            if not match.matched:
                continue
            if best is None or match.score > best[1].score:
                best = (place, match)

        if best is not None and best[1].score >= self.min_score:
            return best
        return None

    def find_self_listing(self, subject: str, location: Location) -> ListingOutcome:
        outcome = ListingOutcome()
        if not location.is_resolved:
            outcome.warnings.append("Cannot verify business listing - no location")
            return outcome

        where = search_location(location)
        outcome.query = f"{subject} {where}".strip()
        results = self.places.search(subject, where)
        if isinstance(results, LookupFailure):
            logger.debug(f"Self-listing lookup failed: {results}")
            outcome.warnings.append(f"Could not look up business listing: {results.reason}")
            return outcome

        chosen = self.best_match(subject, results)
        if chosen is None:
            outcome.warnings.append("Business listing not found or not verified")
            return outcome

        place, match = chosen
        outcome.match = match
        outcome.listing = SelfListing(
            name=place.name,
            review_count=place.review_count,
            rating=place.rating,
            address=place.formatted_address,
            match_score=None if match.match_type is MatchType.EXACT else round(match.score, 3),
        )
        if place.review_count == 0:
            outcome.warnings.append("Business listing exists but has no reviews")
        logger.info(
            f"Self listing: {place.name} ({match.match_type.value}, {place.review_count} reviews)"
        )
        return outcome

    def competitor_query(self, practice_areas: list[str]) -> str:
        area = practice_areas[0] if practice_areas else ""
        return f"{area} {self.role_noun}".strip()

    def find_competitors(
        self,
        subject: str,
        location: Location,
        practice_areas: list[str],
    ) -> CompetitorOutcome:
        outcome = CompetitorOutcome()
        if not location.is_resolved:
            outcome.warnings.append("Cannot find competitors - no location")
            return outcome

        query = self.competitor_query(practice_areas)
        where = search_location(location)
        outcome.query = f"{query} {where}".strip()
        results = self.places.search(query, where)
        if isinstance(results, LookupFailure):
            logger.debug(f"Competitor search failed: {results}")
            outcome.warnings.append(f"Failed to find competitors: {results.reason}")
            return outcome

        seen: set[str] = set()
        for place in results:
            if len(outcome.competitors) >= self.max_competitors:
                break
            key = place.name.lower()
            if self.matcher.is_match(place.name, subject):
                outcome._skip("self")
            elif GENERIC_LISTING_NAME.match(place.name.strip()):
                outcome._skip("generic")
            elif not address_matches_country(place.formatted_address, location.country):
                outcome._skip("country")
            elif key in seen:
                outcome._skip("duplicate")
            else:
                seen.add(key)
                outcome.competitors.append(
                    CompetitorListing(
                        name=place.name,
                        review_count=place.review_count,
                        rating=place.rating,
                        address=place.formatted_address,
                    )
                )

        if not outcome.competitors:
            outcome.warnings.append("No competitors found via place search")
        logger.info(f"Competitors: {len(outcome.competitors)} kept, skipped {outcome.skipped}")
        return outcome
