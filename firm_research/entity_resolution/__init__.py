"""
Business listing resolution.

Matches place-search results to the firm being researched and collects
competitor listings. The name matching rule is pluggable:

    from firm_research.entity_resolution import EntityResolver, ContainmentNameMatcher

    resolver = EntityResolver(places, matcher=ContainmentNameMatcher())
    outcome = resolver.find_self_listing("Roth Jackson", location)
"""

from firm_research.entity_resolution.matchers import (
    ContainmentNameMatcher,
    MatchType,
    NameMatch,
    NameMatcher,
    fuzzy_match,
    normalize_business_name,
)
from firm_research.entity_resolution.resolver import (
    CompetitorOutcome,
    EntityResolver,
    ListingOutcome,
)

__all__ = [
    "CompetitorOutcome",
    "ContainmentNameMatcher",
    "EntityResolver",
    "ListingOutcome",
    "MatchType",
    "NameMatch",
    "NameMatcher",
    "fuzzy_match",
    "normalize_business_name",
]
