"""
Scraped location candidates.

Candidates come out in precedence order. A full US address with a ZIP
code goes first so "Valencia, CA 91355" is never read as Spain; named
major cities follow, then looser address patterns. The location resolver
takes the first.

1. schema.org PostalAddress in JSON-LD (structured, from HTML)
2. US "City, ST 12345"
3. Named UK and Spanish cities (unless already found as a US city)
4. UK "City, Postcode" / "Postcode City" (only if no named UK city)
5. US/Canadian "City, ST" (or province name)
"""

from __future__ import annotations

import json
import logging
import re

from firm_research.constants import MAX_LOCATION_CANDIDATES
from firm_research.location.regions import CA_PROVINCES, US_STATES, normalize_country
from firm_research.models import Location, LocationSource
from firm_research.sources.base import make_soup

logger = logging.getLogger(__name__)

UK_CITIES = ("London", "Manchester", "Birmingham", "Edinburgh", "Glasgow", "Liverpool", "Leeds", "Bristol")
SPANISH_CITIES = {
    "Madrid": "Madrid",
    "Barcelona": "Barcelona",
    "Valencia": "Valencia",
    "Sevilla": "Sevilla",
    "Málaga": "Málaga",
    "Malaga": "Málaga",
    "Marbella": "Marbella",
    "Ibiza": "Ibiza",
    "Mallorca": "Mallorca",
    "Palma": "Palma",
}  # fmt: skip

_CITY_WORD = r"(?:Mc|Mac|O')?[A-Z][a-z]+"
_CITY = rf"{_CITY_WORD}(?: {_CITY_WORD}){{0,2}}"

NOT_A_CITY = frozenset(
    {"Suite", "Floor", "Unit", "Apt", "Building", "Ste", "Box", "Lane", "Street", "Road",
     "Avenue", "Drive", "Court", "Place", "Way", "Contact", "Call", "Us", "Office"}
)  # fmt: skip

_US_CODES = "|".join(US_STATES)
_CA_NAMES = {name: code for code, name in CA_PROVINCES.items()}
_CA_REGIONS = "|".join([*CA_PROVINCES, *(re.escape(n) for n in _CA_NAMES)])

ZIP_PATTERN = re.compile(rf"(?<![\w'])(?P<city>{_CITY}),[ \t]*(?P<region>{_US_CODES})[ \t]+\d{{5}}(?:-\d{{4}})?\b")
_POSTCODE = r"[A-Z]{1,2}\d[A-Z\d]?[ \t]?\d[A-Z]{2}"
UK_POSTCODE_PATTERN = re.compile(
    rf"\b{_POSTCODE}[ \t]+(?P<city_after>{_CITY_WORD})\b|(?<![\w'])(?P<city_before>{_CITY_WORD})[, \t]+{_POSTCODE}\b"
)
CITY_REGION_PATTERN = re.compile(
    rf"(?<![\w'])(?P<city>{_CITY}),[ \t]*(?P<region>{_US_CODES}|{_CA_REGIONS})\b"
)


def _strip_address_words(city: str) -> str:
    """Keep the words after the last street or unit word ("Main Street McLean" -> "McLean")."""
    words = city.split()
    for i in range(len(words) - 1, -1, -1):
        if words[i] in NOT_A_CITY:
            return " ".join(words[i + 1 :])
    return " ".join(words)


class _CandidateList:
    """Ordered, deduplicated, capped list of scraped locations."""

    def __init__(self, cap: int):
        self.cap = cap
        self.items: list[Location] = []

    def add(self, city: str, region: str, country: str, address: str | None = None) -> None:
        city = _strip_address_words(city)
        if not city or len(self.items) >= self.cap:
            return
        key = (city.lower(), normalize_country(country))
        if any((c.city.lower(), c.country) == key for c in self.items):
            return
        self.items.append(
            Location(
                city=city,
                region=region,
                country=normalize_country(country),
                source=LocationSource.SCRAPED,
                formatted_address=address,
            )
        )

    def has_city(self, city: str) -> bool:
        return any(c.city.lower() == city.lower() for c in self.items)


def _word_present(word: str, text: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(word)}(?!\w)", text) is not None


def extract_location_candidates(
    text: str, cap: int = MAX_LOCATION_CANDIDATES
) -> list[Location]:
    """Location candidates found in page text, highest precedence first."""
    text = text or ""
    found = _CandidateList(cap)

    for match in ZIP_PATTERN.finditer(text):
        found.add(match.group("city"), match.group("region"), "US", match.group(0))

    for city in UK_CITIES:
        if _word_present(city, text) and not found.has_city(city):
            found.add(city, "", "GB")
    for spelling, city in SPANISH_CITIES.items():
        if _word_present(spelling, text) and not found.has_city(city):
            found.add(city, "", "ES")

    if not any(c.country == "GB" for c in found.items):
        for match in UK_POSTCODE_PATTERN.finditer(text):
            city = match.group("city_after") or match.group("city_before")
            found.add(city, "", "GB", match.group(0))

    for match in CITY_REGION_PATTERN.finditer(text):
        region = match.group("region")
        if region in CA_PROVINCES or region in _CA_NAMES:
            found.add(match.group("city"), _CA_NAMES.get(region, region), "CA")
        else:
            found.add(match.group("city"), region, "US")

    return found.items


def _postal_addresses(node) -> list[dict]:
    """Walk a JSON-LD document and collect every PostalAddress-like mapping."""
    found = []
    if isinstance(node, list):
        for item in node:
            found.extend(_postal_addresses(item))
    elif isinstance(node, dict):
        if node.get("addressLocality"):
            found.append(node)
        for value in node.values():
            if isinstance(value, (dict, list)):
                found.extend(_postal_addresses(value))
    return found


def extract_structured_locations(
    html: str, cap: int = MAX_LOCATION_CANDIDATES
) -> list[Location]:
    """Locations declared as schema.org PostalAddress in JSON-LD blocks."""
    if not html or "ld+json" not in html:
        return []
    found = _CandidateList(cap)
    for script in make_soup(html).find_all("script", attrs={"type": "application/ld+json"}):
        try:
            document = json.loads(script.string or script.get_text() or "")
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")
            continue
        for address in _postal_addresses(document):
            country = address.get("addressCountry") or ""
            if isinstance(country, dict):
                country = country.get("name") or ""
            found.add(
                str(address.get("addressLocality") or ""),
                str(address.get("addressRegion") or ""),
                str(country) or "US",
                address.get("streetAddress"),
            )
    return found.items


def merge_candidates(*groups: list[Location], cap: int = MAX_LOCATION_CANDIDATES) -> list[Location]:
    """Concatenate candidate lists in order, dropping repeats of the same city and country."""
    merged = _CandidateList(cap)
    for group in groups:
        for location in group:
            merged.add(location.city, location.region, location.country, location.formatted_address)
    return merged.items
