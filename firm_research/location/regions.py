"""
Region and country vocabularies.

Expands region codes to the names place-search understands ("VA" ->
"Virginia"), normalizes country spellings to ISO codes, and knows which
address markers identify a country in a formatted address.
"""

from __future__ import annotations

from firm_research.models import Location

US_STATES: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "DC": "District of Columbia", "FL": "Florida", "GA": "Georgia", "HI": "Hawaii",
    "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming",
}  # fmt: skip

CA_PROVINCES: dict[str, str] = {
    "AB": "Alberta", "BC": "British Columbia", "MB": "Manitoba", "NB": "New Brunswick",
    "NL": "Newfoundland and Labrador", "NS": "Nova Scotia", "ON": "Ontario",
    "PE": "Prince Edward Island", "QC": "Quebec", "SK": "Saskatchewan",
}  # fmt: skip

COUNTRY_ALIASES: dict[str, str] = {
    "us": "US", "usa": "US", "u.s.": "US", "u.s.a.": "US", "united states": "US",
    "united states of america": "US",
    "ca": "CA", "can": "CA", "canada": "CA",
    "uk": "GB", "u.k.": "GB", "gb": "GB", "gbr": "GB", "united kingdom": "GB",
    "great britain": "GB", "england": "GB", "scotland": "GB", "wales": "GB",
    "es": "ES", "esp": "ES", "spain": "ES", "españa": "ES", "espana": "ES",
}  # fmt: skip

COUNTRY_NAMES: dict[str, str] = {
    "US": "United States",
    "CA": "Canada",
    "GB": "United Kingdom",
    "ES": "Spain",
}

# A formatted address must contain one of these for the country to match
COUNTRY_MARKERS: dict[str, tuple[str, ...]] = {
    "US": ("USA", ", US", "United States"),
    "CA": ("Canada",),
    "GB": ("UK", "United Kingdom"),
    "ES": ("Spain", "España"),
}


def normalize_country(country: str | None) -> str:
    """ISO-style code for a country spelling; unknown values are upper-cased as-is."""
    value = (country or "").strip()
    if not value:
        return ""
    return COUNTRY_ALIASES.get(value.lower(), value.upper() if len(value) <= 3 else value)


def region_name(region: str, country: str) -> str:
    """Full region name for a code ("VA" -> "Virginia"), or the input unchanged."""
    code = (region or "").strip().upper()
    country = normalize_country(country)
    if country in ("US", "") and code in US_STATES:
        return US_STATES[code]
    if country == "CA" and code in CA_PROVINCES:
        return CA_PROVINCES[code]
    return (region or "").strip()


def search_location(location: Location) -> str:
    """
    Human-readable location string for place-search queries.

    Examples:
        McLean, VA, US    -> "McLean, Virginia"
        Toronto, ON, CA   -> "Toronto, Ontario, Canada"
        London, "", GB    -> "London, United Kingdom"
        Madrid, "", ES    -> "Madrid, Spain"
    """
    country = normalize_country(location.country)
    region = region_name(location.region, country)
    if country == "US":
        parts = [location.city, region]
    elif country == "CA":
        parts = [location.city, region, "Canada"]
    else:
        parts = [location.city, COUNTRY_NAMES.get(country, country)]
    return ", ".join(part for part in parts if part)


def address_matches_country(address: str, country: str) -> bool:
    """True if the address carries a marker for the country (unknown countries always pass)."""
    markers = COUNTRY_MARKERS.get(normalize_country(country))
    if not markers:
        return True
    return any(marker in (address or "") for marker in markers)
