"""Founding year and firm size signals."""

from __future__ import annotations

import re
from datetime import date

FOUNDING_PATTERN = re.compile(
    r"\b(?:founded|established|since|fundad[oa]|desde)\s+(?:in\s+|en\s+)?(\d{4})\b",
    re.IGNORECASE,
)
TEAM_SIZE_PATTERN = re.compile(
    r"\b(\d{1,4})\+?\s+(?:attorneys|lawyers|professionals|team members|abogados)\b",
    re.IGNORECASE,
)
EARLIEST_FOUNDING_YEAR = 1800


def find_founding_year(text: str, current_year: int | None = None) -> int | None:
    """First plausible "founded/established/since YYYY" year in the text."""
    current_year = current_year or date.today().year
    for match in FOUNDING_PATTERN.finditer(text or ""):
        year = int(match.group(1))
        if EARLIEST_FOUNDING_YEAR <= year <= current_year:
            return year
    return None


def years_in_business(founded_year: int | None, current_year: int | None = None) -> int | None:
    if founded_year is None:
        return None
    return (current_year or date.today().year) - founded_year


def find_team_size(text: str) -> int | None:
    """First "N+ attorneys/professionals" count in the text."""
    for match in TEAM_SIZE_PATTERN.finditer(text or ""):
        size = int(match.group(1))
        if size > 0:
            return size
    return None
