"""
Business Name Matching Module.

Decides whether a listing name refers to the firm being researched. The
rule is a replaceable strategy behind NameMatcher, so it can be tightened
without touching the resolver.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class MatchType(Enum):
    """Types of matches."""

    NO_MATCH = "no_match"
    EXACT = "exact"
    NORMALIZED = "normalized"
    CONTAINMENT = "containment"


@dataclass(frozen=True)
class NameMatch:
    """Result of comparing a listing name with the firm name."""

    candidate: str
    subject: str
    match_type: MatchType
    score: float = 0.0
    matcher_name: str = ""

    @property
    def matched(self) -> bool:
        return self.match_type is not MatchType.NO_MATCH


class NameMatcher(ABC):
    """Abstract base class for name matchers."""

    @abstractmethod
    def match(self, candidate: str, subject: str) -> NameMatch:
        """
        Compare a listing name with the firm name.

        Returns:
            NameMatch; higher scores mean a closer match, exact matches score inf
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this matcher for debugging."""
        ...

    def is_match(self, candidate: str, subject: str) -> bool:
        return self.match(candidate, subject).matched


# Entity-type suffixes that say nothing about which firm it is
LEGAL_SUFFIXES = re.compile(
    r"(?:\s+(?:llp|pllc|llc|pc|pa|plc|inc|ltd|limited|chtd|apc|slp|sl|sa))+$"
)
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
MIN_CONTAINED_LENGTH = 3


def normalize_business_name(name: str) -> str:
    """
    Lower-case, drop punctuation and trailing entity suffixes.

    Examples:
        "Smith & Jones, LLP" -> "smith and jones"
        "Roth Jackson P.C."  -> "roth jackson"
    """
    text = (name or "").lower().replace("&", " and ")
    text = re.sub(r"\b((?:[a-z]\.){2,})", lambda m: m.group(1).replace(".", ""), text)
    text = _PUNCTUATION.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return LEGAL_SUFFIXES.sub("", text).strip()


class ContainmentNameMatcher(NameMatcher):
    """
    Matches names where one contains the other.

    Exact (case-insensitive) names win outright. Otherwise names are
    compared without punctuation or entity suffixes, and containment is
    scored as len(shorter) / (length difference + 1), so a longer overlap
    with a smaller leftover scores higher. The contained name must sit on
    word boundaries, which keeps "Ann Law" from matching "Joanne Law".
    """

    @property
    def name(self) -> str:
        return "containment"

    def match(self, candidate: str, subject: str) -> NameMatch:
        raw_a = " ".join((candidate or "").lower().split())
        raw_b = " ".join((subject or "").lower().split())
        if raw_a and raw_a == raw_b:
            return NameMatch(candidate, subject, MatchType.EXACT, math.inf, self.name)

        a = normalize_business_name(candidate)
        b = normalize_business_name(subject)
        if not a or not b:
            return NameMatch(candidate, subject, MatchType.NO_MATCH, 0.0, self.name)

        if a == b:
            return NameMatch(candidate, subject, MatchType.NORMALIZED, float(len(a)), self.name)

        shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
        if len(shorter) >= MIN_CONTAINED_LENGTH and re.search(
            rf"(?<!\w){re.escape(shorter)}(?!\w)", longer
        ):
            score = len(shorter) / (len(longer) - len(shorter) + 1)
            return NameMatch(candidate, subject, MatchType.CONTAINMENT, score, self.name)

        return NameMatch(candidate, subject, MatchType.NO_MATCH, 0.0, self.name)


DEFAULT_MATCHER: NameMatcher = ContainmentNameMatcher()


def fuzzy_match(candidate: str, subject: str, matcher: NameMatcher | None = None) -> bool:
    """True if the two names refer to the same business under the matcher's rule."""
    return (matcher or DEFAULT_MATCHER).is_match(candidate, subject)
