"""
Attorney roster extraction.

Several independent strategies find (name, title) pairs in team page text;
their hits are merged in strategy order and deduplicated by lower-cased
name, so the first strategy to see a name decides its title.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from firm_research.constants import HEADING_TITLE_WINDOW, MAX_ATTORNEYS
from firm_research.models import Attorney

_UPPER = "A-ZÀ-ÖØ-Þ"
_LOWER = "a-zß-öø-ÿ"
_WORD = rf"(?:[{_UPPER}]['’])?(?:Mc|Mac)?[{_UPPER}][{_LOWER}]+(?:-[{_UPPER}][{_LOWER}]+)*"
_INITIAL = rf"[{_UPPER}]\."
NAME = rf"(?<![\w'’.]){_WORD}(?:[ \t]+(?:{_INITIAL}|{_WORD})){{1,3}}"

TITLES = {
    "founding partner": "Founding Partner",
    "managing partner": "Managing Partner",
    "senior partner": "Senior Partner",
    "of counsel": "Of Counsel",
    "partner": "Partner",
    "associate": "Associate",
    "attorney": "Attorney",
    "counsel": "Counsel",
    "esq.": "Esq.",
    "j.d.": "J.D.",
    "ll.b.": "LL.B.",
    "socio": "Socio",
    "socia": "Socia",
}
TITLE = r"(?<!\w)(?i:" + "|".join(re.escape(t) for t in TITLES) + r")(?!\w)"
DEFAULT_TITLE = "Attorney"

# Words at the edge of a match that belong to the surrounding copy, not the name
EDGE_NOISE = frozenset(
    {
        "Meet", "Our", "About", "The", "Contact", "Call", "Email", "View", "Read",
        "More", "Profile", "Bio", "Team", "Attorney", "Lawyer", "Partner", "Associate",
        "Founding", "Managing", "Senior", "Counsel", "Of", "Esq", "Socio", "Socia",
        "Abogado", "Abogada", "Dr", "Mr", "Mrs", "Ms",
    }
)  # fmt: skip

# A name containing any of these is a heading or an institution, not a person
NON_NAME_WORDS = frozenset(
    {
        "University", "College", "School", "Law", "Legal", "Firm", "Group", "Office",
        "Offices", "Llp", "Pllc", "Street", "Avenue", "Suite", "Road", "Practice",
        "Areas", "Injury", "Personal", "Accident", "Family", "Criminal", "Defense",
        "Estate", "Planning", "Immigration", "Business", "Free", "Consultation",
        "Services", "Case", "Results", "Reviews", "Home", "Privacy", "Policy",
        "Terms", "Court", "Supreme", "State", "Bar", "Association", "Center",
        "Lawyers", "Attorneys", "Injuries", "Claims", "Compensation", "Insurance",
        "Real", "Trial", "Bankruptcy", "Divorce", "Custody", "Employment", "Tax",
        "Car", "Truck", "Accidents", "Wrongful", "Death", "Medical", "Malpractice",
        "Workers", "Contact", "Us", "Welcome", "Why", "Choose", "How", "We", "Help",
    }
)  # fmt: skip


def canonical_title(raw: str) -> str:
    return TITLES.get(" ".join(raw.lower().split()), raw.strip())


def clean_name(raw: str) -> str | None:
    """
    Normalize a candidate name, or return None if it is not a person's name.

    Edge noise ("Meet", "Our", trailing "Managing") is dropped; what remains
    must be 2-4 tokens, start and end with a full word, and contain no
    institution or topic words.
    """
    tokens = raw.split()
    while tokens and tokens[0].rstrip(".,") in EDGE_NOISE:
        tokens.pop(0)
    while tokens and tokens[-1].rstrip(".,") in EDGE_NOISE:
        tokens.pop()
    if not 2 <= len(tokens) <= 4:
        return None
    if tokens[0].endswith(".") or tokens[-1].endswith("."):
        return None
    if any(token.rstrip(".,").capitalize() in NON_NAME_WORDS for token in tokens):
        return None
    return " ".join(tokens)


@dataclass(frozen=True)
class RosterCandidate:
    """A possible attorney found by one strategy."""

    name: str
    title: str
    start_pos: int
    strategy: str


class RosterStrategy(ABC):
    """Abstract base class for roster extraction strategies."""

    @abstractmethod
    def extract(self, text: str) -> list[RosterCandidate]:
        """Extract candidates from text."""
        ...

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Name of this strategy for debugging."""
        ...


class TitleAdjacencyStrategy(RosterStrategy):
    """
    A name directly followed by a title.

    Examples:
    - "Jane A. Smith, Partner"
    - "Carlos Ruiz Socio"
    - "John Doe, Esq."
    """

    PATTERN = re.compile(rf"(?P<name>{NAME})[ \t]*(?:,[ \t]*|\n[ \t]*|[ \t]+)(?P<title>{TITLE})")

    @property
    def strategy_name(self) -> str:
        return "title_adjacency"

    def extract(self, text: str) -> list[RosterCandidate]:
        candidates = []
        for match in self.PATTERN.finditer(text):
            name = clean_name(match.group("name"))
            if name:
                candidates.append(
                    RosterCandidate(
                        name=name,
                        title=canonical_title(match.group("title")),
                        start_pos=match.start(),
                        strategy=self.strategy_name,
                    )
                )
        return candidates


class HeadingNameStrategy(RosterStrategy):
    """
    A line holding only a name, kept only when a title follows it.

    The title is looked up in the next `window` characters, cut short at the
    next name line so one person never borrows another's title. Headings
    and nav labels with no title of their own are dropped.

    Examples:
    - "## Jane A. Smith" followed by "Partner" on a later line
    - "Robert Chen" followed by "Associate Attorney"
    """

    LINE = re.compile(rf"^[ \t]*#{{0,3}}[ \t]*(?P<name>{NAME})[ \t]*$", re.MULTILINE)
    TITLE_PATTERN = re.compile(TITLE)

    def __init__(self, window: int = HEADING_TITLE_WINDOW):
        self.window = window

    @property
    def strategy_name(self) -> str:
        return "heading"

    def extract(self, text: str) -> list[RosterCandidate]:
        lines = [
            (match, name)
            for match in self.LINE.finditer(text)
            if (name := clean_name(match.group("name")))
        ]
        candidates = []
        for i, (match, name) in enumerate(lines):
            end = match.start() + self.window
            if i + 1 < len(lines):
                end = min(end, lines[i + 1][0].start())
            title_match = self.TITLE_PATTERN.search(text, match.end("name"), max(end, match.end()))
            if title_match is None:
                continue
            candidates.append(
                RosterCandidate(
                    name=name,
                    title=canonical_title(title_match.group(0)),
                    start_pos=match.start("name"),
                    strategy=self.strategy_name,
                )
            )
        return candidates


class EducationMarkerStrategy(RosterStrategy):
    """
    A name followed on the same line by a school or degree.

    Examples:
    - "Jane Smith earned her J.D. from ..."
    - "Maria Lopez graduated from Stanford Law School"
    """

    PATTERN = re.compile(
        rf"(?P<name>{NAME})[^\n]{{0,150}}?"
        r"(?:University|Law School|College|J\.D\.|LL\.B\.|Juris Doctor|Universidad)"
    )

    @property
    def strategy_name(self) -> str:
        return "education"

    def extract(self, text: str) -> list[RosterCandidate]:
        candidates = []
        for match in self.PATTERN.finditer(text):
            name = clean_name(match.group("name"))
            if name:
                candidates.append(
                    RosterCandidate(
                        name=name,
                        title=DEFAULT_TITLE,
                        start_pos=match.start(),
                        strategy=self.strategy_name,
                    )
                )
        return candidates


def default_strategies() -> list[RosterStrategy]:
    return [TitleAdjacencyStrategy(), HeadingNameStrategy(), EducationMarkerStrategy()]


def extract_roster_with_stats(
    text: str,
    strategies: list[RosterStrategy] | None = None,
    cap: int = MAX_ATTORNEYS,
) -> tuple[list[Attorney], dict[str, int]]:
    """
    Extract attorneys and report how many raw hits each strategy produced.

    Returns:
        (attorneys, {strategy_name: hit_count})
    """
    strategies = strategies or default_strategies()
    stats: dict[str, int] = {}
    roster: list[Attorney] = []
    seen: set[str] = set()

    for strategy in strategies:
        hits = strategy.extract(text or "")
        stats[strategy.strategy_name] = len(hits)
        for hit in hits:
            key = hit.name.lower()
            if key in seen or len(roster) >= cap:
                continue
            seen.add(key)
            roster.append(Attorney(name=hit.name, title=hit.title))

    return roster, stats


def extract_roster(
    text: str,
    strategies: list[RosterStrategy] | None = None,
    cap: int = MAX_ATTORNEYS,
) -> list[Attorney]:
    """Attorneys found by all strategies, one entry per name, at most `cap`."""
    roster, _ = extract_roster_with_stats(text, strategies, cap)
    return roster


def roster_confidence(count: int) -> int:
    """Confidence (0-10) for the number of distinct attorneys found."""
    if count >= 5:
        return 9
    if count >= 2:
        return 7
    if count >= 1:
        return 5
    return 2
