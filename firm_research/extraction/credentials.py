"""
Credential, award and bar admission extraction.

Each recognizable phrase found in the text contributes at most one
human-readable line: the sentence that mentions it, if that sentence is a
sensible length.
"""

from __future__ import annotations

import re

from firm_research.extraction.text import collapse_whitespace, split_sentences

AWARD_KEYWORDS: tuple[str, ...] = (
    "Super Lawyers",
    "Best Lawyers",
    "AV Rated",
    "Martindale",
    "Top Attorney",
    "Rising Star",
    "Award",
    "Recognition",
    "Chambers",
    "Legal 500",
    "Who's Who",
    "Avvo",
    "Justia",
)

EDUCATION_KEYWORDS: tuple[str, ...] = (
    "University",
    "Law School",
    "College",
    "summa cum laude",
    "magna cum laude",
    "honors",
)

BAR_PATTERN = re.compile(
    r"(?i:admitted to (?:practice (?:law )?(?:in|before) |(?:the )?bar (?:in|of) (?:the )?))"
    r"(?P<where>[A-Z][A-Za-z]+(?:[ \t]+(?:of[ \t]+)?[A-Z][A-Za-z]+){0,3})"
)


def sentences_for_keywords(
    text: str,
    keywords: tuple[str, ...],
    min_length: int,
    max_length: int,
) -> list[tuple[str, str]]:
    """
    First qualifying sentence per keyword.

    Returns:
        (keyword, sentence) pairs in keyword order; a sentence already used
        for an earlier keyword is not repeated.
    """
    sentences = split_sentences(text)
    used: set[str] = set()
    found = []
    for keyword in keywords:
        pattern = re.compile(rf"(?<!\w){re.escape(keyword)}", re.IGNORECASE)
        for sentence in sentences:
            if not (min_length < len(sentence) < max_length):
                continue
            if not pattern.search(sentence):
                continue
            if sentence not in used:
                used.add(sentence)
                found.append((keyword, sentence))
            break
    return found


def extract_awards(text: str) -> list[str]:
    """Sentences mentioning awards or peer ratings (10-200 chars), one per keyword."""
    return [sentence for _, sentence in sentences_for_keywords(text, AWARD_KEYWORDS, 10, 200)]


def extract_education(text: str) -> list[str]:
    """Education sentences from a team page (20-250 chars), one per keyword."""
    return [
        sentence for _, sentence in sentences_for_keywords(text, EDUCATION_KEYWORDS, 20, 250)
    ]


def extract_bar_admissions(text: str) -> list[str]:
    """Jurisdictions the firm's attorneys are admitted in, as "Admitted to the bar in X"."""
    admissions: list[str] = []
    for match in BAR_PATTERN.finditer(text or ""):
        where = collapse_whitespace(match.group("where"))
        line = f"Admitted to the bar in {where}"
        if line not in admissions:
            admissions.append(line)
    return admissions
