"""Text helpers shared by the extractors."""

import re
import unicodedata

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+|\n+")
_WHITESPACE = re.compile(r"\s+")


def fold_accents(text: str) -> str:
    """Strip diacritics ("inmigración" -> "inmigracion")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def split_sentences(text: str) -> list[str]:
    """Split on sentence punctuation and line breaks; empty pieces dropped."""
    return [collapse_whitespace(s) for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]


def flexible_phrase(phrase: str) -> str:
    """Regex source matching a phrase with any run of whitespace between words."""
    return r"\s+".join(re.escape(word) for word in phrase.split())
