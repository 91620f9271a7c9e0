"""
Optional text-extraction service (OpenAI chat completions).

The service answers natural-language questions about page text. Its answers
are unreliable: every reply is parsed into a provisional pydantic model and
checked (type, length, non-placeholder values) before anything is accepted
into a research record.
"""

from __future__ import annotations

import json
import logging
import re

from openai import APITimeoutError, OpenAI, OpenAIError
from pydantic import BaseModel, Field, ValidationError, field_validator

from firm_research.config import Settings
from firm_research.constants import TEXT_EXTRACTION_TIMEOUT
from firm_research.models import Location, LocationSource
from firm_research.sources.base import LookupFailure

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 6000

PLACEHOLDER_VALUES = {
    "",
    "not_found",
    "not found",
    "none",
    "null",
    "unknown",
    "n/a",
    "na",
    "city",
    "state",
}

LOCATION_INSTRUCTION = (
    "Find the office location of this law firm. Reply with only "
    '"City, ST" (two-letter region code), or NOT_FOUND if no address is given.'
)

_CITY_RE = re.compile(r"^[^\W\d_]+(?:[ .'\-]+[^\W\d_]+)*\.?$")
_REGION_RE = re.compile(r"^[^\W\d_]+(?:[ .\-]+[^\W\d_]+)*$")


def _is_placeholder(value: str) -> bool:
    return value.strip().strip("\"'").lower() in PLACEHOLDER_VALUES


class ExtractedLocation(BaseModel):
    """Provisional location parsed from a text-extraction reply."""

    city: str = Field(min_length=2, max_length=60)
    region: str = Field(default="", max_length=40)
    country: str = Field(default="", max_length=40)

    @field_validator("city", "region", "country", mode="before")
    @classmethod
    def strip_value(cls, v):
        if isinstance(v, str):
            return v.strip().strip("\"'").strip()
        return v

    @field_validator("city")
    @classmethod
    def check_city(cls, v: str) -> str:
        if _is_placeholder(v) or not _CITY_RE.match(v):
            raise ValueError(f"not a city name: {v!r}")
        return v

    @field_validator("region")
    @classmethod
    def check_region(cls, v: str) -> str:
        if v and (_is_placeholder(v) or not _REGION_RE.match(v)):
            raise ValueError(f"not a region: {v!r}")
        return v

    def to_location(self) -> Location:
        return Location(
            city=self.city,
            region=self.region,
            country=self.country,
            source=LocationSource.SCRAPED,
        )


def parse_location_answer(answer: str | None) -> ExtractedLocation | None:
    """
    Parse a reply of the form "City, ST" (or a JSON object) defensively.

    Returns None for placeholders, empty replies, and anything that fails
    validation.
    """
    if not answer:
        return None
    text = answer.strip().splitlines()[0].strip() if answer.strip() else ""
    if _is_placeholder(text) or "not_found" in text.lower():
        return None

    candidate: dict
    if text.startswith("{"):
        try:
            raw = json.loads(answer)
        except json.JSONDecodeError:
            return None
        if not isinstance(raw, dict):
            return None
        candidate = {
            "city": raw.get("city") or "",
            "region": raw.get("region") or raw.get("state") or "",
            "country": raw.get("country") or "",
        }
    else:
        parts = [part.strip() for part in text.split(",")]
        if len(parts) < 2:
            return None
        candidate = {"city": parts[0], "region": parts[1]}
        if len(parts) > 2:
            candidate["country"] = parts[2]

    try:
        return ExtractedLocation.model_validate(candidate)
    except ValidationError as e:
        logger.debug(f"Rejected text-extraction location {answer!r}: {e.error_count()} errors")
        return None


class TextExtractionClient:
    """Asks the chat model questions about page text."""

    source_name = "text_extraction"

    def __init__(self, client: OpenAI, model: str = "gpt-4o-mini"):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> TextExtractionClient | None:
        """Build a client when an API key is configured, otherwise None."""
        if not settings.openai_api_key:
            return None
        client = OpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.text_extraction_timeout or TEXT_EXTRACTION_TIMEOUT,
            max_retries=1,
        )
        return cls(client, model=settings.openai_model)

    def ask(self, instruction: str, text: str) -> str | LookupFailure:
        """Send one instruction plus (truncated) page text; return the raw reply."""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": instruction},
                    {"role": "user", "content": text[:MAX_INPUT_CHARS]},
                ],
                temperature=0,
                max_tokens=100,
            )
        except APITimeoutError as e:
            return LookupFailure(self.source_name, str(e), timed_out=True)
        except OpenAIError as e:
            logger.debug(f"Text extraction failed: {e}")
            return LookupFailure(self.source_name, str(e))
        return (response.choices[0].message.content or "").strip()

    def extract_location(self, text: str) -> Location | None:
        """Ask for the firm's location and accept it only if it validates."""
        if not text.strip():
            return None
        answer = self.ask(LOCATION_INSTRUCTION, text)
        if isinstance(answer, LookupFailure):
            logger.debug(str(answer))
            return None
        parsed = parse_location_answer(answer)
        return parsed.to_location() if parsed else None
