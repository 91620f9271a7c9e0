"""
Data models for research records.

These dataclasses represent the research record built for one firm website
and the values each pipeline stage contributes to it. Stages only add to a
record; nothing here removes a previously found fact.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from firm_research.constants import MAX_ATTORNEYS


class LocationSource(Enum):
    """Provenance of the canonical location."""

    EXTERNAL_VALIDATED = "externally-supplied-validated"
    EXTERNAL = "externally-supplied"
    SCRAPED_VALIDATED = "scraped-validated"
    SCRAPED = "scraped"
    UNRESOLVED = "unresolved"


# Fixed ranking table: a location's confidence is a function of its source
LOCATION_CONFIDENCE: dict[LocationSource, int] = {
    LocationSource.EXTERNAL_VALIDATED: 10,
    LocationSource.EXTERNAL: 6,
    LocationSource.SCRAPED_VALIDATED: 8,
    LocationSource.SCRAPED: 5,
    LocationSource.UNRESOLVED: 0,
}


@dataclass
class Location:
    """A city/region/country triple with its provenance."""

    city: str = ""
    region: str = ""
    country: str = ""
    source: LocationSource = LocationSource.UNRESOLVED
    formatted_address: str | None = None

    @property
    def confidence(self) -> int:
        return LOCATION_CONFIDENCE[self.source]

    @property
    def is_resolved(self) -> bool:
        return self.source is not LocationSource.UNRESOLVED

    @classmethod
    def unresolved(cls) -> Location:
        return cls()

    def label(self) -> str:
        """Short "City, Region" form used in logs and warnings."""
        return ", ".join(part for part in (self.city, self.region) if part)

    def to_dict(self) -> dict[str, Any]:
        return {
            "city": self.city,
            "region": self.region,
            "country": self.country,
            "source": self.source.value,
            "confidence": self.confidence,
            "formattedAddress": self.formatted_address,
        }


@dataclass(frozen=True)
class LocationHint:
    """Externally supplied location, trusted above anything scraped."""

    city: str
    region: str = ""
    country: str = "US"


@dataclass
class ResearchHints:
    """Optional inputs that short-circuit extraction steps."""

    contact_name: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    organization_name: str | None = None

    def location_hint(self) -> LocationHint | None:
        """Return a location hint when at least a city was supplied."""
        city = (self.city or "").strip()
        if not city:
            return None
        return LocationHint(
            city=city,
            region=(self.region or "").strip(),
            country=(self.country or "").strip() or "US",
        )


@dataclass(frozen=True)
class Attorney:
    """A named member of the firm's legal staff."""

    name: str
    title: str = "Attorney"

    @property
    def key(self) -> str:
        return self.name.lower()

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "title": self.title}


@dataclass
class FirmHistory:
    """Founding and size signals from the About page."""

    founded_year: int | None = None
    years_in_business: int | None = None
    team_size: int | None = None
    awards: list[str] = field(default_factory=list)
    bar_admissions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "foundedYear": self.founded_year,
            "yearsInBusiness": self.years_in_business,
            "teamSize": self.team_size,
            "awards": list(self.awards),
            "barAdmissions": list(self.bar_admissions),
        }


@dataclass
class SelfListing:
    """The firm's own business listing."""

    name: str
    review_count: int = 0
    rating: float | None = None
    address: str = ""
    match_score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "reviewCount": self.review_count,
            "rating": self.rating,
            "address": self.address,
            "matchScore": self.match_score,
        }


@dataclass
class CompetitorListing:
    """A nearby business listing for the same kind of practice."""

    name: str
    review_count: int = 0
    rating: float | None = None
    address: str = ""

    @property
    def key(self) -> str:
        return self.name.lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "reviewCount": self.review_count,
            "rating": self.rating,
            "address": self.address,
        }


CONFIDENCE_FIELDS = ("firmName", "location", "attorneys", "practiceAreas")


def _default_confidence() -> dict[str, int]:
    scores = {name: 0 for name in CONFIDENCE_FIELDS}
    scores["overall"] = 0
    return scores


@dataclass
class DataQuality:
    """Accumulated warnings, missing fields and per-field confidence."""

    missing_fields: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    confidence: dict[str, int] = field(default_factory=_default_confidence)

    def add_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    def add_missing(self, field_name: str) -> None:
        if field_name not in self.missing_fields:
            self.missing_fields.append(field_name)

    def set_confidence(self, field_name: str, value: int) -> None:
        """Record a stage's confidence for one field (0-10)."""
        if field_name not in CONFIDENCE_FIELDS:
            raise ValueError(f"Unknown confidence field: {field_name!r}")
        self.confidence[field_name] = max(0, min(10, int(value)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "missingFields": list(self.missing_fields),
            "warnings": list(self.warnings),
            "confidence": dict(self.confidence),
        }


@dataclass
class ResearchRecord:
    """Everything learned about one firm in a single run."""

    website: str
    subject_name: str = ""
    contact_name: str | None = None
    location: Location = field(default_factory=Location.unresolved)
    all_candidates: list[Location] = field(default_factory=list)
    attorneys: list[Attorney] = field(default_factory=list)
    practice_areas: list[str] = field(default_factory=list)
    credentials: list[str] = field(default_factory=list)
    firm_history: FirmHistory = field(default_factory=FirmHistory)
    self_listing: SelfListing | None = None
    competitors: list[CompetitorListing] = field(default_factory=list)
    pages: dict[str, str] = field(default_factory=dict)
    data_quality: DataQuality = field(default_factory=DataQuality)
    researched_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def add_attorney(self, attorney: Attorney, cap: int = MAX_ATTORNEYS) -> bool:
        """Add an attorney unless the name is already present or the roster is full."""
        if len(self.attorneys) >= cap:
            return False
        if any(existing.key == attorney.key for existing in self.attorneys):
            return False
        self.attorneys.append(attorney)
        return True

    def add_practice_area(self, area: str) -> bool:
        if area in self.practice_areas:
            return False
        self.practice_areas.append(area)
        return True

    def add_credential(self, credential: str) -> bool:
        if credential in self.credentials:
            return False
        self.credentials.append(credential)
        return True

    def add_competitor(self, listing: CompetitorListing) -> bool:
        if any(existing.key == listing.key for existing in self.competitors):
            return False
        self.competitors.append(listing)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "subjectName": self.subject_name,
            "website": self.website,
            "contactName": self.contact_name,
            "location": self.location.to_dict(),
            "allCandidates": [candidate.to_dict() for candidate in self.all_candidates],
            "attorneys": [attorney.to_dict() for attorney in self.attorneys],
            "practiceAreas": list(self.practice_areas),
            "credentials": list(self.credentials),
            "firmHistory": self.firm_history.to_dict(),
            "selfListing": self.self_listing.to_dict() if self.self_listing else None,
            "competitors": [competitor.to_dict() for competitor in self.competitors],
            "pages": dict(self.pages),
            "dataQuality": self.data_quality.to_dict(),
            "researchedAt": self.researched_at,
        }
