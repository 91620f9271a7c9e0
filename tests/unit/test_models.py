"""
Unit tests for firm_research.models.
"""

import pytest

from firm_research.models import (
    Attorney,
    CompetitorListing,
    DataQuality,
    Location,
    LocationSource,
    ResearchHints,
    ResearchRecord,
)


class TestLocation:
    """Tests for Location."""

    @pytest.mark.parametrize(
        "source, confidence",
        [
            (LocationSource.EXTERNAL_VALIDATED, 10),
            (LocationSource.EXTERNAL, 6),
            (LocationSource.SCRAPED_VALIDATED, 8),
            (LocationSource.SCRAPED, 5),
            (LocationSource.UNRESOLVED, 0),
        ],
    )
    def test_confidence_follows_source(self, source, confidence):
        assert Location("McLean", "VA", "US", source).confidence == confidence

    def test_unresolved(self):
        location = Location.unresolved()
        assert not location.is_resolved
        assert location.label() == ""

    def test_to_dict(self):
        location = Location("McLean", "VA", "US", LocationSource.SCRAPED, "McLean, VA 22102")
        assert location.to_dict() == {
            "city": "McLean",
            "region": "VA",
            "country": "US",
            "source": "scraped",
            "confidence": 5,
            "formattedAddress": "McLean, VA 22102",
        }


class TestResearchHints:
    """Tests for ResearchHints.location_hint."""

    def test_country_defaults_to_us(self):
        hint = ResearchHints(city=" McLean ", region="VA").location_hint()
        assert (hint.city, hint.region, hint.country) == ("McLean", "VA", "US")

    def test_no_city_no_hint(self):
        assert ResearchHints(region="VA", country="US").location_hint() is None


class TestDataQuality:
    """Tests for DataQuality."""

    def test_default_keys(self):
        assert set(DataQuality().confidence) == {
            "firmName",
            "location",
            "attorneys",
            "practiceAreas",
            "overall",
        }

    def test_warnings_and_missing_deduplicated(self):
        quality = DataQuality()
        quality.add_warning("No Team page found")
        quality.add_warning("No Team page found")
        quality.add_missing("attorneys")
        quality.add_missing("attorneys")
        assert quality.warnings == ["No Team page found"]
        assert quality.missing_fields == ["attorneys"]

    def test_set_confidence_clamps(self):
        quality = DataQuality()
        quality.set_confidence("attorneys", 14)
        quality.set_confidence("practiceAreas", -2)
        assert quality.confidence["attorneys"] == 10
        assert quality.confidence["practiceAreas"] == 0

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            DataQuality().set_confidence("revenue", 5)


class TestResearchRecord:
    """Tests for ResearchRecord."""

    def test_attorneys_keyed_by_lowercase_name(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        assert record.add_attorney(Attorney("Jane Smith", "Partner"))
        assert not record.add_attorney(Attorney("JANE SMITH", "Associate"))
        assert record.attorneys == [Attorney("Jane Smith", "Partner")]

    def test_attorney_cap(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        for i in range(3):
            record.add_attorney(Attorney(f"Person Number{i}"), cap=2)
        assert len(record.attorneys) == 2

    def test_competitors_keyed_by_lowercase_name(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        assert record.add_competitor(CompetitorListing("Smith Law"))
        assert not record.add_competitor(CompetitorListing("smith law"))

    def test_to_dict_shape(self):
        record = ResearchRecord(website="https://roth-jackson.com", subject_name="Roth Jackson")
        data = record.to_dict()
        assert data["subjectName"] == "Roth Jackson"
        assert data["location"]["source"] == "unresolved"
        assert data["selfListing"] is None
        assert set(data["dataQuality"]) == {"missingFields", "warnings", "confidence"}
        assert data["researchedAt"]
