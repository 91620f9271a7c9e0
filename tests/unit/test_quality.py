"""
Unit tests for firm_research.quality.
"""

import pytest

from firm_research.models import DataQuality, Location, LocationSource, ResearchRecord
from firm_research.quality import aggregate, is_report_ready, overall_confidence


class TestOverallConfidence:
    """Tests for overall_confidence."""

    def test_mean(self):
        assert overall_confidence([10, 8, 6, 4]) == 7

    def test_half_rounds_up(self):
        assert overall_confidence([10, 5, 7, 8]) == 8  # 7.5
        assert overall_confidence([5, 0, 2, 3]) == 3  # 2.5

    def test_empty(self):
        assert overall_confidence([]) == 0


class TestAggregate:
    """Tests for aggregate."""

    def test_location_confidence_follows_source(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        record.location = Location("McLean", "VA", "US", LocationSource.SCRAPED_VALIDATED)
        record.data_quality.set_confidence("firmName", 9)
        record.data_quality.set_confidence("attorneys", 7)
        record.data_quality.set_confidence("practiceAreas", 9)

        quality = aggregate(record)

        assert quality is record.data_quality
        assert quality.confidence["location"] == 8
        assert quality.confidence["overall"] == 8  # 33 / 4 = 8.25

    def test_overrides_applied_before_overall(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        quality = aggregate(
            record, {"firmName": 10, "attorneys": 10, "practiceAreas": 10}
        )
        assert quality.confidence["overall"] == 8  # (10 + 0 + 10 + 10) / 4 = 7.5

    def test_overall_cannot_be_overridden(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        with pytest.raises(ValueError):
            aggregate(record, {"overall": 10})

    def test_warnings_and_missing_fields_kept(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        record.data_quality.add_warning("No Team page found")
        record.data_quality.add_missing("attorneys")

        quality = aggregate(record)

        assert quality.warnings == ["No Team page found"]
        assert quality.missing_fields == ["attorneys", "location"]

    def test_recomputes_on_every_call(self):
        record = ResearchRecord(website="https://roth-jackson.com")
        aggregate(record)
        assert record.data_quality.confidence["overall"] == 0

        record.location = Location("McLean", "VA", "US", LocationSource.EXTERNAL_VALIDATED)
        aggregate(record)
        assert record.data_quality.confidence["overall"] == 3  # 10 / 4 = 2.5


class TestIsReportReady:
    """Tests for is_report_ready."""

    def make_quality(self, overall, location):
        quality = DataQuality()
        quality.confidence.update({"overall": overall, "location": location})
        return quality

    def test_ready(self):
        assert is_report_ready(self.make_quality(7, 10), threshold=5)

    def test_below_threshold(self):
        assert not is_report_ready(self.make_quality(4, 10), threshold=5)

    def test_location_unresolved(self):
        assert not is_report_ready(self.make_quality(9, 0), threshold=5)
