"""
Unit tests for scraped location candidates.
"""

from firm_research.extraction.locations import (
    extract_location_candidates,
    extract_structured_locations,
    merge_candidates,
)
from firm_research.models import Location, LocationSource

JSON_LD = """
<html><head>
<script type="application/ld+json">
{"@context": "https://schema.org", "@type": "LegalService", "name": "Roth Jackson",
 "address": {"@type": "PostalAddress", "streetAddress": "1750 Tysons Blvd",
             "addressLocality": "McLean", "addressRegion": "VA", "addressCountry": "US"}}
</script>
</head><body></body></html>
"""


def triples(locations):
    return [(loc.city, loc.region, loc.country) for loc in locations]


class TestExtractLocationCandidates:
    """Tests for extract_location_candidates."""

    def test_us_address_with_zip(self):
        found = extract_location_candidates("Visit us at 1750 Tysons Blvd, McLean, VA 22102 today.")

        assert triples(found) == [("McLean", "VA", "US")]
        assert found[0].source is LocationSource.SCRAPED
        assert found[0].formatted_address == "McLean, VA 22102"

    def test_zip_address_before_named_cities(self):
        text = "Offices at 12 Main St, Boston, MA 02110 and in London and Madrid."
        found = extract_location_candidates(text)
        assert triples(found) == [
            ("Boston", "MA", "US"),
            ("London", "", "GB"),
            ("Madrid", "", "ES"),
        ]

    def test_us_city_sharing_a_spanish_name(self):
        found = extract_location_candidates("Smith Law, 24000 Main St, Valencia, CA 91355")
        assert triples(found) == [("Valencia", "CA", "US")]

    def test_street_words_before_city_are_dropped(self):
        found = extract_location_candidates("Visit us at 1 Main Street McLean, VA 22101 today")
        assert triples(found) == [("McLean", "VA", "US")]
        assert found[0].formatted_address == "Main Street McLean, VA 22101"

    def test_spanish_spelling_normalized(self):
        found = extract_location_candidates("Abogados en Malaga y Marbella")
        assert triples(found) == [("Málaga", "", "ES"), ("Marbella", "", "ES")]

    def test_uk_postcode(self):
        found = extract_location_candidates("10 Queen Street, Leicester LE1 5AB")
        assert triples(found) == [("Leicester", "", "GB")]

    def test_canadian_province(self):
        assert triples(extract_location_candidates("Toronto, ON M5V 2T6")) == [("Toronto", "ON", "CA")]
        assert triples(extract_location_candidates("Ottawa, Ontario")) == [("Ottawa", "ON", "CA")]

    def test_address_words_are_not_cities(self):
        found = extract_location_candidates("Suite 200, Fairfax, VA 22030")
        assert triples(found) == [("Fairfax", "VA", "US")]

    def test_duplicates_and_cap(self):
        text = "McLean, VA 22102. McLean, VA. Vienna, VA. Reston, VA."
        assert triples(extract_location_candidates(text, cap=2)) == [
            ("McLean", "VA", "US"),
            ("Vienna", "VA", "US"),
        ]

    def test_nothing_found(self):
        assert extract_location_candidates("Call us for a free consultation.") == []
        assert extract_location_candidates("") == []


class TestStructuredLocations:
    """Tests for JSON-LD PostalAddress extraction."""

    def test_postal_address(self):
        found = extract_structured_locations(JSON_LD)
        assert triples(found) == [("McLean", "VA", "US")]
        assert found[0].formatted_address == "1750 Tysons Blvd"

    def test_country_object_and_default(self):
        html = (
            '<script type="application/ld+json">[{"address": {"addressLocality": "London",'
            ' "addressCountry": {"name": "United Kingdom"}}}, {"address": {"addressLocality":'
            ' "Austin", "addressRegion": "TX"}}]</script>'
        )
        assert triples(extract_structured_locations(html)) == [
            ("London", "", "GB"),
            ("Austin", "TX", "US"),
        ]

    def test_malformed_json_skipped(self):
        html = '<script type="application/ld+json">{not json</script>'
        assert extract_structured_locations(html) == []

    def test_no_json_ld(self):
        assert extract_structured_locations("<html><body>McLean, VA</body></html>") == []


class TestMergeCandidates:
    def test_first_group_wins_on_duplicates(self):
        structured = [Location("McLean", "VA", "US", LocationSource.SCRAPED, "1750 Tysons Blvd")]
        text = [
            Location("McLean", "VA", "US", LocationSource.SCRAPED),
            Location("Vienna", "VA", "US", LocationSource.SCRAPED),
        ]
        merged = merge_candidates(structured, text)
        assert triples(merged) == [("McLean", "VA", "US"), ("Vienna", "VA", "US")]
        assert merged[0].formatted_address == "1750 Tysons Blvd"
