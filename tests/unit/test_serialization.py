"""
Unit tests for firm_research.serialization.
"""

import json

from firm_research.models import ResearchRecord
from firm_research.serialization import record_slug, slugify, write_record


class TestSlugs:
    def test_slugify(self):
        assert slugify("Roth & Jackson, P.C.") == "roth-jackson-p-c"
        assert slugify("Núñez Abogados") == "nunez-abogados"

    def test_record_slug_prefers_firm_name(self):
        record = ResearchRecord(website="https://roth-jackson.com", subject_name="Roth Jackson")
        assert record_slug(record) == "roth-jackson"

    def test_record_slug_falls_back_to_host(self):
        record = ResearchRecord(website="https://www.smithlaw.com", subject_name="Law Firm")
        assert record_slug(record) == "smithlaw-com"

    def test_record_slug_last_resort(self):
        assert record_slug(ResearchRecord(website="", subject_name="")) == "firm"


class TestWriteRecord:
    def test_writes_json(self, tmp_path):
        record = ResearchRecord(website="https://roth-jackson.com", subject_name="Roth Jackson")
        record.add_practice_area("personal injury")

        path = write_record(record, tmp_path / "reports")

        assert path == tmp_path / "reports" / "roth-jackson-research.json"
        written = json.loads(path.read_text(encoding="utf-8"))
        assert written == record.to_dict()
