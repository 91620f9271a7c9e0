"""
Unit tests for firm_research.discovery.categorizer.
"""

from firm_research.discovery.categorizer import PageRole, categorize_pages, url_path

SITE = "https://roth-jackson.com"


class TestCategorizePages:
    """Tests for categorize_pages."""

    def test_english_site(self):
        urls = [
            f"{SITE}/",
            f"{SITE}/about-us/",
            f"{SITE}/our-team",
            f"{SITE}/contact",
            f"{SITE}/practice-areas",
            f"{SITE}/testimonials",
        ]
        result = categorize_pages(urls)

        assert result.get(PageRole.ABOUT) == f"{SITE}/about-us/"
        assert result.get(PageRole.TEAM) == f"{SITE}/our-team"
        assert result.get(PageRole.CONTACT) == f"{SITE}/contact"
        assert result.get(PageRole.SERVICES) == f"{SITE}/practice-areas"
        assert result.get(PageRole.TESTIMONIALS) == f"{SITE}/testimonials"
        assert result.missing == []

    def test_spanish_site(self):
        urls = [
            f"{SITE}/es/sobre-nosotros",
            f"{SITE}/es/nuestro-equipo",
            f"{SITE}/es/contacto",
            f"{SITE}/es/servicios",
        ]
        result = categorize_pages(urls)

        assert result.get(PageRole.ABOUT) == f"{SITE}/es/sobre-nosotros"
        assert result.get(PageRole.TEAM) == f"{SITE}/es/nuestro-equipo"
        assert result.get(PageRole.CONTACT) == f"{SITE}/es/contacto"
        assert result.get(PageRole.SERVICES) == f"{SITE}/es/servicios"

    def test_specific_pattern_beats_earlier_loose_match(self):
        """A whole-segment match wins even if a looser match appears first."""
        urls = [f"{SITE}/attorneys/jane-smith", f"{SITE}/attorneys"]
        result = categorize_pages(urls)
        assert result.get(PageRole.TEAM) == f"{SITE}/attorneys"

    def test_loose_pattern_used_when_nothing_specific(self):
        urls = [f"{SITE}/about-the-firm-history"]
        result = categorize_pages(urls)
        assert result.get(PageRole.ABOUT) == f"{SITE}/about-the-firm-history"

    def test_missing_roles_are_warnings(self):
        result = categorize_pages([f"{SITE}/contact"])

        assert PageRole.TEAM in result.missing
        assert "Missing key page: team" in result.missing_warnings()
        assert "Missing key page: contact" not in result.missing_warnings()

    def test_empty_input(self):
        result = categorize_pages([])
        assert result.pages == {}
        assert len(result.missing) == len(PageRole)


class TestUrlPath:
    """Tests for url_path."""

    def test_decodes_and_lowercases(self):
        assert url_path("https://x.es/Cont%C3%A1ctenos") == "/contáctenos"

    def test_homepage(self):
        assert url_path("https://x.com") == "/"
