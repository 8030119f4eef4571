"""
Tests for text and URL normalizers.
"""

from opportunity_scraper.utils import add_query_params, clean_text, infer_remote, normalize_url


class TestCleanText:

    def test_collapses_whitespace(self):
        assert clean_text("  Développeur\n   React  ") == "Développeur React"

    def test_empty(self):
        assert clean_text(None) == ""
        assert clean_text("   ") == ""


class TestInferRemote:
    """Test remote detection from location text."""

    def test_remote_keywords(self):
        assert infer_remote("Télétravail") is True
        assert infer_remote("À distance") is True
        assert infer_remote("Anywhere in the World") is True
        assert infer_remote("Paris - Remote") is True

    def test_on_site(self):
        assert infer_remote("Lyon") is False

    def test_missing(self):
        assert infer_remote(None) is False
        assert infer_remote("") is False


class TestNormalizeUrl:
    """Test link resolution against a site's base URL."""

    BASE = "https://www.codeur.com"

    def test_relative_link(self):
        assert normalize_url("/projects/1-site", self.BASE) == "https://www.codeur.com/projects/1-site"

    def test_absolute_link_unchanged(self):
        url = "https://www.codeur.com/projects/2-api"

        assert normalize_url(url, self.BASE) == url

    def test_unusable_links(self):
        assert normalize_url(None, self.BASE) is None
        assert normalize_url("   ", self.BASE) is None
        assert normalize_url("#", self.BASE) is None
        assert normalize_url("javascript:void(0)", self.BASE) is None


class TestAddQueryParams:
    """Test query string merging."""

    def test_appends_to_existing_query(self):
        url = add_query_params("https://www.codeur.com/projects?category=developpement-web", page=2)

        assert url == "https://www.codeur.com/projects?category=developpement-web&page=2"

    def test_replaces_existing_param(self):
        url = add_query_params("https://weworkremotely.com/categories/remote-design-jobs?page=1", page=3)

        assert url == "https://weworkremotely.com/categories/remote-design-jobs?page=3"

    def test_encodes_values(self):
        url = add_query_params("https://www.malt.fr/search", q="développeur web")

        assert url == "https://www.malt.fr/search?q=d%C3%A9veloppeur%20web"
