"""Unit tests for content extractor."""

import pytest
from bs4 import BeautifulSoup

from sitekb.core.schemas import ExtractedPage
from sitekb.crawler.content_extractor import ContentExtractor, PageClassifier


def soup(html):
    return BeautifulSoup(html, "html.parser")


class TestContentExtractor:
    """Test content extraction heuristics."""

    @pytest.fixture
    def extractor(self):
        return ContentExtractor("https://example.com")

    def test_extract_title_trimmed(self, extractor):
        """Test title extraction from <title> tag."""
        html = "<html><head><title>\n  Test Page Title  </title></head></html>"
        assert extractor.extract_title(soup(html)) == "Test Page Title"

    def test_missing_title(self, extractor):
        """Test that a page without <title> has an empty title."""
        html = "<html><body><h1>Heading only</h1></body></html>"
        assert extractor.extract_title(soup(html)) == ""

    def test_content_from_main_container(self, extractor):
        """Test that the semantic container is preferred and cleaned."""
        html = """
        <html>
            <body>
                <div>Outside text</div>
                <main>
                    <header>Site header</header>
                    <nav>Menu</nav>
                    <h1>Welcome</h1>
                    <script>alert('x');</script>
                    <style>p { color: red; }</style>
                    <p>Quality   office
                    supplies.</p>
                    <div class="sidebar">Related</div>
                    <div class="comments">Nice!</div>
                    <footer>Copyright</footer>
                </main>
            </body>
        </html>
        """
        content = extractor.extract_content(soup(html))
        assert content == "Welcome Quality office supplies."

    def test_first_container_in_document_order(self, extractor):
        """Test that the first matching container wins."""
        html = """
        <html><body>
            <div class="content">First block</div>
            <main>Second block</main>
        </body></html>
        """
        assert extractor.extract_content(soup(html)) == "First block"

    def test_article_container(self, extractor):
        """Test that <article> counts as a content container."""
        html = "<html><body><nav>Menu</nav><article><p>Story</p></article></body></html>"
        assert extractor.extract_content(soup(html)) == "Story"

    def test_fallback_to_document_text(self, extractor):
        """Test whole-document text when no container matches."""
        html = """
        <html><head><title>T</title></head>
        <body>
            <h1>Plain</h1>
            <script>var x = 1;</script>
            <p>page   text</p>
        </body></html>
        """
        assert extractor.extract_content(soup(html)) == "Plain page text"

    def test_empty_document(self, extractor):
        """Test extraction from empty HTML."""
        assert extractor.extract_content(soup("")) == ""

    def test_category_from_breadcrumbs(self, extractor):
        """Test category from a '>'-separated breadcrumb trail."""
        html = '<div class="breadcrumbs">Home &gt; Products &gt; Paper</div>'
        assert extractor.extract_category(soup(html), "https://example.com/x") == "Products"

    def test_category_from_slash_breadcrumbs(self, extractor):
        """Test category from a '/'-separated breadcrumb trail."""
        html = '<div class="breadcrumbs">Home / Suppliers</div>'
        assert extractor.extract_category(soup(html), "https://example.com/") == "Suppliers"

    def test_category_from_breadcrumb_list(self, extractor):
        """Test category from a list breadcrumb without literal separators."""
        html = """
        <ul class="breadcrumb">
            <li><a href="/">Home</a></li>
            <li><a href="/clients">Clients</a></li>
        </ul>
        """
        assert extractor.extract_category(soup(html), "https://example.com/") == "Clients"

    def test_single_breadcrumb_falls_back_to_url(self, extractor):
        """Test that a one-segment trail defers to the URL path."""
        html = '<div class="breadcrumbs">Home</div>'
        url = "https://example.com/products/toner"
        assert extractor.extract_category(soup(html), url) == "products"

    def test_category_from_url_path(self, extractor):
        """Test category from the first path segment."""
        url = "https://example.com/services/printing?page=2"
        assert extractor.extract_category(soup("<p></p>"), url) == "services"

    def test_category_strips_base_path(self):
        """Test that the site base path is removed before reading the segment."""
        extractor = ContentExtractor("https://example.com/shop")
        url = "https://example.com/shop/suppliers/acme"
        assert extractor.extract_category(soup("<p></p>"), url) == "suppliers"

    def test_default_category(self, extractor):
        """Test the General fallback for the site root."""
        assert extractor.extract_category(soup("<p></p>"), "https://example.com/") == "General"

    def test_extract_tags(self, extractor):
        """Test meta keywords merged with tag links, deduplicated in order."""
        html = """
        <html>
            <head><meta name="keywords" content="paper, toner , ,paper"></head>
            <body>
                <div class="tags"><a href="/t/toner">toner</a><a href="/t/ink">ink</a></div>
                <span class="tag">office</span>
                <div class="category"><a href="/c/b2b">B2B</a></div>
            </body>
        </html>
        """
        assert extractor.extract_tags(soup(html)) == ["paper", "toner", "ink", "office", "B2B"]

    def test_no_tags(self, extractor):
        """Test a page without keywords or tag links."""
        assert extractor.extract_tags(soup("<p>Nothing</p>")) == []

    def test_classify(self, extractor):
        """Test full page classification."""
        html = """
        <html>
            <head>
                <title>Toner Cartridges</title>
                <meta name="keywords" content="toner">
            </head>
            <body>
                <main>
                    <nav class="breadcrumbs">Home &gt; Products &gt; Toner</nav>
                    <p>Genuine toner cartridges.</p>
                </main>
            </body>
        </html>
        """
        page = extractor.classify(html, "https://example.com/products/toner")

        assert isinstance(page, ExtractedPage)
        assert page.title == "Toner Cartridges"
        assert page.category == "Products"
        assert page.content == "Genuine toner cartridges."
        assert page.tags == ["toner"]

    def test_classifier_is_abstract(self):
        """Test that PageClassifier requires an implementation."""
        with pytest.raises(TypeError):
            PageClassifier()
