"""
URL resolution for menu items.

Covers:
  - linked page overrides a custom URL
  - missing page -> NotFound
  - neither page nor URL -> ValidationError
  - blank URL counts as absent
  - script URLs rejected
"""
import pytest

from navtree.errors import NotFound, ValidationError
from navtree.services.url_service import UrlResolver


class FakeCatalog:
    def __init__(self, pages):
        self.pages = pages
        self.lookups = []

    def get_page(self, page_id):
        self.lookups.append(page_id)
        return self.pages.get(page_id)


@pytest.fixture()
def resolver():
    return UrlResolver(FakeCatalog({
        'page-42': {'id': 'page-42', 'title': 'Docs', 'slug': 'documentation'},
    }))


class TestResolve:

    def test_page_slug_becomes_url(self, resolver):
        assert resolver.resolve(None, 'page-42') == '/documentation'

    def test_page_overrides_custom_url(self, resolver):
        assert resolver.resolve('https://example.com', 'page-42') == '/documentation'

    def test_custom_url_used_without_page(self, resolver):
        assert resolver.resolve('/contact', None) == '/contact'

    def test_custom_url_is_trimmed(self, resolver):
        assert resolver.resolve('  /contact  ', None) == '/contact'

    def test_external_url_allowed(self, resolver):
        assert resolver.resolve('https://example.com/a?b=1', None) == 'https://example.com/a?b=1'

    def test_unknown_page_not_found(self, resolver):
        with pytest.raises(NotFound) as exc:
            resolver.resolve('/fallback', 'page-missing')
        assert exc.value.message == "Selected page not found"

    def test_neither_url_nor_page(self, resolver):
        with pytest.raises(ValidationError) as exc:
            resolver.resolve(None, None)
        assert exc.value.message == "Either a page or custom URL must be provided"

    def test_blank_url_counts_as_missing(self, resolver):
        with pytest.raises(ValidationError):
            resolver.resolve('   ', None)

    def test_page_lookup_skipped_without_page_id(self, resolver):
        resolver.resolve('/a', None)
        assert resolver.page_catalog.lookups == []

    @pytest.mark.parametrize('url', [
        'javascript:alert(1)',
        'JavaScript:alert(1)',
        'java\nscript:alert(1)',
        'data:text/html;base64,PHNjcmlwdD4=',
    ])
    def test_script_urls_rejected(self, resolver, url):
        with pytest.raises(ValidationError):
            resolver.resolve(url, None)
