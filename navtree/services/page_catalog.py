"""Page catalog clients: page id -> {id, title, slug}"""
from urllib.parse import quote
import requests
from flask import current_app
from navtree.errors import NavtreeError
from navtree.models.page import Page


class PageCatalog:
    """Catalog backed by the local pages table (published pages only)"""

    def __init__(self, session):
        self.session = session

    def get_page(self, page_id):
        """
        Look up a linkable page.

        Args:
            page_id (str): Page ID

        Returns:
            dict: {'id', 'title', 'slug'} or None if not found/unpublished
        """
        if not page_id:
            return None
        page = self.session.query(Page).filter_by(id=page_id, published=True).first()
        return page.to_basic() if page else None

    def list_pages(self):
        """List published pages for item-target selection, ordered by title"""
        pages = self.session.query(Page).filter_by(published=True).order_by(Page.title).all()
        return [p.to_basic() for p in pages]


class RemotePageCatalog:
    """Catalog served by an external CMS over HTTP.

    Expects ``GET {base_url}/pages`` and ``GET {base_url}/pages/<id>`` to
    return page objects carrying at least id, title and slug.
    """

    def __init__(self, base_url, api_key=None, timeout=5):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self):
        headers = {'Accept': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _get(self, endpoint):
        """GET an endpoint; returns parsed JSON, None on 404, raises otherwise"""
        url = f"{self.base_url}/{endpoint}"
        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            current_app.logger.error(f"Page catalog request failed ({url}): {e}")
            raise NavtreeError(f"Page catalog unavailable: {e}") from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            current_app.logger.error(f"Page catalog error: {response.status_code} - {response.text}")
            raise NavtreeError(f"Page catalog returned {response.status_code}")
        return response.json()

    @staticmethod
    def _basic(data):
        return {'id': str(data['id']), 'title': data.get('title', ''), 'slug': data['slug']}

    def get_page(self, page_id):
        if not page_id:
            return None
        data = self._get(f"pages/{quote(str(page_id), safe='')}")
        if not data:
            return None
        return self._basic(data)

    def list_pages(self):
        data = self._get('pages') or []
        # Accept both a bare list and a {"pages": [...]} wrapper
        if isinstance(data, dict):
            data = data.get('pages', [])
        return [self._basic(p) for p in data]


def get_page_catalog(session):
    """Pick the catalog implementation from app config"""
    base_url = current_app.config.get('PAGE_CATALOG_URL')
    if base_url:
        return RemotePageCatalog(
            base_url,
            api_key=current_app.config.get('PAGE_CATALOG_API_KEY'),
            timeout=current_app.config.get('PAGE_CATALOG_TIMEOUT', 5)
        )
    return PageCatalog(session)
