"""URL resolution for menu items"""
from navtree.errors import NotFound, ValidationError
from navtree.utils.security import validate_custom_url


class UrlResolver:
    """Derives an item's effective URL from a custom URL or a linked page"""

    def __init__(self, page_catalog):
        self.page_catalog = page_catalog

    def resolve(self, url=None, page_id=None):
        """
        Resolve the effective URL of a menu item.
        A linked page always wins over a custom URL.

        Args:
            url (str, optional): Custom URL supplied by the caller
            page_id (str, optional): Linked page ID

        Returns:
            str: Effective URL

        Raises:
            NotFound: page_id does not resolve to a page
            ValidationError: neither a page nor a usable URL was given
        """
        if page_id:
            page = self.page_catalog.get_page(page_id)
            if not page:
                raise NotFound("Selected page not found")
            return '/' + page['slug'].lstrip('/')

        url = url.strip() if isinstance(url, str) else None
        if not url:
            raise ValidationError("Either a page or custom URL must be provided")

        if not validate_custom_url(url):
            raise ValidationError("Custom URL uses a disallowed scheme")

        return url
