"""Security utilities for text sanitization, URL validation and token checks"""
import html
import re
from urllib.parse import urlparse
import bleach


# Schemes that can execute code when placed in an href
BLOCKED_URL_SCHEMES = {'javascript', 'vbscript', 'data'}


def sanitize_text(value):
    """
    Strip all markup from a short plain-text field (item titles, icon names).

    Args:
        value (str): Raw text from user

    Returns:
        str: Text with tags removed, or None when value is None
    """
    if value is None:
        return None

    cleaned = bleach.clean(value, tags=set(), attributes={}, strip=True)
    # bleach entity-escapes what is left; titles are stored as plain text
    cleaned = html.unescape(cleaned)
    return cleaned.strip()


def validate_custom_url(url):
    """
    Validate a custom menu item URL.
    Allows relative paths, anchors and http(s)/mailto/tel links.

    Args:
        url (str): The URL to validate

    Returns:
        bool: True if URL is safe, False otherwise
    """
    if not url:
        return False

    # Browsers ignore embedded whitespace/control chars inside the scheme
    compact = re.sub(r'[\s\x00-\x1f]', '', url).lower()

    try:
        parsed = urlparse(compact)
    except ValueError:
        return False

    if parsed.scheme in BLOCKED_URL_SCHEMES:
        return False

    return True


def extract_bearer_token(header_value):
    """
    Pull the token out of an Authorization header.

    Args:
        header_value (str): e.g. "Bearer abc123"

    Returns:
        str: The token, or None when the header is missing or malformed
    """
    if not header_value:
        return None
    parts = header_value.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1].strip() or None


def verify_token(token):
    """
    Auth verifier: decode a bearer token to the caller identity.

    Args:
        token (str): Bearer token

    Returns:
        dict: {'user_id': ..., 'role': ...} or None when the token is unknown
    """
    from navtree.models import User

    return identity_for(User.get_by_api_token(token))


def identity_for(user):
    """The {'user_id', 'role'} identity of a user, None for anonymous callers"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    return {'user_id': user.id, 'role': user.role}
