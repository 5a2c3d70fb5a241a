"""
URL sanitizing for href/src attributes.

Only relative paths, fragments and a short allow-list of schemes survive;
everything else (javascript:, data:, bare hosts, garbage) is rejected with
an empty string so callers can fall back to plain text.
"""

import html
import logging
from urllib.parse import urlsplit

logger = logging.getLogger("pubmark.urls")

ALLOWED_SCHEMES = frozenset({"http", "https", "mailto", "tel"})


def _has_bad_chars(value: str) -> bool:
    return any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7F for c in value)


def safe_url(raw: str) -> str:
    """
    Validate a URL and return it escaped for attribute embedding.

    Args:
        raw: Candidate URL, possibly already HTML-escaped

    Returns:
        The escaped URL, or "" if it must not be emitted
    """
    val = html.unescape(raw).strip()
    if not val:
        return ""
    if _has_bad_chars(val):
        logger.debug(f"Rejected URL with whitespace or control characters: {val!r}")
        return ""
    if val.startswith("/") or val.startswith("#"):
        return html.escape(val)

    try:
        scheme = urlsplit(val).scheme
    except ValueError:
        logger.debug(f"Rejected unparsable URL: {val!r}")
        return ""

    if scheme.lower() not in ALLOWED_SCHEMES:
        logger.debug(f"Rejected URL scheme '{scheme}': {val!r}")
        return ""
    return html.escape(val)
