"""
Text sanitizing for the gateway: HTML escaping and form validation.

Escaping is a single pass over the four HTML-significant characters, so it is
not idempotent: escaping "&lt;" again yields "&amp;lt;". Input and output are
each escaped once.
"""

import re

from chatgate.core.config import MAX_QUERY_LENGTH
from chatgate.core.errors import InvalidInputError

_HTML_ESCAPES: dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
}
_HTML_SPECIAL = re.compile(r'[<>&"]')


def escape_html(text: str) -> str:
    """Replace < > & " with their HTML entities."""
    if not text:
        return ""
    return _HTML_SPECIAL.sub(lambda m: _HTML_ESCAPES[m.group(0)], text)


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units, as browsers count it (an emoji counts as 2)."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def validate_query(model: str, raw_query: str) -> str:
    """
    Check the submitted form before anything is sent to a backend.
    Length is measured on the raw query, before escaping, in UTF-16 units.
    Returns the model value stripped of surrounding whitespace.
    """
    selected = (model or "").strip()
    if not selected:
        raise InvalidInputError("model is required")
    if not raw_query:
        raise InvalidInputError("query is required")
    if utf16_length(raw_query) > MAX_QUERY_LENGTH:
        raise InvalidInputError(f"query exceeds {MAX_QUERY_LENGTH} characters")
    return selected
