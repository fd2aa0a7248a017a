"""Open Graph Image Extraction: find a preview image URL in an HTML document.

Invariants:
    - Patterns are tried in fixed priority order; the first match wins
    - No match is a valid outcome (None), never an error
    - Pure: same HTML and base URL always give the same result

Design Decisions:
    - OgImageExtractor protocol: handlers depend on the interface, so the regex
      heuristic can be replaced by a real HTML tag scanner without touching them
    - Values are HTML-unescaped and resolved against the page URL (relative og:image)
"""

import html
import re
from typing import Protocol
from urllib.parse import urljoin

_Q = r"""["']"""
_VALUE = r"""([^"']+)"""

# Priority order matters: og:image beats twitter:image.
OG_IMAGE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("og:image", re.compile(
        rf"<meta[^>]+property={_Q}og:image{_Q}[^>]+content={_Q}{_VALUE}{_Q}",
        re.IGNORECASE,
    )),
    ("og:image (content first)", re.compile(
        rf"<meta[^>]+content={_Q}{_VALUE}{_Q}[^>]+property={_Q}og:image{_Q}",
        re.IGNORECASE,
    )),
    ("name=og:image", re.compile(
        rf"<meta[^>]+name={_Q}og:image{_Q}[^>]+content={_Q}{_VALUE}{_Q}",
        re.IGNORECASE,
    )),
    ("og:image:secure_url", re.compile(
        rf"<meta[^>]+property={_Q}og:image:secure_url{_Q}[^>]+content={_Q}{_VALUE}{_Q}",
        re.IGNORECASE,
    )),
    ("twitter:image", re.compile(
        rf"<meta[^>]+name={_Q}twitter:image{_Q}[^>]+content={_Q}{_VALUE}{_Q}",
        re.IGNORECASE,
    )),
)


class OgImageExtractor(Protocol):
    """Anything that can pull an image URL out of an HTML page."""

    def extract(self, html_text: str, base_url: str | None = None) -> str | None:
        ...


class RegexOgImageExtractor:
    """Regex heuristic over <meta> tags."""

    def __init__(
        self,
        patterns: tuple[tuple[str, re.Pattern[str]], ...] = OG_IMAGE_PATTERNS,
    ):
        self.patterns = patterns

    def extract(self, html_text: str, base_url: str | None = None) -> str | None:
        for _name, pattern in self.patterns:
            match = pattern.search(html_text)
            if not match:
                continue
            value = html.unescape(match.group(1)).strip()
            if not value:
                continue
            return urljoin(base_url, value) if base_url else value
        return None
