"""URL and text normalisation helpers used during extraction and export."""

import re
from datetime import datetime
from typing import Optional
from urllib.parse import urljoin, urlparse

from seoreport.errors import ExtractionElementError

_HIERARCHICAL_SCHEMES = {"http", "https"}
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def normalize_text(value: Optional[str]) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    if not value:
        return ""
    return " ".join(value.split())


def optional_text(value: Optional[str]) -> Optional[str]:
    """Return the trimmed *value*, or ``None`` when it is missing or blank."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_url(base_url: str, reference: Optional[str]) -> str:
    """Resolve *reference* against *base_url* and return an absolute URL.

    Raises:
        ExtractionElementError: if the reference is empty or does not resolve
            to a usable absolute URL.
    """
    reference = (reference or "").strip()
    if not reference:
        raise ExtractionElementError("Empty URL reference.")

    try:
        resolved = urljoin(base_url, reference)
        parsed = urlparse(resolved)
        hostname = parsed.hostname
    except ValueError as exc:
        raise ExtractionElementError(f"Unresolvable URL {reference!r}: {exc}") from exc

    if not parsed.scheme:
        raise ExtractionElementError(f"URL {reference!r} has no scheme.")
    if parsed.scheme in _HIERARCHICAL_SCHEMES and not hostname:
        raise ExtractionElementError(f"URL {reference!r} has no hostname.")
    return resolved


def hostname_of(url: str) -> Optional[str]:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def is_same_host(url: str, page_url: str) -> bool:
    """Return True when *url* has exactly the same hostname as *page_url*."""
    host = hostname_of(url)
    return host is not None and host == hostname_of(page_url)


def report_filename(url: str, timestamp: str) -> str:
    """Build the PDF file name for a report of *url* generated at *timestamp*.

    Every non-alphanumeric character of the URL becomes a hyphen; the
    ISO-8601 *timestamp* is rendered as ``YYYYMMDD-HHMMSS``.
    """
    slug = _NON_ALNUM_RE.sub("-", url)
    stamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%Y%m%d-%H%M%S")
    return f"seo-analysis-{slug}-{stamp}.pdf"
