"""On-page signal extraction.

:func:`extract` walks a parsed document once per concern and returns an
immutable :class:`ExtractedSignals`. A broken element (an ``src`` or ``href``
that does not resolve, an invalid JSON-LD block) is skipped on its own; it
never stops the rest of the page from being read.
"""

import json
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from seoreport.errors import ExtractionElementError
from seoreport.models.signals import (
    ExtractedSignals,
    ImageSignal,
    LinkSignal,
    OpenGraph,
    TwitterCard,
)
from seoreport.services.normalizer import (
    is_same_host,
    normalize_text,
    optional_text,
    resolve_url,
)

logger = logging.getLogger(__name__)

_LD_JSON_RE = re.compile(r"^\s*application/ld\+json\s*$", re.IGNORECASE)

# Text inside these elements is never rendered as page copy
_INVISIBLE_TAGS = {"script", "style", "noscript", "template", "head", "title"}


def _name_pattern(name: str) -> re.Pattern:
    return re.compile(rf"^\s*{re.escape(name)}\s*$", re.IGNORECASE)


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    tag = soup.find("meta", attrs={attr: _name_pattern(value)})
    if tag is None:
        return None
    return optional_text(tag.get("content"))


def _extract_title(soup: BeautifulSoup) -> Optional[str]:
    title_tag = soup.find("title")
    if title_tag is None:
        return None
    return optional_text(title_tag.get_text())


def _extract_canonical(soup: BeautifulSoup) -> Optional[str]:
    link_tag = soup.find("link", rel="canonical")
    if link_tag is None:
        return None
    return optional_text(link_tag.get("href"))


def _extract_open_graph(soup: BeautifulSoup) -> OpenGraph:
    return OpenGraph(
        title=_meta_content(soup, "property", "og:title"),
        description=_meta_content(soup, "property", "og:description"),
        image=_meta_content(soup, "property", "og:image"),
        type=_meta_content(soup, "property", "og:type"),
    )


def _twitter_content(soup: BeautifulSoup, key: str) -> Optional[str]:
    # Twitter documents ``name=``; many sites publish ``property=`` instead.
    value = _meta_content(soup, "name", key)
    if value is None:
        value = _meta_content(soup, "property", key)
    return value


def _extract_twitter_card(soup: BeautifulSoup) -> TwitterCard:
    return TwitterCard(
        title=_twitter_content(soup, "twitter:title"),
        description=_twitter_content(soup, "twitter:description"),
        image=_twitter_content(soup, "twitter:image"),
    )


def _extract_headings(soup: BeautifulSoup, level: str) -> List[str]:
    headings: List[str] = []
    for heading in soup.find_all(level):
        text = normalize_text(heading.get_text(" "))
        if text:
            headings.append(text)
    return headings


def _extract_images(soup: BeautifulSoup, page_url: str) -> List[ImageSignal]:
    images: List[ImageSignal] = []
    for img in soup.find_all("img"):
        src = img.get("src")
        if not src:
            continue
        try:
            abs_url = resolve_url(page_url, src)
        except ExtractionElementError as exc:
            logger.debug("Skipping image: %s", exc)
            continue
        alt = img.get("alt")
        images.append(ImageSignal(src=abs_url, alt=str(alt).strip() if alt is not None else ""))
    return images


def _extract_links(soup: BeautifulSoup, page_url: str) -> List[LinkSignal]:
    links: List[LinkSignal] = []
    for a in soup.find_all("a", href=True):
        text = normalize_text(a.get_text(" "))
        if not text:
            continue
        try:
            abs_url = resolve_url(page_url, str(a["href"]))
        except ExtractionElementError as exc:
            logger.debug("Skipping link: %s", exc)
            continue
        link_type = "internal" if is_same_host(abs_url, page_url) else "external"
        links.append(LinkSignal(href=abs_url, text=text, type=link_type))
    return links


def _extract_structured_data(soup: BeautifulSoup) -> list:
    blocks = []
    for script in soup.find_all("script", attrs={"type": _LD_JSON_RE}):
        raw = script.string if script.string is not None else script.get_text()
        try:
            blocks.append(json.loads(raw))
        except (ValueError, TypeError, RecursionError) as exc:
            logger.debug("Skipping invalid JSON-LD block: %s", exc)
    return blocks


def _is_visible(text) -> bool:
    # Comments, doctypes, CDATA and processing instructions are markup, not copy
    if not isinstance(text, NavigableString) or isinstance(text, PreformattedString):
        return False
    return not any(
        isinstance(parent, Tag) and parent.name in _INVISIBLE_TAGS for parent in text.parents
    )


def count_words(soup: BeautifulSoup) -> int:
    """Count whitespace-separated tokens in the visible body text.

    The document is read, not modified, so the same tree can be extracted
    again with identical results.
    """
    root = soup.body or soup
    return sum(len(text.split()) for text in root.find_all(string=True) if _is_visible(text))


def extract(soup: BeautifulSoup, page_url: str, load_time: int = 0) -> ExtractedSignals:
    """Extract every SEO signal from the parsed document *soup* served at *page_url*."""
    return ExtractedSignals(
        url=page_url,
        title=_extract_title(soup),
        description=_meta_content(soup, "name", "description"),
        meta_keywords=_meta_content(soup, "name", "keywords"),
        canonical_url=_extract_canonical(soup),
        robots=_meta_content(soup, "name", "robots"),
        open_graph=_extract_open_graph(soup),
        twitter_card=_extract_twitter_card(soup),
        h1_tags=tuple(_extract_headings(soup, "h1")),
        h2_tags=tuple(_extract_headings(soup, "h2")),
        h3_tags=tuple(_extract_headings(soup, "h3")),
        images=tuple(_extract_images(soup, page_url)),
        links=tuple(_extract_links(soup, page_url)),
        structured_data=tuple(_extract_structured_data(soup)),
        word_count=count_words(soup),
        load_time=load_time,
    )
