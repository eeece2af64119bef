"""Ordered SEO rules.

Each rule inspects :class:`ExtractedSignals` and returns at most one
:class:`Finding`. :data:`RULES` fixes the evaluation order, which is also the
order of ``issues`` and ``recommendations`` in every report. Rules never
raise: an absent field is a normal input.
"""

from typing import Callable, List, NamedTuple, Optional, Tuple
from urllib.parse import urlparse

from seoreport.models.signals import ExtractedSignals

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160
MIN_WORD_COUNT = 300
MAX_LOAD_TIME_MS = 3000
MIN_INTERNAL_LINKS = 3


class Finding(NamedTuple):
    rule: str
    issue: str
    recommendation: str


Rule = Callable[[ExtractedSignals], Optional[Finding]]


def check_title(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.title is None:
        return Finding("title", "Missing page title", "Add a descriptive page title (50-60 characters)")
    if len(signals.title) > TITLE_MAX_LENGTH:
        return Finding(
            "title",
            "Title too long",
            "Shorten title to 50-60 characters for better display in search results",
        )
    if len(signals.title) < TITLE_MIN_LENGTH:
        return Finding("title", "Title too short", "Extend title to 30-60 characters for better SEO")
    return None


def check_description(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.description is None:
        return Finding(
            "description",
            "Missing meta description",
            "Add a compelling meta description (150-160 characters)",
        )
    if len(signals.description) > DESCRIPTION_MAX_LENGTH:
        return Finding(
            "description",
            "Meta description too long",
            "Shorten meta description to 150-160 characters",
        )
    if len(signals.description) < DESCRIPTION_MIN_LENGTH:
        return Finding(
            "description",
            "Meta description too short",
            "Extend meta description to 120-160 characters",
        )
    return None


def check_h1(signals: ExtractedSignals) -> Optional[Finding]:
    if len(signals.h1_tags) == 0:
        return Finding("h1", "Missing H1 tag", "Add exactly one H1 tag that describes the main topic")
    if len(signals.h1_tags) > 1:
        return Finding("h1", "Multiple H1 tags", "Use only one H1 tag per page for better SEO structure")
    return None


def check_h2(signals: ExtractedSignals) -> Optional[Finding]:
    if len(signals.h2_tags) == 0:
        return Finding(
            "h2",
            "No H2 tags found",
            "Add H2 tags to structure your content and improve readability",
        )
    return None


def check_image_alt(signals: ExtractedSignals) -> Optional[Finding]:
    missing = signals.images_missing_alt
    if missing > 0:
        return Finding(
            "image_alt",
            f"{missing} images missing alt text",
            "Add descriptive alt text to all images for accessibility and SEO",
        )
    return None


def check_canonical(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.canonical_url is None:
        return Finding(
            "canonical",
            "Missing canonical URL",
            "Add a canonical URL to prevent duplicate content issues",
        )
    return None


def check_open_graph(signals: ExtractedSignals) -> Optional[Finding]:
    og = signals.open_graph
    if og.title is None or og.description is None:
        return Finding(
            "open_graph",
            "Incomplete Open Graph tags",
            "Add Open Graph title, description, and image for better social media sharing",
        )
    return None


def check_word_count(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.word_count < MIN_WORD_COUNT:
        return Finding(
            "word_count",
            "Content too short",
            "Increase content length to at least 300 words for better SEO value",
        )
    return None


def check_structured_data(signals: ExtractedSignals) -> Optional[Finding]:
    if len(signals.structured_data) == 0:
        return Finding(
            "structured_data",
            "No structured data found",
            "Add structured data (Schema.org) to help search engines understand your content",
        )
    return None


def check_load_time(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.load_time > MAX_LOAD_TIME_MS:
        return Finding(
            "load_time",
            "Slow page load time",
            "Optimize page load time - currently taking over 3 seconds",
        )
    return None


def check_internal_links(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.internal_links < MIN_INTERNAL_LINKS:
        return Finding(
            "internal_links",
            "Few internal links",
            "Add at least 3 internal links to related pages on your site",
        )
    return None


def check_external_links(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.external_links == 0:
        return Finding(
            "external_links",
            "No external links found",
            "Link to relevant, authoritative external resources",
        )
    return None


def check_robots_noindex(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.robots is not None and "noindex" in signals.robots.lower():
        return Finding(
            "robots_noindex",
            "Page blocked from indexing",
            "Remove the noindex directive if this page should appear in search results",
        )
    return None


def check_https(signals: ExtractedSignals) -> Optional[Finding]:
    if urlparse(signals.url).scheme != "https":
        return Finding(
            "https",
            "Not using HTTPS",
            "Serve the page over HTTPS to protect visitors and improve rankings",
        )
    return None


def check_twitter_card(signals: ExtractedSignals) -> Optional[Finding]:
    if signals.twitter_card.title is None:
        return Finding(
            "twitter_card",
            "Missing Twitter Card tags",
            "Add Twitter Card title, description, and image meta tags",
        )
    return None


RULES: Tuple[Rule, ...] = (
    check_title,
    check_description,
    check_h1,
    check_h2,
    check_image_alt,
    check_canonical,
    check_open_graph,
    check_word_count,
    check_structured_data,
    check_load_time,
    check_internal_links,
    check_external_links,
    check_robots_noindex,
    check_https,
    check_twitter_card,
)


def evaluate(signals: ExtractedSignals, rules: Tuple[Rule, ...] = RULES) -> List[Finding]:
    """Run *rules* in order and collect the findings they produce."""
    findings: List[Finding] = []
    for rule in rules:
        finding = rule(signals)
        if finding is not None:
            findings.append(finding)
    return findings
