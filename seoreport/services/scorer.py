"""Section scoring and report assembly.

Every section starts at 100 and loses a fixed, section-specific penalty for
each finding that belongs to it. Membership is looked up by rule code in
:data:`SECTION_MEMBERSHIP`; the penalties come from configuration.
"""

import math
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from seoreport.config import DEFAULT_SECTION_PENALTIES
from seoreport.models.report import SECTION_NAMES, Report, SectionScore
from seoreport.models.signals import ExtractedSignals
from seoreport.services.rules import Finding

SECTION_MEMBERSHIP: Dict[str, Tuple[str, ...]] = {
    "title": ("meta",),
    "description": ("meta",),
    "canonical": ("meta",),
    "open_graph": ("meta", "externalFactors"),
    "h1": ("pageQuality",),
    "h2": ("pageQuality",),
    "image_alt": ("pageQuality",),
    "word_count": ("pageQuality",),
    "internal_links": ("linkStructure",),
    "external_links": ("linkStructure",),
    "load_time": ("performance",),
    "robots_noindex": ("crawlability",),
    "structured_data": ("crawlability",),
    "https": ("externalFactors",),
    "twitter_card": ("externalFactors",),
}


def _keyword_count(keywords: Optional[str]) -> int:
    if keywords is None:
        return 0
    return len([k for k in keywords.split(",") if k.strip()])


def _present(*values) -> int:
    return sum(1 for value in values if value is not None)


def sub_metrics(signals: ExtractedSignals) -> Dict[str, Dict[str, int]]:
    """Return the raw counts reported for each section."""
    og = signals.open_graph
    twitter = signals.twitter_card
    return {
        "meta": {
            "titleLength": len(signals.title or ""),
            "descriptionLength": len(signals.description or ""),
            "keywordCount": _keyword_count(signals.meta_keywords),
        },
        "pageQuality": {
            "wordCount": signals.word_count,
            "h1Count": len(signals.h1_tags),
            "h2Count": len(signals.h2_tags),
            "h3Count": len(signals.h3_tags),
            "imageCount": len(signals.images),
            "imagesMissingAlt": signals.images_missing_alt,
        },
        "linkStructure": {
            "totalLinks": len(signals.links),
            "internalLinks": signals.internal_links,
            "externalLinks": signals.external_links,
        },
        "performance": {
            "loadTime": signals.load_time,
        },
        "crawlability": {
            "structuredDataBlocks": len(signals.structured_data),
            "hasCanonical": int(signals.canonical_url is not None),
            "hasRobotsDirective": int(signals.robots is not None),
        },
        "externalFactors": {
            "openGraphFields": _present(og.title, og.description, og.image, og.type),
            "twitterCardFields": _present(twitter.title, twitter.description, twitter.image),
            "https": int(urlparse(signals.url).scheme == "https"),
        },
    }


def score_sections(
    signals: ExtractedSignals,
    findings: List[Finding],
    penalties: Optional[Mapping[str, int]] = None,
) -> Dict[str, SectionScore]:
    """Score the six sections for *signals* given the rule *findings*."""
    penalties = penalties if penalties is not None else DEFAULT_SECTION_PENALTIES
    metrics = sub_metrics(signals)

    section_issues: Dict[str, List[str]] = {name: [] for name in SECTION_NAMES}
    for finding in findings:
        for name in SECTION_MEMBERSHIP.get(finding.rule, ()):
            section_issues[name].append(finding.issue)

    sections: Dict[str, SectionScore] = {}
    for name in SECTION_NAMES:
        issues = section_issues[name]
        score = max(0, 100 - penalties.get(name, 0) * len(issues))
        sections[name] = SectionScore(
            name=name,
            score=min(100, score),
            sub_metrics=metrics[name],
            issues=issues,
        )
    return sections


def overall_score(sections: Mapping[str, SectionScore]) -> int:
    """Mean of the section scores, rounded half-up and clamped to 0..100."""
    if not sections:
        return 0
    mean = sum(section.score for section in sections.values()) / len(sections)
    return max(0, min(100, int(math.floor(mean + 0.5))))


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def assemble_report(
    signals: ExtractedSignals,
    findings: List[Finding],
    penalties: Optional[Mapping[str, int]] = None,
    timestamp: Optional[str] = None,
) -> Report:
    """Combine findings and section scores into a single immutable :class:`Report`."""
    sections = score_sections(signals, findings, penalties)
    return Report(
        url=signals.url,
        timestamp=timestamp or utc_timestamp(),
        overall_score=overall_score(sections),
        sections=sections,
        issues=[finding.issue for finding in findings],
        recommendations=[finding.recommendation for finding in findings],
        load_time=signals.load_time,
    )
