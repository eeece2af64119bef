"""URL → Report orchestration."""

import logging
from typing import Mapping, Optional

from seoreport.models.report import Report
from seoreport.services.extractor import extract
from seoreport.services.fetcher import PageFetcher
from seoreport.services.parser import parse_document
from seoreport.services.rules import evaluate
from seoreport.services.scorer import assemble_report

logger = logging.getLogger(__name__)


def build_report(
    html: str,
    url: str,
    load_time: int = 0,
    *,
    penalties: Optional[Mapping[str, int]] = None,
    timestamp: Optional[str] = None,
) -> Report:
    """Parse, extract, evaluate and score *html* served at *url*. No I/O."""
    soup = parse_document(html)
    signals = extract(soup, url, load_time=load_time)
    findings = evaluate(signals)
    return assemble_report(signals, findings, penalties=penalties, timestamp=timestamp)


async def analyze_url(
    url: str,
    fetcher: PageFetcher,
    *,
    penalties: Optional[Mapping[str, int]] = None,
) -> Report:
    """Fetch *url* and build its report.

    The fetch is the only await; a timeout or fetch failure propagates
    immediately and nothing is retried.
    """
    result = await fetcher.fetch(url)
    report = build_report(result.html, url, result.load_time, penalties=penalties)
    logger.info(
        "Analysis complete for %s: score=%s issues=%s",
        url,
        report.overall_score,
        len(report.issues),
    )
    return report
