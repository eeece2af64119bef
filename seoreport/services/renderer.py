"""
PDF rendering of an SEO report.

Layout happens in two steps. :func:`plan_layout` turns a :class:`Report`
into pages of positioned text blocks without touching reportlab's canvas;
:func:`render_pdf` draws that plan. All positions are millimetres from the
top-left corner of an A4 page.

Pagination: before a block is written, if ``y + lines * line_height`` would
pass ``PAGE_HEIGHT - MARGIN`` a new page is started and ``y`` resets to
``MARGIN``. After writing, ``y`` advances by the block height plus
``BLOCK_GAP``.
"""

import io
import re
from datetime import date, datetime
from typing import List, NamedTuple, Optional, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from seoreport.models.report import SECTION_NAMES, Report

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
HEADER_HEIGHT = 40.0
CONTENT_START = 60.0
LINE_HEIGHT_FACTOR = 0.3
BLOCK_GAP = 5.0

FONT_NAME = "Helvetica"
FONT_NAME_BOLD = "Helvetica-Bold"

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREY = (128, 128, 128)
HEADER_BLUE = (59, 130, 246)
GREEN = (34, 197, 94)
YELLOW = (234, 179, 8)
RED = (239, 68, 68)

SECTION_TITLES = {
    "meta": "Meta Information",
    "pageQuality": "Page Quality",
    "linkStructure": "Link Structure",
    "performance": "Performance",
    "crawlability": "Crawlability",
    "externalFactors": "External Factors",
}


class TextBlock(NamedTuple):
    lines: Tuple[str, ...]
    y: float  # baseline of the first line
    font_size: float
    bold: bool = False
    color: Tuple[int, int, int] = BLACK

    @property
    def line_height(self) -> float:
        return self.font_size * LINE_HEIGHT_FACTOR


class LayoutPlan(NamedTuple):
    pages: List[List[TextBlock]]
    report_date: str
    generated_on: str


def score_status(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    return "Needs Improvement"


def score_color(score: float) -> Tuple[int, int, int]:
    if score >= 80:
        return GREEN
    if score >= 60:
        return YELLOW
    return RED


def wrap_text(text: str, font_size: float, bold: bool = False) -> List[str]:
    """Split *text* into lines that fit the content width at *font_size*."""
    font = FONT_NAME_BOLD if bold else FONT_NAME
    return simpleSplit(text, font, font_size, CONTENT_WIDTH * mm) or [""]


def metric_label(key: str) -> str:
    """``imagesMissingAlt`` → ``Images Missing Alt``."""
    spaced = re.sub(r"(?<!^)(?=[A-Z])", " ", key)
    return spaced[:1].upper() + spaced[1:]


def unique_recommendations(report: Report) -> List[str]:
    return list(dict.fromkeys(report.recommendations))


class _Cursor:
    def __init__(self) -> None:
        self.pages: List[List[TextBlock]] = [[]]
        self.y = CONTENT_START

    def add_text(
        self,
        text: str,
        font_size: float = 12,
        bold: bool = False,
        color: Tuple[int, int, int] = BLACK,
    ) -> None:
        lines = wrap_text(text, font_size, bold)
        line_height = font_size * LINE_HEIGHT_FACTOR
        if self.y + len(lines) * line_height > PAGE_HEIGHT - MARGIN:
            self.pages.append([])
            self.y = MARGIN
        self.pages[-1].append(TextBlock(tuple(lines), self.y, font_size, bold, color))
        self.y += len(lines) * line_height + BLOCK_GAP

    def space(self, amount: float) -> None:
        self.y += amount


def _format_date(value: datetime | date) -> str:
    return value.strftime("%Y-%m-%d")


def plan_layout(report: Report, generated_on: Optional[date] = None) -> LayoutPlan:
    """Lay out *report* into pages of text blocks."""
    cursor = _Cursor()

    cursor.add_text(f"Website: {report.url}", 14, True)
    cursor.add_text(f"Overall SEO Score: {report.overall_score}/100", 16, True)
    cursor.add_text(
        f"Status: {score_status(report.overall_score)}",
        14,
        True,
        score_color(report.overall_score),
    )
    cursor.space(10)

    cursor.add_text("Section Scores:", 16, True)
    for name in SECTION_NAMES:
        section = report.sections.get(name)
        if section is None:
            continue
        cursor.add_text(f"{SECTION_TITLES[name]}: {section.score}/100", 12)
    cursor.space(10)

    cursor.add_text("Detailed Analysis:", 16, True)
    for name in SECTION_NAMES:
        section = report.sections.get(name)
        if section is None:
            continue
        cursor.add_text(SECTION_TITLES[name], 14, True)
        cursor.add_text(f"Score: {section.score}/100", 10)
        for key, value in section.sub_metrics.items():
            cursor.add_text(f"{metric_label(key)}: {value}", 10)
        if section.issues:
            cursor.add_text("Issues:", 12, True)
            for issue in section.issues:
                cursor.add_text(f"• {issue}", 10)
        cursor.space(5)

    cursor.add_text("Recommendations:", 16, True)
    for recommendation in unique_recommendations(report):
        cursor.add_text(f"• {recommendation}", 10)

    report_date = _format_date(datetime.fromisoformat(report.timestamp.replace("Z", "+00:00")))
    return LayoutPlan(
        pages=cursor.pages,
        report_date=report_date,
        generated_on=_format_date(generated_on or date.today()),
    )


def _set_fill(pdf: canvas.Canvas, color: Tuple[int, int, int]) -> None:
    pdf.setFillColorRGB(color[0] / 255, color[1] / 255, color[2] / 255)


def _draw_header(pdf: canvas.Canvas, report_date: str) -> None:
    _set_fill(pdf, HEADER_BLUE)
    pdf.rect(0, (PAGE_HEIGHT - HEADER_HEIGHT) * mm, PAGE_WIDTH * mm, HEADER_HEIGHT * mm, stroke=0, fill=1)
    _set_fill(pdf, WHITE)
    pdf.setFont(FONT_NAME_BOLD, 24)
    pdf.drawString(MARGIN * mm, (PAGE_HEIGHT - 25) * mm, "SEO Analysis Report")
    pdf.setFont(FONT_NAME, 12)
    pdf.drawString((PAGE_WIDTH - MARGIN - 30) * mm, (PAGE_HEIGHT - 32) * mm, report_date)


def _draw_block(pdf: canvas.Canvas, block: TextBlock) -> None:
    _set_fill(pdf, block.color)
    pdf.setFont(FONT_NAME_BOLD if block.bold else FONT_NAME, block.font_size)
    for index, line in enumerate(block.lines):
        y = block.y + index * block.line_height
        pdf.drawString(MARGIN * mm, (PAGE_HEIGHT - y) * mm, line)


def _draw_footer(pdf: canvas.Canvas, generated_on: str) -> None:
    _set_fill(pdf, GREY)
    pdf.setFont(FONT_NAME, 8)
    pdf.drawString(MARGIN * mm, 10 * mm, f"Generated by SEO Report on {generated_on}")


def render_pdf(report: Report, generated_on: Optional[date] = None) -> bytes:
    """Render *report* to PDF bytes."""
    plan = plan_layout(report, generated_on)
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"SEO Analysis Report - {report.url}")

    last = len(plan.pages) - 1
    for index, blocks in enumerate(plan.pages):
        if index == 0:
            _draw_header(pdf, plan.report_date)
        for block in blocks:
            _draw_block(pdf, block)
        if index == last:
            _draw_footer(pdf, plan.generated_on)
        pdf.showPage()

    pdf.save()
    return buffer.getvalue()
