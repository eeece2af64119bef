"""Conversational summary of a report.

The report is turned into a prompt, then offered to an ordered list of
providers. The first provider that returns non-blank text wins; when every
provider fails the templated :func:`fallback_message` is returned instead,
so a caller always gets an answer.
"""

import logging
from typing import List, NamedTuple, Optional, Protocol, Sequence

from anthropic import Anthropic

from seoreport.models.report import Report

logger = logging.getLogger(__name__)

FALLBACK_PROVIDER = "fallback"
TOP_RECOMMENDATIONS = 5


class Provider(Protocol):
    name: str

    def generate(self, prompt: str) -> str: ...


class ProviderOutcome(NamedTuple):
    provider: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text and self.text.strip())


class ChainResult(NamedTuple):
    provider: str
    text: str
    attempts: List[ProviderOutcome]


def _bullets(items: Sequence[str], empty: str) -> str:
    if not items:
        return empty
    return "\n".join(f"• {item}" for item in items)


def build_conversation_prompt(report: Report, user_name: Optional[str] = None) -> str:
    """Summarise *report* as instructions for a friendly SEO consultant reply."""
    quality = report.sections["pageQuality"].sub_metrics
    links = report.sections["linkStructure"].sub_metrics
    crawl = report.sections["crawlability"].sub_metrics
    social = report.sections["externalFactors"].sub_metrics

    section_lines = "\n".join(
        f"- {name}: {section.score}/100" for name, section in report.sections.items()
    )
    greeting = f" (their name is {user_name})" if user_name else ""

    return f"""You are an enthusiastic and friendly SEO expert who has just finished analyzing a website. You're excited to share your findings and help improve the website's performance.

WEBSITE ANALYZED: {report.url}
OVERALL SCORE: {report.overall_score}/100

SECTION SCORES:
{section_lines}

ANALYSIS RESULTS:
- H1 Tags Found: {quality.get("h1Count", 0)}
- H2 Tags Found: {quality.get("h2Count", 0)}
- Total Images: {quality.get("imageCount", 0)}
- Images Missing Alt Text: {quality.get("imagesMissingAlt", 0)}
- Internal Links: {links.get("internalLinks", 0)}
- External Links: {links.get("externalLinks", 0)}
- Content Word Count: {quality.get("wordCount", 0)}
- Page Load Time: {report.load_time}ms
- Open Graph Fields: {social.get("openGraphFields", 0)}
- Structured Data: {crawl.get("structuredDataBlocks", 0)} items

MAIN ISSUES DETECTED:
{_bullets(report.issues, "No major issues found")}

TOP RECOMMENDATIONS:
{_bullets(report.recommendations[:TOP_RECOMMENDATIONS], "No specific recommendations")}

YOUR TASK:
Write a friendly, conversational opening message as if you're a real SEO consultant who just finished analyzing their website. Your message should:

1. Greet them warmly by name{greeting} and mention you've just analyzed their website
2. Give them a quick overview of what you found (both good and areas for improvement)
3. Highlight 2-3 most important findings in a conversational way
4. Ask an engaging question to continue the conversation

Be specific about their actual website data, not generic advice."""


def fallback_message(report: Report, user_name: Optional[str] = None) -> str:
    """Templated reply used when no provider produced an answer."""
    issue_count = len(report.issues)
    if issue_count:
        findings = f"The main issues I spotted are {' and '.join(report.issues[:2])}."
    else:
        findings = "Your site is looking pretty good overall!"

    parts = [
        f"Hey {user_name or 'there'}! I've just finished analyzing {report.url} "
        f"and it scored {report.overall_score}/100.",
        f"I discovered {issue_count} areas where we can improve your SEO performance. {findings}",
    ]
    if report.recommendations:
        parts.append(
            f"I've got {len(report.recommendations)} specific recommendations "
            "that could really boost your search rankings."
        )
    parts.append("What aspect of your website's SEO would you like to dive into first?")
    return "\n\n".join(parts)


def run_fallback_chain(providers: Sequence[Provider], prompt: str, fallback: str) -> ChainResult:
    """Ask each provider in turn and stop at the first usable answer."""
    attempts: List[ProviderOutcome] = []
    for provider in providers:
        try:
            outcome = ProviderOutcome(provider.name, text=provider.generate(prompt))
        except Exception as exc:
            logger.warning("Provider %s failed: %s", provider.name, exc)
            outcome = ProviderOutcome(provider.name, error=str(exc) or type(exc).__name__)
        attempts.append(outcome)
        if outcome.ok:
            return ChainResult(provider.name, outcome.text.strip(), attempts)
        if outcome.error is None:
            logger.warning("Provider %s returned an empty response", provider.name)

    logger.info("All %d providers failed; using fallback response", len(providers))
    return ChainResult(FALLBACK_PROVIDER, fallback, attempts)


class AnthropicProvider:
    """Adapter around an ``anthropic.Anthropic`` client created once at start-up."""

    name = "anthropic"

    def __init__(self, client: Anthropic, model: str, max_tokens: int = 1000) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        content = ""
        for block in getattr(response, "content", []) or []:
            text = getattr(block, "text", None)
            if text:
                content += text
        return content.strip()


def converse(
    report: Report,
    providers: Sequence[Provider],
    user_name: Optional[str] = None,
) -> ChainResult:
    prompt = build_conversation_prompt(report, user_name)
    return run_fallback_chain(providers, prompt, fallback_message(report, user_name))
