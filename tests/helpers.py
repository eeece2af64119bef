"""HTML builders and fake-site helpers shared by the test modules."""

import json
from typing import Callable

import httpx

from seoreport.services.fetcher import PageFetcher

PAGE_URL = "https://example.com/page"
TIMESTAMP = "2026-01-02T03:04:05Z"

GOOD_TITLE = "Acme Widgets - Handmade Widgets for Every Home"
GOOD_DESCRIPTION = ("Shop handmade widgets. " * 6).strip()


def page(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


def words(count: int, word: str = "widget") -> str:
    return " ".join([word] * count)


def good_page() -> str:
    """A page that triggers no rule at all when served over HTTPS quickly."""
    ld = json.dumps({"@context": "https://schema.org", "@type": "Organization", "name": "Acme"})
    head = (
        f"<title>{GOOD_TITLE}</title>"
        f'<meta name="description" content="{GOOD_DESCRIPTION}">'
        '<meta name="keywords" content="widgets, handmade, home">'
        '<link rel="canonical" href="https://example.com/page">'
        '<meta name="robots" content="index, follow">'
        '<meta property="og:title" content="Acme Widgets">'
        '<meta property="og:description" content="Handmade widgets">'
        '<meta property="og:image" content="https://example.com/og.png">'
        '<meta name="twitter:title" content="Acme Widgets">'
        f'<script type="application/ld+json">{ld}</script>'
    )
    body = (
        "<h1>Welcome to Acme</h1>"
        "<h2>Our range</h2>"
        f"<p>{words(320)}</p>"
        '<img src="/hero.png" alt="A widget on a table">'
        '<a href="/">Home</a>'
        '<a href="/about">About</a>'
        '<a href="https://example.com/shop">Shop</a>'
        '<a href="https://partner.org/">Partner</a>'
    )
    return page(head, body)


def make_fetcher(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> PageFetcher:
    """Return a fetcher whose client answers every request with *handler*."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("block_private", False)
    return PageFetcher(client, **kwargs)


def serve(html: str, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status, text=html, headers={"content-type": "text/html; charset=utf-8"}
        )

    return handler


def fail_with(exc_type: type, message: str = "boom") -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type(message, request=request)

    return handler
