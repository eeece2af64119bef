from bs4 import BeautifulSoup

from seoreport.errors import ParseError


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* into a navigable tree with the lxml backend."""
    if html is None:
        raise ParseError("No document to parse.")
    try:
        return BeautifulSoup(html, "lxml")
    except Exception as exc:
        raise ParseError(f"Could not parse document: {exc}") from exc
