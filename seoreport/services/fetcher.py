import ipaddress
import logging
import socket
import time
from typing import NamedTuple
from urllib.parse import urljoin, urlparse

import httpx

from seoreport.config import Settings
from seoreport.errors import (
    FetchError,
    FetchTargetNotFound,
    FetchTargetServerError,
    FetchTimeoutError,
    InputValidationError,
)

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"http", "https"}


class FetchResult(NamedTuple):
    url: str  # final URL after redirects
    html: str
    status: int
    load_time: int  # milliseconds


def _is_private_address(hostname: str) -> bool:
    """Return True if *hostname* resolves to a private, loopback, or link-local address."""
    try:
        infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    for info in infos:
        # Strip IPv6 zone IDs (e.g. "::1%eth0" → "::1")
        raw_ip = info[4][0].split("%")[0]
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if addr.is_private or addr.is_loopback or addr.is_link_local or addr.is_reserved:
            return True
    return False


def validate_url(url: str, *, block_private: bool = True) -> None:
    """Raise InputValidationError if *url* is malformed or fails SSRF / scheme validation."""
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        # .port raises ValueError for a non-numeric or out-of-range port
        parsed.port
    except ValueError as exc:
        raise InputValidationError(f"Invalid URL provided: {exc}") from exc

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise InputValidationError("Invalid URL provided. Use an http or https URL.")
    if not hostname:
        raise InputValidationError("Invalid URL provided. URL must have a valid hostname.")
    if block_private and _is_private_address(hostname):
        raise InputValidationError("Requests to private/internal addresses are not allowed.")


class PageFetcher:
    """Fetches a single page through a long-lived :class:`httpx.AsyncClient`.

    The client is created once (see :meth:`from_settings`) and handed in, so
    tests can pass one built on ``httpx.MockTransport``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        max_content_size: int = 10 * 1024 * 1024,
        max_redirects: int = 10,
        block_private: bool = True,
    ) -> None:
        self.client = client
        self.max_content_size = max_content_size
        self.max_redirects = max_redirects
        self.block_private = block_private

    @classmethod
    def from_settings(cls, settings: Settings) -> "PageFetcher":
        client = httpx.AsyncClient(
            follow_redirects=False,
            timeout=settings.fetch_timeout,
            headers={"User-Agent": settings.user_agent},
        )
        return cls(
            client,
            max_content_size=settings.max_content_size,
            max_redirects=settings.max_redirects,
            block_private=settings.block_private_addresses,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch(self, url: str) -> FetchResult:
        """Fetch *url* and return its body, final status and elapsed time.

        Redirects are followed manually so that every redirect destination is
        validated before the next request is made.

        Raises:
            InputValidationError: if the URL (or a redirect target) is invalid.
            FetchTimeoutError: if the target did not answer within the timeout.
            FetchTargetNotFound: if the target answered 404.
            FetchTargetServerError: if the target answered with a 5xx status.
            FetchError: on any other network or HTTP failure.
        """
        validate_url(url, block_private=self.block_private)

        started = time.perf_counter()
        try:
            current_url, html, status = await self._get(url)
        except httpx.InvalidURL as exc:
            raise InputValidationError(f"Invalid URL provided: {exc}") from exc
        except httpx.TimeoutException as exc:
            logger.error("Timeout fetching URL: %s", url)
            raise FetchTimeoutError() from exc
        except httpx.RequestError as exc:
            logger.error("Error fetching URL %s: %s", url, exc)
            raise FetchError() from exc
        load_time = int((time.perf_counter() - started) * 1000)

        return FetchResult(url=current_url, html=html, status=status, load_time=load_time)

    async def _get(self, url: str) -> tuple:
        current_url = url
        for _ in range(self.max_redirects + 1):
            async with self.client.stream("GET", current_url) as response:
                if response.is_redirect:
                    location = response.headers.get("location", "")
                    next_url = urljoin(current_url, location)
                    validate_url(next_url, block_private=self.block_private)
                    current_url = next_url
                    continue

                _raise_for_target_status(current_url, response.status_code)

                content_length = response.headers.get("content-length")
                if content_length and content_length.isdigit() and int(content_length) > self.max_content_size:
                    raise FetchError("Response body exceeds the maximum allowed size.")

                chunks = []
                total = 0
                async for chunk in response.aiter_bytes():
                    total += len(chunk)
                    if total > self.max_content_size:
                        raise FetchError("Response body exceeds the maximum allowed size.")
                    chunks.append(chunk)

                encoding = response.encoding or "utf-8"
                return current_url, b"".join(chunks).decode(encoding, errors="replace"), response.status_code

        raise FetchError("Too many redirects.")


def _raise_for_target_status(url: str, status: int) -> None:
    if status < 400:
        return
    logger.warning("Target %s answered HTTP %s", url, status)
    if status == 404:
        raise FetchTargetNotFound()
    if status >= 500:
        raise FetchTargetServerError()
    raise FetchError(f"Target URL returned HTTP {status}.")
