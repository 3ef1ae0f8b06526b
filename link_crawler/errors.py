# File: link_crawler/errors.py
"""link_crawler.errors: Exception hierarchy for a single page crawl."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "CrawlerError",
    "URLValidationError",
    "TransportError",
    "BadStatusError",
    "EmptyBodyError",
    "ParseError",
]


class CrawlerError(Exception):
    """Base class for every failure raised while crawling one page."""


class URLValidationError(CrawlerError):
    """The URL is not well-formed enough to be requested."""

    def __init__(self, url: str, reason: str = "malformed URL") -> None:
        super().__init__(f"{reason}: {url!r}")
        self.url = url


class TransportError(CrawlerError):
    """The request could not be performed (connection, DNS, timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class BadStatusError(CrawlerError):
    """The server answered with anything other than 200 OK."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"{url} returned HTTP {status}")
        self.url = url
        self.status = status


class EmptyBodyError(CrawlerError):
    """The server answered 200 OK with a zero-length body."""

    def __init__(self, url: str) -> None:
        super().__init__(f"no body returned from {url}")
        self.url = url


class ParseError(CrawlerError):
    """The HTML parser rejected the markup."""

    def __init__(self, reason: str, url: Optional[str] = None) -> None:
        where = f" ({url})" if url else ""
        super().__init__(f"cannot parse HTML{where}: {reason}")
        self.url = url
        self.reason = reason
