# File: tests/conftest.py
import asyncio
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Union

import pytest

from link_crawler.config import CrawlerConfig
from link_crawler.crawler.fetcher import Fetcher
from link_crawler.crawler.page_crawler import PageCrawler

#: route value that makes the stub transport never answer
HANG = object()


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class StubResponse:
    """Canned response with the attributes the fetcher reads."""

    def __init__(self, status: int = 200, body: Union[bytes, str] = b"", charset: Optional[str] = "utf-8"):
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self.charset = charset

    async def read(self) -> bytes:
        return self._body


class StubClient:
    """
    In-memory HTTP capability: routes exact URLs to responses or exceptions.
    Unknown URLs answer 404. Records every request and every release.
    """

    def __init__(self, routes: Dict[str, object]):
        self.routes = routes
        self.requested: List[str] = []
        self.redirect_flags: List[bool] = []
        self.opened = 0
        self.released = 0

    @asynccontextmanager
    async def get(self, url: str, *, allow_redirects: bool = True):
        self.requested.append(url)
        self.redirect_flags.append(allow_redirects)
        outcome = self.routes.get(url, StubResponse(status=404, body=b"not found"))
        if outcome is HANG:
            await asyncio.sleep(3600)
        if isinstance(outcome, BaseException):
            raise outcome
        self.opened += 1
        try:
            yield outcome
        finally:
            self.released += 1


def html_page(*hrefs: str) -> str:
    """Build a small HTML list of anchors pointing at *hrefs*."""
    items = "".join(f'<li><a href="{href}">{href}</a></li>' for href in hrefs)
    return f"<html><body><p>Links:</p><ul>{items}</ul></body></html>"


def site(pages: Dict[str, List[str]]) -> StubClient:
    """StubClient where every key is a page whose body links to the listed URLs."""
    return StubClient({url: StubResponse(body=html_page(*links)) for url, links in pages.items()})


def drain(queue: asyncio.Queue) -> List[object]:
    """Return everything currently in *queue*, in order."""
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig with a short request timeout.
    """
    return CrawlerConfig(timeout=2.0, user_agent="TestAgent/1.0", limit=5)


@pytest.fixture()
def make_page_crawler():
    """Factory: PageCrawler over a given stub client."""

    def _make(client: StubClient, timeout: Optional[float] = 2.0) -> PageCrawler:
        return PageCrawler(Fetcher(client, timeout=timeout))

    return _make
