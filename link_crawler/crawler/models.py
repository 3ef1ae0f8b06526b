# link_crawler/crawler/models.py
"""
Data models and transport protocols for the link crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncContextManager, Optional, Protocol


class HttpResponse(Protocol):
    """Minimal response surface the fetcher relies on (aiohttp.ClientResponse fits)."""

    status: int

    @property
    def charset(self) -> Optional[str]: ...

    async def read(self) -> bytes: ...


class HttpClient(Protocol):
    """GET capability injected into the fetcher (aiohttp.ClientSession fits)."""

    def get(self, url: str, *, allow_redirects: bool = ...) -> AsyncContextManager[HttpResponse]: ...


@dataclass(slots=True, frozen=True)
class CrawlDone:
    """End-of-stream marker a crawl worker puts on the result queue."""

    seed: str
    error: Optional[str] = None
