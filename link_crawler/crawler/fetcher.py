# link_crawler/crawler/fetcher.py
"""
Fetcher module: performs one bounded GET and validates the response.
"""
from __future__ import annotations

import asyncio
import codecs
from typing import Optional, Tuple

from aiohttp import ClientError

from link_crawler.crawler.models import HttpClient
from link_crawler.errors import BadStatusError, EmptyBodyError, TransportError
from link_crawler.logger import logger
from link_crawler.utils import ensure_scheme

_OK = 200


class Fetcher:
    """Fetches page bodies through an injected HTTP client.

    No redirects are followed and nothing is retried: any status other than
    200 is a failure, and so is an empty body.
    """

    def __init__(self, client: HttpClient, timeout: Optional[float] = None) -> None:
        self.client = client
        self.timeout = timeout

    async def fetch(self, url: str) -> str:
        """
        Return the decoded body of *url*.

        Raises TransportError, BadStatusError or EmptyBodyError.
        """
        target = ensure_scheme(url)
        logger.debug("GET %s", target)
        try:
            status, body, charset = await asyncio.wait_for(self._get(target), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise TransportError(target, f"no response within {self.timeout} s") from exc
        # ValueError covers hosts the IDNA codec rejects (UnicodeError)
        except (ClientError, OSError, ValueError) as exc:
            raise TransportError(target, str(exc) or type(exc).__name__) from exc

        if status != _OK:
            raise BadStatusError(target, status)
        if not body:
            raise EmptyBodyError(target)
        return body.decode(_codec(charset), errors="replace")

    async def _get(self, url: str) -> Tuple[int, bytes, Optional[str]]:
        # the body is drained inside the context so the connection is always released
        async with self.client.get(url, allow_redirects=False) as resp:
            body = await resp.read()
            return resp.status, body, resp.charset


def _codec(charset: Optional[str]) -> str:
    if charset:
        try:
            return codecs.lookup(charset).name
        except LookupError:
            pass
    return "utf-8"
