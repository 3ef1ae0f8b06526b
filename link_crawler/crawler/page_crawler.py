# link_crawler/crawler/page_crawler.py
"""
Single-page crawl: fetch, parse, extract.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from bs4 import BeautifulSoup

from link_crawler.crawler.fetcher import Fetcher
from link_crawler.crawler.link_extractor import extract_links
from link_crawler.errors import URLValidationError
from link_crawler.parser.html_parser import parse_html
from link_crawler.utils import ensure_scheme, is_crawlable_url

HtmlParser = Callable[[str, Optional[str]], BeautifulSoup]


class PageCrawler:
    """Turns one URL into the list of links found on that page."""

    def __init__(self, fetcher: Fetcher, parser: HtmlParser = parse_html) -> None:
        self.fetcher = fetcher
        self.parser = parser

    async def crawl(self, url: str) -> List[str]:
        """
        Fetch *url* and return its outbound links in document order.

        Bare domains are accepted and completed with ``https://``; anything
        that still is not an http(s) URL with a host raises URLValidationError
        before a request is made. Fetch and parse errors propagate as is.
        """
        if not url or not url.strip():
            raise URLValidationError(url, "empty URL")
        page_url = ensure_scheme(url)
        if not is_crawlable_url(page_url):
            raise URLValidationError(url)

        body = await self.fetcher.fetch(page_url)
        document = self.parser(body, page_url)
        return extract_links(document, page_url)
