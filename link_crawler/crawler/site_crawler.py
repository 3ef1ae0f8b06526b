# link_crawler/crawler/site_crawler.py
"""
Bounded breadth-first crawl from one seed URL.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Set

from link_crawler.crawler.page_crawler import PageCrawler
from link_crawler.errors import CrawlerError
from link_crawler.logger import logger
from link_crawler.utils import ensure_scheme


class SiteCrawler:
    """Breadth-first crawler with a visit limit.

    Every call to :meth:`crawl` owns a fresh frontier and visited set, so one
    instance can be reused and two instances never share state.
    """

    def __init__(self, page_crawler: PageCrawler, limit: int) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.page_crawler = page_crawler
        self.limit = limit

    async def crawl(self, seed: str, results: asyncio.Queue) -> None:
        """
        Visit pages starting at *seed* and put each visited URL on *results*.

        Stops after ``limit`` successful visits or when the frontier runs dry.
        A failing page is logged and skipped; it does not count as a visit
        and is never requested again. Nothing marks the end of the stream.
        """
        seed = ensure_scheme(seed)
        frontier: Deque[str] = deque([seed])
        # every URL ever queued, so nothing is enqueued twice
        seen: Set[str] = {seed}
        visited: Set[str] = set()

        while len(visited) < self.limit and frontier:
            url = frontier.popleft()
            try:
                links = await self.page_crawler.crawl(url)
            except CrawlerError as exc:
                logger.warning("Failed %s: %s", url, exc)
                continue

            for link in links:
                if link not in seen:
                    seen.add(link)
                    frontier.append(link)

            visited.add(url)
            logger.debug("Visited %s (%d/%d), %d queued", url, len(visited), self.limit, len(frontier))
            await results.put(url)

        logger.info("Crawl from %s finished: %d visited, %d left in frontier", seed, len(visited), len(frontier))
