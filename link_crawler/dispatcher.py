# File: link_crawler/dispatcher.py
"""link_crawler.dispatcher: Orchestration layer для одностраничного и многостраничного обхода."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from link_crawler.aggregator import aggregate_results
from link_crawler.config import CrawlerConfig
from link_crawler.crawler.fetcher import Fetcher
from link_crawler.crawler.models import CrawlDone, HttpClient
from link_crawler.crawler.page_crawler import PageCrawler
from link_crawler.crawler.site_crawler import SiteCrawler
from link_crawler.logger import logger
from link_crawler.utils import remove_duplicates

__all__ = ["Dispatcher", "open_session", "fetch_links", "start_crawl"]


def open_session(config: CrawlerConfig) -> ClientSession:
    """Создаёт aiohttp-сессию с таймаутом, User-Agent и лимитом соединений."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        connector=TCPConnector(limit=config.max_connections),
        raise_for_status=False,
    )


class Dispatcher:
    """Entry point for CLI and tests.

    Owns the HTTP session unless a client is injected, crawls the seed page
    and fans the crawl out to one :class:`SiteCrawler` task per distinct link.
    """

    def __init__(self, config: CrawlerConfig, client: Optional[HttpClient] = None) -> None:
        self.config = config
        self._client = client
        self._session: Optional[ClientSession] = None

    async def __aenter__(self) -> Dispatcher:
        if self._client is None:
            self._session = open_session(self.config)
            self._client = self._session
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session is not None:
            if not self._session.closed:
                await self._session.close()
            self._session = None
            self._client = None

    def _page_crawler(self) -> PageCrawler:
        if self._client is None:
            raise RuntimeError("Dispatcher must be used as 'async with Dispatcher(...)'")
        return PageCrawler(Fetcher(self._client, timeout=self.config.timeout))

    async def links(self, url: str) -> List[str]:
        """Single-page mode: links on *url*. Any error is fatal."""
        logger.info("Crawling page: %s", url)
        found = await self._page_crawler().crawl(url)
        logger.info("Found %d links on %s", len(found), url)
        return found

    async def crawl(self, url: str, limit: Optional[int] = None) -> List[str]:
        """
        Multi-page mode: visit up to *limit* pages from every link on *url*.

        Failure to crawl *url* itself is fatal. Returns the visited URLs of
        all branches in arrival order.
        """
        limit = self.config.limit if limit is None else limit
        if limit < 1:
            raise ValueError("limit must be >= 1")

        page_crawler = self._page_crawler()
        logger.info("Crawling from page: %s", url)
        seeds = remove_duplicates(await page_crawler.crawl(url))
        if not seeds:
            logger.info("No links on %s, nothing to crawl", url)
            return []

        results: asyncio.Queue = asyncio.Queue(maxsize=self.config.result_buffer)
        tasks = [
            asyncio.create_task(self._worker(SiteCrawler(page_crawler, limit), seed, results))
            for seed in seeds
        ]
        logger.info("Started %d crawl workers, limit %d each", len(tasks), limit)
        try:
            visited = await aggregate_results(results, len(tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        await asyncio.gather(*tasks)
        logger.info("Crawl finished: %d pages visited", len(visited))
        return visited

    @staticmethod
    async def _worker(crawler: SiteCrawler, seed: str, results: asyncio.Queue) -> None:
        try:
            await crawler.crawl(seed, results)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            await results.put(CrawlDone(seed, error=repr(exc)))
            raise
        else:
            await results.put(CrawlDone(seed))


async def fetch_links(cfg: CrawlerConfig, url: str) -> List[str]:
    """Открывает Dispatcher и возвращает ссылки одной страницы."""
    async with Dispatcher(cfg) as dispatcher:
        return await dispatcher.links(url)


async def start_crawl(cfg: CrawlerConfig, url: str, limit: Optional[int] = None) -> List[str]:
    """Открывает Dispatcher и запускает многостраничный обход."""
    async with Dispatcher(cfg) as dispatcher:
        return await dispatcher.crawl(url, limit)
