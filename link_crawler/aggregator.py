# File: link_crawler/aggregator.py
"""link_crawler.aggregator: Fan-in of crawl results and the final report model."""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from link_crawler.crawler.models import CrawlDone
from link_crawler.logger import logger

__all__ = ["CrawlReport", "aggregate_results"]


@dataclass(slots=True)
class CrawlReport:
    """Outcome of one CLI run: the start URL and the URLs found or visited, in order."""

    url: str
    mode: str
    urls: List[str] = field(default_factory=list)
    limit: Optional[int] = None

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


async def aggregate_results(results: asyncio.Queue, workers: int) -> List[str]:
    """
    Drain *results* until every one of *workers* has sent its CrawlDone marker.

    Returns visited URLs in arrival order. Branches are independent, so the
    same URL may appear more than once.
    """
    visited: List[str] = []
    pending = workers
    while pending:
        item = await results.get()
        if isinstance(item, CrawlDone):
            pending -= 1
            if item.error:
                logger.error("Crawl from %s aborted: %s", item.seed, item.error)
            else:
                logger.debug("Crawl from %s done, %d workers left", item.seed, pending)
            continue
        visited.append(item)
    return visited
