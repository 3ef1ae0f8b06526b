"""Crawl engine: fetcher, link extractor, page and site crawlers."""
from link_crawler.crawler.fetcher import Fetcher
from link_crawler.crawler.link_extractor import extract_links, normalize_link
from link_crawler.crawler.models import CrawlDone, HttpClient, HttpResponse
from link_crawler.crawler.page_crawler import PageCrawler
from link_crawler.crawler.site_crawler import SiteCrawler

__all__ = (
    "CrawlDone",
    "Fetcher",
    "HttpClient",
    "HttpResponse",
    "PageCrawler",
    "SiteCrawler",
    "extract_links",
    "normalize_link",
)
