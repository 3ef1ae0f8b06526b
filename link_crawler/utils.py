# File: link_crawler/utils.py
"""link_crawler.utils: URL helpers shared by the fetcher, page crawler and dispatcher."""

from __future__ import annotations

from typing import Collection, List, Sequence
from urllib.parse import urlsplit

from link_crawler.logger import logger

__all__: Sequence[str] = (
    "ensure_scheme",
    "is_crawlable_url",
    "remove_duplicates",
)


def ensure_scheme(url: str) -> str:
    """Prefix ``https://`` unless the URL already starts with http:// or https://."""
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def is_crawlable_url(url: str) -> bool:
    """True for an absolute http(s) URL with a host and no embedded whitespace."""
    if not url or any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlsplit(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.hostname)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Drop repeated URLs, keeping the first occurrence order."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
