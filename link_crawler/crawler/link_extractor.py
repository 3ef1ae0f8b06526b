# link_crawler/crawler/link_extractor.py
"""
Link extraction and URL normalization for LinkCrawler.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlsplit

from bs4.element import PageElement, Tag

from link_crawler.utils import ensure_scheme

_WEB_SCHEMES = ("http", "https")


def extract_links(node: PageElement, page_url: str) -> List[str]:
    """
    Collect normalized absolute URLs from every <a href> under *node*.

    Depth-first pre-order, so the result follows document order.
    Duplicates are kept; hrefs that are not http(s) links are skipped.
    """
    links: List[str] = []
    stack: List[PageElement] = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, Tag):
            continue
        if current.name == "a":
            href = current.get("href")
            if isinstance(href, str):
                link = normalize_link(href, page_url)
                if link is not None:
                    links.append(link)
        stack.extend(reversed(current.contents))
    return links


def normalize_link(href: str, page_url: str) -> Optional[str]:
    """
    Turn an href into ``host + path + query`` form, or None if it is not a link.

    Accepted: absolute http(s) URLs, protocol-relative ``//host/path`` and
    absolute paths. Paths are joined onto *page_url* as-is (no RFC 3986
    resolution). The fragment is dropped.
    """
    raw = href.strip()
    if not raw:
        return None
    try:
        parts = urlsplit(raw)
        parts.port  # malformed ports raise ValueError
    except ValueError:
        return None
    if any(ch.isspace() for ch in parts.netloc + parts.path):
        return None

    if parts.scheme:
        if parts.scheme not in _WEB_SCHEMES or not parts.hostname:
            return None
        host = f"{parts.scheme}://{parts.netloc}"
    elif parts.netloc:
        if not parts.hostname:
            return None
        host = parts.netloc
    elif parts.path.startswith("/"):
        host = page_url.rstrip("/")
    else:
        return None

    host = ensure_scheme(host)
    query = f"?{parts.query}" if parts.query else ""
    return f"{host}{parts.path}{query}"
