# === FILE: link_crawler/parser/html_parser.py ===
"""HTML parsing capability for LinkCrawler.

Turns raw markup into a traversable BeautifulSoup tree.  The stdlib
``html.parser`` builder is used so that no C extension is required, and
duplicate attributes on one element keep their *first* value: the link
extractor relies on first-``href``-wins semantics.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from link_crawler.errors import ParseError

__all__: Sequence[str] = ("parse_html",)


def parse_html(markup: str, url: Optional[str] = None) -> BeautifulSoup:
    """Parse *markup* into a document tree.

    Parameters
    ----------
    markup
        Raw HTML text. An empty string yields an empty document.
    url
        Page the markup came from; only used in the error message.

    Raises
    ------
    ParseError
        If the parser rejects the markup.
    """
    try:
        return BeautifulSoup(markup, "html.parser", on_duplicate_attribute="ignore")
    except ParserRejectedMarkup as exc:
        raise ParseError(str(exc), url=url) from exc
