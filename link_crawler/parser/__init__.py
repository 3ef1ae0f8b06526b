"""HTML parsing capability."""
from link_crawler.parser.html_parser import parse_html

__all__ = ("parse_html",)
