# File: link_crawler/report/__init__.py
"""link_crawler.report: Сохранение отчётов обхода (JSON) для CLI и тестов."""

from link_crawler.report.json_report import render_json

__all__ = ["render_json"]
