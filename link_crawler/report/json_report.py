# link_crawler/report/json_report.py

"""
Генерация JSON-отчёта для проекта LinkCrawler.

Сериализация объекта CrawlReport в файл.
"""
from pathlib import Path

from link_crawler.aggregator import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект CrawlReport с результатами обхода
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from link_crawler.report.json_report import render_json
    report_path = render_json(report, 'reports/links.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=True), encoding="utf-8")
    return output
