# setup.py
from setuptools import setup, find_packages

setup(
    name="link_crawler",
    version="0.1.0",
    description="Асинхронный обходчик ссылок LinkCrawler",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "link-crawler=link_crawler.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
