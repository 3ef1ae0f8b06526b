# File: tests/test_dispatcher.py
import asyncio
from collections import Counter

import pytest

from conftest import StubResponse, site
from link_crawler.aggregator import CrawlReport, aggregate_results
from link_crawler.crawler.models import CrawlDone
from link_crawler.dispatcher import Dispatcher
from link_crawler.errors import BadStatusError, URLValidationError

SEED = "https://seed.com"
A = "https://a.com"
B = "https://b.com"
C = "https://c.com"


@pytest.mark.asyncio()
async def test_links_single_page(basic_config):
    client = site({SEED: [A, B, A]})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        assert await dispatcher.links("seed.com") == [A, B, A]


@pytest.mark.asyncio()
async def test_links_error_is_fatal(basic_config):
    client = site({})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        with pytest.raises(BadStatusError):
            await dispatcher.links(SEED)


@pytest.mark.asyncio()
async def test_crawl_runs_one_branch_per_link(basic_config):
    client = site({SEED: [A, B], A: [C], B: [], C: []})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        visited = await dispatcher.crawl(SEED, limit=2)
    # branch A visits A then C, branch B only B; the seed itself is not reported
    assert Counter(visited) == Counter({A: 1, C: 1, B: 1})
    assert visited.index(A) < visited.index(C)


@pytest.mark.asyncio()
async def test_branches_do_not_share_visited_sets(basic_config):
    client = site({SEED: [A, B], A: [C], B: [C], C: []})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        visited = await dispatcher.crawl(SEED, limit=2)
    assert Counter(visited) == Counter({A: 1, B: 1, C: 2})


@pytest.mark.asyncio()
async def test_duplicate_seed_links_start_one_branch(basic_config):
    client = site({SEED: [A, A, A], A: []})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        assert await dispatcher.crawl(SEED, limit=3) == [A]


@pytest.mark.asyncio()
async def test_crawl_uses_config_limit_by_default(basic_config):
    chain = {f"https://p{i}.com": [f"https://p{i + 1}.com"] for i in range(10)}
    client = site({SEED: ["https://p0.com"], **chain})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        visited = await dispatcher.crawl(SEED)
    assert visited == [f"https://p{i}.com" for i in range(basic_config.limit)]


@pytest.mark.asyncio()
async def test_seed_without_links_returns_empty(basic_config):
    client = site({SEED: []})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        assert await dispatcher.crawl(SEED, limit=5) == []


@pytest.mark.asyncio()
async def test_seed_failure_is_fatal(basic_config):
    client = site({})
    client.routes[SEED] = StubResponse(status=201, body="<a href='https://a.com'>a</a>")
    async with Dispatcher(basic_config, client=client) as dispatcher:
        with pytest.raises(BadStatusError) as info:
            await dispatcher.crawl(SEED, limit=5)
    assert info.value.status == 201


@pytest.mark.asyncio()
async def test_malformed_seed_is_fatal(basic_config):
    client = site({})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        with pytest.raises(URLValidationError):
            await dispatcher.crawl("   ", limit=5)
    assert client.requested == []


@pytest.mark.asyncio()
async def test_branch_failures_leave_partial_results(basic_config):
    client = site({SEED: [A, B], B: []})
    async with Dispatcher(basic_config, client=client) as dispatcher:
        assert await dispatcher.crawl(SEED, limit=5) == [B]


@pytest.mark.asyncio()
async def test_unexpected_worker_error_propagates_without_hanging(basic_config):
    client = site({SEED: [A, B], B: []})
    client.routes[A] = RuntimeError("bug in transport")
    async with Dispatcher(basic_config, client=client) as dispatcher:
        with pytest.raises(RuntimeError, match="bug in transport"):
            await asyncio.wait_for(dispatcher.crawl(SEED, limit=5), timeout=5)


@pytest.mark.asyncio()
async def test_bounded_result_buffer(basic_config):
    cfg = basic_config.model_copy(update={"result_buffer": 1})
    pages = {SEED: [A, B, C], A: [B, C], B: [C, A], C: [A, B]}
    async with Dispatcher(cfg, client=site(pages)) as dispatcher:
        visited = await dispatcher.crawl(SEED, limit=3)
    assert Counter(visited) == Counter({A: 3, B: 3, C: 3})


@pytest.mark.asyncio()
async def test_invalid_limit(basic_config):
    async with Dispatcher(basic_config, client=site({SEED: [A]})) as dispatcher:
        with pytest.raises(ValueError):
            await dispatcher.crawl(SEED, limit=0)


@pytest.mark.asyncio()
async def test_dispatcher_without_session_refuses_to_crawl(basic_config):
    with pytest.raises(RuntimeError):
        await Dispatcher(basic_config).links(SEED)


@pytest.mark.asyncio()
async def test_dispatcher_owns_and_closes_session(basic_config):
    dispatcher = Dispatcher(basic_config)
    async with dispatcher:
        session = dispatcher._session
        assert session is not None and not session.closed
    assert session.closed


@pytest.mark.asyncio()
async def test_aggregate_results_stops_after_all_done_markers():
    queue: asyncio.Queue = asyncio.Queue()
    for item in (A, CrawlDone(A), B, C, CrawlDone(B, error="RuntimeError()")):
        queue.put_nowait(item)
    queue.put_nowait("https://late.com")
    assert await aggregate_results(queue, workers=2) == [A, B, C]
    assert queue.qsize() == 1


def test_crawl_report_json():
    report = CrawlReport(url="seed.com", mode="crawl", urls=[A, B], limit=2)
    assert report.json() == (
        '{"url": "seed.com", "mode": "crawl", "urls": ["https://a.com", "https://b.com"], "limit": 2}'
    )
