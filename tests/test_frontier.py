# File: tests/test_frontier.py
# Crawl frontier driven by an in-memory fetcher
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import pytest

from conftest import FIXED_NOW, FakeFetcher, html_page
from sitemap_scout.crawler import frontier as frontier_module
from sitemap_scout.crawler.frontier import CrawlFrontier, FrontierState
from sitemap_scout.crawler.models import FetchResult, PageRecord
from sitemap_scout.exceptions import FetchError

ROOT = "https://x.test/"
A = ROOT
B = "https://x.test/b"
C = "https://x.test/c"
D = "https://x.test/d"


def make_frontier(fetcher, **kwargs) -> CrawlFrontier:
    kwargs.setdefault("delay", 0)
    kwargs.setdefault("clock", lambda: FIXED_NOW)
    return CrawlFrontier(ROOT, fetcher, **kwargs)


@pytest.mark.asyncio()
async def test_each_page_fetched_once_on_cycle():
    fetcher = FakeFetcher({
        A: html_page(A, "/b", "/b", "/b#frag", "/b?utm=1"),
        B: html_page(B, "/", "/index.html"),
    })
    frontier = make_frontier(fetcher)

    pages = await frontier.run()

    assert fetcher.calls == [A, B]
    assert [p.location for p in pages] == [A, B]
    assert frontier.state is FrontierState.DONE
    assert frontier.visited == {A, B}
    assert frontier.pending == ()


@pytest.mark.asyncio()
async def test_fetch_failure_does_not_abort_crawl(caplog):
    caplog.set_level(logging.WARNING, logger="SitemapScout")
    fetcher = FakeFetcher({
        A: html_page(A, "/b", "/c"),
        B: FetchError(B, "HTTP 500"),
        C: html_page(C, "/d"),
        D: html_page(D),
    })
    frontier = make_frontier(fetcher)

    pages = await frontier.run()

    assert [p.location for p in pages] == [A, C, D]
    assert fetcher.calls == [A, B, C, D]
    assert frontier.failed == (B,)
    assert B in frontier.visited
    assert "HTTP 500" in caplog.text


@pytest.mark.asyncio()
async def test_links_of_failed_page_are_never_seen():
    # /d is linked only from /b, which fails
    fetcher = FakeFetcher({
        A: html_page(A, "/b"),
        B: FetchError(B, "timeout"),
        D: html_page(D),
    })
    pages = await make_frontier(fetcher).run()
    assert [p.location for p in pages] == [A]
    assert D not in fetcher.calls


@pytest.mark.asyncio()
async def test_unencodable_href_skipped():
    ok = "https://x.test/ok"
    fetcher = FakeFetcher({
        A: html_page(A, "/bad\udcff", "/ok"),
        ok: html_page(ok),
    })
    pages = await make_frontier(fetcher).run()
    assert [p.location for p in pages] == [A, ok]
    assert fetcher.calls == [A, ok]


@pytest.mark.asyncio()
async def test_unexpected_errors_propagate():
    fetcher = FakeFetcher({A: RuntimeError("boom")})
    with pytest.raises(RuntimeError):
        await make_frontier(fetcher).run()


@pytest.mark.asyncio()
async def test_off_origin_and_skipped_extensions_not_enqueued():
    fetcher = FakeFetcher({
        A: html_page(A, "https://other.test/", "/logo.png", "/doc.PDF", "mailto:a@x.test", "/b"),
        B: html_page(B),
    })
    pages = await make_frontier(fetcher).run()
    assert fetcher.calls == [A, B]
    assert [p.location for p in pages] == [A, B]


@pytest.mark.asyncio()
async def test_custom_skip_extensions():
    fetcher = FakeFetcher({
        A: html_page(A, "/b.php", "/c.pdf"),
        "https://x.test/c.pdf": FetchResult("https://x.test/c.pdf", "", "application/pdf"),
    })
    pages = await make_frontier(fetcher, skip_extensions=["php"]).run()
    assert [p.location for p in pages] == [A, "https://x.test/c.pdf"]


@pytest.mark.asyncio()
async def test_max_pages_cap():
    fetcher = FakeFetcher({
        A: html_page(A, "/b", "/c", "/d"),
        B: html_page(B),
        C: html_page(C),
        D: html_page(D),
    })
    frontier = make_frontier(fetcher, max_pages=2)
    pages = await frontier.run()
    assert [p.location for p in pages] == [A, B]
    assert fetcher.calls == [A, B]
    assert frontier.pending == (C, D)


@pytest.mark.asyncio()
async def test_failures_do_not_count_towards_cap():
    fetcher = FakeFetcher({
        A: html_page(A, "/b", "/c"),
        B: FetchError(B, "HTTP 404"),
        C: html_page(C),
    })
    pages = await make_frontier(fetcher, max_pages=2).run()
    assert [p.location for p in pages] == [A, C]


@pytest.mark.asyncio()
async def test_last_modified_from_fetch_or_clock():
    stamp = datetime(2023, 6, 1, 8, 30, tzinfo=timezone.utc)
    fetcher = FakeFetcher({
        A: html_page(A, "/b", last_modified=stamp),
        B: html_page(B),
    })
    pages = await make_frontier(fetcher).run()
    assert pages == [PageRecord(A, stamp), PageRecord(B, FIXED_NOW)]


@pytest.mark.asyncio()
async def test_non_html_page_is_recorded_but_not_crawled():
    feed = "https://x.test/feed"
    fetcher = FakeFetcher({
        A: html_page(A, "/feed"),
        feed: FetchResult(feed, '<a href="/hidden">x</a>', "application/rss+xml"),
    })
    pages = await make_frontier(fetcher).run()
    assert [p.location for p in pages] == [A, feed]
    assert fetcher.calls == [A, feed]


@pytest.mark.asyncio()
async def test_step_by_step_state():
    fetcher = FakeFetcher({A: html_page(A, "/b"), B: html_page(B)})
    frontier = make_frontier(fetcher)

    assert frontier.state is FrontierState.RUNNING
    assert frontier.pending == (A,)
    assert frontier.visited == frozenset()

    assert await frontier.step() is FrontierState.RUNNING
    assert frontier.visited == {A}
    assert frontier.pending == (B,)

    assert await frontier.step() is FrontierState.RUNNING
    assert await frontier.step() is FrontierState.DONE
    # DONE is terminal
    assert await frontier.step() is FrontierState.DONE
    assert fetcher.calls == [A, B]


@pytest.mark.asyncio()
async def test_cancel_event_stops_before_next_fetch():
    cancel = asyncio.Event()
    fetcher = FakeFetcher({A: html_page(A, "/b"), B: html_page(B)})
    frontier = make_frontier(fetcher, cancel_event=cancel)

    await frontier.step()
    cancel.set()
    pages = await frontier.run()

    assert [p.location for p in pages] == [A]
    assert fetcher.calls == [A]
    assert frontier.state is FrontierState.DONE


@pytest.mark.asyncio()
async def test_delay_after_every_fetch(monkeypatch):
    sleeps: list[float] = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(frontier_module.asyncio, "sleep", fake_sleep)
    fetcher = FakeFetcher({A: html_page(A, "/b", "/c"), C: html_page(C)})

    await make_frontier(fetcher, delay=0.15).run()

    # A ok, B failed, C ok: three fetches, three pauses
    assert sleeps == [0.15, 0.15, 0.15]


def test_seed_is_canonicalized():
    frontier = CrawlFrontier("https://X.test//index.html?x=1", FakeFetcher({}))
    assert frontier.seed == ROOT
    assert frontier.pending == (ROOT,)


@pytest.mark.parametrize("seed", ["https://x.test/file.pdf", "not a url", "ftp://x.test/"])
def test_bad_seed_rejected(seed):
    with pytest.raises(ValueError):
        CrawlFrontier(seed, FakeFetcher({}))


@pytest.mark.parametrize("kwargs", [{"max_pages": 0}, {"delay": -1}])
def test_bad_limits_rejected(kwargs):
    with pytest.raises(ValueError):
        CrawlFrontier(ROOT, FakeFetcher({}), **kwargs)


@pytest.mark.asyncio()
async def test_fresh_state_per_frontier():
    fetcher = FakeFetcher({A: html_page(A)})
    first = make_frontier(fetcher)
    await first.run()
    second = make_frontier(fetcher)
    assert second.visited == frozenset()
    assert [p.location for p in await second.run()] == [A]
    assert fetcher.calls == [A, A]
