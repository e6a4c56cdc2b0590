# File: tests/conftest.py
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Union

import pytest

from sitemap_scout.crawler.models import FetchResult
from sitemap_scout.exceptions import FetchError
from sitemap_scout.logger import LOGGER_NAME

#: fixed "now" used as the fallback last-modified time in frontier tests
FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FakeFetcher:
    """
    In-memory PageFetcher: maps URL -> FetchResult or exception.
    Unknown URLs fail like a 404.
    """

    def __init__(self, pages: Dict[str, Union[FetchResult, Exception]]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        outcome = self.pages.get(url)
        if outcome is None:
            raise FetchError(url, "HTTP 404")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def html_page(url: str, *hrefs: str, last_modified: Optional[datetime] = None) -> FetchResult:
    """Build an HTML FetchResult whose body links to *hrefs*."""
    body = "".join(f'<a href="{h}">link</a>' for h in hrefs)
    return FetchResult(
        url=url,
        body=f"<html><body>{body}</body></html>",
        content_type="text/html; charset=utf-8",
        last_modified=last_modified,
    )


@pytest.fixture()
def fake_fetcher_factory():
    """Return the FakeFetcher class so tests can build their own link graphs."""
    return FakeFetcher


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def reset_project_logger():
    """
    CLI tests call init_logging(), which binds handlers to CliRunner streams
    and disables propagation; undo that so caplog keeps working.
    """
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
