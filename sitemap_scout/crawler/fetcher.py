# sitemap_scout/crawler/fetcher.py
"""
Fetcher module: one GET per URL over a shared aiohttp session, with timeout.

Any failure (network error, timeout, non-2xx status) is reported as
:class:`~sitemap_scout.exceptions.FetchError`; the frontier decides what to do.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_scout.crawler.models import FetchResult
from sitemap_scout.exceptions import FetchError

__all__ = ("PageFetcher", "Fetcher", "parse_http_date")

_ACCEPT = "text/html,*/*"


class PageFetcher(Protocol):
    """Collaborator the crawl frontier fetches pages through."""

    async def fetch(self, url: str) -> FetchResult:
        ...


def parse_http_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a ``Last-Modified`` header into an aware UTC datetime."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class Fetcher:
    """HTTP fetcher used as an async context manager."""

    def __init__(self, user_agent: str, timeout: float = 10.0) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("SitemapScout")

    async def __aenter__(self) -> Fetcher:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent, "Accept": _ACCEPT},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url*. HTML bodies are read as text; other content types are
        returned with an empty body.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}")
                result = FetchResult(
                    url=url,
                    body="",
                    content_type=resp.headers.get("Content-Type", ""),
                    last_modified=parse_http_date(resp.headers.get("Last-Modified")),
                    status=resp.status,
                )
                if result.is_html:
                    result.body = await resp.text(errors="replace")
                return result
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timeout") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        except LookupError as exc:
            # unknown charset in Content-Type
            raise FetchError(url, f"cannot decode body: {exc}") from exc
