# sitemap_scout/crawler/canonical.py
"""
URL canonicalization for the crawl frontier.

``canonicalize()`` maps any href (absolute, relative or protocol-relative)
to the single string the frontier uses as the identity of a page, or to
``None`` when the URL must not be crawled: another origin, unparsable, or a
path ending in one of the skipped (non-page) extensions.
"""
from __future__ import annotations

import posixpath
import re
from typing import Iterable, Optional, Sequence, Tuple
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "DEFAULT_SKIP_EXTENSIONS",
    "Origin",
    "canonicalize",
    "normalize_extensions",
    "origin_of",
    "origin_root",
)

DEFAULT_SKIP_EXTENSIONS: Tuple[str, ...] = (
    "pdf", "jpg", "jpeg", "png", "gif", "webp", "svg", "ico",
    "js", "css", "json", "txt",
    "zip", "rar", "7z",
    "mp4", "mp3", "wav",
    "woff", "woff2", "ttf", "eot",
)

#: (scheme, host, port) with the default port filled in
Origin = Tuple[str, str, int]

_DEFAULT_PORTS = {"http": 80, "https": 443}
_INDEX_RE = re.compile(r"/index\.html?$", re.IGNORECASE)
_SLASHES_RE = re.compile(r"/{2,}")
# RFC 3986 pchar plus "/", and "%" so existing escapes survive
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def normalize_extensions(extensions: Iterable[str]) -> Tuple[str, ...]:
    """Lower-case, strip leading dots, drop blanks and duplicates."""
    cleaned = (e.strip().lstrip(".").lower() for e in extensions)
    return tuple(dict.fromkeys(e for e in cleaned if e))


def origin_of(url: str) -> Optional[Origin]:
    """Return the origin triple of an absolute http(s) URL, or None."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    host = parts.hostname
    if scheme not in _DEFAULT_PORTS or not host:
        return None
    return scheme, host.lower(), port if port is not None else _DEFAULT_PORTS[scheme]


def _netloc(origin: Origin) -> str:
    scheme, host, port = origin
    if ":" in host:
        host = f"[{host}]"
    if port == _DEFAULT_PORTS[scheme]:
        return host
    return f"{host}:{port}"


def _remove_dot_segments(path: str) -> str:
    if "/." not in path:
        return path
    trailing = path.endswith(("/", "/.", "/.."))
    norm = posixpath.normpath(path)
    if trailing and not norm.endswith("/"):
        norm += "/"
    return norm


def origin_root(origin: Origin) -> str:
    """Bare origin URL, e.g. ``https://example.com/``."""
    return urlunsplit((origin[0], _netloc(origin), "/", "", ""))


def canonicalize(
    raw: str,
    base: str,
    *,
    origin: Optional[Origin] = None,
    skip_extensions: Iterable[str] = DEFAULT_SKIP_EXTENSIONS,
) -> Optional[str]:
    """Resolve *raw* against *base* and return its canonical form.

    Parameters
    ----------
    raw
        href value or absolute URL.
    base
        URL of the page the href was found on (or the seed URL).
    origin
        Crawl origin; defaults to the origin of *base*.
    skip_extensions
        Path extensions (without dot) that never denote an HTML page.

    Returns
    -------
    str | None
        Canonical URL, or ``None`` if the URL is rejected.
    """
    if origin is None:
        origin = origin_of(base)
        if origin is None:
            return None
    try:
        resolved = urljoin(base, raw.strip())
        if origin_of(resolved) != origin:
            return None
        path = _remove_dot_segments(urlsplit(resolved).path or "/")
        path = _INDEX_RE.sub("/", path)
        path = _SLASHES_RE.sub("/", path)
        # UnicodeEncodeError (lone surrogates) is a ValueError too
        path = quote(path, safe=_PATH_SAFE)
    except ValueError:
        return None

    suffixes = tuple("." + ext for ext in normalize_extensions(skip_extensions))
    if suffixes and path.lower().endswith(suffixes):
        return None

    return urlunsplit((origin[0], _netloc(origin), path, "", ""))
