"""HTTP fetching: probing, redirect following and scheme fallback."""

from favicon_resolver.fetchers.http import (
    REDIRECT_CODES,
    browser_headers,
    build_client,
    close_client,
    fetch_root,
    follow_redirects,
    get_and_follow,
    get_client,
    probe,
)

__all__ = [
    "REDIRECT_CODES",
    "browser_headers",
    "build_client",
    "close_client",
    "fetch_root",
    "follow_redirects",
    "get_and_follow",
    "get_client",
    "probe",
]
