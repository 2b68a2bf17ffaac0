"""Favicon resolution: find, fetch and validate a site's icon."""

from favicon_resolver.config import ResolverConfig
from favicon_resolver.fetchers.http import close_client, get_client
from favicon_resolver.models import IconResult, MediaType
from favicon_resolver.resolver import resolve_icon, resolve_icons

__all__ = [
    "ResolverConfig",
    "close_client",
    "get_client",
    "IconResult",
    "MediaType",
    "resolve_icon",
    "resolve_icons",
]
