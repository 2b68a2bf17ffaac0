"""Favicon resolution orchestrator.

Given a bare domain:
1. Fetch the root page (http, then https), HTML only
2. Extract ranked icon candidates from its <link> elements
3. Fetch every candidate concurrently and classify the bytes
4. If none succeeded, try scheme://host/favicon.ico once
5. Return the filled candidate with the lowest rank
"""

import asyncio
from typing import Optional

import httpx
from rich.console import Console

from favicon_resolver.config import DEFAULT_CONFIG, ResolverConfig
from favicon_resolver.extractors.links import extract_candidates, origin_of, resolve_uri
from favicon_resolver.extractors.media import classify
from favicon_resolver.fetchers.http import fetch_root, get_and_follow, get_client
from favicon_resolver.models import Candidate, FetchOutcome, IconResult

console = Console()


def normalize_domain(domain: str) -> Optional[str]:
    """Clean up a bare domain, or None if it is not one."""
    if not domain:
        return None
    domain = domain.strip().rstrip(".").lower()
    if not domain or "://" in domain or "/" in domain:
        return None
    if any(ch.isspace() for ch in domain):
        return None
    return domain


async def fetch_icon(
    client: httpx.AsyncClient,
    uri: str,
    config: ResolverConfig = DEFAULT_CONFIG,
):
    """Fetch and classify one icon URI.

    Returns:
        (media_type, bytes) or None
    """
    response = await get_and_follow(client, uri, config)
    if response is None:
        return None
    return classify(
        response.status_code,
        response.headers.get("content-type"),
        response.body,
    )


async def fetch_candidate(
    client: httpx.AsyncClient,
    index: int,
    uri: str,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[FetchOutcome]:
    classified = await fetch_icon(client, uri, config)
    if classified is None:
        return None
    media_type, content = classified
    return FetchOutcome(index=index, content=content, media_type=media_type)


def select_best(candidates: list[Candidate]) -> Optional[Candidate]:
    """Lowest-ranked filled candidate; ties go to the earliest one."""
    filled = [c for c in candidates if c.is_filled]
    if not filled:
        return None
    # min() keeps the first of equal keys
    return min(filled, key=lambda c: c.priority_rank)


async def resolve_icon(
    domain: str,
    client: Optional[httpx.AsyncClient] = None,
    config: Optional[ResolverConfig] = None,
) -> Optional[IconResult]:
    """Find the best icon for a domain.

    Args:
        domain: Bare hostname, e.g. ``example.com``
        client: HTTP client to use (defaults to the shared one)
        config: Resolver tunables

    Returns:
        IconResult, or None if no icon could be found
    """
    config = config or DEFAULT_CONFIG
    host = normalize_domain(domain)
    if host is None:
        console.print(f"[dim]Not a bare domain: {domain!r}[/dim]")
        return None

    client = client or await get_client(config)

    root = await fetch_root(client, host, config)
    if root is None:
        console.print(f"[dim]No HTML root page for {host}[/dim]")
        return None

    candidates = []
    for candidate in extract_candidates(root.body, config.priority):
        candidate.resolved_uri = resolve_uri(candidate.source_path, root.final_uri)
        if candidate.resolved_uri is not None:
            candidates.append(candidate)

    # Each task only reports back; candidates are updated after the join
    results = await asyncio.gather(
        *[
            fetch_candidate(client, index, candidate.resolved_uri, config)
            for index, candidate in enumerate(candidates)
        ],
        return_exceptions=True,
    )

    for result in results:
        if isinstance(result, Exception):
            console.print(f"[red]Icon fetch error for {host}: {result!r}[/red]")
            continue
        if result is None:
            continue
        candidate = candidates[result.index]
        candidate.icon_bytes = result.content
        candidate.media_type = result.media_type

    if not any(c.is_filled for c in candidates):
        scheme, origin_host = origin_of(root.final_uri) or ("https", host)
        fallback_uri = f"{scheme}://{origin_host}/favicon.ico"
        classified = await fetch_icon(client, fallback_uri, config)
        if classified is None:
            console.print(f"[dim]No icon found for {host}[/dim]")
            return None
        media_type, content = classified
        candidates.append(Candidate(
            source_path="/favicon.ico",
            priority_rank=config.priority.fallback_rank,
            resolved_uri=fallback_uri,
            icon_bytes=content,
            media_type=media_type,
        ))

    best = select_best(candidates)
    return IconResult(uri=best.resolved_uri, content=best.icon_bytes, media_type=best.media_type)


async def resolve_icons(
    domains: list[str],
    max_concurrent: int = 10,
    client: Optional[httpx.AsyncClient] = None,
    config: Optional[ResolverConfig] = None,
) -> dict[str, Optional[IconResult]]:
    """Resolve icons for several domains with bounded concurrency.

    Returns:
        Dict mapping each domain to its IconResult (or None)
    """
    semaphore = asyncio.Semaphore(max_concurrent)

    async def resolve_with_semaphore(domain: str) -> tuple[str, Optional[IconResult]]:
        async with semaphore:
            return domain, await resolve_icon(domain, client=client, config=config)

    results: dict[str, Optional[IconResult]] = {}
    for coro in asyncio.as_completed([resolve_with_semaphore(d) for d in domains]):
        domain, icon = await coro
        results[domain] = icon
    return results
