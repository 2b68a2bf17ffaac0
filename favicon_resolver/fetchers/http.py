"""HTTP probing with manual redirect following and scheme fallback.

The transport never follows redirects on its own: ``follow_redirects``
walks at most ``max_redirects`` hops, accepting only 301, 302 and 307
with a Location header. Transport errors (DNS, connect, TLS, timeouts)
become ``None`` instead of exceptions.
"""

import asyncio
from typing import Optional

import httpx
from rich.console import Console

from favicon_resolver.config import DEFAULT_CONFIG, ResolverConfig
from favicon_resolver.extractors.links import resolve_uri
from favicon_resolver.models import ResponseEnvelope

console = Console()

REDIRECT_CODES = frozenset({301, 302, 307})

# Shared clients for connection pooling, keyed by (timeout, connect_timeout)
_clients: dict[tuple[float, float], httpx.AsyncClient] = {}
_client_loop: Optional[asyncio.AbstractEventLoop] = None


def browser_headers(config: ResolverConfig = DEFAULT_CONFIG) -> dict[str, str]:
    """Headers that make the request look like a desktop browser.

    Some sites block requests without them.
    """
    return {
        "User-Agent": config.user_agent,
        "Accept-Language": "en-US,en;q=0.8",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Accept": "image/webp,image/apng,image/*,*/*;q=0.8",
    }


def build_client(config: ResolverConfig = DEFAULT_CONFIG, **kwargs) -> httpx.AsyncClient:
    """Create a client with redirects disabled (gzip/deflate are on by default).

    Extra keyword arguments go to ``httpx.AsyncClient``, e.g. ``transport``.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout),
        follow_redirects=False,
        **kwargs,
    )


async def get_client(config: ResolverConfig = DEFAULT_CONFIG) -> httpx.AsyncClient:
    """Get or create the shared HTTP client for the running loop and timeouts.

    Pooled connections belong to the loop that opened them, so clients
    created under an earlier loop are dropped, never reused.
    """
    global _client_loop
    loop = asyncio.get_running_loop()
    if _client_loop is not loop:
        _clients.clear()
        _client_loop = loop

    key = (config.timeout, config.connect_timeout)
    client = _clients.get(key)
    if client is None or client.is_closed:
        client = build_client(config)
        _clients[key] = client
    return client


async def close_client():
    """Close the shared HTTP clients."""
    global _client_loop
    clients = list(_clients.values())
    _clients.clear()
    _client_loop = None
    for client in clients:
        await client.aclose()


async def probe(
    client: httpx.AsyncClient,
    uri: str,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[ResponseEnvelope]:
    """Issue a single GET without following redirects.

    Returns:
        The response, or None on any transport-level failure
    """
    try:
        response = await client.get(
            uri,
            headers=browser_headers(config),
            follow_redirects=False,
        )
    except httpx.TimeoutException:
        console.print(f"[dim]Timeout: {uri}[/dim]")
        return None
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        console.print(f"[dim]Request failed for {uri}: {type(e).__name__}[/dim]")
        return None

    return ResponseEnvelope(
        status_code=response.status_code,
        headers={name.lower(): value for name, value in response.headers.items()},
        body=response.content,
        final_uri=str(response.url),
    )


async def follow_redirects(
    client: httpx.AsyncClient,
    response: ResponseEnvelope,
    max_follow: int,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[ResponseEnvelope]:
    """Follow redirects from ``response`` for at most ``max_follow`` hops.

    Relative Location values are joined onto ``scheme://host/`` of the
    redirecting response, not merged with its path.

    Returns:
        The first 2xx response, or None if the chain breaks, leads to a
        non-redirect error status, or needs more than ``max_follow`` hops
    """
    follows = 0
    while not response.is_success:
        if response.status_code not in REDIRECT_CODES:
            return None

        location = response.location
        if location is None:
            return None

        if follows >= max_follow:
            console.print(f"[dim]Too many redirects from {response.final_uri}[/dim]")
            return None

        target = resolve_uri(location, response.final_uri)
        if target is None:
            return None

        next_response = await probe(client, target, config)
        if next_response is None:
            return None

        response = next_response
        follows += 1

    return response


async def get_and_follow(
    client: httpx.AsyncClient,
    uri: str,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[ResponseEnvelope]:
    """Probe ``uri`` and follow redirects up to the configured bound."""
    response = await probe(client, uri, config)
    if response is None:
        return None
    return await follow_redirects(client, response, config.max_redirects, config)


async def fetch_root(
    client: httpx.AsyncClient,
    domain: str,
    config: ResolverConfig = DEFAULT_CONFIG,
) -> Optional[ResponseEnvelope]:
    """Fetch a domain's root page, trying http first, then https.

    Returns:
        The final response if it is a 2xx ``text/html`` page, else None
    """
    response = await get_and_follow(client, f"http://{domain}", config)
    if response is None or not response.is_success:
        response = await get_and_follow(client, f"https://{domain}", config)

    if response is None or not response.is_success:
        return None

    if response.content_type != "text/html":
        console.print(
            f"[dim]Root of {domain} is {response.content_type or 'untyped'}, not HTML[/dim]"
        )
        return None

    return response
