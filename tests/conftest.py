"""Shared test fixtures and configuration."""

import asyncio

import httpx
import pytest

from fakes import run_with_client
from favicon_resolver.resolver import resolve_icon


@pytest.fixture
def resolve():
    """Resolve a domain against a fake site, recording every request."""
    def _resolve(handler, domain: str = "example.com", config=None):
        requests: list[httpx.Request] = []

        async def recording(request: httpx.Request):
            requests.append(request)
            result = handler(request)
            if asyncio.iscoroutine(result):
                result = await result
            return result

        icon = run_with_client(
            recording,
            lambda client: resolve_icon(domain, client=client, config=config),
        )
        return icon, requests
    return _resolve
