"""
HTTP Helpers
============

Shared request plumbing for the market data, Canva and GitHub tools.

Every public fetch function accepts an optional `httpx.AsyncClient`. When
none is given a short-lived client is opened for the single request, the
same way the GitHub tools have always done it. Tests pass a client built on
`httpx.MockTransport` instead.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx

from src.utils.config import get_config


@asynccontextmanager
async def client_scope(client: httpx.AsyncClient | None = None) -> AsyncIterator[httpx.AsyncClient]:
    """
    Yield the given client, or a temporary one closed on exit.

    Args:
        client: An existing client to reuse (left open)
    """
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(timeout=get_config().http_timeout_seconds) as temporary:
        yield temporary


async def request_json(
    method: str,
    url: str,
    *,
    params: dict | None = None,
    json: Any = None,
    headers: dict | None = None,
    client: httpx.AsyncClient | None = None
) -> Any:
    """
    Perform a request and decode the JSON body.

    Raises:
        httpx.HTTPStatusError: On 4xx/5xx responses
        httpx.HTTPError: On transport failures
        ValueError: If the body is not JSON
    """
    async with client_scope(client) as http:
        response = await http.request(method, url, params=params, json=json, headers=headers)
        response.raise_for_status()
        return response.json()


async def request_text(
    url: str,
    *,
    params: dict | None = None,
    headers: dict | None = None,
    client: httpx.AsyncClient | None = None
) -> str:
    """GET a URL and return the body as text."""
    async with client_scope(client) as http:
        response = await http.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.text
