from __future__ import annotations

"""Shared HTTP client and a deadline-bound GET.

One pooled ``httpx.AsyncClient`` is created lazily per process and reused
read-only by every request; a long-running server never tears it down. No
retries: a failed call surfaces immediately to the stage that made it.
"""
from functools import lru_cache

import httpx

from cotacao.core.deadline import Deadline
from cotacao.core.errors import RequestBuildError, ResponseReadError, TransportError


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    # Timeouts are enforced per stage by Deadline, not by the transport.
    return httpx.AsyncClient(timeout=None)


async def get(
    url: str, deadline: Deadline, *, client: httpx.AsyncClient | None = None
) -> httpx.Response:
    """GET ``url`` and read the full body before ``deadline`` expires.

    Raises RequestBuildError for an unusable URL, DeadlineExceeded when the
    deadline fires, TransportError for connection level failures and
    ResponseReadError when the body cannot be read. The status is not checked.
    """
    client = client or get_http_client()
    try:
        request = client.build_request("GET", url)
    except (httpx.InvalidURL, ValueError, TypeError) as e:
        raise RequestBuildError(f"invalid request for {url}: {e}") from e

    async def _send() -> httpx.Response:
        response = await client.send(request, stream=True)
        try:
            await response.aread()
        except httpx.HTTPError as e:
            raise ResponseReadError(f"failed to read response from {url}: {e}") from e
        finally:
            await response.aclose()
        return response

    try:
        return await deadline.run(_send())
    except httpx.HTTPError as e:
        raise TransportError(f"GET {url} failed: {e}") from e
