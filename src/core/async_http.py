"""Async HTTP utilities using httpx."""

from __future__ import annotations

import asyncio
import httpx
from typing import Optional
from config import settings


class AsyncHttpError(RuntimeError):
    pass


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def fetch(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    retries: int = 0,
    backoff: float = 0.5,
) -> str:
    """GET ``url`` and return the decoded body.

    ``retries`` defaults to 0: the chart treats an unreachable source as fatal.
    """
    close_client = False
    if client is None:
        headers = {"User-Agent": settings.DEFAULT_USER_AGENT}
        client = httpx.AsyncClient(headers=headers, timeout=settings.DEFAULT_TIMEOUT)
        close_client = True
    try:
        attempt = 0
        while True:
            attempt += 1
            try:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.text
            except (httpx.TimeoutException, httpx.HTTPError) as e:
                if attempt > retries:
                    raise AsyncHttpError(f"Failed after {attempt} attempt(s): {e}") from e
                await asyncio.sleep(backoff * (2 ** (attempt - 1)))
    finally:
        if close_client:
            await client.aclose()
