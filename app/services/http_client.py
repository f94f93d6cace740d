from __future__ import annotations

"""Lightweight async HTTP helper.

Wraps httpx so providers only deal with two failure shapes: ``HttpError`` for
anything the remote side got wrong and ``ConnectivityError`` when the remote
side could not be reached at all. No retries: a failed fetch is terminal and
the user triggers the next attempt.
"""
from typing import Any, Dict, Optional

import httpx


class HttpError(Exception):
    pass


class ConnectivityError(HttpError):
    pass


async def get_json(
    url: str,
    *,
    timeout: float = 5.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=timeout)
    try:
        resp = await client.get(url, timeout=timeout)
    except (httpx.ConnectError, httpx.ConnectTimeout) as e:
        raise ConnectivityError(f"Could not reach {_redact(url)}: {e}") from e
    except httpx.HTTPError as e:
        raise HttpError(f"Request to {_redact(url)} failed: {e}") from e
    finally:
        if owns_client:
            await client.aclose()
    if resp.status_code >= 400:
        raise HttpError(f"HTTP {resp.status_code} for {_redact(url)}")
    try:
        data = resp.json()
    except ValueError as e:  # JSON decode
        raise HttpError(f"Invalid JSON from {_redact(url)}") from e
    if not isinstance(data, dict):
        raise HttpError(f"Unexpected payload from {_redact(url)}")
    return data


def _redact(url: str) -> str:
    # api keys travel in the path; keep them out of logs and messages
    parts = url.split("/")
    return "/".join("***" if len(p) >= 20 and p.isalnum() else p for p in parts)
