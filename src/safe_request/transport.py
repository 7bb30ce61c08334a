"""Thin aiohttp adapter producing responses a SafeCaller can consume.

The adapter adds no policy of its own: no retries, no timeouts beyond what the
caller's session carries. Non-2xx responses raise aiohttp's
``ClientResponseError`` so the status reaches the classifier.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
from typing import Any, Generic, TypeVar

from aiohttp import ClientSession, ContentTypeError
from yarl import URL

TData = TypeVar("TData")


@dataclass(frozen=True)
class HttpResponse(Generic[TData]):
    """Decoded response of one request."""

    status: int
    url: str
    data: TData
    headers: Mapping[str, str] = field(default_factory=dict)


async def request_json(
    session: ClientSession,
    method: str,
    url: str | URL,
    **kwargs: Any,
) -> HttpResponse[Any]:
    """Perform ``method url`` on ``session`` and decode the JSON body.

    Bodies that are not JSON are returned as text.

    Raises:
        aiohttp.ClientResponseError: the server answered with a non-2xx status.
        aiohttp.ClientError: connection-level failures.
    """
    async with session.request(method.upper(), url, **kwargs) as response:
        response.raise_for_status()
        try:
            data: Any = await response.json()
        except (ContentTypeError, json.JSONDecodeError):
            data = await response.text()
        return HttpResponse(
            status=response.status,
            url=str(response.url),
            data=data,
            headers=dict(response.headers),
        )


async def get_json(
    session: ClientSession, url: str | URL, **kwargs: Any
) -> HttpResponse[Any]:
    return await request_json(session, "GET", url, **kwargs)


__all__ = ["HttpResponse", "request_json", "get_json"]
