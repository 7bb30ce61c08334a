"""Factories for transport failures and operations used across tests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from aiohttp import ClientResponseError, RequestInfo
from multidict import CIMultiDict, CIMultiDictProxy
from yarl import URL

MOCK_URL = URL("https://mock.example.test/resource")


@dataclass(frozen=True)
class FakeResponse:
    data: Any
    status: int = 200


def client_response_error(status: int | None) -> ClientResponseError:
    request_info = RequestInfo(
        MOCK_URL, "GET", CIMultiDictProxy(CIMultiDict()), MOCK_URL
    )
    return ClientResponseError(
        request_info,
        (),
        status=status,  # type: ignore[arg-type]
        message="mock failure",
    )


def succeeding(payload: Any) -> Callable[[], Awaitable[FakeResponse]]:
    async def operation() -> FakeResponse:
        return FakeResponse(data=payload)

    return operation


def failing(error: BaseException) -> Callable[[], Awaitable[FakeResponse]]:
    async def operation() -> FakeResponse:
        raise error

    return operation


def failing_with_status(status: int | None) -> Callable[[], Awaitable[FakeResponse]]:
    return failing(client_response_error(status))
