from __future__ import annotations

from aiohttp import ClientResponseError, ClientSession, web
from aiohttp.test_utils import TestServer
import pytest
from tests.stubs.recording_sink import RecordingSink

from safe_request.caller import SafeCaller
from safe_request.outcome import ExpectedFailure, Success, UnexpectedFailure
from safe_request.transport import get_json, request_json
from safe_request.utilities.logger_manager import LoggerManager


async def _status(request: web.Request) -> web.Response:
    code = int(request.match_info["code"])
    if code < 400:
        return web.json_response({"message": "ok", "code": code}, status=code)
    return web.json_response({"error": f"status {code}"}, status=code)


async def _plain(request: web.Request) -> web.Response:
    return web.Response(text="pong")


async def _echo(request: web.Request) -> web.Response:
    return web.json_response(await request.json(), status=201)


def _app() -> web.Application:
    app = web.Application()
    app.router.add_get("/status/{code}", _status)
    app.router.add_get("/plain", _plain)
    app.router.add_post("/echo", _echo)
    return app


@pytest.mark.asyncio
async def test_get_json_decodes_body() -> None:
    async with TestServer(_app()) as server, ClientSession() as session:
        response = await get_json(session, server.make_url("/status/200"))
    assert response.status == 200
    assert response.data == {"message": "ok", "code": 200}
    assert response.url.endswith("/status/200")


@pytest.mark.asyncio
async def test_non_json_body_falls_back_to_text() -> None:
    async with TestServer(_app()) as server, ClientSession() as session:
        response = await get_json(session, server.make_url("/plain"))
    assert response.data == "pong"


@pytest.mark.asyncio
async def test_request_json_posts_payload() -> None:
    async with TestServer(_app()) as server, ClientSession() as session:
        response = await request_json(
            session, "post", server.make_url("/echo"), json={"a": 1}
        )
    assert response.status == 201
    assert response.data == {"a": 1}


@pytest.mark.asyncio
async def test_error_status_raises_client_response_error() -> None:
    async with TestServer(_app()) as server, ClientSession() as session:
        with pytest.raises(ClientResponseError) as exc:
            await get_json(session, server.make_url("/status/404"))
    assert exc.value.status == 404


@pytest.mark.asyncio
async def test_safe_caller_over_real_transport(logger_manager: LoggerManager) -> None:
    sink = RecordingSink()
    caller = SafeCaller(sink, logger_manager=logger_manager)
    expected = {403: "Not authorized", 404: "Not Found"}

    async with TestServer(_app()) as server, ClientSession() as session:

        def fetch(code: int):
            return lambda: get_json(session, server.make_url(f"/status/{code}"))

        ok = await caller.execute(fetch(200), expected)
        not_found = await caller.execute(fetch(404), expected)
        invalid = await caller.execute(fetch(422), expected)

    assert ok == Success(data={"message": "ok", "code": 200})
    assert not_found == ExpectedFailure(message="Not Found")
    assert invalid == UnexpectedFailure(message="An unexpected error occurred")
    assert sink.count == 1
    assert isinstance(sink.failures[0], ClientResponseError)
    assert sink.failures[0].status == 422
