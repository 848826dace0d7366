import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from handlers.async_comm import AsyncCommError, AsyncCommInvalidContentTypeError, AsyncCommTimeoutError, AsyncHttp


def test_construction_does_not_open_session() -> None:
    http = AsyncHttp()

    assert http.is_open is False


@pytest.mark.asyncio
async def test_session_property_logs_session_initialized(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="I18nEngine")
    http = AsyncHttp()

    _ = http.session

    assert http.is_open is True
    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)
    await http.close()


@pytest.mark.asyncio
async def test_context_enter_does_not_log_already_initialized(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="I18nEngine")
    http = AsyncHttp()
    http.initialize_session()
    caplog.clear()

    async with http:
        pass

    assert not any("session already initialized" in rec.message for rec in caplog.records)
    assert http.is_open is False


@pytest.mark.asyncio
async def test_reenter_after_close_logs_session_initialized(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="I18nEngine")
    http = AsyncHttp()

    async with http:
        pass

    caplog.clear()

    async with http:
        pass

    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)


def _response(body: bytes, content_type: str) -> Any:
    resp = MagicMock()
    resp.headers = {"Content-Type": content_type}
    resp.read = AsyncMock(return_value=body)
    return resp


@pytest.mark.asyncio
async def test_decode_response_json() -> None:
    http = AsyncHttp()
    data = await http.decode_response(_response(b'{"a": 1}', "application/json; charset=utf-8"))
    assert data == {"a": 1}


@pytest.mark.asyncio
async def test_decode_response_empty_body() -> None:
    assert await AsyncHttp().decode_response(_response(b"", "application/json")) is None


@pytest.mark.asyncio
async def test_decode_response_invalid_json_raises() -> None:
    with pytest.raises(AsyncCommInvalidContentTypeError):
        await AsyncHttp().decode_response(_response(b"{oops", "application/json"))


@pytest.mark.asyncio
async def test_decode_response_unknown_type_raises() -> None:
    with pytest.raises(AsyncCommInvalidContentTypeError):
        await AsyncHttp().decode_response(_response(b"\x00", "application/octet-stream"))


def test_build_timeout() -> None:
    http = AsyncHttp(default_timeout=10.0)

    assert http._build_timeout(None).total == 10.0
    assert http._build_timeout(None).connect == 1.0
    assert http._build_timeout(0.5).connect is None
    assert http._build_timeout(0).total is None


class _FailingSession:
    def __init__(self, err: BaseException) -> None:
        self.err = err
        self.closed = False

    def request(self, **kwargs: Any) -> Any:
        _ = kwargs
        raise self.err


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("err", "expected", "status"),
    [
        (TimeoutError(), AsyncCommTimeoutError, None),
        (ConnectionResetError(), AsyncCommError, None),
        (aiohttp.ClientResponseError(MagicMock(), (), status=429), AsyncCommError, 429),
        (aiohttp.ClientConnectionError("refused"), AsyncCommError, None),
    ],
)
async def test_request_maps_transport_errors(
    monkeypatch: pytest.MonkeyPatch, err: BaseException, expected: type[AsyncCommError], status: int | None
) -> None:
    http = AsyncHttp()
    monkeypatch.setattr(AsyncHttp, "session", property(lambda self: _FailingSession(err)))

    with pytest.raises(expected) as exc_info:
        await http.get(url="https://example.invalid/", params={"q": "x"})
    assert exc_info.value.status == status
