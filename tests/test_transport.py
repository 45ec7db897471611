"""Tests for the HTTP transports: status handling, decoding and fallbacks."""

import asyncio

import aiohttp
import pytest
import requests

from sixpack_client.core.config import Settings
from sixpack_client.core.exceptions import DecodeError, ServerError, TransportError
from sixpack_client.options import RequestParameters
from sixpack_client.transport import AsyncTransport, Transport, resolve_url

from conftest import BASE_URL, FakeAsyncResponse, FakeAsyncSession, FakeResponse, FakeSession


def _params():
    params = RequestParameters()
    params.set("client_id", "abc")
    params.replace_all("alternatives", ["a", "b"])
    return params


class TestResolveUrl:
    def test_endpoint_joined_to_root(self):
        assert resolve_url("https://sixpack.test", "/participate") == "https://sixpack.test/participate"

    def test_absolute_endpoint_replaces_base_path(self):
        assert resolve_url("https://sixpack.test/api/", "/convert") == "https://sixpack.test/convert"


class TestTransport:
    def test_success_uses_service_alternative(self):
        session = FakeSession()
        outcome = Transport(session=session).send(BASE_URL, "/participate", _params(), "a")

        assert outcome.alternative == "my-alternative"
        assert outcome.error is None
        assert outcome.ok
        assert outcome.response.status == "OK"
        assert outcome.response.client_id == "123456"
        assert outcome.response.experiment_name == "my-test"
        assert outcome.response.experiment_version == 1

    def test_request_shape(self):
        session = FakeSession()
        settings = Settings(connect_timeout=0.25, read_timeout=3.0)
        Transport(settings, session=session).send(BASE_URL, "/participate", _params(), "a")

        call = session.calls[0]
        assert call["url"] == "https://sixpack.test/participate"
        assert call["params"] == [("client_id", "abc"), ("alternatives", "a"), ("alternatives", "b")]
        assert call["timeout"] == (0.25, 3.0)

    def test_response_released(self):
        session = FakeSession()
        Transport(session=session).send(BASE_URL, "/participate", _params(), "a")
        assert session.responses[0].closed

    @pytest.mark.parametrize("exc", [
        requests.exceptions.ConnectTimeout("timed out"),
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.ReadTimeout("slow"),
    ])
    def test_transport_failure_falls_back(self, exc):
        session = FakeSession(lambda url, params: exc)
        outcome = Transport(session=session).send(BASE_URL, "/participate", _params(), "b")

        assert outcome.alternative == "b"
        assert outcome.response is None
        assert isinstance(outcome.error, TransportError)
        assert not outcome.ok

    def test_server_error_falls_back(self):
        session = FakeSession(lambda url, params: FakeResponse(500, "Internal Server Error"))
        outcome = Transport(session=session).send(BASE_URL, "/participate", _params(), "a")

        assert outcome.alternative == "a"
        assert isinstance(outcome.error, ServerError)
        assert outcome.error.status_code == 500
        assert session.responses[0].closed

    def test_invalid_json_falls_back(self):
        session = FakeSession(lambda url, params: FakeResponse(200, "<html>oops</html>"))
        outcome = Transport(session=session).send(BASE_URL, "/participate", _params(), "a")

        assert outcome.alternative == "a"
        assert isinstance(outcome.error, DecodeError)
        assert outcome.error.body == "<html>oops</html>"

    def test_missing_alternative_keeps_default(self):
        body = '{"status": "ok", "client_id": "abc"}'
        session = FakeSession(lambda url, params: FakeResponse(200, body))
        outcome = Transport(session=session).send(BASE_URL, "/convert", _params(), "a")

        assert outcome.alternative == "a"
        assert outcome.error is None
        assert outcome.response.status == "ok"

    def test_client_error_body_decoded(self):
        body = '{"status": "failed", "message": "missing arguments"}'
        session = FakeSession(lambda url, params: FakeResponse(400, body))
        outcome = Transport(session=session).send(BASE_URL, "/participate", _params(), "a")

        assert outcome.alternative == "a"
        assert outcome.response.status == "failed"
        assert outcome.response.message == "missing arguments"

    def test_close_leaves_injected_session_open(self):
        session = FakeSession()
        Transport(session=session).close()
        assert not session.closed

    def test_owned_session_has_headers(self):
        with Transport(Settings(user_agent="tests/1.0")) as transport:
            assert transport.session.headers["User-Agent"] == "tests/1.0"


class TestAsyncTransport:
    def test_success(self):
        session = FakeAsyncSession()
        transport = AsyncTransport(session=session)
        outcome = asyncio.run(transport.send(BASE_URL, "/participate", _params(), "a"))

        assert outcome.alternative == "my-alternative"
        assert outcome.error is None
        assert session.calls[0]["url"] == "https://sixpack.test/participate"
        assert session.calls[0]["params"][1:] == [("alternatives", "a"), ("alternatives", "b")]
        assert session.responses[0].released

    @pytest.mark.parametrize("exc", [
        asyncio.TimeoutError(),
        aiohttp.ClientConnectionError("refused"),
    ])
    def test_transport_failure_falls_back(self, exc):
        session = FakeAsyncSession(lambda url, params: exc)
        outcome = asyncio.run(AsyncTransport(session=session).send(BASE_URL, "/participate", _params(), "b"))

        assert outcome.alternative == "b"
        assert isinstance(outcome.error, TransportError)

    def test_server_error_falls_back(self):
        session = FakeAsyncSession(lambda url, params: FakeAsyncResponse(503, "unavailable"))
        outcome = asyncio.run(AsyncTransport(session=session).send(BASE_URL, "/participate", _params(), "a"))

        assert outcome.alternative == "a"
        assert isinstance(outcome.error, ServerError)
        assert outcome.error.status_code == 503

    def test_close_leaves_injected_session_open(self):
        session = FakeAsyncSession()
        asyncio.run(AsyncTransport(session=session).close())
        assert not session.closed

    def test_invalid_json_falls_back(self):
        session = FakeAsyncSession(lambda url, params: FakeAsyncResponse(200, "<html>oops</html>"))
        outcome = asyncio.run(AsyncTransport(session=session).send(BASE_URL, "/participate", _params(), "a"))

        assert outcome.alternative == "a"
        assert outcome.response is None
        assert isinstance(outcome.error, DecodeError)
        assert outcome.error.body == "<html>oops</html>"

    def test_undecodable_body_falls_back(self):
        body = b'{"status": "ok", "client_id": "abc", "x": "\xff\xfe"}'
        session = FakeAsyncSession(lambda url, params: FakeAsyncResponse(200, body))
        outcome = asyncio.run(AsyncTransport(session=session).send(BASE_URL, "/participate", _params(), "a"))

        assert outcome.alternative == "a"
        assert isinstance(outcome.error, DecodeError)
        assert "�" in outcome.error.body
        assert session.responses[0].released

    def test_owned_session_timeouts(self):
        async def build():
            async with AsyncTransport(Settings(connect_timeout=0.25, read_timeout=3.0)) as transport:
                return transport._get_session().timeout

        timeout = asyncio.run(build())
        assert timeout.total is None
        assert timeout.connect == 0.25
        assert timeout.sock_connect == 0.25
        assert timeout.sock_read == 3.0
