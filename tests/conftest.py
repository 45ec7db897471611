import json
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from sixpack_client.client import AsyncClient, Client
from sixpack_client.transport import AsyncTransport, Transport

BASE_URL = "https://sixpack.test"

OK_BODY = json.dumps({
    "status": "OK",
    "client_id": "123456",
    "alternative": {"name": "my-alternative"},
    "experiment": {"version": 1, "name": "my-test"},
})


def query(call: Dict[str, Any]) -> Dict[str, List[str]]:
    """Group the recorded query pairs of a call by key, order preserved."""
    grouped = defaultdict(list)
    for key, value in call["params"]:
        grouped[key].append(value)
    return dict(grouped)


class FakeResponse:
    """Stand-in for ``requests.Response`` used as a context manager."""

    def __init__(self, status_code: int = 200, text: str = OK_BODY):
        self.status_code = status_code
        self.text = text
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True


class FakeSession:
    """Records GETs and answers through ``responder(url, params)``."""

    def __init__(self, responder: Optional[Callable] = None):
        self.responder = responder or (lambda url, params: FakeResponse())
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[FakeResponse] = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        params = list(params or [])
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        result = self.responder(url, params)
        if isinstance(result, Exception):
            raise result
        self.responses.append(result)
        return result

    def close(self):
        self.closed = True


class FakeAsyncResponse:
    def __init__(self, status: int = 200, body: Union[str, bytes] = OK_BODY):
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self.released = False

    async def read(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.released = True


class FakeAsyncSession:
    def __init__(self, responder: Optional[Callable] = None):
        self.responder = responder or (lambda url, params: FakeAsyncResponse())
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[FakeAsyncResponse] = []
        self.closed = False

    def get(self, url, params=None):
        params = list(params or [])
        self.calls.append({"url": url, "params": params})
        result = self.responder(url, params)
        if isinstance(result, Exception):
            raise result
        self.responses.append(result)
        return result

    async def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return Client(BASE_URL, transport=Transport(session=session))


@pytest.fixture
def async_session():
    return FakeAsyncSession()


@pytest.fixture
def async_client(async_session):
    return AsyncClient(BASE_URL, transport=AsyncTransport(session=async_session))
