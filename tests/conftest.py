"""Shared pytest fixtures for the Hyperwallet client tests."""

from __future__ import annotations

import json
import sys
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import pytest
import requests

# Allow running the suite from a checkout without installing the package
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from hyperwallet import Hyperwallet  # noqa: E402
from hyperwallet.core.client import ApiClient  # noqa: E402


class InlineExecutor(Executor):
    """Runs submitted work immediately so results are observable synchronously."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs):
        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


def make_response(
    status: int, body: Any = None, *, raw: Optional[bytes] = None
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


@pytest.fixture
def executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def session() -> MagicMock:
    fake = MagicMock(spec=requests.Session)
    fake.request.return_value = make_response(200, {})
    return fake


@pytest.fixture
def respond(session: MagicMock) -> Callable[..., requests.Response]:
    """Stub the next response returned by the fake session."""

    def _respond(status: int, body: Any = None, *, raw: Optional[bytes] = None):
        response = make_response(status, body, raw=raw)
        session.request.return_value = response
        return response

    return _respond


@pytest.fixture
def api_client(session: MagicMock, executor: InlineExecutor) -> ApiClient:
    return ApiClient(
        "test-username",
        "test-password",
        "https://api.example.com",
        session=session,
        executor=executor,
    )


@pytest.fixture
def client(session: MagicMock, executor: InlineExecutor) -> Hyperwallet:
    return Hyperwallet(
        "test-username",
        "test-password",
        server="https://api.example.com",
        session=session,
        executor=executor,
    )


@pytest.fixture
def make_client(session: MagicMock, executor: InlineExecutor):
    def _make(**kwargs: Any) -> Hyperwallet:
        kwargs.setdefault("server", "https://api.example.com")
        return Hyperwallet(
            "test-username",
            "test-password",
            session=session,
            executor=executor,
            **kwargs,
        )

    return _make


@pytest.fixture
def last_request(session: MagicMock) -> Callable[[], dict]:
    """Return method, url, keyword arguments and decoded JSON body of the last request."""

    def _last() -> dict:
        args, kwargs = session.request.call_args
        request = {"method": args[0], "url": args[1], **kwargs}
        if "data" in kwargs:
            request["json"] = json.loads(kwargs["data"])
        return request

    return _last
