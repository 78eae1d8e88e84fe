"""
HTTP request executor for the Hyperwallet REST API.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional

import requests
from requests.auth import HTTPBasicAuth

from .config import DEFAULT_SERVER

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResult",
    "Callback",
    "Transform",
    "SDK_VERSION",
]

logger = logging.getLogger(__name__)

SDK_VERSION = "1.0.0"
API_PREFIX = "/rest/v3"
COMMUNICATION_ERROR = "COMMUNICATION_ERROR"

_METHODS = ("GET", "POST", "PUT")


class ApiError(Exception):
    """
    A transport failure or a non-2xx answer from the API.

    ``errors`` is the list of ``{"message", "code", ...}`` entries reported by
    the server, or a single ``COMMUNICATION_ERROR`` entry when nothing
    structured came back.
    """

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        *,
        status: Optional[int] = None,
        response: Optional[requests.Response] = None,
    ) -> None:
        self.errors = errors
        self.status = status
        self.response = response
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.errors and isinstance(self.errors[0], Mapping):
            return str(self.errors[0].get("message", ""))
        return ""

    @property
    def codes(self) -> List[str]:
        return [
            str(entry.get("code"))
            for entry in self.errors
            if isinstance(entry, Mapping) and entry.get("code")
        ]

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, errors={self.errors!r})"


class ApiResult(NamedTuple):
    error: Optional[ApiError]
    data: Any
    response: Optional[requests.Response]


Callback = Callable[[Optional[ApiError], Any, Optional[requests.Response]], None]
Transform = Callable[[ApiResult], ApiResult]


def _parse_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    """
    Performs one authenticated JSON request per call and normalizes the outcome.

    Requests run on ``executor`` (a private thread pool unless one is
    injected). Each call returns a :class:`~concurrent.futures.Future` that
    resolves to an :class:`ApiResult`; the optional callback receives the same
    three values exactly once.
    """

    def __init__(
        self,
        username: str,
        password: str,
        server: str = DEFAULT_SERVER,
        *,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.server = server.rstrip("/")
        self.base_url = (
            self.server if self.server.endswith(API_PREFIX) else self.server + API_PREFIX
        )
        self._auth = HTTPBasicAuth(username, password)
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._owns_executor = executor is None
        self._executor = executor
        self._closed = False
        self._lock = threading.Lock()

    @property
    def default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"Hyperwallet Python SDK v{SDK_VERSION}",
        }

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def do_get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> "Future[ApiResult]":
        return self.execute("GET", path, params, None, callback)

    def do_post(
        self,
        path: str,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        callback: Optional[Callback] = None,
    ) -> "Future[ApiResult]":
        return self.execute("POST", path, data, headers, callback)

    def do_put(
        self,
        path: str,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        callback: Optional[Callback] = None,
    ) -> "Future[ApiResult]":
        return self.execute("PUT", path, data, headers, callback)

    def execute(
        self,
        method: str,
        path: str,
        query_or_body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        callback: Optional[Callback] = None,
        *,
        transform: Optional[Transform] = None,
    ) -> "Future[ApiResult]":
        """
        Issue ``method`` against ``path`` and deliver the normalized result.

        For GET, ``query_or_body`` is the query mapping; for POST and PUT it is
        the JSON body. An unsupported verb, a body that cannot be encoded as
        JSON, or a closed client raises here; every network or
        API failure is delivered as the ``error`` of the result. ``transform``
        rewrites the result before it reaches the callback and the future.
        """
        verb = method.upper()
        if verb not in _METHODS:
            raise ValueError(f"Unsupported HTTP method '{method}'")

        request_headers = self.default_headers
        if headers:
            request_headers.update(headers)

        request_kwargs: Dict[str, Any] = {"headers": request_headers}
        if verb == "GET":
            request_kwargs["params"] = dict(query_or_body or {})
        else:
            body = {} if query_or_body is None else query_or_body
            request_kwargs["data"] = json.dumps(body).encode("utf-8")

        url = self.url_for(path)
        return self._get_executor().submit(
            self._run, verb, url, request_kwargs, callback, transform
        )

    def _run(
        self,
        method: str,
        url: str,
        request_kwargs: Dict[str, Any],
        callback: Optional[Callback],
        transform: Optional[Transform] = None,
    ) -> ApiResult:
        result = self._send(method, url, request_kwargs)
        if transform is not None:
            result = transform(result)
        if callback is not None:
            try:
                callback(*result)
            except Exception:  # noqa: BLE001
                logger.exception("Callback for %s %s raised", method, url)
        return result

    def _send(
        self, method: str, url: str, request_kwargs: Dict[str, Any]
    ) -> ApiResult:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method, url, auth=self._auth, **request_kwargs
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return ApiResult(self._communication_error(), None, None)

        data = _parse_body(response)
        if 200 <= response.status_code < 300:
            return ApiResult(None, data, response)

        logger.warning("%s %s responded with %s", method, url, response.status_code)
        errors = data.get("errors") if isinstance(data, Mapping) else None
        if isinstance(errors, list) and errors:
            error = ApiError(errors, status=response.status_code, response=response)
        else:
            error = self._communication_error(response)
        return ApiResult(error, data, response)

    def _communication_error(
        self, response: Optional[requests.Response] = None
    ) -> ApiError:
        return ApiError(
            [
                {
                    "message": f"Could not communicate with {self.server}",
                    "code": COMMUNICATION_ERROR,
                }
            ],
            status=None if response is None else response.status_code,
            response=response,
        )

    def _get_executor(self) -> Executor:
        with self._lock:
            if self._closed:
                raise RuntimeError("ApiClient is closed")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(thread_name_prefix="hyperwallet")
            return self._executor

    def close(self) -> None:
        executor = None
        with self._lock:
            self._closed = True
            if self._owns_executor:
                executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
