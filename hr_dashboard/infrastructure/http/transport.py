"""
HTTP transport for the HR backend.

Builds authenticated requests, then normalises whatever body comes back (JSON
document, bare confirmation string, or nothing) into a value, or raises ApiError.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable

import requests

from hr_dashboard.infrastructure.storage.session_store import TOKEN_KEY, SessionStore
from hr_dashboard.utils.config import api_base_url, api_timeout
from hr_dashboard.utils.logger import get_logger

logger = get_logger()

METHODS = ("GET", "POST", "PUT", "DELETE")
DEFAULT_ERROR_MESSAGE = "An error occurred"
UNAUTHORIZED_MESSAGE = "Unauthorized"


class ApiError(Exception):
    """Classified request failure. Callers branch on `status`; 0 means no response."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, message={self.message!r})"


class UnauthorizedError(ApiError):
    """Raised on HTTP 401, after the unauthorized handler has torn the session down."""

    def __init__(self) -> None:
        super().__init__(401, UNAUTHORIZED_MESSAGE)


@dataclass(frozen=True)
class JsonBody:
    value: Any


@dataclass(frozen=True)
class TextBody:
    text: str

    @property
    def value(self) -> str:
        return self.text


def parse_body(text: str) -> JsonBody | TextBody:
    """Empty -> JsonBody({}); valid JSON -> JsonBody(parsed); anything else -> TextBody."""
    if not text:
        return JsonBody({})
    try:
        return JsonBody(json.loads(text))
    except (ValueError, RecursionError):
        return TextBody(text)


def error_message(text: str) -> str:
    """Pick the message for a failed response: JSON `message`, raw text, or a fallback."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        data = None
    if isinstance(data, dict):
        msg = data.get("message")
        if isinstance(msg, str) and msg:
            return msg
    return text or DEFAULT_ERROR_MESSAGE


class Transport:
    """
    Executes one logical call against the backend.

    The bearer token is read from the session store on every call; the transport
    never writes it. On 401 the registered `unauthorized_handler` runs before
    UnauthorizedError is raised, so whoever owns navigation and session state
    reacts in one place. With no handler registered the persisted session is
    still cleared.
    """

    def __init__(
        self,
        store: SessionStore,
        base_url: str | None = None,
        timeout: float | None = None,
        unauthorized_handler: Callable[[], None] | None = None,
    ) -> None:
        self._store = store
        self._base_url = (base_url or api_base_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else api_timeout()
        self.unauthorized_handler = unauthorized_handler

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, json_body: bool = True) -> dict[str, str]:
        headers: dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        token = self._store.get(TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _url(self, path: str) -> str:
        if not isinstance(path, str) or not path.startswith("/"):
            raise ValueError(f"API path must be a non-empty server-relative path, got {path!r}")
        return f"{self._base_url}{path}"

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, path)
        try:
            return requests.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed before a response: %s", method, path, e)
            raise ApiError(0, f"Network error: {e}") from e

    def _handle_response(self, method: str, path: str, response: requests.Response) -> JsonBody | TextBody:
        text = response.text or ""
        status = response.status_code
        if 200 <= status < 300:
            return parse_body(text)

        if status == 401:
            logger.warning("%s %s returned 401; ending session", method, path)
            if self.unauthorized_handler is not None:
                self.unauthorized_handler()
            else:
                self._store.clear_session()
            raise UnauthorizedError()

        message = error_message(text)
        logger.warning("%s %s failed with %s: %s", method, path, status, message)
        raise ApiError(status, message)

    def request(self, method: str, path: str, body: Any = None) -> JsonBody | TextBody:
        """Issue the call and return the tagged body."""
        method = (method or "").upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method!r}")
        kwargs: dict[str, Any] = {"headers": self._headers()}
        if body is not None:
            kwargs["data"] = json.dumps(body)
        response = self._send(method, path, **kwargs)
        return self._handle_response(method, path, response)

    def execute(self, method: str, path: str, body: Any = None) -> Any:
        """Issue the call and return the parsed JSON value or the raw text."""
        return self.request(method, path, body).value

    def get(self, path: str) -> Any:
        return self.execute("GET", path)

    def post(self, path: str, body: Any = None) -> Any:
        return self.execute("POST", path, body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.execute("PUT", path, body)

    def delete(self, path: str) -> Any:
        return self.execute("DELETE", path)

    def upload(
        self,
        path: str,
        files: dict[str, Any],
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Multipart POST. The HTTP library sets the multipart content type."""
        kwargs: dict[str, Any] = {"headers": self._headers(json_body=False), "files": files}
        if data:
            kwargs["data"] = data
        response = self._send("POST", path, **kwargs)
        return self._handle_response("POST", path, response).value
