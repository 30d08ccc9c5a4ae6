"""
Tests for Transport: headers, body normalisation, error classification, 401 hook.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from hr_dashboard.infrastructure.http.transport import (
    ApiError,
    JsonBody,
    TextBody,
    Transport,
    UnauthorizedError,
    error_message,
    parse_body,
)
from hr_dashboard.infrastructure.storage.session_store import MemorySessionStore

BASE = "https://hr.example.test"
REQUEST = "hr_dashboard.infrastructure.http.transport.requests.request"


def _response(status: int, text: str = "") -> MagicMock:
    return MagicMock(status_code=status, text=text)


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def transport(store: MemorySessionStore) -> Transport:
    return Transport(store, base_url=BASE + "/")


def test_headers_without_token(transport: Transport) -> None:
    """No token: JSON content type only, no Authorization header at all."""
    with patch(REQUEST, return_value=_response(200, "[]")) as mock_req:
        transport.get("/api/v1/leaves")
    args, kwargs = mock_req.call_args
    assert args == ("GET", f"{BASE}/api/v1/leaves")
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert "data" not in kwargs


def test_headers_with_token(store: MemorySessionStore, transport: Transport) -> None:
    store.set("token", "abc")
    with patch(REQUEST, return_value=_response(200, "{}")) as mock_req:
        transport.post("/api/v1/employees", {"name": "Ann", "companyId": 7})
    _, kwargs = mock_req.call_args
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert json.loads(kwargs["data"]) == {"name": "Ann", "companyId": 7}


def test_empty_token_is_not_sent(store: MemorySessionStore, transport: Transport) -> None:
    store.set("token", "")
    with patch(REQUEST, return_value=_response(200, "")) as mock_req:
        transport.get("/api/companies")
    assert "Authorization" not in mock_req.call_args.kwargs["headers"]


def test_success_empty_body_returns_empty_dict(transport: Transport) -> None:
    with patch(REQUEST, return_value=_response(200, "")):
        assert transport.delete("/api/v1/employees/3") == {}


@pytest.mark.parametrize(
    "body",
    [{"id": 7, "name": "Acme"}, [{"id": 1}, {"id": 2}], [], "quoted string", 42],
)
def test_success_json_returned_unchanged(transport: Transport, body: object) -> None:
    with patch(REQUEST, return_value=_response(200, json.dumps(body))):
        assert transport.get("/api/companies/get/7") == body


def test_success_plain_text_returned_verbatim(transport: Transport) -> None:
    msg = "Company profile updated successfully."
    with patch(REQUEST, return_value=_response(200, msg)):
        assert transport.put("/api/companies/update/7", {"name": "Acme"}) == msg


def test_request_returns_tagged_body(transport: Transport) -> None:
    with patch(REQUEST, return_value=_response(201, '{"id": 1}')):
        assert transport.request("POST", "/api/v1/leaves", {}) == JsonBody({"id": 1})
    with patch(REQUEST, return_value=_response(200, "done")):
        assert transport.request("POST", "/api/v1/leaves", {}) == TextBody("done")


def test_server_error_uses_json_message(transport: Transport) -> None:
    with patch(REQUEST, return_value=_response(500, '{"message":"DB down"}')):
        with pytest.raises(ApiError) as exc:
            transport.get("/api/v1/leaves")
    assert exc.value.status == 500
    assert exc.value.message == "DB down"


def test_error_falls_back_to_raw_text_then_generic(transport: Transport) -> None:
    with patch(REQUEST, return_value=_response(400, "Email already exists")):
        with pytest.raises(ApiError) as exc:
            transport.post("/api/companies/add", {})
    assert (exc.value.status, exc.value.message) == (400, "Email already exists")

    with patch(REQUEST, return_value=_response(404, "")):
        with pytest.raises(ApiError) as exc:
            transport.get("/api/v1/employees/9")
    assert (exc.value.status, exc.value.message) == (404, "An error occurred")


def test_error_message_helper() -> None:
    assert error_message('{"message": "bad"}') == "bad"
    assert error_message('{"error": "x"}') == '{"error": "x"}'
    assert error_message("") == "An error occurred"


def test_parse_body_helper() -> None:
    assert parse_body("") == JsonBody({})
    assert parse_body("null") == JsonBody(None)
    assert parse_body("not json") == TextBody("not json")


def test_unauthorized_calls_handler_then_raises(store: MemorySessionStore) -> None:
    calls: list[str] = []
    store.set("token", "stale")
    transport = Transport(store, base_url=BASE, unauthorized_handler=lambda: calls.append("hook"))
    with patch(REQUEST, return_value=_response(401, '{"message":"token expired"}')):
        with pytest.raises(UnauthorizedError) as exc:
            transport.get("/api/v1/leaves")
    assert calls == ["hook"]
    assert exc.value.status == 401
    assert exc.value.message == "Unauthorized"
    assert isinstance(exc.value, ApiError)


def test_unauthorized_without_handler_clears_store(store: MemorySessionStore, transport: Transport) -> None:
    store.set("token", "stale")
    store.set("company", '{"id": 7}')
    assert transport.unauthorized_handler is None
    with patch(REQUEST, return_value=_response(401)):
        with pytest.raises(UnauthorizedError):
            transport.get("/api/v1/leaves")
    assert store.snapshot() == {}


def test_deeply_nested_body_is_text(transport: Transport) -> None:
    deep = "[" * 100000 + "]" * 100000
    assert parse_body(deep) == TextBody(deep)
    assert error_message(deep) == deep


def test_network_failure_is_api_error(transport: Transport) -> None:
    with patch(REQUEST, side_effect=requests.ConnectionError("refused")):
        with pytest.raises(ApiError) as exc:
            transport.get("/api/v1/leaves")
    assert exc.value.status == 0
    assert "refused" in exc.value.message


@pytest.mark.parametrize("method,path", [("PATCH", "/api/x"), ("GET", ""), ("GET", "api/x")])
def test_invalid_arguments_rejected_before_io(transport: Transport, method: str, path: str) -> None:
    with patch(REQUEST) as mock_req:
        with pytest.raises(ValueError):
            transport.execute(method, path)
    mock_req.assert_not_called()


def test_upload_omits_json_content_type(store: MemorySessionStore, transport: Transport) -> None:
    store.set("token", "abc")
    with patch(REQUEST, return_value=_response(200, '{"firstName":"Ann"}')) as mock_req:
        out = transport.upload("/api/ai/process-cv", files={"file": ("cv.pdf", b"%PDF", "application/pdf")})
    assert out == {"firstName": "Ann"}
    _, kwargs = mock_req.call_args
    assert kwargs["headers"] == {"Authorization": "Bearer abc"}
    assert "file" in kwargs["files"]
