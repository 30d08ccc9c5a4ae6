"""Login and company registration endpoints."""

from __future__ import annotations

from typing import Any

from hr_dashboard.infrastructure.http.transport import Transport

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/companies/add"

REGISTER_FIELDS = ("name", "email", "password", "phone", "taxId", "address")


class AuthApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def login(self, email: str, password: str) -> Any:
        return self._transport.post(LOGIN_PATH, {"email": email, "password": password})

    def register(self, data: dict[str, Any]) -> Any:
        """Register a company. Only the fields the backend accepts are sent."""
        payload = {k: data[k] for k in REGISTER_FIELDS if data.get(k) is not None}
        return self._transport.post(REGISTER_PATH, payload)
