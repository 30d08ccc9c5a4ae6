"""Leave request endpoints."""

from __future__ import annotations

from typing import Any

from hr_dashboard.infrastructure.http.transport import Transport

BASE_PATH = "/api/v1/leaves"


class LeaveApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def list_leaves(self) -> list[dict[str, Any]]:
        data = self._transport.get(BASE_PATH)
        return data if isinstance(data, list) else []

    def get_leave(self, leave_id: int) -> Any:
        return self._transport.get(f"{BASE_PATH}/{leave_id}")

    def create_leave(self, data: dict[str, Any]) -> Any:
        return self._transport.post(BASE_PATH, data)

    def update_leave(self, leave_id: int, data: dict[str, Any]) -> Any:
        return self._transport.put(f"{BASE_PATH}/{leave_id}", data)

    def delete_leave(self, leave_id: int) -> None:
        self._transport.delete(f"{BASE_PATH}/{leave_id}")
