"""Attendance endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any

from hr_dashboard.infrastructure.http.transport import Transport

BASE_PATH = "/api/v1/attendance"


def build_attendance_payload(
    employee_name: str,
    status: str,
    clock_in: str,
    company_id: int,
    day: date | None = None,
) -> dict[str, Any]:
    """Manual attendance entry; `date` defaults to today in ISO format."""
    return {
        "employeeName": (employee_name or "").strip(),
        "status": status or "Present",
        "clockIn": clock_in,
        "companyId": company_id,
        "date": (day or date.today()).isoformat(),
    }


class AttendanceApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def list_by_company(self, company_id: int) -> list[dict[str, Any]]:
        data = self._transport.get(f"{BASE_PATH}/company/{company_id}")
        return data if isinstance(data, list) else []

    def log_attendance(self, data: dict[str, Any]) -> Any:
        return self._transport.post(BASE_PATH, data)
