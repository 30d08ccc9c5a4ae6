"""Payroll endpoints."""

from __future__ import annotations

from typing import Any

from hr_dashboard.infrastructure.http.transport import Transport

BASE_PATH = "/api/payrolls"


def build_payroll_payload(
    employee_id: int | str,
    month: str,
    year: int | str,
    basic_salary: float | str,
    deductions: float | str = 0,
) -> dict[str, Any]:
    """
    Payload for a new payroll run. Net salary is basic minus deductions and new
    runs start as Pending.

    Raises:
        ValueError: If a numeric field cannot be parsed.
    """
    basic = float(basic_salary)
    ded = float(deductions or 0)
    return {
        "employeeId": int(employee_id),
        "month": month,
        "year": int(year),
        "basicSalary": basic,
        "deductions": ded,
        "netSalary": basic - ded,
        "status": "Pending",
    }


class PayrollApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def list_payrolls(self) -> list[dict[str, Any]]:
        data = self._transport.get(BASE_PATH)
        return data if isinstance(data, list) else []

    def get_payroll(self, payroll_id: int) -> Any:
        return self._transport.get(f"{BASE_PATH}/{payroll_id}")

    def list_by_employee(self, employee_id: int) -> list[dict[str, Any]]:
        data = self._transport.get(f"{BASE_PATH}/employee/{employee_id}")
        return data if isinstance(data, list) else []

    def create_payroll(self, data: dict[str, Any]) -> Any:
        return self._transport.post(f"{BASE_PATH}/add", data)

    def update_payroll(self, payroll_id: int, data: dict[str, Any]) -> Any:
        return self._transport.put(f"{BASE_PATH}/update/{payroll_id}", data)

    def delete_payroll(self, payroll_id: int) -> None:
        self._transport.delete(f"{BASE_PATH}/{payroll_id}")
