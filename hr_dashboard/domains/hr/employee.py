"""Employee endpoints (v1, flat `name` field)."""

from __future__ import annotations

from typing import Any

from hr_dashboard.infrastructure.http.transport import Transport

BASE_PATH = "/api/v1/employees"


def build_employee_payload(
    name: str,
    position: str,
    salary: float | str | None,
    company_id: int,
) -> dict[str, Any]:
    """Payload for create_employee. Salary is sent as a number; blank means 0."""
    if salary is None or (isinstance(salary, str) and not salary.strip()):
        amount = 0.0
    else:
        amount = float(salary)
    return {
        "name": (name or "").strip(),
        "position": (position or "").strip(),
        "salary": amount,
        "companyId": company_id,
    }


class EmployeeApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def list_by_company(self, company_id: int) -> list[dict[str, Any]]:
        data = self._transport.get(f"{BASE_PATH}/company/{company_id}")
        return data if isinstance(data, list) else []

    def get_employee(self, employee_id: int) -> Any:
        return self._transport.get(f"{BASE_PATH}/{employee_id}")

    def create_employee(self, data: dict[str, Any]) -> Any:
        return self._transport.post(BASE_PATH, data)

    def update_employee(self, employee_id: int, data: dict[str, Any]) -> Any:
        return self._transport.put(f"{BASE_PATH}/{employee_id}", data)

    def delete_employee(self, employee_id: int) -> None:
        self._transport.delete(f"{BASE_PATH}/{employee_id}")
