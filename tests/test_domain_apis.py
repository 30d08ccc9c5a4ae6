"""
Tests for the resource wrappers: paths, verbs and payload helpers.
"""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import MagicMock

import pytest

from hr_dashboard.domains.hr import AiApi, AttendanceApi, CompanyApi, EmployeeApi, LeaveApi, PayrollApi
from hr_dashboard.domains.hr.attendance import build_attendance_payload
from hr_dashboard.domains.hr.employee import build_employee_payload
from hr_dashboard.domains.hr.payroll import build_payroll_payload


@pytest.fixture
def transport() -> MagicMock:
    return MagicMock()


def test_employee_paths(transport: MagicMock) -> None:
    api = EmployeeApi(transport)
    transport.get.return_value = [{"id": 1, "name": "Ann"}]
    assert api.list_by_company(7) == [{"id": 1, "name": "Ann"}]
    transport.get.assert_called_with("/api/v1/employees/company/7")

    api.create_employee({"name": "Bob"})
    transport.post.assert_called_with("/api/v1/employees", {"name": "Bob"})

    api.delete_employee(3)
    transport.delete.assert_called_with("/api/v1/employees/3")


def test_list_helpers_tolerate_non_list_bodies(transport: MagicMock) -> None:
    transport.get.return_value = {}
    assert EmployeeApi(transport).list_by_company(7) == []
    assert LeaveApi(transport).list_leaves() == []
    assert AttendanceApi(transport).list_by_company(7) == []
    assert PayrollApi(transport).list_payrolls() == []


def test_company_update_filters_fields_and_passes_text(transport: MagicMock) -> None:
    transport.put.return_value = "Company profile updated successfully."
    out = CompanyApi(transport).update_company(7, {"name": "Acme", "id": 99, "phone": None})
    transport.put.assert_called_with("/api/companies/update/7", {"name": "Acme"})
    assert out == "Company profile updated successfully."


def test_company_get_path(transport: MagicMock) -> None:
    CompanyApi(transport).get_company(7)
    transport.get.assert_called_with("/api/companies/get/7")


def test_leave_and_attendance_paths(transport: MagicMock) -> None:
    LeaveApi(transport).create_leave({"employeeId": 1})
    transport.post.assert_called_with("/api/v1/leaves", {"employeeId": 1})
    AttendanceApi(transport).log_attendance({"status": "Present"})
    transport.post.assert_called_with("/api/v1/attendance", {"status": "Present"})


def test_payroll_paths(transport: MagicMock) -> None:
    api = PayrollApi(transport)
    api.create_payroll({"employeeId": 1})
    transport.post.assert_called_with("/api/payrolls/add", {"employeeId": 1})
    api.update_payroll(4, {"status": "Paid"})
    transport.put.assert_called_with("/api/payrolls/update/4", {"status": "Paid"})
    api.list_by_employee(1)
    transport.get.assert_called_with("/api/payrolls/employee/1")


@pytest.mark.parametrize(
    "answer,expected",
    [("All good.", "All good."), ({"answer": "Fine"}, "Fine"), ({"n": 1}, json.dumps({"n": 1}))],
)
def test_ai_ask_returns_text(transport: MagicMock, answer: object, expected: str) -> None:
    transport.post.return_value = answer
    assert AiApi(transport).ask("How many staff?") == expected
    transport.post.assert_called_with("/api/ai/ask", {"question": "How many staff?"})


def test_ai_process_cv_uploads_file(transport: MagicMock) -> None:
    transport.upload.return_value = {"firstName": "Ann", "skills": "Python"}
    out = AiApi(transport).process_cv("cv.pdf", b"%PDF-1.4")
    assert out["firstName"] == "Ann"
    path = transport.upload.call_args.args[0]
    files = transport.upload.call_args.kwargs["files"]
    assert path == "/api/ai/process-cv"
    assert files["file"][0] == "cv.pdf"


def test_build_payroll_payload_computes_net() -> None:
    payload = build_payroll_payload("12", "March", "2025", "1500.50", "200")
    assert payload == {
        "employeeId": 12,
        "month": "March",
        "year": 2025,
        "basicSalary": 1500.5,
        "deductions": 200.0,
        "netSalary": 1300.5,
        "status": "Pending",
    }
    with pytest.raises(ValueError):
        build_payroll_payload("x", "March", 2025, 100)


def test_build_employee_payload() -> None:
    assert build_employee_payload(" Ann ", "Dev", "2500", 7) == {
        "name": "Ann",
        "position": "Dev",
        "salary": 2500.0,
        "companyId": 7,
    }
    assert build_employee_payload("Bob", "", "", 7)["salary"] == 0.0


def test_build_attendance_payload_dates() -> None:
    payload = build_attendance_payload("Ann", "Late", "09:40", 7, day=date(2025, 3, 1))
    assert payload["date"] == "2025-03-01"
    assert payload["companyId"] == 7
    assert payload["employeeName"] == "Ann"
