"""Thin wrappers over the transport, one per backend resource."""

from hr_dashboard.domains.hr.ai import AiApi
from hr_dashboard.domains.hr.attendance import AttendanceApi
from hr_dashboard.domains.hr.auth import AuthApi
from hr_dashboard.domains.hr.company import CompanyApi
from hr_dashboard.domains.hr.employee import EmployeeApi
from hr_dashboard.domains.hr.leave import LeaveApi
from hr_dashboard.domains.hr.payroll import PayrollApi

__all__ = ["AiApi", "AttendanceApi", "AuthApi", "CompanyApi", "EmployeeApi", "LeaveApi", "PayrollApi"]
