"""
Per-session wiring: one store, one transport, one session manager, and the
domain wrappers that share them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hr_dashboard.domains.hr import (
    AiApi,
    AttendanceApi,
    AuthApi,
    CompanyApi,
    EmployeeApi,
    LeaveApi,
    PayrollApi,
)
from hr_dashboard.infrastructure.http.transport import Transport
from hr_dashboard.infrastructure.storage.session_store import FileSessionStore, SessionStore
from hr_dashboard.services.navigation import Navigator
from hr_dashboard.services.session_manager import SessionManager


@dataclass
class DashboardContext:
    store: SessionStore
    transport: Transport
    navigator: Navigator
    session: SessionManager
    companies: CompanyApi
    employees: EmployeeApi
    leaves: LeaveApi
    attendance: AttendanceApi
    payrolls: PayrollApi
    ai: AiApi

    def open(self) -> bool:
        """Make sure 401s reach the session manager, then restore any persisted session."""
        self.transport.unauthorized_handler = self.session.handle_unauthorized
        return self.session.bootstrap()

    def close(self) -> None:
        """
        Detach the 401 hook. The persisted session is left for the next start;
        a later 401 still clears it through the transport.
        """
        self.transport.unauthorized_handler = None


def build_context(
    base_url: str | None = None,
    store: SessionStore | None = None,
    navigator: Navigator | None = None,
    timeout: float | None = None,
    session_dir: Path | None = None,
) -> DashboardContext:
    store = store if store is not None else FileSessionStore(session_dir)
    navigator = navigator if navigator is not None else Navigator()
    transport = Transport(store, base_url=base_url, timeout=timeout)
    companies = CompanyApi(transport)
    session = SessionManager(store, AuthApi(transport), companies, navigator)
    transport.unauthorized_handler = session.handle_unauthorized
    return DashboardContext(
        store=store,
        transport=transport,
        navigator=navigator,
        session=session,
        companies=companies,
        employees=EmployeeApi(transport),
        leaves=LeaveApi(transport),
        attendance=AttendanceApi(transport),
        payrolls=PayrollApi(transport),
        ai=AiApi(transport),
    )
