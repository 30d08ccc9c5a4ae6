"""
Streamlit pages for the HR dashboard. Every page reads the DashboardContext and
shows ApiError messages inline; none of them talk to the network directly.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from hr_dashboard.domains.hr.attendance import build_attendance_payload
from hr_dashboard.domains.hr.employee import build_employee_payload
from hr_dashboard.domains.hr.insights import filter_records, insight_prompt, summarize_workforce
from hr_dashboard.domains.hr.payroll import build_payroll_payload
from hr_dashboard.infrastructure.http.transport import ApiError, UnauthorizedError
from hr_dashboard.services.context import DashboardContext
from hr_dashboard.services.navigation import LOGIN_ROUTE, REGISTER_ROUTE, Navigator
from hr_dashboard.services.session_manager import RefreshOutcome, SessionError
from hr_dashboard.utils.logger import get_logger

logger = get_logger()

ROUTE_KEY = "route"

# per-company values cached in st.session_state; dropped whenever the session ends
COMPANY_STATE_KEYS = ("ai_insight", "employee_search", "attendance_search", "leave_search", "payroll_search")

PAGES: dict[str, str] = {
    "/dashboard": "Dashboard",
    "/employees": "Employees",
    "/attendance": "Attendance",
    "/leaves": "Leaves",
    "/payroll": "Payroll",
    "/company": "Company Profile",
}


class StreamlitNavigator(Navigator):
    """Mirrors the current route into st.session_state so reruns land on it."""

    def __init__(self, initial: str = LOGIN_ROUTE) -> None:
        super().__init__(st.session_state.get(ROUTE_KEY, initial))
        self.subscribe(self._remember)

    @staticmethod
    def _remember(route: str) -> None:
        st.session_state[ROUTE_KEY] = route
        if route == LOGIN_ROUTE:
            forget_company_state()


def forget_company_state() -> None:
    for key in COMPANY_STATE_KEYS:
        st.session_state.pop(key, None)


def _error_text(e: Exception) -> str:
    return e.message if isinstance(e, ApiError) else str(e)


def _show_error(e: Exception) -> None:
    """Show a failed action. A 401 has already ended the session, so redraw on the login page."""
    if isinstance(e, UnauthorizedError):
        st.rerun()
    st.error(_error_text(e))


def render_login(ctx: DashboardContext) -> None:
    st.subheader("Sign in")
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        try:
            ctx.session.login(email.strip(), password)
            st.rerun()
        except (ApiError, SessionError) as e:
            st.error(_error_text(e))
    if st.button("Register a new company"):
        ctx.navigator.navigate(REGISTER_ROUTE)
        st.rerun()


def render_register(ctx: DashboardContext) -> None:
    st.subheader("Register your company")
    with st.form("register"):
        data = {
            "name": st.text_input("Company name"),
            "email": st.text_input("Email"),
            "password": st.text_input("Password", type="password"),
            "phone": st.text_input("Phone"),
            "taxId": st.text_input("Tax ID"),
            "address": st.text_input("Address") or None,
        }
        submitted = st.form_submit_button("Create account")
    if submitted:
        try:
            ctx.session.register(data)
            st.rerun()
        except (ApiError, SessionError) as e:
            st.error(_error_text(e))
    if st.button("Back to sign in"):
        ctx.navigator.navigate(LOGIN_ROUTE)
        st.rerun()


def render_sidebar(ctx: DashboardContext) -> None:
    user = ctx.session.user
    with st.sidebar:
        if user:
            st.caption(f"**{user.company_name}** · {user.email}")
        for route, label in PAGES.items():
            if st.button(label, key=f"nav_{route}", use_container_width=True):
                ctx.navigator.navigate(route)
                st.rerun()
        st.divider()
        if st.button("Log out", use_container_width=True):
            ctx.session.logout()
            st.rerun()


def render_dashboard(ctx: DashboardContext, company_id: int) -> None:
    st.subheader("HR overview")
    try:
        employees = ctx.employees.list_by_company(company_id)
        leaves = ctx.leaves.list_leaves()
    except ApiError as e:
        _show_error(e)
        return
    summary = summarize_workforce(employees, leaves)
    c1, c2, c3 = st.columns(3)
    c1.metric("Employees", summary["employee_count"])
    c2.metric("Pending leaves", summary["pending_leaves"])
    c3.metric("Monthly salaries", f"{summary['total_salary']:,.2f}")

    if summary["employee_count"] and "ai_insight" not in st.session_state:
        try:
            st.session_state.ai_insight = ctx.ai.ask(insight_prompt(summary))
        except UnauthorizedError as e:
            _show_error(e)
        except ApiError as e:
            logger.warning("AI insight unavailable: %s", e.message)
            st.session_state.ai_insight = None
    if st.session_state.get("ai_insight"):
        st.info(st.session_state.ai_insight)

    question = st.chat_input("Ask the HR assistant…")
    if question:
        with st.spinner("Thinking…"):
            try:
                st.markdown(ctx.ai.ask(question))
            except UnauthorizedError as e:
                _show_error(e)
            except ApiError:
                st.warning("Sorry, no data.")


def render_employees(ctx: DashboardContext, company_id: int) -> None:
    st.subheader("Employees")
    with st.expander("Add employee"):
        with st.form("add_employee", clear_on_submit=True):
            name = st.text_input("Name")
            position = st.text_input("Position")
            salary = st.text_input("Salary")
            if st.form_submit_button("Save"):
                try:
                    ctx.employees.create_employee(build_employee_payload(name, position, salary, company_id))
                    st.success("Employee added")
                except ValueError:
                    st.error("Salary must be a number")
                except ApiError as e:
                    _show_error(e)
    try:
        employees = ctx.employees.list_by_company(company_id)
    except ApiError as e:
        _show_error(e)
        return
    term = st.text_input("Search", key="employee_search")
    for emp in filter_records(employees, term, ("name", "position")):
        cols = st.columns([3, 3, 2, 1])
        cols[0].write(emp.get("name") or "")
        cols[1].write(emp.get("position") or "")
        cols[2].write(emp.get("salary") or 0)
        if cols[3].button("Delete", key=f"del_emp_{emp.get('id')}"):
            try:
                ctx.employees.delete_employee(emp["id"])
                st.rerun()
            except ApiError as e:
                _show_error(e)


def _render_table(records: list[dict[str, Any]], term_key: str, fields: tuple[str, ...]) -> None:
    term = st.text_input("Search", key=term_key)
    rows = filter_records(records, term, fields)
    if rows:
        st.dataframe(rows, use_container_width=True)
    else:
        st.caption("No records found.")


def render_attendance(ctx: DashboardContext, company_id: int) -> None:
    st.subheader("Attendance")
    with st.expander("Log today's attendance"):
        with st.form("log_attendance", clear_on_submit=True):
            employee_name = st.text_input("Employee name")
            status = st.selectbox("Status", ["Present", "Late", "Absent"])
            clock_in = st.text_input("Clock in", placeholder="09:00")
            if st.form_submit_button("Save"):
                try:
                    ctx.attendance.log_attendance(
                        build_attendance_payload(employee_name, status, clock_in, company_id)
                    )
                    st.success("Attendance logged")
                except ApiError as e:
                    _show_error(e)
    try:
        records = ctx.attendance.list_by_company(company_id)
    except ApiError as e:
        _show_error(e)
        return
    _render_table(records, "attendance_search", ("employeeName", "status"))


def render_leaves(ctx: DashboardContext) -> None:
    st.subheader("Leave requests")
    try:
        leaves = ctx.leaves.list_leaves()
    except ApiError as e:
        _show_error(e)
        return
    _render_table(leaves, "leave_search", ("employeeName", "leaveType"))


def render_payroll(ctx: DashboardContext) -> None:
    st.subheader("Payroll")
    with st.expander("Process payroll"):
        with st.form("process_payroll", clear_on_submit=True):
            employee_id = st.text_input("Employee ID")
            month = st.text_input("Month")
            year = st.text_input("Year")
            basic = st.text_input("Basic salary")
            deductions = st.text_input("Deductions", value="0")
            if st.form_submit_button("Process"):
                try:
                    ctx.payrolls.create_payroll(build_payroll_payload(employee_id, month, year, basic, deductions))
                    st.success("Payroll created")
                except ValueError:
                    st.error("Employee ID, year and amounts must be numbers")
                except UnauthorizedError as e:
                    _show_error(e)
                except ApiError:
                    st.error("Failed to process payroll. Please check employee ID.")
    try:
        payrolls = ctx.payrolls.list_payrolls()
    except ApiError as e:
        _show_error(e)
        return
    _render_table(payrolls, "payroll_search", ("month", "employeeId"))


def render_company(ctx: DashboardContext, company_id: int) -> None:
    st.subheader("Company profile")
    try:
        current = ctx.companies.get_company(company_id)
    except ApiError as e:
        _show_error(e)
        return
    current = current if isinstance(current, dict) else {}
    with st.form("company"):
        data = {
            key: st.text_input(label, value=str(current.get(key) or ""))
            for key, label in (
                ("name", "Name"),
                ("email", "Email"),
                ("phone", "Phone"),
                ("address", "Address"),
                ("website", "Website"),
                ("industry", "Industry"),
                ("size", "Company size"),
            )
        }
        submitted = st.form_submit_button("Save changes")
    if submitted:
        try:
            res = ctx.companies.update_company(company_id, data)
        except ApiError as e:
            _show_error(e)
            return
        if ctx.session.refresh_company() is RefreshOutcome.KEPT_STALE:
            st.caption("Saved; the cached profile will update on the next refresh.")
        st.success(res if isinstance(res, str) else "Company profile updated successfully")


def render_route(ctx: DashboardContext) -> None:
    """Draw the page for the current route; unauthenticated sessions only see login/register."""
    route = ctx.navigator.current_route
    user = ctx.session.user
    if user is None:
        if route == REGISTER_ROUTE:
            render_register(ctx)
        else:
            render_login(ctx)
        return

    render_sidebar(ctx)
    if route == "/employees":
        render_employees(ctx, user.company_id)
    elif route == "/attendance":
        render_attendance(ctx, user.company_id)
    elif route == "/leaves":
        render_leaves(ctx)
    elif route == "/payroll":
        render_payroll(ctx)
    elif route == "/company":
        render_company(ctx, user.company_id)
    else:
        render_dashboard(ctx, user.company_id)
