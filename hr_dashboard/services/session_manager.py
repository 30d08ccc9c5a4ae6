"""
Session state for the logged-in company.

The session manager is the only writer of the persisted token and company. States:
unauthenticated (no token, no company) and authenticated (both present).
"""

from __future__ import annotations

import enum
from typing import Any

from hr_dashboard.domains.hr.auth import AuthApi
from hr_dashboard.domains.hr.company import CompanyApi
from hr_dashboard.domains.models import Company, User
from hr_dashboard.infrastructure.http.transport import ApiError
from hr_dashboard.infrastructure.storage.session_store import COMPANY_KEY, TOKEN_KEY, SessionStore
from hr_dashboard.services.navigation import DASHBOARD_ROUTE, LOGIN_ROUTE, Navigator
from hr_dashboard.utils.logger import get_logger

logger = get_logger()


class SessionError(RuntimeError):
    """Raised when a login/register response cannot be turned into a session."""


class RefreshOutcome(enum.Enum):
    REFRESHED = "refreshed"
    KEPT_STALE = "kept_stale"
    SKIPPED = "skipped"


def _company_from_auth_response(response: Any, fallback_email: str) -> tuple[str, Company]:
    """
    Extract (token, company) from an auth response.

    Accepts {"token", "company": {...}} and the flat {"token", "companyId", "name"}.
    """
    if not isinstance(response, dict):
        raise SessionError("Authentication response was not a JSON object")
    token = response.get("token")
    if not isinstance(token, str) or not token:
        raise SessionError("Authentication response did not include a token")

    raw = response.get("company")
    if not isinstance(raw, dict):
        raw = {
            "id": response.get("companyId"),
            "name": response.get("name"),
            "email": response.get("email"),
        }
    try:
        company = Company.from_dict(raw)
    except ValueError as e:
        raise SessionError(f"Authentication response had no usable company: {e}") from e
    if not company.email:
        company.email = fallback_email
    return token, company


class SessionManager:
    def __init__(
        self,
        store: SessionStore,
        auth_api: AuthApi,
        company_api: CompanyApi,
        navigator: Navigator,
    ) -> None:
        self._store = store
        self._auth = auth_api
        self._companies = company_api
        self._navigator = navigator
        self._token: str | None = None
        self._company: Company | None = None
        self._ready = False

    # -- state ---------------------------------------------------------------

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def company(self) -> Company | None:
        return self._company

    @property
    def user(self) -> User | None:
        if self._company is None:
            return None
        return User.from_company(self._company)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_ready(self) -> bool:
        return self._ready

    def _set_session(self, token: str, company: Company) -> None:
        """
        Persist then adopt (token, company). If a write fails the previous
        persisted pair is put back and the in-memory state is left as it was.
        """
        previous = {TOKEN_KEY: self._store.get(TOKEN_KEY), COMPANY_KEY: self._store.get(COMPANY_KEY)}
        written: list[str] = []
        try:
            # company first: a failed token write must not leave a new token beside an old company
            for key, value in ((COMPANY_KEY, company.to_json()), (TOKEN_KEY, token)):
                self._store.set(key, value)
                written.append(key)
        except OSError:
            self._restore({key: previous[key] for key in written})
            raise
        self._token = token
        self._company = company

    def _restore(self, previous: dict[str, str | None]) -> None:
        try:
            for key, value in previous.items():
                if value is None:
                    self._store.remove(key)
                else:
                    self._store.set(key, value)
        except OSError as e:
            logger.error("Could not restore persisted session after a failed write: %s", e)
            self._store.clear_session()

    def _reset(self) -> None:
        self._token = None
        self._company = None
        self._store.clear_session()

    # -- lifecycle -----------------------------------------------------------

    def bootstrap(self) -> bool:
        """
        Restore the session from the store without touching the network.

        Corrupt or partial persisted state is cleared and the session starts
        unauthenticated. Always marks the manager ready. Returns is_authenticated.
        """
        try:
            token = self._store.get(TOKEN_KEY)
            stored_company = self._store.get(COMPANY_KEY)
            if token and stored_company:
                try:
                    company = Company.from_json(stored_company)
                except ValueError as e:
                    logger.warning("Discarding unreadable persisted session: %s", e)
                    self._reset()
                else:
                    self._token = token
                    self._company = company
                    logger.info("Session restored for company %s", company.id)
            elif token or stored_company:
                logger.warning("Discarding partial persisted session")
                self._reset()
        except OSError as e:
            logger.warning("Session store unavailable during bootstrap: %s", e)
            self._token = None
            self._company = None
        finally:
            self._ready = True
        return self.is_authenticated

    def login(self, email: str, password: str) -> User:
        """
        Authenticate and persist the session, then go to the dashboard.

        Raises:
            ApiError: Propagated unchanged from the transport.
            SessionError: If the response has no token or company.
        """
        response = self._auth.login(email, password)
        token, company = _company_from_auth_response(response, email)
        self._set_session(token, company)
        logger.info("Logged in as company %s", company.id)
        self._navigator.navigate(DASHBOARD_ROUTE)
        return User.from_company(company)

    def register(self, data: dict[str, Any]) -> User:
        """Register a company; on success the session is authenticated immediately."""
        response = self._auth.register(data)
        token, company = _company_from_auth_response(response, str(data.get("email") or ""))
        self._set_session(token, company)
        logger.info("Registered company %s", company.id)
        self._navigator.navigate(DASHBOARD_ROUTE)
        return User.from_company(company)

    def logout(self) -> None:
        """Clear the session and go to login. Safe to call repeatedly."""
        was_authenticated = self.is_authenticated
        self._reset()
        if was_authenticated:
            logger.info("Logged out")
        self._navigator.navigate(LOGIN_ROUTE)

    def handle_unauthorized(self) -> None:
        """Transport hook for HTTP 401."""
        logger.warning("Backend rejected the session token")
        self.logout()

    def refresh_company(self) -> RefreshOutcome:
        """
        Re-fetch the cached company profile. Best effort: never raises; on any
        failure the cached profile is kept.
        """
        cached = self._company
        if cached is None:
            return RefreshOutcome.SKIPPED
        try:
            fresh = Company.from_dict(self._companies.get_company(cached.id))
        except (ApiError, ValueError) as e:
            logger.warning("Company refresh failed, keeping cached profile: %s", e)
            return RefreshOutcome.KEPT_STALE
        if self._token is None or self._company is not cached:
            # session ended or changed while the request was in flight
            return RefreshOutcome.KEPT_STALE
        if not fresh.email:
            fresh.email = cached.email
        try:
            self._set_session(self._token, fresh)
        except OSError as e:
            logger.warning("Could not persist refreshed company, keeping cached profile: %s", e)
            return RefreshOutcome.KEPT_STALE
        logger.info("Company %s profile refreshed", fresh.id)
        return RefreshOutcome.REFRESHED
