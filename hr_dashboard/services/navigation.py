"""
Navigation dispatcher. The session manager asks for a route; the UI decides how
to show it.
"""

from __future__ import annotations

from typing import Callable

from hr_dashboard.utils.logger import get_logger

logger = get_logger()

LOGIN_ROUTE = "/login"
REGISTER_ROUTE = "/register"
DASHBOARD_ROUTE = "/dashboard"


class Navigator:
    """Keeps the current route and notifies listeners when it changes."""

    def __init__(self, initial: str = LOGIN_ROUTE) -> None:
        self._route = initial
        self._history: list[str] = []
        self._listeners: list[Callable[[str], None]] = []

    @property
    def current_route(self) -> str:
        return self._route

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def navigate(self, route: str) -> None:
        logger.debug("Navigate %s -> %s", self._route, route)
        self._route = route
        self._history.append(route)
        for listener in self._listeners:
            listener(route)
