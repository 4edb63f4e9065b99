"""Typed access to the logged-in user id stored in the session.

Handlers never index the session dict by string key. They receive a
``SessionAccessor`` (injected by type annotation) that exposes exactly
one read and one write::

    def profile(id: str, session: SessionAccessor) -> Response:
        if session.get_current_user_id() != id:
            raise Forbidden()

The identifier is always stored and returned as ``str``.
"""

from typing import Any

from commentwall.middleware.sessions import get_session

USER_ID_KEY = "user_id"


class SessionAccessor:
    """View over one request's session dict."""

    __slots__ = ("_session",)

    def __init__(self, session: dict[str, Any]) -> None:
        self._session = session

    def get_current_user_id(self) -> str | None:
        """The stored user id, or ``None`` when absent or empty."""
        value = self._session.get(USER_ID_KEY)
        if isinstance(value, str) and value:
            return value
        return None

    def set_current_user_id(self, user_id: str) -> None:
        """Start a fresh session bound to *user_id*."""
        self._session.clear()
        self._session[USER_ID_KEY] = str(user_id)


def current_session() -> SessionAccessor:
    """Accessor for the active request's session.

    Raises ``LookupError`` outside a request handled by ``SessionMiddleware``.
    """
    return SessionAccessor(get_session())

