"""Signed-cookie sessions.

The whole session dict lives in the client's cookie as JSON signed with
``itsdangerous``. Nothing is stored server side. While a request is in
flight the dict is reachable through ``get_session()``; whatever it
holds when the response comes back is signed into a fresh cookie.
"""

import logging
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from itsdangerous import BadData, URLSafeTimedSerializer

from commentwall.errors import ConfigurationError
from commentwall.http.request import Request
from commentwall.http.response import Response
from commentwall.middleware.protocol import Next

logger = logging.getLogger("commentwall.sessions")

_current: ContextVar[dict[str, Any] | None] = ContextVar("commentwall_session", default=None)


def get_session() -> dict[str, Any]:
    """The session dict of the request being handled.

    Raises:
        LookupError: no ``SessionMiddleware`` is wrapping the caller.
    """
    session = _current.get()
    if session is None:
        msg = (
            "No active session. Ensure SessionMiddleware is added "
            "to the app before accessing the session."
        )
        raise LookupError(msg)
    return session


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Cookie name, lifetime and attributes for the session cookie.

    ``max_age`` bounds both the cookie and the signature: a token older
    than ``max_age`` seconds is treated as absent even if the browser
    still sends it.
    """

    secret_key: str
    cookie_name: str = "commentwall_session"
    max_age: int = 86400
    path: str = "/"
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"
    salt: str = "commentwall.session"


class SessionMiddleware:
    """Load the session before the handler runs and sign it afterwards.

    Usage::

        app.add_middleware(SessionMiddleware(SessionConfig(secret_key=key)))
    """

    __slots__ = ("_config", "_signer")

    def __init__(self, config: SessionConfig) -> None:
        if not config.secret_key:
            msg = "SessionConfig.secret_key must not be empty."
            raise ConfigurationError(msg)
        self._config = config
        self._signer = URLSafeTimedSerializer(config.secret_key, salt=config.salt)

    @property
    def config(self) -> SessionConfig:
        return self._config

    def load(self, token: str | None) -> dict[str, Any]:
        """Decode *token*; bad signatures, expiry and junk all give ``{}``."""
        if not token:
            return {}
        try:
            data = self._signer.loads(token, max_age=self._config.max_age)
        except BadData as exc:
            logger.debug("Discarding session cookie: %s", type(exc).__name__)
            return {}
        return data if isinstance(data, dict) else {}

    def dump(self, session: dict[str, Any]) -> str:
        return self._signer.dumps(session)

    async def __call__(self, request: Request, next: Next) -> Response:
        cfg = self._config
        session = self.load(request.cookies.get(cfg.cookie_name))

        token = _current.set(session)
        try:
            response = await next(request)
        finally:
            _current.reset(token)

        # Re-signed on every response so the max_age window slides
        return response.with_cookie(
            cfg.cookie_name,
            self.dump(session),
            max_age=cfg.max_age,
            path=cfg.path,
            secure=cfg.secure,
            httponly=cfg.httponly,
            samesite=cfg.samesite,
        )
