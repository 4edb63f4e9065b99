"""Session gate — redirect anonymous clients away from protected paths.

Runs after ``SessionMiddleware`` and before routing. Every path outside
the whitelist requires a non-empty user id in the session; without one
the request is answered with a redirect and never reaches the router,
so route-level checks (403s, 404s) only apply to logged-in clients.
"""

from dataclasses import dataclass

from commentwall.http.request import Request
from commentwall.http.response import Redirect, Response
from commentwall.middleware.protocol import Next
from commentwall.security.audit import emit_security_event
from commentwall.session import current_session


@dataclass(frozen=True, slots=True)
class GateConfig:
    """Session gate configuration.

    Attributes:
        whitelist: Exact request paths that skip the check.
        redirect_to: Where anonymous clients are sent.
    """

    whitelist: frozenset[str] = frozenset({"/", "/login"})
    redirect_to: str = "/"


class SessionGate:
    """Whitelist-based session presence check.

    Usage::

        app.add_middleware(SessionMiddleware(...))  # 1st: sessions
        app.add_middleware(SessionGate())           # 2nd: gate
    """

    __slots__ = ("_config",)

    def __init__(self, config: GateConfig | None = None) -> None:
        self._config = config or GateConfig()

    def is_whitelisted(self, path: str) -> bool:
        return path in self._config.whitelist

    async def __call__(self, request: Request, next: Next) -> Response:
        if self.is_whitelisted(request.path):
            return await next(request)

        if current_session().get_current_user_id() is None:
            emit_security_event("auth.gate.redirect", request=request)
            return Redirect(self._config.redirect_to).to_response()

        return await next(request)
