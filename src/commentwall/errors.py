"""Exceptions raised by commentwall.

``HTTPError`` and its subclasses end a request early: the ASGI handler
catches them and answers with their status and detail (or with whatever
an ``app.error()`` handler returns for them). ``ConfigurationError``
is raised while the app is being built and never reaches a client.
"""

from dataclasses import dataclass


class CommentWallError(Exception):
    """Root of the commentwall exception tree."""


class ConfigurationError(CommentWallError):
    """Bad settings, a missing secret key, or an invalid route table."""


@dataclass(frozen=True, slots=True)
class HTTPError(CommentWallError):
    """Abort the request with *status*; *detail* becomes the default body."""

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class Forbidden(HTTPError):  # noqa: N818
    """403: the session is not allowed to see this resource."""

    def __init__(self, detail: str = "Access denied!") -> None:
        super().__init__(status=403, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: no route, or no record behind the route."""

    def __init__(self, detail: str = "Page not found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the path is routed, but not for this method. Sets ``Allow``."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        methods = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {methods}",
            headers=(("Allow", methods),),
        )
