"""Outgoing responses.

``Response`` is a frozen value; every ``with_*`` call hands back a
modified copy. ``Redirect`` is what handlers return to send the browser
elsewhere; negotiation turns it into a ``Response`` with ``Location``.
"""

from dataclasses import dataclass, replace

from commentwall.http.cookies import SetCookie


@dataclass(frozen=True, slots=True)
class Response:
    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        return replace(self, headers=(*self.headers, (name, value)))

    def with_cookie(self, name: str, value: str, **attributes: object) -> "Response":
        """Copy with one more ``Set-Cookie``; *attributes* go to ``SetCookie``."""
        cookie = SetCookie(name, value, **attributes)  # type: ignore[arg-type]
        return replace(self, cookies=(*self.cookies, cookie))

    def header(self, name: str) -> str | None:
        """First header called *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def location(self) -> str | None:
        return self.header("location")

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """Send the client to *url* (302 unless told otherwise)."""

    url: str
    status: int = 302

    def to_response(self) -> Response:
        return Response(status=self.status, headers=(("Location", self.url),))
