"""Reading the ``Cookie`` request header and writing ``Set-Cookie``.

Only the session cookie travels through here: no quoting, no expiry
dates, no domain attribute.
"""

from dataclasses import dataclass


def parse_cookies(header: str) -> dict[str, str]:
    """``"a=1; b=2"`` -> ``{"a": "1", "b": "2"}``.

    Fragments without ``=`` are dropped. When a name repeats, the first
    value is kept.
    """
    cookies: dict[str, str] = {}
    for fragment in header.split(";"):
        name, sep, value = fragment.partition("=")
        if sep:
            cookies.setdefault(name.strip(), value.strip())
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """One ``Set-Cookie`` header attached to a response."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def to_header_value(self) -> str:
        attributes = [
            f"Max-Age={self.max_age}" if self.max_age is not None else "",
            f"Path={self.path}" if self.path else "",
            "Secure" if self.secure else "",
            "HttpOnly" if self.httponly else "",
            f"SameSite={self.samesite}" if self.samesite else "",
        ]
        return "; ".join([f"{self.name}={self.value}", *filter(None, attributes)])
