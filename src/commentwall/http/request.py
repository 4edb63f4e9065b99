"""Incoming requests.

A ``Request`` is built once per ASGI call. Its metadata is frozen; the
body is pulled from ``receive`` the first time it is asked for and kept
for every later read, including reads through copies made by
``with_path_params``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from commentwall._internal.asgi import Receive, Scope
from commentwall.http.cookies import parse_cookies
from commentwall.http.forms import FormData, parse_form_data


def _header_map(raw: Iterable[tuple[bytes, bytes]]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for name, value in raw:
        headers.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
    return headers


@dataclass(frozen=True, slots=True)
class Request:
    """Method, path, lower-cased headers (first value wins) and cookies."""

    method: str
    path: str
    headers: Mapping[str, str]
    cookies: Mapping[str, str]
    client: tuple[str, int] | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Shared by copies: "body" and "form" once read
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        headers = _header_map(scope.get("headers", ()))
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=headers,
            cookies=parse_cookies(headers.get("cookie", "")),
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        if "body" not in self._cache:
            self._cache["body"] = await self._read_body()
        return self._cache["body"]

    async def _read_body(self) -> bytes:
        if self._receive is None:
            return b""
        chunks: list[bytes] = []
        more = True
        while more:
            message = await self._receive()
            chunks.append(message.get("body", b""))
            more = message.get("more_body", False)
        return b"".join(chunks)

    async def form(self) -> FormData:
        """The body parsed as an HTML form. See ``parse_form_data``."""
        if "form" not in self._cache:
            self._cache["form"] = parse_form_data(await self.body(), self.content_type)
        return self._cache["form"]

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        return replace(self, path_params=path_params)
