"""In-process client that drives an ``App`` through its ASGI callable.

No sockets and no server: each request builds a scope, feeds the body
through ``receive``, records what the app passes to ``send`` and hands
back a ``Response``.
"""

from typing import Any
from urllib.parse import urlencode

from commentwall.app import App
from commentwall.http.forms import FORM_CONTENT_TYPE
from commentwall.http.response import Response


def extract_cookie(response: Response, name: str) -> str | None:
    """Value of cookie *name* from the response's Set-Cookie headers."""
    for header, value in response.headers:
        if header.lower() == "set-cookie":
            key, _, rest = value.split(";", 1)[0].partition("=")
            if key.strip() == name:
                return rest.strip()
    return None


def _scope(method: str, target: str, headers: dict[str, str]) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in headers.items()],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class _Recorder:
    """The ``send`` side: collects start and body messages."""

    def __init__(self) -> None:
        self.status = 200
        self.headers: list[tuple[bytes, bytes]] = []
        self.chunks: list[bytes] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def response(self) -> Response:
        content_type = "text/html; charset=utf-8"
        headers: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                headers.append((name, value))
        return Response(
            body=b"".join(self.chunks),
            status=self.status,
            content_type=content_type,
            headers=tuple(headers),
        )


class TestClient:
    __test__ = False  # not a pytest test class
    """Send requests to an app without a server.

    Set-Cookie headers stay in ``response.headers``; read them with
    ``extract_cookie`` and send them back in a ``Cookie`` header.

    Usage::

        async with TestClient(app) as client:
            response = await client.post(
                "/login",
                form={"email": "alice@example.com", "password": "password1"},
            )
            assert response.status == 302
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        form: dict[str, str] | None = None,
    ) -> Response:
        """POST *body* as is, or *form* URL-encoded with the form content type."""
        if form is not None:
            body = urlencode(form).encode("utf-8")
            headers = {"content-type": FORM_CONTENT_TYPE, **(headers or {})}
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        pending = [{"type": "http.request", "body": body or b"", "more_body": False}]

        async def receive() -> dict[str, Any]:
            return pending.pop() if pending else {"type": "http.disconnect"}

        recorder = _Recorder()
        await self.app(_scope(method, path, headers or {}), receive, recorder)
        return recorder.response()
