"""Tests for commentwall.app — setup, freezing, injection and the ASGI entry."""

import pytest

from commentwall.app import App
from commentwall.config import AppConfig
from commentwall.errors import ConfigurationError, Forbidden, NotFound
from commentwall.http.request import Request
from commentwall.http.response import Response
from commentwall.testing import TestClient

SENSITIVE_COOKIE = "session=hunter2"


class _Service:
    def __init__(self, name: str) -> None:
        self.name = name


class TestSetup:
    def test_routes_freeze_app(self) -> None:
        app = App()

        @app.route("/")
        def index():
            return "ok"

        assert [r.path for r in app.routes] == ["/"]
        with pytest.raises(RuntimeError, match="Cannot modify the app"):
            app.route("/late")(index)

    def test_default_methods(self) -> None:
        app = App()
        app.route("/")(lambda: "ok")
        app.route("/form", methods=["post"])(lambda: "ok")
        assert app.routes[0].methods == frozenset({"GET"})
        assert app.routes[1].methods == frozenset({"POST"})

    def test_bad_route_fails_at_freeze(self) -> None:
        app = App()
        app.route("no-slash")(lambda: "ok")
        with pytest.raises(ConfigurationError):
            _ = app.routes


class TestInjection:
    async def test_path_params_request_and_providers(self) -> None:
        app = App()
        app.provide(_Service, lambda: _Service("wall"))

        @app.route("/user/{id}")
        def show(request: Request, id: str, service: _Service):  # noqa: A002
            return f"{request.method} {id} {service.name}"

        async with TestClient(app) as client:
            response = await client.get("/user/abc")
            assert response.text == "GET abc wall"

    async def test_async_handler(self) -> None:
        app = App()

        @app.route("/")
        async def index():
            return "async ok"

        async with TestClient(app) as client:
            assert (await client.get("/")).text == "async ok"


class TestErrors:
    async def test_http_error_detail_is_body(self) -> None:
        app = App()

        @app.route("/")
        def index():
            raise Forbidden()

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 403
            assert response.text == "Access denied!"

    async def test_unknown_route(self) -> None:
        async with TestClient(App()) as client:
            response = await client.get("/missing")
            assert response.status == 404
            assert response.text == "Page not found"

    async def test_registered_handler_by_type(self) -> None:
        app = App()

        @app.route("/")
        def index():
            raise NotFound("User not found")

        @app.error(NotFound)
        def not_found(request, exc):
            return f"custom: {exc.detail}"

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 404
            assert response.text == "custom: User not found"

    async def test_registered_handler_by_status(self) -> None:
        app = App()

        @app.error(404)
        def not_found():
            return Response("gone", status=410)

        async with TestClient(app) as client:
            response = await client.get("/missing")
            assert response.status == 410

    async def test_unexpected_error_in_production(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()

        @app.route("/")
        def index():
            raise RuntimeError("boom")

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 500
            assert response.text == "Internal Server Error"
            assert "boom" not in response.text
        assert "500 GET /" in caplog.text

    async def test_debug_page(self) -> None:
        app = App(AppConfig(debug=True))

        @app.route("/")
        def index():
            raise RuntimeError("<boom>")

        async with TestClient(app) as client:
            response = await client.get("/", headers={"Cookie": SENSITIVE_COOKIE})
            assert response.status == 500
            assert "RuntimeError" in response.text
            assert "&lt;boom&gt;" in response.text
            assert "<boom>" not in response.text
            assert "hunter2" not in response.text


class TestASGI:
    async def test_lifespan(self) -> None:
        app = App()
        app.route("/")(lambda: "ok")
        messages = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict] = []

        async def receive():
            return messages.pop(0)

        async def send(message):
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_lifespan_startup_failure(self) -> None:
        app = App()
        app.route("bad")(lambda: "ok")
        sent: list[dict] = []

        async def receive():
            return {"type": "lifespan.startup"}

        async def send(message):
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert sent[0]["type"] == "lifespan.startup.failed"

    async def test_response_messages(self) -> None:
        app = App()
        app.route("/")(lambda: "hello")
        sent: list[dict] = []

        async def receive():
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message):
            sent.append(message)

        scope = {"type": "http", "method": "GET", "path": "/", "headers": []}
        await app(scope, receive, send)
        start, body = sent
        assert start["status"] == 200
        assert (b"content-length", b"5") in start["headers"]
        assert body["body"] == b"hello"
