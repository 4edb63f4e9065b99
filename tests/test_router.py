"""Tests for commentwall.routing.router — compiled trie-based router."""

import pytest

from commentwall.errors import ConfigurationError, MethodNotAllowed, NotFound
from commentwall.routing.route import Param, Route, parse_pattern
from commentwall.routing.router import Router


def _handler() -> str:
    return "ok"


def _route(path: str, methods: frozenset[str] | None = None) -> Route:
    return Route(path=path, handler=_handler, methods=methods or frozenset({"GET"}))


def _router(*routes: Route) -> Router:
    router = Router()
    for route in routes:
        router.add(route)
    router.compile()
    return router


class TestParsePattern:
    def test_root(self) -> None:
        assert parse_pattern("/") == ()

    def test_static(self) -> None:
        assert parse_pattern("/comments") == ("comments",)

    def test_param(self) -> None:
        assert parse_pattern("/user/{id}") == ("user", Param("id"))

    def test_route_segments(self) -> None:
        assert _route("/user/{id}").segments == ("user", Param("id"))

    def test_requires_leading_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with"):
            parse_pattern("user")

    def test_rejects_invalid_param_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid path parameter"):
            parse_pattern("/user/{not-valid}")


class TestRouterMatch:
    def test_root(self) -> None:
        router = _router(_route("/"))
        assert router.match("GET", "/").route.path == "/"

    def test_param_captured_as_string(self) -> None:
        router = _router(_route("/user/{id}"))
        match = router.match("GET", "/user/42")
        assert match.path_params == {"id": "42"}

    def test_static_wins_over_param(self) -> None:
        static = _route("/user/me")
        router = _router(_route("/user/{id}"), static)
        assert router.match("GET", "/user/me").route is static

    def test_unknown_path(self) -> None:
        router = _router(_route("/"), _route("/user/{id}"))
        with pytest.raises(NotFound):
            router.match("GET", "/nowhere")
        with pytest.raises(NotFound):
            router.match("GET", "/user/1/extra")

    @pytest.mark.parametrize("path", ["/comments/", "//comments", "//", "/user/1/", "/user//1"])
    def test_non_canonical_paths_not_found(self, path: str) -> None:
        router = _router(_route("/"), _route("/comments"), _route("/user/{id}"))
        with pytest.raises(NotFound):
            router.match("GET", path)

    def test_param_needs_a_segment(self) -> None:
        router = _router(_route("/user/{id}"))
        with pytest.raises(NotFound):
            router.match("GET", "/user/")

    def test_wrong_method(self) -> None:
        router = _router(_route("/login", frozenset({"POST"})))
        with pytest.raises(MethodNotAllowed) as exc_info:
            router.match("GET", "/login")
        assert exc_info.value.status == 405
        assert ("Allow", "POST") in exc_info.value.headers


class TestRouterSetup:
    def test_duplicate_route(self) -> None:
        router = Router()
        router.add(_route("/comments", frozenset({"POST"})))
        with pytest.raises(ConfigurationError, match="Duplicate route"):
            router.add(_route("/comments", frozenset({"POST"})))

    def test_conflicting_param_names(self) -> None:
        router = Router()
        router.add(_route("/user/{id}"))
        with pytest.raises(ConfigurationError, match="Conflicting parameter names"):
            router.add(_route("/user/{name}/posts"))

    def test_no_routes_after_compile(self) -> None:
        router = _router()
        with pytest.raises(RuntimeError, match="after compilation"):
            router.add(_route("/"))

    def test_routes_in_registration_order(self) -> None:
        a, b = _route("/a"), _route("/b")
        assert _router(a, b).routes == [a, b]
