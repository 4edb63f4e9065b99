"""Segment trie that maps a method and path to a ``Route``.

Literal segments are tried before the placeholder at each depth, so
``/user/me`` can coexist with ``/user/{id}``. A path that resolves to a
node without a handler for the request method is reported separately
from a path that resolves to nothing at all.
"""

from commentwall.errors import ConfigurationError, MethodNotAllowed, NotFound
from commentwall.routing.route import Param, Route, RouteMatch


class _Node:
    __slots__ = ("by_method", "literal", "param")

    def __init__(self) -> None:
        self.literal: dict[str, _Node] = {}
        self.param: tuple[str, _Node] | None = None
        self.by_method: dict[str, Route] = {}

    def child_for(self, segment: str | Param, path: str) -> "_Node":
        if isinstance(segment, str):
            return self.literal.setdefault(segment, _Node())
        if self.param is None:
            self.param = (segment.name, _Node())
        elif self.param[0] != segment.name:
            msg = (
                f"Conflicting parameter names at {path!r}: "
                f"{{{self.param[0]}}} vs {{{segment.name}}}"
            )
            raise ConfigurationError(msg)
        return self.param[1]


class Router:
    """Method + path lookup, built once and then sealed.

    Usage::

        router = Router()
        router.add(Route("/user/{id}", profile, frozenset({"GET"})))
        router.compile()
        router.match("GET", "/user/7").path_params  # {"id": "7"}
    """

    __slots__ = ("_root", "_routes", "_sealed")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._sealed = False

    @property
    def routes(self) -> list[Route]:
        """Registered routes, oldest first."""
        return list(self._routes)

    def add(self, route: Route) -> None:
        if self._sealed:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for segment in route.segments:
            node = node.child_for(segment, route.path)

        clashes = route.methods & node.by_method.keys()
        if clashes:
            msg = f"Duplicate route: {', '.join(sorted(clashes))} {route.path!r}"
            raise ConfigurationError(msg)
        node.by_method.update(dict.fromkeys(route.methods, route))
        self._routes.append(route)

    def compile(self) -> None:
        self._sealed = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Resolve *method* and *path*.

        Raises:
            NotFound: no pattern covers the path.
            MethodNotAllowed: a pattern covers the path, but not for *method*.
        """
        parts = [p for p in path.split("/") if p]
        # Doubled or trailing slashes name no route
        if "/" + "/".join(parts) != path:
            raise NotFound()
        found = _resolve(self._root, parts, {})
        if found is None:
            raise NotFound()
        node, params = found
        try:
            return RouteMatch(route=node.by_method[method], path_params=params)
        except KeyError:
            raise MethodNotAllowed(frozenset(node.by_method)) from None


def _resolve(
    node: _Node, parts: list[str], params: dict[str, str]
) -> tuple[_Node, dict[str, str]] | None:
    if not parts:
        return (node, params) if node.by_method else None

    head, rest = parts[0], parts[1:]
    literal = node.literal.get(head)
    if literal is not None:
        found = _resolve(literal, rest, params)
        if found is not None:
            return found

    if node.param is None:
        return None
    name, child = node.param
    return _resolve(child, rest, {**params, name: head})
