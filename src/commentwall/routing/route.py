"""Route patterns and match results.

A pattern is a ``/``-separated path whose segments are either literal
text or a ``{name}`` placeholder. Placeholders capture one non-empty
segment as a string; nothing is converted.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from commentwall.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Param:
    """A ``{name}`` placeholder in a route pattern."""

    name: str


type Segment = str | Param


def parse_pattern(path: str) -> tuple[Segment, ...]:
    """Split *path* into literal segments and ``Param`` placeholders.

    ``"/"`` has no segments; ``"/user/{id}"`` is ``("user", Param("id"))``.
    """
    if not path.startswith("/"):
        msg = f"Route path must start with '/': {path!r}"
        raise ConfigurationError(msg)

    segments: list[Segment] = []
    for part in filter(None, path.split("/")):
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(part)
            continue
        name = part[1:-1]
        if not name.isidentifier():
            msg = f"Invalid path parameter {part!r} in route {path!r}"
            raise ConfigurationError(msg)
        segments.append(Param(name))
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class Route:
    """A handler bound to a path pattern for a set of HTTP methods."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None

    @property
    def segments(self) -> tuple[Segment, ...]:
        return parse_pattern(self.path)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    path_params: dict[str, str]
