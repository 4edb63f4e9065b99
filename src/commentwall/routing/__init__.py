"""Routing: path patterns with ``{param}`` segments and a trie matcher."""

from commentwall.routing.route import Param, Route, RouteMatch, parse_pattern
from commentwall.routing.router import Router

__all__ = ["Param", "Route", "RouteMatch", "Router", "parse_pattern"]
