"""The middleware shape.

Middleware is any async callable taking the request and the next step
of the chain. It can answer on its own (the session gate does) or call
``next`` and adjust what comes back (the session middleware does)::

    async def mw(request: Request, next: Next) -> Response: ...
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from commentwall.http.request import Request
from commentwall.http.response import Response

type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    async def __call__(self, request: Request, next: Next) -> Response: ...
