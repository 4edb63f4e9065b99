"""Turn exceptions raised while serving a request into responses.

``HTTPError`` carries its own status and message. Anything else is a
crash: it is logged with its traceback and answered with a 500.
Handlers registered through ``app.error()`` are looked up by exception
type first, then by status code.
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from commentwall._internal.invoke import invoke
from commentwall.errors import HTTPError
from commentwall.http.request import Request
from commentwall.http.response import Response
from commentwall.server.negotiation import negotiate
from commentwall.templating.integration import Renderer

logger = logging.getLogger("commentwall.server")

type ErrorHandlers = Mapping[int | type, Callable[..., Any]]


def _find_handler(
    handlers: ErrorHandlers, exc: Exception, status: int
) -> Callable[..., Any] | None:
    for key in (type(exc), status):
        handler = handlers.get(key)
        if handler is not None:
            return handler
    return None


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    renderer: Renderer | None,
) -> Response:
    """Run *handler* with as many of ``(request, exc)`` as it declares."""
    arity = len(inspect.signature(handler).parameters)
    result = await invoke(handler, *(request, exc)[: min(arity, 2)])
    return negotiate(result, renderer=renderer)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    renderer: Renderer | None,
) -> Response:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = _find_handler(error_handlers, exc, exc.status)
    if handler is None:
        return Response(
            body=exc.detail or f"Error {exc.status}", status=exc.status, headers=exc.headers
        )

    response = await call_error_handler(handler, request, exc, renderer)
    # A handler that just returns a body keeps the error's status
    return response.with_status(exc.status) if response.status == 200 else response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    renderer: Renderer | None,
    debug: bool,
) -> Response:
    logger.exception("500 %s %s", request.method, request.path)

    handler = _find_handler(error_handlers, exc, 500)
    if handler is not None:
        return await call_error_handler(handler, request, exc, renderer)

    if not debug:
        return Response(body="Internal Server Error", status=500)

    from commentwall.server.debug_page import render_debug_page

    return Response(body=render_debug_page(exc, request), status=500)
