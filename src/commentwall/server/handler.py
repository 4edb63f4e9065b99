"""One HTTP request, end to end.

Builds a ``Request`` from the ASGI scope, passes it through the
middleware chain to the router and the matched handler, turns whatever
comes back (or is raised) into a ``Response``, and sends it.
"""

import inspect
from collections.abc import Callable, Sequence
from typing import Any

from commentwall._internal.asgi import Receive, Scope, Send
from commentwall._internal.invoke import invoke
from commentwall.errors import HTTPError
from commentwall.http.request import Request
from commentwall.http.response import Response
from commentwall.middleware.protocol import Next
from commentwall.routing.router import Router
from commentwall.server.errors import ErrorHandlers, handle_http_error, handle_internal_error
from commentwall.server.negotiation import negotiate
from commentwall.server.sender import send_response
from commentwall.templating.integration import Renderer

type Providers = dict[type, Callable[..., Any]]


def chain(middleware: Sequence[Callable[..., Any]], endpoint: Next) -> Next:
    """Wrap *endpoint* so ``middleware[0]`` sees the request first."""
    call = endpoint
    for mw in reversed(middleware):

        async def step(request: Request, _mw: Any = mw, _next: Next = call) -> Response:
            return await _mw(request, _next)

        call = step
    return call


def resolve_arguments(
    handler: Callable[..., Any],
    request: Request,
    providers: Providers | None,
) -> dict[str, Any]:
    """Keyword arguments for *handler*, chosen by parameter name and annotation.

    A parameter named ``request`` (or annotated ``Request``) gets the
    request. A parameter named like a path placeholder gets the captured
    string. A parameter annotated with a provided type gets a fresh value
    from that provider. Anything else is left to its default.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in request.path_params:
            kwargs[name] = request.path_params[name]
        elif providers and param.annotation in providers:
            kwargs[name] = providers[param.annotation]()
    return kwargs


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: Sequence[Callable[..., Any]],
    error_handlers: ErrorHandlers,
    renderer: Renderer | None,
    providers: Providers | None,
    debug: bool,
) -> None:
    if scope["type"] != "http":
        return

    async def endpoint(request: Request) -> Response:
        match = router.match(request.method, request.path)
        request = request.with_path_params(match.path_params)
        handler = match.route.handler
        result = await invoke(handler, **resolve_arguments(handler, request, providers))
        return negotiate(result, renderer=renderer)

    request = Request.from_asgi(scope, receive)
    try:
        response = await chain(middleware, endpoint)(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, renderer)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, renderer, debug)

    await send_response(response, send)
