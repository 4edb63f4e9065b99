"""The ``App`` object: collects routes, middleware, providers and error
handlers during setup, then compiles them once and serves ASGI.

Setup is single-threaded. The first request, lifespan startup or
``run()`` compiles the app; from then on it is read-only and any
attempt to register more raises ``RuntimeError``.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from commentwall._internal.asgi import Receive, Scope, Send
from commentwall.config import AppConfig
from commentwall.middleware.protocol import Middleware
from commentwall.routing.route import Route
from commentwall.routing.router import Router
from commentwall.server.handler import handle_request
from commentwall.templating.integration import Renderer

logger = logging.getLogger("commentwall.app")

type Handler = Callable[..., Any]
type ErrorHandler = Callable[..., Any]


class App:
    """An ASGI application.

    Usage::

        app = App(AppConfig(secret_key="..."))
        app.add_middleware(SessionMiddleware(...))
        app.provide(Store, lambda: store)

        @app.route("/user/{id}")
        def profile(id: str, store: Store): ...
    """

    __slots__ = (
        "_compile_lock",
        "_compiled",
        "_error_handlers",
        "_middleware",
        "_providers",
        "_renderer",
        "_router",
        "_routes",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self._routes: list[Route] = []
        self._middleware: list[Middleware] = []
        self._providers: dict[type, Callable[..., Any]] = {}
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._compile_lock = threading.Lock()
        self._compiled = False
        self._router: Router | None = None
        self._renderer: Renderer | None = None

    # -- Setup --

    def route(
        self, path: str, *, methods: list[str] | None = None, name: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a handler for *path* (GET unless *methods* says otherwise)."""
        allowed = frozenset(m.upper() for m in methods or ["GET"])

        def register(handler: Handler) -> Handler:
            self._check_open()
            self._routes.append(Route(path=path, handler=handler, methods=allowed, name=name))
            return handler

        return register

    def provide(self, annotation: type, factory: Callable[[], Any]) -> None:
        """Inject ``factory()`` into handler parameters annotated *annotation*."""
        self._check_open()
        self._providers[annotation] = factory

    def error(self, key: int | type[Exception]) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator registering an error handler for a status code or exception type."""

        def register(handler: ErrorHandler) -> ErrorHandler:
            self._check_open()
            self._error_handlers[key] = handler
            return handler

        return register

    def add_middleware(self, middleware: Middleware) -> None:
        """Append to the chain. The first one added sees the request first."""
        self._check_open()
        self._middleware.append(middleware)

    # -- Compiled state --

    @property
    def routes(self) -> list[Route]:
        return self._compiled_router().routes

    @property
    def renderer(self) -> Renderer:
        self._ensure_frozen()
        assert self._renderer is not None
        return self._renderer

    def _compiled_router(self) -> Router:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    def _ensure_frozen(self) -> None:
        if self._compiled:
            return
        with self._compile_lock:
            if not self._compiled:
                self._compile()

    def _compile(self) -> None:
        router = Router()
        for route in self._routes:
            router.add(route)
        router.compile()

        self._router = router
        self._renderer = Renderer.from_config(self.config)
        self._compiled = True
        logger.debug("Compiled %d routes, %d middleware", len(self._routes), len(self._middleware))

    def _check_open(self) -> None:
        if self._compiled:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and providers before calling app.run()."
            )
            raise RuntimeError(msg)

    # -- Serving --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Serve with pounce: reloading dev server when ``config.debug``, workers otherwise."""
        self._ensure_frozen()
        from commentwall.server.launch import run_dev_server, run_production_server

        host = host or self.config.host
        port = port or self.config.port
        mode = "debug" if self.config.debug else "production"
        logger.info("Starting commentwall on %s:%d (%s)", host, port, mode)

        if self.config.debug:
            run_dev_server(self, host, port, reload=True, app_path=app_path)
        else:
            run_production_server(
                self,
                host=host,
                port=port,
                workers=self.config.workers,
                log_level=self.config.log_level,
            )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            router=self._compiled_router(),
            middleware=tuple(self._middleware),
            error_handlers=self._error_handlers,
            renderer=self._renderer,
            providers=self._providers,
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        # Compiling at startup surfaces bad routes before traffic arrives
        while True:
            message = await receive()
            if message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
            if message["type"] != "lifespan.startup":
                continue
            try:
                self._ensure_frozen()
            except Exception as exc:
                logger.exception("Startup failed")
                await send({"type": "lifespan.startup.failed", "message": str(exc)})
                return
            await send({"type": "lifespan.startup.complete"})
