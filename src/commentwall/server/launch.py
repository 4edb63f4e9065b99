"""Serve the app with pounce.

Debug runs one worker that reloads on file changes. Production runs a
pool of workers (``0`` lets pounce pick one per CPU) and no reloader.
"""

import logging

logger = logging.getLogger("commentwall.server")


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = True,
    app_path: str | None = None,
) -> None:
    """Single worker around the live *app* object.

    Pass *app_path* (``"module:attribute"``) to have pounce re-import the
    app after each reload instead of reusing the object it was given.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.debug("pounce dev server: reload=%s app_path=%s", reload, app_path)
    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app, app_path=app_path).run()


def run_production_server(
    app: object,
    host: str = "0.0.0.0",
    port: int = 8000,
    workers: int = 0,
    *,
    log_level: str = "info",
) -> None:
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.debug("pounce production server: workers=%d", workers)
    config = ServerConfig(host=host, port=port, workers=workers, log_level=log_level)
    Server(config, app).run()
