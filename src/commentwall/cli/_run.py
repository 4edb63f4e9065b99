"""``commentwall run`` — development or production server command.

Builds the config from the environment, applies CLI overrides, sets up
logging, and starts the app.
"""

import argparse
import dataclasses
import logging
import sys

from commentwall.config import AppConfig
from commentwall.errors import ConfigurationError


def build_config(args: argparse.Namespace, base: AppConfig | None = None) -> AppConfig:
    """Environment config with CLI flags layered on top."""
    config = base or AppConfig.from_env()
    overrides: dict[str, object] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.debug:
        overrides["debug"] = True
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.log_level:
        overrides["log_level"] = args.log_level
    return dataclasses.replace(config, **overrides)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_server(args: argparse.Namespace) -> None:
    """Start the commentwall server (dev or production mode)."""
    from commentwall.views import create_app

    try:
        config = build_config(args)
        configure_logging(config.log_level)
        app = create_app(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.run()
