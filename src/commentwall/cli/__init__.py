"""Command line entry point, installed as ``commentwall``.

    commentwall run --port 8080
    commentwall run --debug
    python -m commentwall run

Flags override the ``COMMENTWALL_*`` environment variables.
"""

import argparse

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commentwall",
        description="Serve the commentwall application.",
    )
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="Start the server")
    run.add_argument("--host", help="Address to bind (default: COMMENTWALL_HOST or 127.0.0.1)")
    run.add_argument("--port", type=int, help="Port to bind (default: COMMENTWALL_PORT or 8000)")
    run.add_argument(
        "--debug",
        action="store_true",
        help="Single reloading worker and the HTML traceback page",
    )
    run.add_argument("--workers", type=int, help="Production worker count, 0 for one per CPU")
    run.add_argument("--log-level", choices=LOG_LEVELS, help="Root logging level")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    match args.command:
        case "run":
            from commentwall.cli._run import run_server

            run_server(args)
        case _:
            parser.print_help()
            raise SystemExit(0)
