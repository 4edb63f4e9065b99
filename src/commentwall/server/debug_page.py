"""Self-contained debug error page, shown for 500s in debug mode only.

Built with plain f-strings and ``html.escape`` rather than the kida
environment, so a broken template layer cannot hide the error report.
Shows the exception, the traceback with source context, and the request
line with sensitive headers masked.
"""

import html
import linecache
import sys
import types
from typing import Any

from commentwall import __version__

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "proxy-authorization"})

_CSS = """\
body { font-family: ui-monospace, Menlo, Consolas, monospace; background: #1a1b26;
       color: #a9b1d6; padding: 2rem; font-size: 14px; line-height: 1.5; }
h1 { color: #f7768e; font-size: 1.3rem; }
h2 { color: #7aa2f7; font-size: 1.05rem; border-bottom: 1px solid #2f3549; }
.exc-message { color: #e0af68; white-space: pre-wrap; }
.frame { border: 1px solid #2f3549; margin: 0.5rem 0; }
.frame-header { background: #24283b; padding: 0.3rem 0.6rem; }
.source-line { white-space: pre; padding: 0 0.6rem; }
.source-line.error-line { background: rgba(247, 118, 142, 0.15); }
"""


def _esc(text: object) -> str:
    return html.escape(str(text), quote=True)


def _extract_frames(tb: types.TracebackType | None) -> list[dict[str, Any]]:
    """Walk a traceback, collecting five lines of source either side."""
    frames: list[dict[str, Any]] = []
    while tb is not None:
        frame = tb.tb_frame
        lineno = tb.tb_lineno
        filename = frame.f_code.co_filename
        source_lines: list[tuple[int, str]] = []
        for i in range(max(1, lineno - 5), lineno + 6):
            line = linecache.getline(filename, i, frame.f_globals)
            if line:
                source_lines.append((i, line.rstrip()))
        frames.append(
            {
                "filename": filename,
                "lineno": lineno,
                "func_name": frame.f_code.co_name,
                "source_lines": source_lines,
            }
        )
        tb = tb.tb_next
    return frames


def _render_frame(frame: dict[str, Any]) -> str:
    lines = []
    for lineno, code in frame["source_lines"]:
        cls = "source-line error-line" if lineno == frame["lineno"] else "source-line"
        lines.append(f'<div class="{cls}">{lineno:>5}  {_esc(code)}</div>')
    return (
        '<div class="frame">'
        f'<div class="frame-header">{_esc(frame["filename"])}:{frame["lineno"]}'
        f' in {_esc(frame["func_name"])}</div>'
        f"{''.join(lines)}</div>"
    )


def _render_request(request: Any) -> str:
    rows = [f"<div>{_esc(request.method)} {_esc(request.path)}</div>"]
    for name, value in request.headers.items():
        shown = "••••••••" if name.lower() in _SENSITIVE_HEADERS else value
        rows.append(f"<div>{_esc(name)}: {_esc(shown)}</div>")
    if request.path_params:
        rows.append(f"<div>path params: {_esc(request.path_params)}</div>")
    return "".join(rows)


def render_debug_page(exc: BaseException, request: Any) -> str:
    """Render a full HTML debug page for *exc* raised while serving *request*."""
    exc_type = type(exc).__name__
    exc_module = type(exc).__module__ or ""
    qualified = f"{exc_module}.{exc_type}" if exc_module and exc_module != "builtins" else exc_type

    sections = [
        f"<h1>{_esc(qualified)}</h1>",
        f'<div class="exc-message">{_esc(exc)}</div>',
    ]
    frames = _extract_frames(exc.__traceback__)
    if frames:
        sections.append("<h2>Traceback</h2>")
        sections.extend(_render_frame(f) for f in frames)
    sections.append("<h2>Request</h2>")
    sections.append(_render_request(request))
    sections.append("<h2>Environment</h2>")
    sections.append(f"<div>Python {_esc(sys.version)}</div>")
    sections.append(f"<div>commentwall {_esc(__version__)}</div>")

    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{_esc(qualified)}</title>"
        f"<style>{_CSS}</style>"
        "</head><body>"
        f"{''.join(sections)}"
        "</body></html>"
    )
