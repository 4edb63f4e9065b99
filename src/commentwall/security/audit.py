"""Security events: logins, denied profile views, gate redirects and
rejected comments.

Each event goes to one process-wide sink. The default sink writes a
line to the ``commentwall.security`` logger; tests install a list's
``append`` to capture events instead.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any

logger = logging.getLogger("commentwall.security")


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    name: str
    timestamp: float = field(default_factory=time)
    path: str | None = None
    method: str | None = None
    user_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


type SecurityEventSink = Callable[[SecurityEvent], None]


def log_security_event(event: SecurityEvent) -> None:
    logger.info(
        "%s method=%s path=%s user_id=%s details=%s",
        event.name,
        event.method,
        event.path,
        event.user_id,
        event.details,
    )


_lock = threading.Lock()
_sink: SecurityEventSink | None = log_security_event


def set_security_event_sink(sink: SecurityEventSink | None) -> SecurityEventSink | None:
    """Install *sink* (``None`` drops events) and return the one it replaces."""
    global _sink
    with _lock:
        previous, _sink = _sink, sink
    return previous


def emit_security_event(
    name: str,
    *,
    request: Any | None = None,
    user_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Build a ``SecurityEvent`` and hand it to the current sink.

    *request* only needs ``path`` and ``method`` attributes.
    """
    with _lock:
        sink = _sink
    if sink is not None:
        sink(
            SecurityEvent(
                name=name,
                path=getattr(request, "path", None),
                method=getattr(request, "method", None),
                user_id=user_id,
                details=details or {},
            )
        )
