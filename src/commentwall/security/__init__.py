"""Security event channel."""

from commentwall.security.audit import (
    SecurityEvent,
    emit_security_event,
    log_security_event,
    set_security_event_sink,
)

__all__ = [
    "SecurityEvent",
    "emit_security_event",
    "log_security_event",
    "set_security_event_sink",
]
