"""Settings for one commentwall process.

``AppConfig`` is frozen. Build it directly in code and tests, or with
``AppConfig.from_env()`` from ``COMMENTWALL_*`` variables when serving.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from commentwall.errors import ConfigurationError

ENV_PREFIX = "COMMENTWALL_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Process settings. Every field has a default::

        AppConfig(secret_key="s3cr3t", port=3000)
    """

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 0  # production only; 0 means one per CPU

    # Signs the session cookie. Required unless debug is on.
    secret_key: str = ""
    session_cookie: str = "commentwall_session"
    session_max_age: int = 86400
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Read ``COMMENTWALL_HOST``, ``_PORT``, ``_DEBUG``, ``_WORKERS``,
        ``_SECRET_KEY``, ``_SESSION_COOKIE``, ``_SESSION_MAX_AGE`` and
        ``_LOG_LEVEL``. Unset or empty variables keep the defaults.

        Raises:
            ConfigurationError: a numeric variable is not an integer.
        """
        env = os.environ if environ is None else environ
        values = {
            key[len(ENV_PREFIX) :].lower(): value
            for key, value in env.items()
            if key.startswith(ENV_PREFIX) and value
        }
        defaults = cls()

        def number(field: str) -> int:
            raw = values.get(field)
            if raw is None:
                return getattr(defaults, field)
            try:
                return int(raw)
            except ValueError:
                msg = f"{ENV_PREFIX}{field.upper()} must be an integer, got {raw!r}"
                raise ConfigurationError(msg) from None

        debug = values.get("debug")
        return cls(
            host=values.get("host", defaults.host),
            port=number("port"),
            debug=debug.lower() in _TRUE_VALUES if debug else defaults.debug,
            workers=number("workers"),
            secret_key=values.get("secret_key", defaults.secret_key),
            session_cookie=values.get("session_cookie", defaults.session_cookie),
            session_max_age=number("session_max_age"),
            log_level=values.get("log_level", defaults.log_level).lower(),
        )
