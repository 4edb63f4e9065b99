"""commentwall: a session-gated comment wall served over ASGI.

Users log in with email and password, see their own profile, and post
to one shared, in-memory list of comments::

    from commentwall import AppConfig, create_app

    app = create_app(AppConfig(secret_key="change-me"))
    app.run()

Names below are imported on first access, so ``import commentwall``
stays cheap.
"""

import importlib

__version__ = "0.1.0"

_EXPORTS = {
    "App": "commentwall.app",
    "AppConfig": "commentwall.config",
    "CommentWallError": "commentwall.errors",
    "ConfigurationError": "commentwall.errors",
    "Forbidden": "commentwall.errors",
    "HTTPError": "commentwall.errors",
    "NotFound": "commentwall.errors",
    "Redirect": "commentwall.http.response",
    "Request": "commentwall.http.request",
    "Response": "commentwall.http.response",
    "SessionAccessor": "commentwall.session",
    "Store": "commentwall.store",
    "Template": "commentwall.templating.returns",
    "create_app": "commentwall.views",
    "validate": "commentwall.validation",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    module = _EXPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module), name)
