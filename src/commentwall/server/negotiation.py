"""Turn whatever a handler returned into a ``Response``."""

from typing import Any

from commentwall.errors import ConfigurationError
from commentwall.http.response import Redirect, Response
from commentwall.templating.integration import Renderer
from commentwall.templating.returns import Template


def negotiate(value: Any, *, renderer: Renderer | None = None) -> Response:
    """Accepted return values:

    - ``Response``: sent unchanged
    - ``Redirect``: 302 (or its own status) with ``Location``
    - ``Template``: rendered to HTML with *renderer*
    - ``str``: an HTML body with status 200
    - ``(value, status)``: any of the above with the status replaced
    """
    match value:
        case Response():
            return value
        case Redirect():
            return value.to_response()
        case Template(name=name, context=context):
            if renderer is None:
                msg = "Template return type requires a Renderer; the app was not frozen."
                raise ConfigurationError(msg)
            return Response(body=renderer.render(name, context))
        case str():
            return Response(body=value)
        case (inner, int() as status):
            return negotiate(inner, renderer=renderer).with_status(status)
    msg = (
        f"Cannot convert {type(value).__name__} to a response. "
        "Return str, Template, Response, Redirect, or (value, status)."
    )
    raise TypeError(msg)
