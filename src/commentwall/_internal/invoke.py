"""Call a handler that may be either ``def`` or ``async def``."""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    result = handler(*args, **kwargs)
    return await result if inspect.isawaitable(result) else result
