"""``Template``: what a handler returns to have a page rendered."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True, init=False)
class Template:
    """A template name plus the fields to render it with.

        return Template("profile.html", user=user, comments=comments)
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)
