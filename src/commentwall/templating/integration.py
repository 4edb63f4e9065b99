"""Kida environment setup and the HTML renderer.

The environment is created once when the app compiles and shared by
every request. Autoescaping is on, so any value interpolated into a
template (user names, emails, comment bodies) reaches the page as text,
never as markup.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, PackageLoader

from commentwall.config import AppConfig


def create_environment(config: AppConfig) -> Environment:
    """Create the kida Environment over the packaged templates."""
    return Environment(
        loader=PackageLoader("commentwall.templating", "templates"),
        autoescape=True,
        auto_reload=config.debug,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class Renderer:
    """Render a named template with a mapping of fields to escaped HTML."""

    __slots__ = ("_env",)

    def __init__(self, env: Environment) -> None:
        self._env = env

    @classmethod
    def from_config(cls, config: AppConfig) -> "Renderer":
        return cls(create_environment(config))

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, template: str, fields: Mapping[str, Any]) -> str:
        return self._env.get_template(template).render(dict(fields))
