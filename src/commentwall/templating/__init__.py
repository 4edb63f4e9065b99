"""Templating — kida environment, renderer, and template return type."""

from commentwall.templating.integration import Renderer, create_environment
from commentwall.templating.returns import Template

__all__ = ["Renderer", "Template", "create_environment"]
