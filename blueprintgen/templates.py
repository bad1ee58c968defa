"""Jinja2 template rendering for blueprint files.

Provides the TemplateRenderer class, the default implementation of the
pluggable ``render(source, locals) -> str`` function the engine calls for
every blueprint file.  Any callable with that signature can be used instead.
"""

from __future__ import annotations

from typing import Any, Protocol

from jinja2 import Environment, StrictUndefined, Undefined

from .strings import camelize, classify, dasherize, decamelize, pluralize


class Renderer(Protocol):
    """Anything that can turn raw template source plus locals into text."""

    def __call__(self, source: str, context: dict[str, Any]) -> str: ...


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders blueprint file contents as Jinja2 templates.

    Blueprint files are rendered from strings rather than through a loader,
    because their location is only known once the blueprint is resolved.
    Locals are exposed both as top-level variables and through the casing
    filters (``{{ name | classify }}``).
    """

    def __init__(self, strict: bool = False) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined if strict else Undefined,
        )
        # Register custom filters
        self.env.filters["camelize"] = camelize
        self.env.filters["classify"] = classify
        self.env.filters["dasherize"] = dasherize
        self.env.filters["decamelize"] = decamelize
        self.env.filters["pluralize"] = pluralize

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def __call__(self, source: str, context: dict[str, Any]) -> str:
        return self.render_string(source, context)
