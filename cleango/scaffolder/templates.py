"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``cleango/scaffolder/templates/`` directory and renders them with a binding
dictionary.  Rendering happens fully in memory; callers decide when and where
the result is written.  Undefined placeholders are errors, never blanks.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from cleango.errors import TemplateError
from .naming import to_camel_case, to_pascal_case, to_snake_case


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Any Jinja2 failure (unknown placeholder, malformed
    block, missing template) is re-raised as :class:`TemplateError` naming
    the offending template.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = to_pascal_case
        self.env.filters["camel_case"] = to_camel_case
        self.env.filters["snake_case"] = to_snake_case
        self.env.filters["go_quote"] = go_quote

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"components/handler.go.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            TemplateError: If the template is missing, malformed, or refers to
                a variable absent from *context*.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(template_path, _describe(exc)) from exc

    def render_string(
        self, template_string: str, context: dict[str, Any], name: str = "<string>"
    ) -> str:
        """Render an inline template string with the provided context."""
        try:
            template = self.env.from_string(template_string)
            return template.render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(name, _describe(exc)) from exc

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


def go_quote(value: Any) -> str:
    """Render *value* as a double-quoted Go string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def _describe(exc: jinja2.TemplateError) -> str:
    if isinstance(exc, jinja2.TemplateSyntaxError):
        return f"{exc.message} (line {exc.lineno})"
    if isinstance(exc, jinja2.TemplateNotFound):
        return "template not found"
    return exc.message or exc.__class__.__name__
