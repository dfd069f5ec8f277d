"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``initializr/scaffolder/templates/`` directory and renders them with
project-specific context data.  Rendering is pure: the same template id and
context always produce the same text.  Compiled templates are cached by the
Jinja2 environment and shared across generation runs.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, TemplateNotFound


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateNotFoundError(LookupError):
    """Raised when a template id is not registered in the template directory."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Template ids are paths relative to the template directory, e.g.
    ``"simple/main.py.j2"``.  Helper filters and tests are registered on the
    environment; every helper is total and returns an empty value instead of
    raising on missing input.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom helpers
        self.env.filters["join_lines"] = _join_lines_filter
        self.env.filters["map_join"] = _map_join_filter
        self.env.filters["replace_all"] = _replace_all_filter
        self.env.filters["quote"] = _quote_filter
        self.env.tests["includes"] = _includes_test
        self.env.tests["includes_any"] = _includes_any_test

    # -- Rendering -----------------------------------------------------------

    def render(self, template_id: str, context: Mapping[str, Any] | None = None) -> str:
        """Render a single template with the provided context.

        Args:
            template_id: Path relative to the template directory.
            context: Variables available inside the template.

        Returns:
            The rendered template content.

        Raises:
            TemplateNotFoundError: If *template_id* does not exist.
        """
        try:
            template = self.env.get_template(template_id)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_id) from exc
        return template.render(**(context or {}))

    async def render_async(
        self, template_id: str, context: Mapping[str, Any] | None = None
    ) -> str:
        """Render a template in a worker thread."""
        return await asyncio.to_thread(self.render, template_id, context)

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Utility -------------------------------------------------------------

    def has_template(self, template_id: str) -> bool:
        """Return ``True`` if *template_id* is registered."""
        return (self.template_dir / template_id).is_file()

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template ids under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 helpers
# ---------------------------------------------------------------------------

def _join_lines_filter(items: Iterable[Any] | None) -> str:
    """Join items with newlines."""
    if not items:
        return ""
    return "\n".join(str(item) for item in items)


def _map_join_filter(
    items: Iterable[Any] | None,
    prefix: str = "",
    suffix: str = "",
    separator: str = "\n",
) -> str:
    """Wrap each item in *prefix*/*suffix* and join with *separator*."""
    if not items:
        return ""
    return separator.join(f"{prefix}{item}{suffix}" for item in items)


def _replace_all_filter(value: Any, search: str, replacement: str) -> str:
    """Replace every occurrence of *search* in *value*."""
    if not value:
        return ""
    return str(value).replace(search, replacement)


def _quote_filter(value: Any) -> str:
    """Escape a value for use inside a double-quoted Python or TOML string."""
    if not value:
        return ""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return text.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")


def _includes_test(items: Iterable[Any] | None, value: Any) -> bool:
    """``{% if deps is includes("pytest") %}``"""
    if not items:
        return False
    return value in items


def _includes_any_test(items: Iterable[Any] | None, values: Iterable[Any] | None) -> bool:
    """True if any of *values* is in *items*."""
    if not items or not values:
        return False
    pool = list(items)
    return any(value in pool for value in values)
