"""Utilities for rendering LaTeX partials (snippets)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from .utils import escape_latex_chars


TEMPLATE_DIR = Path(__file__).resolve().parent / "partials"


class LaTeXFormatter:
    """Render LaTeX templates using Jinja2 with custom delimiters.

    Each ``.tex`` file of the partials directory is exposed as a method named
    after the file stem, so ``formatter.figure(path=..., caption=...)`` renders
    ``partials/figure.tex``.
    """

    def __init__(self, template_dir: Path = TEMPLATE_DIR) -> None:
        self.env = Environment(
            block_start_string=r"\BLOCK{",
            block_end_string=r"}",
            variable_start_string=r"\VAR{",
            variable_end_string=r"}",
            comment_start_string=r"\COMMENT{",
            comment_end_string=r"}",
            loader=FileSystemLoader(template_dir),
            undefined=StrictUndefined,
        )
        self.env.filters.setdefault("latex_escape", escape_latex_chars)

        self._template_names: dict[str, str] = {}
        for path in template_dir.glob("**/*.tex"):
            relative = path.relative_to(template_dir)
            key = relative.with_suffix("").as_posix().replace("/", "_")
            self._template_names[key] = relative.as_posix()

        self.templates: dict[str, Template] = {}

    @property
    def template_names(self) -> set[str]:
        """Return the set of available template identifiers."""
        return set(self._template_names)

    def _get_template(self, key: str) -> Template:
        """Return a cached template instance loading it on demand."""
        template = self.templates.get(key)
        if template is not None:
            return template

        template_name = self._template_names.get(key)
        if template_name is None:
            raise KeyError(key)

        template = self.env.get_template(template_name)
        self.templates[key] = template
        return template

    def __getattr__(self, method: str) -> Callable[..., str]:
        """Proxy calls to templates."""
        if method.startswith("_"):
            raise AttributeError(method)
        try:
            template = self._get_template(method)
        except KeyError:
            raise AttributeError(f"Object has no template for '{method}'") from None

        def render_template(**kwargs: Any) -> str:
            return template.render(**kwargs)

        return render_template

    def __getitem__(self, key: str) -> Callable[..., str]:
        return self._get_template(key).render


__all__ = ["TEMPLATE_DIR", "LaTeXFormatter"]
