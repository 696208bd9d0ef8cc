"""Assembly of rendered bodies into LaTeX document templates."""

from __future__ import annotations

from pathlib import Path

from .exceptions import TemplateError


DOCUMENT_MARKER = r"\begin{document}"


def wrap_template(body: str, template: str | None = None) -> str:
    """Insert ``body`` right after the document-begin marker of ``template``.

    Without a template the body is returned unchanged.
    """
    if template is None:
        return body
    index = template.find(DOCUMENT_MARKER)
    if index == -1:
        raise TemplateError(f"Template does not contain '{DOCUMENT_MARKER}'")
    split = index + len(DOCUMENT_MARKER)
    return template[:split] + body + template[split:]


def load_template(path: Path | str) -> str:
    """Read a template file as UTF-8 text."""
    template_path = Path(path)
    try:
        return template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"Unable to read template '{template_path}': {exc}") from exc


__all__ = ["DOCUMENT_MARKER", "load_template", "wrap_template"]
