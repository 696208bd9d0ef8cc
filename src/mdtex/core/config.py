"""Configuration model used by the LaTeX renderer.

RenderConfig

`heading_offset` (`int`)
: Added to the level reported by the parser before choosing the sectioning
  command. With the default of `0`, `#` renders as `\\section` and `##` as
  `\\subsection`; an offset of `-1` promotes `#` to `\\chapter`.

`assets_root` (`Path | None`)
: Directory searched for cross-document link targets and used to resolve
  image paths. SVG images found there are rasterized next to their source, so
  the directory must be writable.

`code_utf8_escape` (`tuple[str, str] | None`)
: Start and end markers wrapped around every non-ASCII character that
  appears inside code, for listings set up with an escape character.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator


class RenderConfig(BaseModel):
    """Options controlling a single Markdown to LaTeX conversion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    heading_offset: int = 0
    assets_root: Path | None = None
    code_utf8_escape: tuple[str, str] | None = None

    @field_validator("code_utf8_escape")
    @classmethod
    def _require_markers(cls, value: tuple[str, str] | None) -> tuple[str, str] | None:
        if value is not None and not all(value):
            raise ValueError("code_utf8_escape markers must be non-empty strings")
        return value


__all__ = ["RenderConfig"]
