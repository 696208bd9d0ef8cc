"""Conversion facade chaining parsing, rendering, and template assembly."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from .config import RenderConfig
from .diagnostics import DiagnosticEmitter
from .templates import wrap_template


@dataclass(frozen=True, slots=True)
class Converter:
    """Immutable builder describing one Markdown to LaTeX conversion.

    Every option method returns a new converter, so partially configured
    instances can be shared and specialised safely::

        latex = Converter(markdown).assets(Path("docs")).chapter_level_offset(-1).run()
    """

    content: str
    template_text: str | None = None
    assets_root: Path | None = None
    heading_offset: int = 0
    utf8_escape: tuple[str, str] | None = None

    def template(self, template: str) -> Converter:
        """Splice the output into ``template`` after ``\\begin{document}``."""
        return replace(self, template_text=template)

    def assets(self, assets: Path | str) -> Converter:
        """Resolve links and images against the ``assets`` directory."""
        return replace(self, assets_root=Path(assets))

    def chapter_level_offset(self, offset: int) -> Converter:
        return replace(self, heading_offset=offset)

    def code_utf8_escape(self, start_escape: str, end_escape: str) -> Converter:
        """Wrap non-ASCII characters inside code with the given escape markers."""
        return replace(self, utf8_escape=(start_escape, end_escape))

    def config(self) -> RenderConfig:
        return RenderConfig(
            heading_offset=self.heading_offset,
            assets_root=self.assets_root,
            code_utf8_escape=self.utf8_escape,
        )

    def run(self, emitter: DiagnosticEmitter | None = None) -> str:
        """Convert the content and return the LaTeX document or body."""
        body = convert_markdown(self.content, self.config(), emitter=emitter)
        return wrap_template(body, self.template_text)


def convert_markdown(
    source: str,
    config: RenderConfig | None = None,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> str:
    """Parse Markdown ``source`` and render it to a LaTeX body."""
    from mdtex.adapters.latex.renderer import LaTeXRenderer
    from mdtex.adapters.markdown import parse_markdown

    renderer = LaTeXRenderer(config=config, emitter=emitter)
    return renderer.render(parse_markdown(source))


def markdown_to_latex(markdown: str) -> str:
    """Convert Markdown to a LaTeX body with default settings."""
    return Converter(markdown).run()


__all__ = ["Converter", "convert_markdown", "markdown_to_latex"]
