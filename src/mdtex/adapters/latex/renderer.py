"""High-level parse-event to LaTeX renderer based on the modular pipeline."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from mdtex.core.config import RenderConfig
from mdtex.core.context import DocumentState, RenderContext
from mdtex.core.diagnostics import DiagnosticEmitter, LoggingEmitter
from mdtex.core.events import ParseEvent
from mdtex.core.exceptions import InvalidEventError
from mdtex.core.rules import RenderEngine

from ..references import DirectoryReferenceResolver, ReferenceResolver
from ..transformers import rasterize_svg
from .formatter import LaTeXFormatter
from .writer import TexWriter


class LaTeXRenderer:
    """Convert a stream of parse events to a LaTeX body.

    A renderer can be reused: every call to :meth:`render` builds a fresh
    context, so no state leaks from one document to the next.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        formatter: LaTeXFormatter | None = None,
        resolver: ReferenceResolver | None = None,
        rasterizer: Callable[[Path], Path] | None = rasterize_svg,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.formatter = formatter or LaTeXFormatter()
        if resolver is None and self.config.assets_root is not None:
            resolver = DirectoryReferenceResolver(self.config.assets_root)
        self.resolver = resolver
        self.rasterizer = rasterizer
        self.emitter = emitter or LoggingEmitter()

        self.engine = RenderEngine()
        self._register_builtin_handlers()

    def _register_builtin_handlers(self) -> None:
        """Register the initial set of handlers for the renderer."""
        from ..handlers import (
            basic as basic_handlers,
            code as code_handlers,
            html as html_handlers,
            inline as inline_handlers,
            links as link_handlers,
            media as media_handlers,
            tables as table_handlers,
        )

        self.engine.collect_from(basic_handlers)
        self.engine.collect_from(inline_handlers)
        self.engine.collect_from(code_handlers)
        self.engine.collect_from(link_handlers)
        self.engine.collect_from(media_handlers)
        self.engine.collect_from(table_handlers)
        self.engine.collect_from(html_handlers)

    def register(self, handler: Any) -> None:
        """Register additional handlers on demand.

        Arguments can be callables decorated with :func:`renders` or modules/classes
        exposing decorated attributes.
        """
        definition = getattr(handler, "__render_rule__", None)
        if definition is not None:
            self.engine.register(handler)
            return

        self.engine.collect_from(handler)

    def render(
        self,
        events: Iterable[ParseEvent],
        *,
        runtime: Mapping[str, Any] | None = None,
        state: DocumentState | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> str:
        """Render parse events into a LaTeX body."""
        context = RenderContext(
            config=self.config,
            formatter=self.formatter,
            writer=TexWriter(),
            table=TexWriter(),
            resolver=self.resolver,
            rasterizer=self.rasterizer,
            emitter=emitter or self.emitter,
            state=state or DocumentState(),
        )
        if runtime:
            context.runtime.update(runtime)

        self.engine.run(events, context)

        if context.stack:
            raise InvalidEventError(f"Event stream ended with unclosed constructs: {context.stack!r}")
        return context.writer.getvalue()

    def describe_registered_rules(self) -> list[dict[str, object]]:
        """Return detailed metadata about registered rules."""
        return self.engine.registry.describe()


__all__ = ["LaTeXRenderer"]
