"""Rendering context primitives shared across the LaTeX pipeline."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import InvalidEventError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from mdtex.adapters.latex.formatter import LaTeXFormatter
    from mdtex.adapters.latex.writer import TexWriter
    from mdtex.adapters.references import ReferenceResolver

    from .config import RenderConfig


class ContextKind(Enum):
    """Structural construct currently open in the event stream."""

    TEXT = auto()
    HEADER = auto()
    EMPHASIS = auto()
    STRONG = auto()
    BLOCK_QUOTE = auto()
    TABLE = auto()
    TABLE_HEAD = auto()
    CODE = auto()
    FOOTNOTE = auto()


ESCAPING_CONTEXTS = frozenset(
    {
        ContextKind.TEXT,
        ContextKind.HEADER,
        ContextKind.EMPHASIS,
        ContextKind.STRONG,
        ContextKind.BLOCK_QUOTE,
        ContextKind.TABLE,
        ContextKind.TABLE_HEAD,
        ContextKind.FOOTNOTE,
    }
)


class ContextStack:
    """Stack of open constructs; the top decides escaping for new text."""

    def __init__(self) -> None:
        self._items: list[ContextKind] = []

    def push(self, kind: ContextKind) -> None:
        self._items.append(kind)

    def pop(self, kind: ContextKind) -> ContextKind:
        """Close ``kind``, which must be the innermost open construct."""
        if not self._items or self._items[-1] is not kind:
            found = self._items[-1].name if self._items else "nothing"
            raise InvalidEventError(f"Cannot close {kind.name}: innermost open construct is {found}")
        return self._items.pop()

    @property
    def top(self) -> ContextKind:
        return self._items[-1] if self._items else ContextKind.TEXT

    def __contains__(self, kind: object) -> bool:
        return kind in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        names = ", ".join(item.name for item in self._items)
        return f"ContextStack([{names}])"


@dataclass(slots=True)
class DocumentState:
    """In-memory state accumulated while rendering a document."""

    headings: list[dict[str, Any]] = field(default_factory=list)
    rasterized: list[tuple[Path, Path]] = field(default_factory=list)
    header_value: str = ""
    heading_command: str | None = None
    cells: int = 0
    lookback: str = ""
    equation_closer: str | None = None

    @property
    def equation_mode(self) -> bool:
        return self.equation_closer is not None

    def add_heading(self, *, level: int, text: str, ref: str | None = None) -> None:
        """Track heading metadata for callers building a table of contents."""
        self.headings.append({"level": level, "text": text, "ref": ref})

    def next_cell(self) -> int:
        """Count one more head cell in the current table."""
        self.cells += 1
        return self.cells

    def reset_cells(self) -> None:
        self.cells = 0


@dataclass
class RenderContext:
    """Shared context passed to every handler during rendering."""

    config: RenderConfig
    formatter: LaTeXFormatter
    writer: TexWriter
    table: TexWriter
    resolver: ReferenceResolver | None = None
    rasterizer: Callable[[Path], Path] | None = None
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    stack: ContextStack = field(default_factory=ContextStack)
    state: DocumentState = field(default_factory=DocumentState)
    runtime: dict[str, Any] = field(default_factory=dict)

    @property
    def in_table(self) -> bool:
        return ContextKind.TABLE in self.stack or ContextKind.TABLE_HEAD in self.stack

    @property
    def out(self) -> TexWriter:
        """Return the buffer that receives markup for the current position."""
        return self.table if self.in_table else self.writer

    @property
    def escaping(self) -> bool:
        return self.stack.top in ESCAPING_CONTEXTS


__all__ = [
    "ESCAPING_CONTEXTS",
    "ContextKind",
    "ContextStack",
    "DocumentState",
    "RenderContext",
]
