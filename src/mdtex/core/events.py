"""Parse events consumed by the rendering engine.

A Markdown parser flattens the document into a linear sequence of
:class:`ParseEvent` values. Container constructs appear as a ``*_START`` /
``*_END`` pair surrounding their content while leaf constructs (text, inline
code, images, breaks) are single events. The engine consumes the sequence once,
in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    """Tag identifying the structural token carried by a parse event."""

    HEADING_START = "heading_start"
    HEADING_END = "heading_end"
    PARAGRAPH_START = "paragraph_start"
    PARAGRAPH_END = "paragraph_end"
    EMPHASIS_START = "emphasis_start"
    EMPHASIS_END = "emphasis_end"
    STRONG_START = "strong_start"
    STRONG_END = "strong_end"
    STRIKETHROUGH_START = "strikethrough_start"
    STRIKETHROUGH_END = "strikethrough_end"
    BLOCKQUOTE_START = "blockquote_start"
    BLOCKQUOTE_END = "blockquote_end"
    LIST_START = "list_start"
    LIST_END = "list_end"
    ITEM_START = "item_start"
    ITEM_END = "item_end"
    TASK_MARKER = "task_marker"
    LINK_START = "link_start"
    LINK_END = "link_end"
    IMAGE = "image"
    TABLE_START = "table_start"
    TABLE_END = "table_end"
    TABLE_HEAD_START = "table_head_start"
    TABLE_HEAD_END = "table_head_end"
    TABLE_ROW_START = "table_row_start"
    TABLE_ROW_END = "table_row_end"
    TABLE_CELL_START = "table_cell_start"
    TABLE_CELL_END = "table_cell_end"
    CODE_BLOCK_START = "code_block_start"
    CODE_BLOCK_END = "code_block_end"
    INLINE_CODE = "inline_code"
    FOOTNOTE_REFERENCE = "footnote_reference"
    FOOTNOTE_DEFINITION_START = "footnote_definition_start"
    FOOTNOTE_DEFINITION_END = "footnote_definition_end"
    HTML = "html"
    TEXT = "text"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    RULE = "rule"


@dataclass(frozen=True, slots=True)
class ParseEvent:
    """One structural token from the Markdown source.

    Only the payload fields meaningful for ``kind`` are populated:

    ``level``
    : heading level reported by the parser (``#`` is 1).

    ``start``
    : first number of an ordered list, ``None`` for bullet lists.

    ``url`` / ``title``
    : link target and title; ``title`` doubles as the image caption.

    ``path``
    : image source as written in the document.

    ``language``
    : raw info string of a fenced code block, ``None`` when indented.

    ``text``
    : literal payload of text, inline code, and raw HTML events.

    ``checked``
    : state of a task-list marker.

    ``label``
    : footnote label shared by references and definitions.
    """

    kind: EventKind
    level: int | None = None
    start: int | None = None
    url: str | None = None
    title: str | None = None
    path: str | None = None
    language: str | None = None
    text: str | None = None
    checked: bool | None = None
    label: str | None = None


def text(value: str) -> ParseEvent:
    """Shorthand for a text event."""
    return ParseEvent(EventKind.TEXT, text=value)


def start_heading(level: int) -> ParseEvent:
    """Shorthand for a heading start event."""
    return ParseEvent(EventKind.HEADING_START, level=level)


def event(kind: EventKind, **payload: object) -> ParseEvent:
    """Build an event of ``kind`` with an arbitrary payload."""
    return ParseEvent(kind, **payload)  # type: ignore[arg-type]


__all__ = ["EventKind", "ParseEvent", "event", "start_heading", "text"]
