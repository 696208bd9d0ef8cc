"""Markdown parsing utilities producing the parse-event stream.

markdown-it-py tokenizes the source into block tokens carrying nested inline
children. This module flattens that tree into the linear sequence of
:class:`~mdtex.core.events.ParseEvent` values consumed by the renderer.

Parser configuration

`preset`
: CommonMark with raw HTML enabled.

`rules`
: ``table`` and ``strikethrough`` plus the typographer rules
  ``replacements`` and ``smartquotes``. ``text_join`` is disabled so
  backslash-escaped brackets keep their markup and math delimiters such as
  ``\\(`` survive tokenization.

`plugins`
: ``footnote_plugin`` and ``tasklists_plugin`` from mdit-py-plugins.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache
import logging

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdtex.core.events import EventKind, ParseEvent


logger = logging.getLogger(__name__)

# Escapes whose markup is kept verbatim so LaTeX math delimiters reach the renderer.
PRESERVED_ESCAPES = frozenset({r"\(", r"\)", r"\[", r"\]"})
TASK_CHECKBOX_CLASS = "task-list-item-checkbox"

_SIMPLE_BLOCK_TOKENS: dict[str, EventKind] = {
    "heading_close": EventKind.HEADING_END,
    "blockquote_open": EventKind.BLOCKQUOTE_START,
    "blockquote_close": EventKind.BLOCKQUOTE_END,
    "bullet_list_close": EventKind.LIST_END,
    "ordered_list_close": EventKind.LIST_END,
    "list_item_open": EventKind.ITEM_START,
    "list_item_close": EventKind.ITEM_END,
    "table_open": EventKind.TABLE_START,
    "table_close": EventKind.TABLE_END,
    "th_open": EventKind.TABLE_CELL_START,
    "th_close": EventKind.TABLE_CELL_END,
    "td_open": EventKind.TABLE_CELL_START,
    "td_close": EventKind.TABLE_CELL_END,
    "hr": EventKind.RULE,
}

_SIMPLE_INLINE_TOKENS: dict[str, EventKind] = {
    "softbreak": EventKind.SOFT_BREAK,
    "hardbreak": EventKind.HARD_BREAK,
    "em_open": EventKind.EMPHASIS_START,
    "em_close": EventKind.EMPHASIS_END,
    "strong_open": EventKind.STRONG_START,
    "strong_close": EventKind.STRONG_END,
    "s_open": EventKind.STRIKETHROUGH_START,
    "s_close": EventKind.STRIKETHROUGH_END,
    "link_close": EventKind.LINK_END,
}


def create_parser() -> MarkdownIt:
    """Return a markdown-it parser configured for LaTeX conversion."""
    parser = (
        MarkdownIt("commonmark", {"typographer": True})
        .enable(["table", "strikethrough", "replacements", "smartquotes"])
        .use(footnote_plugin)
        .use(tasklists_plugin)
    )
    parser.disable("text_join")
    return parser


@lru_cache(maxsize=1)
def _default_parser() -> MarkdownIt:
    return create_parser()


def _attr(token: Token, name: str) -> str | None:
    value = token.attrGet(name)
    return None if value is None else str(value)


def _strip_final_newline(content: str) -> str:
    return content[:-1] if content.endswith("\n") else content


class _EventBuilder:
    """Flatten markdown-it tokens into parse events."""

    def __init__(self, footnotes: dict[int, list[Token]]) -> None:
        self.footnotes = footnotes
        self.events: list[ParseEvent] = []
        self._in_table_head = False
        self._emitted_footnotes: set[int] = set()

    def emit(self, kind: EventKind, **payload: object) -> None:
        self.events.append(ParseEvent(kind, **payload))  # type: ignore[arg-type]

    def walk_blocks(self, tokens: Iterable[Token]) -> None:
        for token in tokens:
            kind = _SIMPLE_BLOCK_TOKENS.get(token.type)
            if kind is not None:
                self.emit(kind)
                continue
            self._block(token)

    def _block(self, token: Token) -> None:
        kind = token.type
        if kind in {"paragraph_open", "paragraph_close"}:
            # Paragraphs of tight list items are hidden and render nothing.
            if not token.hidden:
                self.emit(
                    EventKind.PARAGRAPH_START if kind == "paragraph_open" else EventKind.PARAGRAPH_END
                )
        elif kind == "inline":
            self.walk_inline(token.children or [])
        elif kind == "heading_open":
            self.emit(EventKind.HEADING_START, level=int(token.tag[1:]))
        elif kind == "bullet_list_open":
            self.emit(EventKind.LIST_START)
        elif kind == "ordered_list_open":
            self.emit(EventKind.LIST_START, start=int(_attr(token, "start") or 1))
        elif kind in {"fence", "code_block"}:
            info = token.info.strip() if kind == "fence" else ""
            self.emit(EventKind.CODE_BLOCK_START, language=info or None)
            self.emit(EventKind.TEXT, text=_strip_final_newline(token.content))
            self.emit(EventKind.CODE_BLOCK_END)
        elif kind == "html_block":
            self.emit(EventKind.HTML, text=token.content)
        elif kind == "thead_open":
            self._in_table_head = True
            self.emit(EventKind.TABLE_HEAD_START)
        elif kind == "thead_close":
            self._in_table_head = False
            self.emit(EventKind.TABLE_HEAD_END)
        elif kind in {"tr_open", "tr_close"}:
            # The head row is delimited by the head events themselves.
            if not self._in_table_head:
                self.emit(EventKind.TABLE_ROW_START if kind == "tr_open" else EventKind.TABLE_ROW_END)
        elif kind in {"tbody_open", "tbody_close"}:
            return
        else:
            logger.debug("Ignoring unsupported block token '%s'", kind)

    def walk_inline(self, tokens: Sequence[Token]) -> None:
        for token in tokens:
            kind = _SIMPLE_INLINE_TOKENS.get(token.type)
            if kind is not None:
                self.emit(kind)
                continue
            self._inline(token)

    def _inline(self, token: Token) -> None:
        kind = token.type
        if kind == "text":
            content = token.content
            if self.events and self.events[-1].kind is EventKind.TASK_MARKER:
                # tasklists keeps the space that separated the checkbox from the text.
                content = content.removeprefix(" ")
            if content:
                self.emit(EventKind.TEXT, text=content)
        elif kind == "text_special":
            preserved = token.info == "escape" and token.markup in PRESERVED_ESCAPES
            self.emit(EventKind.TEXT, text=token.markup if preserved else token.content)
        elif kind == "code_inline":
            self.emit(EventKind.INLINE_CODE, text=token.content)
        elif kind == "link_open":
            self.emit(EventKind.LINK_START, url=_attr(token, "href"), title=_attr(token, "title"))
        elif kind == "image":
            self.emit(
                EventKind.IMAGE,
                path=_attr(token, "src"),
                title=_attr(token, "title"),
                text=token.content,
            )
        elif kind == "html_inline":
            if TASK_CHECKBOX_CLASS in token.content:
                self.emit(EventKind.TASK_MARKER, checked='checked="checked"' in token.content)
            else:
                self.emit(EventKind.HTML, text=token.content)
        elif kind == "footnote_ref":
            self._footnote(token)
        elif kind == "footnote_anchor":
            return
        else:
            logger.debug("Ignoring unsupported inline token '%s'", kind)

    def _footnote(self, token: Token) -> None:
        """Inline the definition at its first reference; later ones only point at it."""
        meta = token.meta or {}
        identifier = int(meta.get("id", 0))
        label = str(identifier + 1)
        definition = self.footnotes.get(identifier)
        if definition is None or identifier in self._emitted_footnotes:
            self.emit(EventKind.FOOTNOTE_REFERENCE, label=label)
            return
        self._emitted_footnotes.add(identifier)
        self.emit(EventKind.FOOTNOTE_DEFINITION_START, label=label)
        self.walk_blocks(definition)
        self.emit(EventKind.FOOTNOTE_DEFINITION_END, label=label)


def split_footnotes(tokens: Sequence[Token]) -> tuple[list[Token], dict[int, list[Token]]]:
    """Separate footnote definitions from the body tokens.

    Returns the body tokens and the definition tokens keyed by footnote id.
    """
    body: list[Token] = []
    footnotes: dict[int, list[Token]] = {}
    current: list[Token] | None = None
    in_block = False
    for token in tokens:
        if token.type == "footnote_block_open":
            in_block = True
        elif token.type == "footnote_block_close":
            in_block = False
        elif token.type == "footnote_open":
            current = footnotes.setdefault(int((token.meta or {}).get("id", 0)), [])
        elif token.type == "footnote_close":
            current = None
        elif token.type == "footnote_anchor":
            continue
        elif current is not None:
            current.append(token)
        elif not in_block:
            body.append(token)
    return body, footnotes


def parse_markdown(source: str, parser: MarkdownIt | None = None) -> list[ParseEvent]:
    """Parse Markdown source into the flat event sequence consumed by the renderer."""
    active = parser or _default_parser()
    tokens = active.parse(source, {})
    body, footnotes = split_footnotes(tokens)
    builder = _EventBuilder(footnotes)
    builder.walk_blocks(body)
    return builder.events


__all__ = [
    "PRESERVED_ESCAPES",
    "create_parser",
    "parse_markdown",
    "split_footnotes",
]
