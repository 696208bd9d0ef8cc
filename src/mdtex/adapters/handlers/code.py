"""Code-related handlers for the LaTeX renderer."""

from __future__ import annotations

import re

from mdtex.core.context import ContextKind, RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.rules import renders


_ATTRIBUTE_SUFFIX = re.compile(r",.*", re.DOTALL)


def listing_language(info: str | None) -> str | None:
    """Return the listings language named by a fence info string.

    Attributes after the first comma (``rust,editable``) are dropped and only
    the first word is kept.
    """
    if not info:
        return None
    cleaned = _ATTRIBUTE_SUFFIX.sub("", info).strip()
    if not cleaned:
        return None
    return cleaned.split()[0]


@renders(EventKind.CODE_BLOCK_START, name="code_block_start")
def render_code_block_start(event: ParseEvent, context: RenderContext) -> None:
    """Open a listing; text up to the matching end event is written verbatim."""
    context.stack.push(ContextKind.CODE)
    opener = context.formatter.codeblock_begin(language=listing_language(event.language))
    context.out.push_str(opener).new_line()


@renders(EventKind.CODE_BLOCK_END, name="code_block_end")
def render_code_block_end(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.pop(ContextKind.CODE)
    context.out.new_line().push_str(r"\end{lstlisting}").new_line()


__all__ = ["listing_language"]
