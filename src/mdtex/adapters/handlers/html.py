"""Best-effort rendering of raw HTML embedded in Markdown.

Only the handful of tags commonly found in hand-written Markdown are
translated; any other tag contributes its text content.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from mdtex.core.context import RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.rules import renders

from ._helpers import record_heading_text
from .inline import emit_text, write_inline_code
from .media import include_path


TABLE_IMAGE_WIDTH = "0.2"
BODY_IMAGE_WIDTH = "0.8"


def _render_node(node: PageElement, context: RenderContext) -> None:
    if isinstance(node, PreformattedString):
        return
    if isinstance(node, NavigableString):
        record_heading_text(context, str(node))
        emit_text(context, str(node))
        return
    if not isinstance(node, Tag):
        return

    name = node.name.lower()
    out = context.out
    if name == "img":
        src = node.get("src")
        if isinstance(src, str) and src:
            width = TABLE_IMAGE_WIDTH if context.in_table else BODY_IMAGE_WIDTH
            out.push_str(context.formatter.html_image(width=width, path=include_path(context, src)))
        return
    if name == "br":
        out.push_str(r"\\").new_line()
        return
    if name == "code":
        # Inline HTML arrives one tag per event, so a lone <code> has no text.
        code = node.get_text()
        if code:
            write_inline_code(context, code)
        return
    for child in node.children:
        _render_node(child, context)


@renders(EventKind.HTML, name="raw_html")
def render_raw_html(event: ParseEvent, context: RenderContext) -> None:
    """Translate images, breaks, and inline code found in raw HTML."""
    soup = BeautifulSoup(event.text or "", "html.parser")
    for node in soup.children:
        _render_node(node, context)


__all__ = ["render_raw_html"]
