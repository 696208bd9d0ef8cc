"""Inline handlers: running text, math spans, inline code, and footnotes."""

from __future__ import annotations

from mdtex.core.context import ContextKind, RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.exceptions import DelimiterExhaustedError
from mdtex.core.rules import renders

from ..latex.utils import escape_latex_chars, wrap_non_ascii
from ._helpers import record_heading_text


LOOKBACK_LIMIT = 100
MATH_DELIMITERS: dict[str, str] = {
    r"\(": r"\)",
    r"\[": r"\]",
    "$$": "$$",
}
_LSTINLINE_DELIMITERS = "|!@+=~/"
_CODE_REPLACEMENTS = (("…", "..."), ("З", "3"))


def _find_opener(text: str, start: int) -> tuple[int, str] | None:
    """Return the position and marker of the earliest math opener."""
    best: tuple[int, str] | None = None
    for marker in MATH_DELIMITERS:
        index = text.find(marker, start)
        if index != -1 and (best is None or index < best[0]):
            best = (index, marker)
    return best


def _rewrite_split_prefix(context: RenderContext, char: str) -> bool:
    """Replace the escaped form of ``char`` at the end of the output by ``char``.

    Used when a math opener straddles two text events: its first character was
    already written escaped and has to become raw again. Returns ``False`` when
    other markup was written after ``char``, in which case the two events are
    not adjacent and no opener straddles them.
    """
    out = context.out
    escaped = escape_latex_chars(char)
    if escaped == char or not out.endswith(escaped):
        return False
    out.truncate(len(escaped)).push_str(char)
    return True


def emit_text(context: RenderContext, text: str) -> None:
    """Write ``text`` escaped, leaving math spans verbatim.

    The lookback window holds the recent text that has not been consumed by a
    math marker, so an opener whose first character ended the previous event is
    still detected. It is cleared once it grows past ``LOOKBACK_LIMIT``
    characters; a marker split exactly at that point is missed.
    """
    state = context.state
    out = context.out
    if len(state.lookback) > LOOKBACK_LIMIT:
        state.lookback = ""

    carry = state.lookback[-1:]
    window = carry + text
    cursor = len(carry)
    position = 0

    while True:
        if state.equation_closer is None:
            found = _find_opener(window, position)
            if found is not None and found[0] < cursor and not _rewrite_split_prefix(context, carry):
                found = _find_opener(window, cursor)
            if found is None:
                out.escape_str(window[max(position, cursor) :])
                break
            index, marker = found
            if index >= cursor:
                out.escape_str(window[max(position, cursor) : index])
            out.push_str(window[max(index, cursor) : index + len(marker)])
            state.equation_closer = MATH_DELIMITERS[marker]
            position = index + len(marker)
        else:
            closer = state.equation_closer
            index = window.find(closer, max(position, cursor - len(closer) + 1))
            if index == -1:
                out.push_str(window[max(position, cursor) :])
                break
            out.push_str(window[max(position, cursor) : index + len(closer)])
            state.equation_closer = None
            position = index + len(closer)

    state.lookback = window[position:] if position else state.lookback + text


def emit_code_text(context: RenderContext, text: str) -> None:
    """Write code verbatim, wrapping non-ASCII characters when configured."""
    markers = context.config.code_utf8_escape
    if markers is not None:
        text = wrap_non_ascii(text, *markers)
    context.out.push_str(text)


@renders(EventKind.TEXT, name="text")
def render_text(event: ParseEvent, context: RenderContext) -> None:
    """Route text to the active buffer with the escaping of the current context."""
    text = event.text or ""
    record_heading_text(context, text)
    if not context.escaping:
        emit_code_text(context, text)
        return
    emit_text(context, text)


def pick_lstinline_delimiter(code: str) -> str:
    """Return the first verbatim delimiter absent from ``code``."""
    for delimiter in _LSTINLINE_DELIMITERS:
        if delimiter not in code:
            return delimiter
    raise DelimiterExhaustedError(
        f"Inline code uses every \\lstinline delimiter ({_LSTINLINE_DELIMITERS}): {code!r}"
    )


def prepare_inline_code(code: str, *, in_heading: bool) -> str:
    if in_heading:
        code = code.replace("#", r"\#")
    for old, new in _CODE_REPLACEMENTS:
        code = code.replace(old, new)
    if not in_heading:
        code = code.replace("�", "\\�")
    return code


def write_inline_code(context: RenderContext, raw: str) -> None:
    """Write ``raw`` as ``\\lstinline`` with a collision-free delimiter."""
    record_heading_text(context, raw)
    code = prepare_inline_code(raw, in_heading=ContextKind.HEADER in context.stack)
    markers = context.config.code_utf8_escape
    if markers is not None:
        code = wrap_non_ascii(code, *markers)
    delimiter = pick_lstinline_delimiter(code)
    context.out.push_str(f"\\lstinline{delimiter}{code}{delimiter}")


@renders(EventKind.INLINE_CODE, name="inline_code")
def render_inline_code(event: ParseEvent, context: RenderContext) -> None:
    write_inline_code(context, event.text or "")


@renders(EventKind.FOOTNOTE_REFERENCE, name="footnote_reference")
def render_footnote_reference(event: ParseEvent, context: RenderContext) -> None:
    """Point a repeated reference at an already typeset footnote."""
    label = event.label or ""
    if label.isdigit():
        context.out.push_str(f"\\footnotemark[{label}]")
    else:
        context.out.push_str(r"\footnotemark")


@renders(EventKind.FOOTNOTE_DEFINITION_START, name="footnote_start")
def render_footnote_start(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.push(ContextKind.FOOTNOTE)
    context.out.push_str(r"\footnote{")


@renders(EventKind.FOOTNOTE_DEFINITION_END, name="footnote_end")
def render_footnote_end(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.pop(ContextKind.FOOTNOTE)
    context.out.push("}")


__all__ = [
    "LOOKBACK_LIMIT",
    "MATH_DELIMITERS",
    "emit_code_text",
    "emit_text",
    "pick_lstinline_delimiter",
    "prepare_inline_code",
    "write_inline_code",
]
