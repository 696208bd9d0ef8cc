"""Built-in baseline handlers used by the renderer."""

from __future__ import annotations

from mdtex.core.context import ContextKind, RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.rules import renders

from ..latex.utils import slug


SECTIONING_COMMANDS: tuple[str, ...] = (
    "chapter",
    "section",
    "subsection",
    "subsubsection",
    "paragraph",
    "subparagraph",
)
PARSER_LEVELS = range(1, 7)
# \paragraph and \subparagraph cannot open directly inside a quote environment.
QUOTE_GUARDED_COMMANDS = frozenset({"paragraph", "subparagraph"})
QUOTE_GUARD = r"\mbox{}"


def sectioning_command(level: int) -> str:
    """Return the sectioning command for an effective heading level."""
    index = min(max(level, 0), len(SECTIONING_COMMANDS) - 1)
    return SECTIONING_COMMANDS[index]


@renders(EventKind.HEADING_START, name="heading_start")
def render_heading_start(event: ParseEvent, context: RenderContext) -> None:
    """Open a sectioning command for the heading."""
    enclosing = context.stack.top
    context.stack.push(ContextKind.HEADER)
    context.state.header_value = ""
    out = context.out

    level = event.level
    if level is None or level not in PARSER_LEVELS:
        context.state.heading_command = None
        context.emitter.warning(f"Heading level {level!r} is out of range; rendering as plain text.")
        out.new_line()
        return

    command = sectioning_command(level + context.config.heading_offset)
    context.state.heading_command = command
    out.new_line()
    if enclosing is ContextKind.BLOCK_QUOTE and command in QUOTE_GUARDED_COMMANDS:
        out.push_str(QUOTE_GUARD).new_line()
    out.back_slash().push_str(f"{command}{{")


@renders(EventKind.HEADING_END, name="heading_end")
def render_heading_end(_event: ParseEvent, context: RenderContext) -> None:
    """Close the heading and label it with its raw text and its slug."""
    context.stack.pop(ContextKind.HEADER)
    out = context.out
    command = context.state.heading_command
    out.push_str("}\n" if command is not None else "\n")

    raw_text = context.state.header_value
    ref = slug(raw_text)
    if raw_text:
        out.push_str(f"\\label{{{raw_text}}}").new_line()
    if ref:
        out.push_str(f"\\label{{{ref}}}").new_line()

    if command is not None:
        context.state.add_heading(
            level=SECTIONING_COMMANDS.index(command), text=raw_text, ref=ref or None
        )
    context.state.heading_command = None


@renders(EventKind.PARAGRAPH_START, name="paragraph_start")
def render_paragraph_start(_event: ParseEvent, context: RenderContext) -> None:
    if ContextKind.FOOTNOTE in context.stack:
        return
    context.out.new_line()


@renders(EventKind.PARAGRAPH_END, name="paragraph_end")
def render_paragraph_end(_event: ParseEvent, context: RenderContext) -> None:
    """End the paragraph with a tie so empty paragraphs still have a line to end."""
    if ContextKind.FOOTNOTE in context.stack:
        return
    context.out.push_str(r"~\\").new_line()


@renders(EventKind.EMPHASIS_START, name="emphasis_start")
def render_emphasis_start(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.push(ContextKind.EMPHASIS)
    context.out.push_str(r"\emph{")


@renders(EventKind.EMPHASIS_END, name="emphasis_end")
def render_emphasis_end(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.pop(ContextKind.EMPHASIS)
    context.out.push("}")


@renders(EventKind.STRONG_START, name="strong_start")
def render_strong_start(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.push(ContextKind.STRONG)
    context.out.push_str(r"\textbf{")


@renders(EventKind.STRONG_END, name="strong_end")
def render_strong_end(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.pop(ContextKind.STRONG)
    context.out.push("}")


@renders(EventKind.STRIKETHROUGH_START, name="strikethrough_start")
def render_strikethrough_start(_event: ParseEvent, context: RenderContext) -> None:
    context.out.push_str(r"\sout{")


@renders(EventKind.STRIKETHROUGH_END, name="strikethrough_end")
def render_strikethrough_end(_event: ParseEvent, context: RenderContext) -> None:
    context.out.push("}")


@renders(EventKind.BLOCKQUOTE_START, name="blockquote_start")
def render_blockquote_start(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.push(ContextKind.BLOCK_QUOTE)
    context.out.push_str(r"\begin{quote}").new_line()


@renders(EventKind.BLOCKQUOTE_END, name="blockquote_end")
def render_blockquote_end(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.pop(ContextKind.BLOCK_QUOTE)
    context.out.push_str(r"\end{quote}").new_line()


def _list_environment(event: ParseEvent) -> str:
    return "enumerate" if event.start is not None else "itemize"


@renders(EventKind.LIST_START, name="list_start")
def render_list_start(event: ParseEvent, context: RenderContext) -> None:
    context.runtime.setdefault("lists", []).append(_list_environment(event))
    context.out.push_str(f"\\begin{{{_list_environment(event)}}}").new_line()


@renders(EventKind.LIST_END, name="list_end")
def render_list_end(event: ParseEvent, context: RenderContext) -> None:
    open_lists = context.runtime.get("lists") or [_list_environment(event)]
    environment = open_lists.pop()
    context.out.push_str(f"\\end{{{environment}}}").new_line()


@renders(EventKind.ITEM_START, name="item_start")
def render_item_start(_event: ParseEvent, context: RenderContext) -> None:
    context.out.push_str(r"\item ")


@renders(EventKind.ITEM_END, name="item_end")
def render_item_end(_event: ParseEvent, context: RenderContext) -> None:
    context.out.new_line()


@renders(EventKind.TASK_MARKER, name="task_marker")
def render_task_marker(event: ParseEvent, context: RenderContext) -> None:
    """Render a task-list checkbox ahead of the item text."""
    box = r"$\boxtimes$ " if event.checked else r"$\square$ "
    context.out.push_str(box)


@renders(EventKind.SOFT_BREAK, name="soft_break")
def render_soft_break(_event: ParseEvent, context: RenderContext) -> None:
    context.out.new_line()


@renders(EventKind.HARD_BREAK, name="hard_break")
def render_hard_break(_event: ParseEvent, context: RenderContext) -> None:
    context.out.push_str(r"\\").new_line()


@renders(EventKind.RULE, name="horizontal_rule")
def render_horizontal_rule(_event: ParseEvent, context: RenderContext) -> None:
    context.out.new_line().push_str(r"\hrulefill").new_line()
