"""Handlers rendering Markdown tables as ``longtable`` environments.

Table markup is written to the table buffer of the render context because the
column specification depends on the number of head cells, which is only known
once the table closes. The preamble carries a placeholder that is replaced in
that buffer alone before it is flushed to the document.
"""

from __future__ import annotations

from mdtex.core.context import ContextKind, RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.rules import renders


COLUMN_PLACEHOLDER = "!!!"
CELL_SEPARATOR = " & "


def column_spec(count: int) -> str:
    """Return ``count`` equal-width columns spanning the text width."""
    if count <= 0:
        return ""
    return f"C{{{1 / count}\\textwidth}} " * count


@renders(EventKind.TABLE_START, name="table_start")
def render_table_start(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.push(ContextKind.TABLE)
    context.state.reset_cells()
    preamble = context.formatter.table_begin(columns=COLUMN_PLACEHOLDER)
    context.table.push_lines(["\n", preamble, "\n"])


@renders(EventKind.TABLE_HEAD_START, name="table_head_start")
def render_table_head_start(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.push(ContextKind.TABLE_HEAD)


@renders(EventKind.TABLE_HEAD_END, name="table_head_end")
def render_table_head_end(_event: ParseEvent, context: RenderContext) -> None:
    context.stack.pop(ContextKind.TABLE_HEAD)
    context.table.truncate(2)
    context.table.push_str(r"\\").new_line().push_str(r"\hline").new_line()


@renders(EventKind.TABLE_ROW_END, name="table_row_end")
def render_table_row_end(_event: ParseEvent, context: RenderContext) -> None:
    context.table.truncate(2)
    context.table.push_str(r"\\\arrayrulecolor{lightgray}\hline").new_line()


@renders(EventKind.TABLE_CELL_START, name="table_cell_start")
def render_table_cell_start(_event: ParseEvent, context: RenderContext) -> None:
    if context.stack.top is ContextKind.TABLE_HEAD:
        context.table.push_str(r"\bfseries{")


@renders(EventKind.TABLE_CELL_END, name="table_cell_end")
def render_table_cell_end(_event: ParseEvent, context: RenderContext) -> None:
    """Close the cell; head cells are counted to size the columns."""
    if context.stack.top is ContextKind.TABLE_HEAD:
        context.table.push("}")
        context.state.next_cell()
    context.table.push_str(CELL_SEPARATOR)


@renders(EventKind.TABLE_END, name="table_end")
def render_table_end(_event: ParseEvent, context: RenderContext) -> None:
    """Resolve the column placeholder and move the table into the document."""
    context.stack.pop(ContextKind.TABLE)
    table = context.table
    table.push_lines([context.formatter.table_end(), "\n"])
    table.replace(COLUMN_PLACEHOLDER, column_spec(context.state.cells))
    context.writer.push_str(table.getvalue())
    table.clear()
    context.state.reset_cells()


__all__ = ["CELL_SEPARATOR", "COLUMN_PLACEHOLDER", "column_spec"]
