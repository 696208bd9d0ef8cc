import pytest

from mdtex.adapters.latex.formatter import LaTeXFormatter
from mdtex.adapters.latex.renderer import LaTeXRenderer
from mdtex.adapters.latex.writer import TexWriter
from mdtex.core.config import RenderConfig
from mdtex.core.context import ContextKind, ContextStack, RenderContext
from mdtex.core.diagnostics import NullEmitter
from mdtex.core.events import EventKind, ParseEvent, text
from mdtex.core.exceptions import InvalidEventError


def _context() -> RenderContext:
    return RenderContext(
        config=RenderConfig(),
        formatter=LaTeXFormatter(),
        writer=TexWriter(),
        table=TexWriter(),
    )


def test_empty_stack_defaults_to_text() -> None:
    stack = ContextStack()

    assert stack.top is ContextKind.TEXT
    assert not stack
    assert len(stack) == 0


def test_pop_restores_enclosing_context() -> None:
    stack = ContextStack()
    stack.push(ContextKind.STRONG)
    stack.push(ContextKind.EMPHASIS)

    assert stack.pop(ContextKind.EMPHASIS) is ContextKind.EMPHASIS
    assert stack.top is ContextKind.STRONG
    assert ContextKind.STRONG in stack


def test_pop_of_mismatched_kind_raises() -> None:
    stack = ContextStack()
    stack.push(ContextKind.STRONG)

    with pytest.raises(InvalidEventError):
        stack.pop(ContextKind.EMPHASIS)
    with pytest.raises(InvalidEventError):
        ContextStack().pop(ContextKind.HEADER)


def test_output_routes_to_table_buffer_inside_tables() -> None:
    context = _context()
    assert context.out is context.writer

    context.stack.push(ContextKind.TABLE)
    context.stack.push(ContextKind.STRONG)

    assert context.in_table
    assert context.out is context.table
    assert context.escaping


def test_code_context_disables_escaping() -> None:
    context = _context()
    context.stack.push(ContextKind.CODE)

    assert not context.escaping


def test_cell_counter() -> None:
    context = _context()

    assert context.state.next_cell() == 1
    assert context.state.next_cell() == 2
    context.state.reset_cells()
    assert context.state.cells == 0


def test_unbalanced_end_event_raises() -> None:
    renderer = LaTeXRenderer(emitter=NullEmitter())

    with pytest.raises(InvalidEventError):
        renderer.render([ParseEvent(EventKind.EMPHASIS_END)])


def test_unclosed_construct_raises() -> None:
    renderer = LaTeXRenderer(emitter=NullEmitter())

    with pytest.raises(InvalidEventError):
        renderer.render([ParseEvent(EventKind.STRONG_START), text("open")])


def test_each_render_starts_from_fresh_state() -> None:
    renderer = LaTeXRenderer(emitter=NullEmitter())
    events = [ParseEvent(EventKind.PARAGRAPH_START), text("\\["), text("x")]

    first = renderer.render(events + [ParseEvent(EventKind.PARAGRAPH_END)])
    second = renderer.render([ParseEvent(EventKind.PARAGRAPH_START), text("a_b")])

    assert first == "\n\\[x~\\\\\n"
    assert second == "\na\\_b"
