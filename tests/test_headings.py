import logging

import pytest

from mdtex.adapters.latex.renderer import LaTeXRenderer
from mdtex.adapters.markdown import parse_markdown
from mdtex.core.config import RenderConfig
from mdtex.core.context import DocumentState
from mdtex.core.diagnostics import NullEmitter
from mdtex.core.events import EventKind, ParseEvent, start_heading, text


END = ParseEvent(EventKind.HEADING_END)


@pytest.fixture
def renderer() -> LaTeXRenderer:
    return LaTeXRenderer(emitter=NullEmitter())


def test_basic_heading_rendering(renderer: LaTeXRenderer) -> None:
    state = DocumentState()
    latex = renderer.render([start_heading(1), text("Introduction"), END], state=state)

    assert latex == "\n\\section{Introduction}\n\\label{Introduction}\n\\label{introduction}\n"
    assert state.headings == [{"level": 1, "text": "Introduction", "ref": "introduction"}]


@pytest.mark.parametrize(
    ("level", "offset", "command"),
    [
        (1, -1, "chapter"),
        (1, -3, "chapter"),
        (1, 0, "section"),
        (2, 0, "subsection"),
        (3, 0, "subsubsection"),
        (4, 0, "paragraph"),
        (5, 0, "subparagraph"),
        (6, 0, "subparagraph"),
        (2, -1, "section"),
    ],
)
def test_heading_levels_follow_offset(level: int, offset: int, command: str) -> None:
    renderer = LaTeXRenderer(RenderConfig(heading_offset=offset), emitter=NullEmitter())
    latex = renderer.render([start_heading(level), text("T"), END])

    assert latex.startswith(f"\n\\{command}{{T}}\n")


def test_heading_with_nested_formatting_labels_raw_text() -> None:
    latex = LaTeXRenderer(emitter=NullEmitter()).render(parse_markdown("# Fish & Chips *today*\n"))

    assert latex == (
        "\n\\section{Fish \\& Chips \\emph{today}}\n"
        "\\label{Fish & Chips today}\n"
        "\\label{fish-chips-today}\n"
    )


def test_quote_guard_precedes_paragraph_headings(renderer: LaTeXRenderer) -> None:
    events = [
        ParseEvent(EventKind.BLOCKQUOTE_START),
        start_heading(4),
        text("Deep"),
        END,
        ParseEvent(EventKind.BLOCKQUOTE_END),
    ]

    assert renderer.render(events) == (
        "\\begin{quote}\n\n\\mbox{}\n\\paragraph{Deep}\n"
        "\\label{Deep}\n\\label{deep}\n\\end{quote}\n"
    )


def test_quote_guard_not_needed_for_sections(renderer: LaTeXRenderer) -> None:
    events = [
        ParseEvent(EventKind.BLOCKQUOTE_START),
        start_heading(2),
        text("Shallow"),
        END,
        ParseEvent(EventKind.BLOCKQUOTE_END),
    ]

    assert "\\mbox{}" not in renderer.render(events)


def test_out_of_range_level_degrades_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    renderer = LaTeXRenderer()
    with caplog.at_level(logging.WARNING):
        latex = renderer.render([start_heading(7), text("Odd"), END])

    assert latex == "\nOdd\n\\label{Odd}\n\\label{odd}\n"
    assert any("Heading level 7" in record.getMessage() for record in caplog.records)


def test_empty_heading_emits_no_labels(renderer: LaTeXRenderer) -> None:
    assert renderer.render([start_heading(2), END]) == "\n\\subsection{}\n"


def test_heading_text_is_escaped_in_the_title(renderer: LaTeXRenderer) -> None:
    latex = renderer.render([start_heading(1), text("50% off"), END])

    assert "\\section{50\\% off}" in latex
    assert "\\label{50-off}" in latex


def test_footnote_in_heading_stays_out_of_labels(renderer: LaTeXRenderer) -> None:
    latex = renderer.render(parse_markdown("# Title[^1]\n\n[^1]: A note.\n"))

    assert latex == "\n\\section{Title\\footnote{A note.}}\n\\label{Title}\n\\label{title}\n"


def test_raw_html_in_heading_feeds_labels(renderer: LaTeXRenderer) -> None:
    events = [
        start_heading(1),
        ParseEvent(EventKind.HTML, text="<code>a#b</code> &amp; more"),
        END,
    ]

    latex = renderer.render(events)

    assert latex == (
        "\n\\section{\\lstinline|a\\#b| \\& more}\n\\label{a#b & more}\n\\label{a-b-more}\n"
    )
