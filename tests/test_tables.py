import re

import pytest

from mdtex.adapters.handlers.tables import column_spec
from mdtex.adapters.latex.renderer import LaTeXRenderer
from mdtex.adapters.markdown import parse_markdown
from mdtex.core.diagnostics import NullEmitter


TWO_BY_TWO = "| A | B |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |\n"


@pytest.fixture
def renderer() -> LaTeXRenderer:
    return LaTeXRenderer(emitter=NullEmitter())


def test_two_column_table_layout(renderer: LaTeXRenderer) -> None:
    latex = renderer.render(parse_markdown(TWO_BY_TWO))

    assert latex == (
        "\n\n"
        "\\begingroup\n"
        "\\setlength{\\LTleft}{-20cm plus -1fill}\n"
        "\\setlength{\\LTright}{\\LTleft}\n"
        "\\begin{longtable}{C{0.5\\textwidth} C{0.5\\textwidth} }\n"
        "\\hline\n"
        "\\hline\n"
        "\n\n"
        "\\bfseries{A} & \\bfseries{B} \\\\\n"
        "\\hline\n"
        "1 & 2 \\\\\\arrayrulecolor{lightgray}\\hline\n"
        "3 & 4 \\\\\\arrayrulecolor{lightgray}\\hline\n"
        "\\arrayrulecolor{black}\\hline\n"
        "\\end{longtable}\n"
        "\\endgroup\n"
        "\n\n"
    )


@pytest.mark.parametrize("columns", [1, 3, 4])
def test_one_width_token_per_head_cell(renderer: LaTeXRenderer, columns: int) -> None:
    head = "|" + "|".join(f" H{index} " for index in range(columns)) + "|\n"
    rule = "|" + "|".join("---" for _ in range(columns)) + "|\n"
    row = "|" + "|".join(" x " for _ in range(columns)) + "|\n"

    latex = renderer.render(parse_markdown(head + rule + row))

    widths = [float(value) for value in re.findall(r"C\{([0-9.]+)\\textwidth\}", latex)]
    assert len(widths) == columns
    assert all(width == pytest.approx(1 / columns) for width in widths)
    assert "!!!" not in latex


def test_placeholder_in_body_text_is_left_alone(renderer: LaTeXRenderer) -> None:
    latex = renderer.render(parse_markdown("Wow!!!\n\n" + TWO_BY_TWO))

    assert "Wow!!!" in latex
    assert latex.count("C{0.5\\textwidth}") == 2


def test_cells_are_escaped_and_formatted(renderer: LaTeXRenderer) -> None:
    source = "| Name | Share |\n|---|---|\n| **R&D** | 50% |\n"
    latex = renderer.render(parse_markdown(source))

    assert "\\textbf{R\\&D} & 50\\% \\\\" in latex


def test_consecutive_tables_count_cells_independently(renderer: LaTeXRenderer) -> None:
    three = "| a | b | c |\n|---|---|---|\n| 1 | 2 | 3 |\n"
    latex = renderer.render(parse_markdown(TWO_BY_TWO + "\n" + three))

    assert latex.count("C{0.5\\textwidth}") == 2
    assert latex.count("C{0.3333333333333333\\textwidth}") == 3


def test_text_after_table_goes_to_document(renderer: LaTeXRenderer) -> None:
    latex = renderer.render(parse_markdown(TWO_BY_TWO + "\nAfter.\n"))

    assert latex.endswith("\\endgroup\n\n\n\nAfter.~\\\\\n")


def test_column_spec() -> None:
    assert column_spec(2) == "C{0.5\\textwidth} C{0.5\\textwidth} "
    assert column_spec(0) == ""
