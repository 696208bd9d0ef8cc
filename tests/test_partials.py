import pytest
from jinja2 import UndefinedError

from mdtex.adapters.latex.formatter import LaTeXFormatter


@pytest.fixture
def formatter() -> LaTeXFormatter:
    return LaTeXFormatter()


def test_available_partials(formatter: LaTeXFormatter) -> None:
    assert formatter.template_names == {
        "codeblock_begin",
        "figure",
        "html_image",
        "table_begin",
        "table_end",
    }


def test_codeblock_language_is_optional(formatter: LaTeXFormatter) -> None:
    assert formatter.codeblock_begin(language=None) == "\\begin{lstlisting}"
    assert formatter.codeblock_begin(language="c") == "\\begin{lstlisting}[language=c]"


def test_figure(formatter: LaTeXFormatter) -> None:
    assert formatter["figure"](path="a.png", caption="Cap") == (
        "\\begin{figure}\n"
        "\\centering\n"
        "\\includegraphics[width=\\textwidth]{a.png}\n"
        "\\caption{Cap}\n"
        "\\end{figure}"
    )


def test_table_begin_substitutes_columns(formatter: LaTeXFormatter) -> None:
    rendered = formatter.table_begin(columns="!!!")

    assert "\\begin{longtable}{!!!}" in rendered
    assert rendered.startswith("\\begingroup\n")


def test_missing_variables_are_errors(formatter: LaTeXFormatter) -> None:
    with pytest.raises(UndefinedError):
        formatter.figure(path="a.png")


def test_unknown_partial(formatter: LaTeXFormatter) -> None:
    with pytest.raises(AttributeError):
        formatter.does_not_exist  # noqa: B018


def test_figure_caption_is_escaped(formatter: LaTeXFormatter) -> None:
    rendered = formatter.figure(path="a_b.png", caption="R&D at 50%")

    assert "\\caption{R\\&D at 50\\%}" in rendered
    assert "{a_b.png}" in rendered
