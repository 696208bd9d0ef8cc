"""Implementation of the ``mdtex`` conversion command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from mdtex.core.conversion import Converter
from mdtex.core.exceptions import ConversionError, exception_hint
from mdtex.core.templates import load_template

from ..diagnostics import CliEmitter
from ..state import emit_error, set_cli_state


DIAGNOSTICS_PANEL = "Diagnostics"
OUTPUT_PANEL = "Output"


def _build_converter(
    content: str,
    *,
    template: Path | None,
    assets: Path | None,
    heading_offset: int,
    code_escape: tuple[str, str] | None,
) -> Converter:
    converter = Converter(content).chapter_level_offset(heading_offset)
    if template is not None:
        converter = converter.template(load_template(template))
    if assets is not None:
        converter = converter.assets(assets)
    if code_escape is not None and any(marker is not None for marker in code_escape):
        start, end = code_escape
        converter = converter.code_utf8_escape(start or "", end or "")
    return converter


def convert(
    ctx: typer.Context,
    input_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            readable=True,
            help="Markdown document to convert.",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            dir_okay=False,
            help="Write the LaTeX output to this file instead of stdout.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Option(
            "--template",
            "-t",
            exists=True,
            dir_okay=False,
            help="LaTeX template receiving the body after \\begin{document}.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = None,
    assets: Annotated[
        Path | None,
        typer.Option(
            "--assets",
            "-a",
            file_okay=False,
            help="Directory used to resolve cross-document links and images.",
        ),
    ] = None,
    heading_offset: Annotated[
        int,
        typer.Option(
            "--heading-offset",
            help="Shift heading levels; -1 renders '#' headings as chapters.",
        ),
    ] = 0,
    code_escape: Annotated[
        tuple[str, str] | None,
        typer.Option(
            "--code-escape",
            metavar="START END",
            help="Wrap non-ASCII characters in code with these escape markers.",
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Show full tracebacks when an unexpected error occurs.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
) -> None:
    """Convert a Markdown document to LaTeX."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    emitter = CliEmitter(state)

    try:
        content = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        emit_error(f"Unable to read '{input_path}'.", exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        converter = _build_converter(
            content,
            template=template,
            assets=assets,
            heading_offset=heading_offset,
            code_escape=code_escape,
        )
        latex = converter.run(emitter=emitter)
    except ConversionError as exc:
        message = str(exc)
        hint = exception_hint(exc)
        if hint and hint not in message:
            message = f"{message} ({hint})"
        emit_error(message, exception=exc)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        emit_error(f"Invalid option: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(latex, nl=False)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(latex, encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to write '{output}'.", exception=exc)
        raise typer.Exit(code=1) from exc
    if state.verbosity >= 1:
        state.err_console.print(f"[cyan]LaTeX written to[/] {output}")


__all__ = ["convert"]
