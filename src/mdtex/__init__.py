"""Primary public API for mdtex."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from mdtex.adapters.latex.renderer import LaTeXRenderer
from mdtex.adapters.markdown import create_parser, parse_markdown
from mdtex.adapters.references import DirectoryReferenceResolver, MappingReferenceResolver
from mdtex.core.config import RenderConfig
from mdtex.core.context import DocumentState, RenderContext
from mdtex.core.conversion import Converter, convert_markdown, markdown_to_latex
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.exceptions import (
    AssetMissingError,
    ConversionError,
    DelimiterExhaustedError,
    InvalidEventError,
    TemplateError,
    TransformerExecutionError,
)
from mdtex.core.rules import renders
from mdtex.core.templates import load_template, wrap_template


try:
    __version__ = _pkg_version("mdtex")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AssetMissingError",
    "ConversionError",
    "Converter",
    "DelimiterExhaustedError",
    "DirectoryReferenceResolver",
    "DocumentState",
    "EventKind",
    "InvalidEventError",
    "LaTeXRenderer",
    "MappingReferenceResolver",
    "ParseEvent",
    "RenderConfig",
    "RenderContext",
    "TemplateError",
    "TransformerExecutionError",
    "__version__",
    "convert_markdown",
    "create_parser",
    "load_template",
    "markdown_to_latex",
    "parse_markdown",
    "renders",
    "wrap_template",
]
