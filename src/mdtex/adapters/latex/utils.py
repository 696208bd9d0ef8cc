"""Utility helpers specific to LaTeX rendering."""

from __future__ import annotations

import re

from slugify import slugify


_BASIC_LATEX_ESCAPE_MAP = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "_": r"\_",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "—": "---",
}

_URL_ESCAPE_MAP = {
    "#": r"\#",
    "%": r"\%",
}

_DIGIT_COMMA = re.compile(r"(?<=\d),(?=\d)")


def escape_latex_chars(text: str) -> str:
    """Escape the characters LaTeX would otherwise interpret in running text.

    A literal ``\\<`` (an escaped angle bracket left over by the Markdown source)
    collapses to ``<`` first; every remaining character is translated in a
    single pass so replacement output is never escaped twice.
    """
    if not text:
        return text
    text = text.replace("\\<", "<")
    return "".join(_BASIC_LATEX_ESCAPE_MAP.get(char, char) for char in text)


def escape_url(url: str) -> str:
    """Escape a URL for use as the first argument of ``\\href``."""
    return "".join(_URL_ESCAPE_MAP.get(char, char) for char in url)


def wrap_non_ascii(text: str, start: str, end: str) -> str:
    """Surround every non-ASCII character with ``start`` and ``end``."""
    return "".join(f"{start}{char}{end}" if ord(char) > 127 else char for char in text)


def slug(text: str) -> str:
    """Return the lowercase, hyphen-separated label derived from ``text``."""
    # slugify drops thousands separators (1,000 -> 1000); keep them as breaks.
    text = _DIGIT_COMMA.sub("-", text)
    return slugify(text, separator="-", lowercase=True)


__all__ = ["escape_latex_chars", "escape_url", "slug", "wrap_non_ascii"]
