"""Append-only text sink used to accumulate LaTeX output."""

from __future__ import annotations

from collections.abc import Iterable

from .utils import escape_latex_chars


class TexWriter:
    """Accumulate LaTeX markup.

    Content is only ever appended, with two exceptions used by table rendering:
    :meth:`truncate` drops a bounded number of trailing characters at row
    boundaries, and :meth:`replace`/:meth:`clear` let the table buffer patch its
    column placeholder before being flushed. Every mutator returns the writer so
    calls can be chained.
    """

    def __init__(self, initial: str = "") -> None:
        self._buffer = initial

    def push_str(self, text: str) -> TexWriter:
        self._buffer += text
        return self

    def push(self, char: str) -> TexWriter:
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        self._buffer += char
        return self

    def new_line(self) -> TexWriter:
        self._buffer += "\n"
        return self

    def back_slash(self) -> TexWriter:
        self._buffer += "\\"
        return self

    def push_lines(self, lines: Iterable[str]) -> TexWriter:
        """Append each line followed by a newline."""
        for line in lines:
            self.push_str(line).new_line()
        return self

    def escape_str(self, text: str) -> TexWriter:
        """Append ``text`` after escaping LaTeX special characters."""
        return self.push_str(escape_latex_chars(text))

    def truncate(self, count: int = 2) -> TexWriter:
        """Drop the last ``count`` characters."""
        if count < 0 or count > len(self._buffer):
            raise ValueError(
                f"Cannot truncate {count} characters from a buffer of {len(self._buffer)}"
            )
        if count:
            self._buffer = self._buffer[:-count]
        return self

    def replace(self, old: str, new: str) -> TexWriter:
        self._buffer = self._buffer.replace(old, new)
        return self

    def clear(self) -> TexWriter:
        self._buffer = ""
        return self

    def endswith(self, suffix: str) -> bool:
        return self._buffer.endswith(suffix)

    def getvalue(self) -> str:
        return self._buffer

    def __len__(self) -> int:
        return len(self._buffer)

    def __str__(self) -> str:
        return self._buffer

    def __repr__(self) -> str:
        return f"TexWriter({self._buffer[-40:]!r})"


__all__ = ["TexWriter"]
