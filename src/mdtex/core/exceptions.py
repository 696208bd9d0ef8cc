"""Custom exception hierarchy for the Markdown to LaTeX pipeline."""

from __future__ import annotations


class ConversionError(RuntimeError):
    """Base exception for conversion failures."""


class TemplateError(ConversionError):
    """Raised when a LaTeX template cannot be loaded or lacks its body marker."""


class AssetMissingError(ConversionError):
    """Raised when an expected asset cannot be located or read."""


class TransformerExecutionError(ConversionError):
    """Raised when an image converter fails to execute properly."""


class DelimiterExhaustedError(ConversionError):
    """Raised when inline code collides with every verbatim delimiter."""


class InvalidEventError(ConversionError):
    """Raised when the parse-event stream is not properly nested."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "AssetMissingError",
    "ConversionError",
    "DelimiterExhaustedError",
    "InvalidEventError",
    "TemplateError",
    "TransformerExecutionError",
    "exception_hint",
    "exception_messages",
]
