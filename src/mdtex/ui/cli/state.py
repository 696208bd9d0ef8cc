"""Per-invocation CLI state and Rich message rendering."""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING, Any

import click

from mdtex.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Verbosity, traceback preference, and diagnostics of one conversion."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: dict[str, list[dict[str, Any]]] = field(default_factory=dict, init=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def err_console(self) -> Console:
        """Return a stderr console, rebuilt whenever ``sys.stderr`` is swapped."""
        from rich.console import Console

        if self._err_console is None or self._err_console.file is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.setdefault(name, []).append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return and forget the events recorded under ``name``."""
        return self.events.pop(name, [])


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("mdtex_cli_state", default=None)


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state stored on the Click context chain, creating it on demand.

    Outside a Click context the state of the current execution context is used.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        state = ctx.find_object(CLIState)
        if state is None and create:
            state = ctx.ensure_object(CLIState)
        if state is not None:
            _STATE_VAR.set(state)
            return state

    state = _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def render_message(level: str, message: str, *, exception: BaseException | None = None) -> None:
    """Print ``message`` on stderr.

    Errors and warnings are prefixed with their level. With ``-v`` the exception
    type is appended, and with ``-vv`` the messages of its whole cause chain.
    """
    state = get_cli_state()
    if level == "info":
        state.err_console.log(message)
        return

    from rich.text import Text

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))

    details: list[str] = []
    if exception is not None and state.verbosity >= 1:
        details.append(f"type: {type(exception).__name__}")
        if state.verbosity >= 2:
            causes = [entry for entry in exception_messages(exception) if entry not in message]
            details.extend(f"caused by: {entry}" for entry in causes)
    if details:
        text.append("\n" + "\n".join(details), style=style)

    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks were requested with ``--debug``."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
