"""Rule declaration and execution engine for the LaTeX renderer.

Handlers declare the parse events they render via the ``@renders`` decorator,
which records a lightweight :class:`RuleDefinition` on the callable. At runtime
the :class:`RenderEngine` collects those declarations into a
:class:`RenderRegistry` keyed by :class:`~mdtex.core.events.EventKind` and feeds
every event of the stream, in arrival order, to the matching handlers.

Architecture

`Declaration layer`
: ``@renders`` stores a :class:`RuleDefinition` on every handler.

`Registry layer`
: :class:`RenderRegistry` collates definitions into sortable
  :class:`RenderRule` instances grouped per event kind.

`Execution layer`
: :class:`RenderEngine` walks the flat event sequence once, dispatching each
  event to its rules ordered by priority then name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any, cast

from .events import EventKind, ParseEvent


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import RenderContext


logger = logging.getLogger(__name__)

RuleCallable = Callable[[ParseEvent, "RenderContext"], None]


@dataclass
class RenderRule:
    """Concrete rendering rule registered in the engine."""

    priority: int
    kinds: tuple[EventKind, ...]
    name: str
    handler: RuleCallable


@dataclass(frozen=True)
class RuleDefinition:
    """Descriptor installed on handler callables by the decorator."""

    kinds: tuple[EventKind, ...]
    priority: int = 0
    name: str | None = None

    def bind(self, handler: RuleCallable) -> RenderRule:
        """Create a concrete rule instance bound to the callable."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return RenderRule(
            priority=self.priority,
            kinds=self.kinds,
            name=name,
            handler=handler,
        )


class RenderRegistry:
    """Container used to gather render rules before execution."""

    def __init__(self) -> None:
        self._rules: dict[EventKind, list[RenderRule]] = {}

    def register(self, rule: RenderRule) -> None:
        """Register a rule for every event kind it targets."""
        for kind in rule.kinds:
            bucket = self._rules.setdefault(kind, [])
            bucket.append(rule)
            bucket.sort(key=lambda item: (item.priority, item.name))

    def rules_for(self, kind: EventKind) -> tuple[RenderRule, ...]:
        """Return the ordered rules attached to an event kind."""
        return tuple(self._rules.get(kind, ()))

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered rules."""
        entries: list[dict[str, object]] = []
        for kind in EventKind:
            for order, rule in enumerate(self._rules.get(kind, ())):
                entries.append(
                    {
                        "kind": kind.value,
                        "name": rule.name,
                        "priority": rule.priority,
                        "order": order,
                    }
                )
        return entries


def renders(
    *kinds: EventKind,
    priority: int = 0,
    name: str | None = None,
) -> Callable[[RuleCallable], RuleCallable]:
    """Decorator used to register event handlers."""
    if not kinds:
        raise TypeError("@renders requires at least one event kind")
    definition = RuleDefinition(kinds=tuple(kinds), priority=priority, name=name)

    def decorator(handler: RuleCallable) -> RuleCallable:
        cast(Any, handler).__render_rule__ = definition
        return handler

    return decorator


class RenderEngine:
    """Execution engine that dispatches parse events to registered rules."""

    def __init__(self, registry: RenderRegistry | None = None) -> None:
        self.registry = registry or RenderRegistry()

    def collect_from(self, owner: Any) -> None:
        """Collect decorated callables from an object or module."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__render_rule__", None)
            if isinstance(definition, RuleDefinition):
                self.registry.register(definition.bind(handler))

    def register(self, handler: RuleCallable) -> None:
        """Register a standalone callable decorated with ``@renders``."""
        definition = getattr(handler, "__render_rule__", None)
        if not isinstance(definition, RuleDefinition):
            msg = "Handler must be decorated with @renders"
            raise TypeError(msg)
        self.registry.register(definition.bind(handler))

    def run(self, events: Iterable[ParseEvent], context: RenderContext) -> None:
        """Feed every event, in order, to the rules registered for its kind."""
        for event in events:
            rules = self.registry.rules_for(event.kind)
            if not rules:
                logger.debug("No rule renders %s events; skipping", event.kind.value)
                continue
            for rule in rules:
                rule.handler(event, context)


__all__ = [
    "RenderEngine",
    "RenderRegistry",
    "RenderRule",
    "RuleDefinition",
    "renders",
]
