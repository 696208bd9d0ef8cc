from typing import Any

import pytest

from mdtex.core.events import EventKind, ParseEvent, text
from mdtex.core.rules import RenderEngine, RenderRegistry, renders


def _make_handler(name: str, *, priority: int = 0):
    @renders(EventKind.TEXT, name=name, priority=priority)
    def handler(_event: Any, _context: Any) -> None:
        return None

    definition = handler.__render_rule__
    return definition.bind(handler)


def test_rule_order_respects_priority_then_name() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("third", priority=1))
    registry.register(_make_handler("second"))
    registry.register(_make_handler("first"))

    names = [rule.name for rule in registry.rules_for(EventKind.TEXT)]
    assert names == ["first", "second", "third"]


def test_describe_reports_registered_rules() -> None:
    registry = RenderRegistry()
    registry.register(_make_handler("only"))

    assert registry.describe() == [{"kind": "text", "name": "only", "priority": 0, "order": 0}]


def test_renders_requires_an_event_kind() -> None:
    with pytest.raises(TypeError):
        renders()


def test_engine_rejects_undecorated_handlers() -> None:
    engine = RenderEngine()

    with pytest.raises(TypeError):
        engine.register(lambda event, context: None)


def test_engine_dispatches_in_arrival_order() -> None:
    seen: list[str] = []

    @renders(EventKind.TEXT, EventKind.SOFT_BREAK)
    def collect(event: ParseEvent, _context: Any) -> None:
        seen.append(event.text or event.kind.value)

    engine = RenderEngine()
    engine.register(collect)
    engine.run([text("a"), ParseEvent(EventKind.SOFT_BREAK), text("b"), ParseEvent(EventKind.RULE)], None)

    assert seen == ["a", "soft_break", "b"]
