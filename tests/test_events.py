"""Tests for outgoing event models."""

import pytest
from pydantic import ValidationError

from recipe_finder.events import DoneEvent, ResultEvent, TextEvent, ToolEvent, UsageEvent, parse_event


class TestWireFormat:
    """Events serialize to small tagged dicts."""

    def test_text(self):
        assert TextEvent(text="Searching...").to_wire() == {"type": "text", "text": "Searching..."}

    def test_tool(self):
        assert ToolEvent(name="navigate_page").to_wire() == {"type": "tool", "name": "navigate_page"}

    def test_usage(self):
        assert UsageEvent(input=12, output=0).to_wire() == {"type": "usage", "input": 12, "output": 0}

    def test_result(self):
        assert ResultEvent(text="Here are 3 recipes...").to_wire() == {"type": "result", "text": "Here are 3 recipes..."}

    def test_done(self):
        assert DoneEvent().to_wire() == {"type": "done"}

    def test_parse_dispatches_on_type(self):
        assert parse_event({"type": "tool", "name": "click"}) == ToolEvent(name="click")
        assert parse_event({"type": "done"}) == DoneEvent()


class TestValidation:
    """Event invariants."""

    def test_usage_defaults_to_zero(self):
        event = UsageEvent()
        assert (event.input, event.output) == (0, 0)

    def test_usage_rejects_negative(self):
        with pytest.raises(ValidationError):
            UsageEvent(input=-1)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            parse_event({"type": "thinking", "text": "..."})

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            ToolEvent(name="click", arguments={"uid": "1"})

    def test_frozen(self):
        event = TextEvent(text="a")
        with pytest.raises(ValidationError):
            event.text = "b"
