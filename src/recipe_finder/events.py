"""Simplified events emitted to callers of the agent stream."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        """Plain dict form, e.g. ``{"type": "text", "text": "..."}``."""
        return self.model_dump(mode="json")


class TextEvent(_Event):
    """A chunk of assistant text."""

    type: Literal["text"] = "text"
    text: str


class ToolEvent(_Event):
    """The agent invoked a tool; arguments are not surfaced."""

    type: Literal["tool"] = "tool"
    name: str


class UsageEvent(_Event):
    """Token counters reported upstream."""

    type: Literal["usage"] = "usage"
    input: int = Field(default=0, ge=0)
    output: int = Field(default=0, ge=0)


class ResultEvent(_Event):
    """Final answer text."""

    type: Literal["result"] = "result"
    text: str


class DoneEvent(_Event):
    """Terminates every stream exactly once."""

    type: Literal["done"] = "done"


AgentEvent = Annotated[
    TextEvent | ToolEvent | UsageEvent | ResultEvent | DoneEvent,
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[AgentEvent] = TypeAdapter(AgentEvent)


def parse_event(data: dict[str, Any]) -> AgentEvent:
    """Validate a wire dict back into an event model."""
    return _event_adapter.validate_python(data)
