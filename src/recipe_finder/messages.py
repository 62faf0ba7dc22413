"""Normalized view of messages coming from the query service.

The SDK yields typed dataclasses, but older transports and proxies hand us
raw JSON-shaped dicts instead. Both are folded into ``UpstreamMessage`` so the
relay only ever matches on a closed set of variants. Anything unrecognized
becomes an ``unknown`` message carrying nothing.

Usage is read only from the per-turn assistant payload. The result message
also reports usage, but that is the run total and would double-count.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from claude_agent_sdk import AssistantMessage, ResultMessage, SystemMessage, TextBlock, ToolUseBlock, UserMessage
from claude_agent_sdk.types import StreamEvent

MessageKind = Literal["assistant", "result", "system", "user", "stream_event", "unknown"]


@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class ToolUseContent:
    name: str
    id: str = ""


@dataclass(frozen=True)
class UnknownContent:
    kind: str


ContentBlock: TypeAlias = TextContent | ToolUseContent | UnknownContent


def _count(value: Any) -> int:
    # bool is an int subclass but never a token count
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


@dataclass(frozen=True)
class TokenUsage:
    """Token counters; missing or invalid counts read as zero."""

    input_tokens: int = 0
    output_tokens: int = 0

    @classmethod
    def from_raw(cls, raw: Any) -> "TokenUsage | None":
        if raw is None:
            return None
        if isinstance(raw, Mapping):
            return cls(_count(raw.get("input_tokens")), _count(raw.get("output_tokens")))
        if hasattr(raw, "input_tokens") or hasattr(raw, "output_tokens"):
            return cls(_count(getattr(raw, "input_tokens", 0)), _count(getattr(raw, "output_tokens", 0)))
        return None


@dataclass(frozen=True)
class UpstreamMessage:
    kind: MessageKind
    blocks: tuple[ContentBlock, ...] = ()
    usage: TokenUsage | None = None
    result: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.blocks and self.usage is None and not self.result


def _parse_block(block: Any) -> ContentBlock:
    match block:
        case TextBlock(text=text):
            return TextContent(text=text or "")
        case ToolUseBlock(name=name, id=block_id):
            return ToolUseContent(name=name, id=block_id)
        case {"type": "text", **rest}:
            text = rest.get("text")
            return TextContent(text=text if isinstance(text, str) else "")
        case {"type": "tool_use", "name": str(name), **rest}:
            return ToolUseContent(name=name, id=str(rest.get("id", "")))
        case {"type": str(kind)}:
            return UnknownContent(kind=kind)
        case _:
            return UnknownContent(kind=type(block).__name__)


def _parse_blocks(content: Any) -> tuple[ContentBlock, ...]:
    if not isinstance(content, (list, tuple)):
        return ()
    return tuple(_parse_block(block) for block in content)


def _result_text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _parse_dict(raw: Mapping[str, Any]) -> UpstreamMessage:
    inner = raw.get("message")
    inner = inner if isinstance(inner, Mapping) else {}
    usage = TokenUsage.from_raw(inner.get("usage"))
    result = _result_text(raw.get("result"))

    match raw.get("type"):
        case "assistant":
            return UpstreamMessage("assistant", _parse_blocks(inner.get("content")), usage, result)
        case "result" | "system" | "user" | "stream_event" as kind:
            return UpstreamMessage(kind, (), usage, result)
        case _:
            return UpstreamMessage("unknown", (), usage, result)


def parse_message(raw: Any) -> UpstreamMessage:
    """Fold an SDK message, raw dict or anything else into an UpstreamMessage."""
    match raw:
        case AssistantMessage():
            # Usage is only present on newer SDK releases
            return UpstreamMessage(
                "assistant",
                _parse_blocks(raw.content),
                TokenUsage.from_raw(getattr(raw, "usage", None)),
            )
        case ResultMessage():
            return UpstreamMessage("result", result=_result_text(raw.result))
        case SystemMessage():
            return UpstreamMessage("system")
        case UserMessage():
            return UpstreamMessage("user")
        case StreamEvent():
            return UpstreamMessage("stream_event")
        case Mapping():
            return _parse_dict(raw)
        case _:
            inner = getattr(raw, "message", None)
            usage = TokenUsage.from_raw(inner.get("usage") if isinstance(inner, Mapping) else getattr(inner, "usage", None))
            result = _result_text(getattr(raw, "result", None))
            return UpstreamMessage("unknown", (), usage, result)
