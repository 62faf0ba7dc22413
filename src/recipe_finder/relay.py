"""Relay from the query service's message stream to simplified agent events."""

import uuid
from collections.abc import AsyncIterable, AsyncIterator, Callable
from typing import Any

import structlog
from claude_agent_sdk import ClaudeAgentOptions, query

from .events import AgentEvent, DoneEvent, ResultEvent, TextEvent, ToolEvent, UsageEvent
from .messages import TextContent, ToolUseContent, UpstreamMessage, parse_message
from .observability import bind_run_context, clear_run_context
from .options import get_options

QueryFn = Callable[..., AsyncIterable[Any]]

logger = structlog.get_logger(__name__)


def translate(message: UpstreamMessage) -> list[AgentEvent]:
    """Map one upstream message to zero or more events.

    Order within a message is fixed: text blocks, then tool calls, then
    usage, then result. The four checks are independent of each other.
    """
    events: list[AgentEvent] = []

    if message.kind == "assistant":
        events.extend(TextEvent(text=block.text) for block in message.blocks if isinstance(block, TextContent) and block.text)
        events.extend(ToolEvent(name=block.name) for block in message.blocks if isinstance(block, ToolUseContent))

    if message.usage is not None:
        events.append(UsageEvent(input=message.usage.input_tokens, output=message.usage.output_tokens))

    if message.result:
        events.append(ResultEvent(text=message.result))

    return events


async def relay(messages: AsyncIterable[Any]) -> AsyncIterator[AgentEvent]:
    """Translate an upstream stream, then emit a single ``done``.

    Errors raised while pulling from ``messages`` propagate unchanged and no
    ``done`` follows them.
    """
    async for raw in messages:
        events = translate(parse_message(raw))
        if not events:
            logger.debug("message_skipped", message_type=type(raw).__name__)
        for event in events:
            yield event
    yield DoneEvent()


async def stream_agent(
    prompt: str,
    *,
    options: ClaudeAgentOptions | None = None,
    query_fn: QueryFn | None = None,
) -> AsyncIterator[AgentEvent]:
    """Run the recipe finder agent on ``prompt`` and stream simplified events.

    Each call opens its own query session. Without explicit ``options`` the
    agent launches its own chrome-devtools tool server.

    Args:
        prompt: Free-text user request, e.g. "find me three lasagna recipes"
        options: Query options (default: ``get_options(standalone=True)``)
        query_fn: Replacement for the SDK ``query`` function

    Yields:
        Text, tool, usage and result events, then exactly one done event
    """
    run_id = str(uuid.uuid4())
    options = options if options is not None else get_options(standalone=True)
    query_fn = query_fn or query

    bind_run_context(run_id, prompt)
    logger.info("run_started", model=options.model, max_turns=options.max_turns)
    emitted = 0
    try:
        async for event in relay(query_fn(prompt=prompt, options=options)):
            emitted += 1
            yield event
    except Exception:
        logger.exception("run_failed", events_emitted=emitted)
        raise
    else:
        logger.info("run_finished", events_emitted=emitted)
    finally:
        clear_run_context()
