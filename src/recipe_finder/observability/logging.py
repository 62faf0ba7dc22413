"""Structured logging with per-run context using structlog and contextvars."""

import logging
import sys
from contextvars import ContextVar

import structlog

# Context variables for the current agent run
current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)

_configured = False


def setup_structured_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog with per-run context.

    Logs go to stderr; stdout carries the event stream.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines instead of the console format
    """
    global _configured
    if _configured:
        return

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Inject run context
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    _configured = True


def bind_run_context(run_id: str, prompt: str) -> None:
    """Bind run context for all subsequent logs in this async context.

    Args:
        run_id: Unique identifier of the agent run
        prompt: User prompt; only a short preview is bound
    """
    current_run_id.set(run_id)
    structlog.contextvars.bind_contextvars(run_id=run_id, prompt_preview=prompt[:60])


def clear_run_context() -> None:
    """Clear run context after the stream ends."""
    current_run_id.set(None)
    structlog.contextvars.unbind_contextvars("run_id", "prompt_preview")


def get_current_run_id() -> str | None:
    """Get the current run ID from context."""
    return current_run_id.get()
