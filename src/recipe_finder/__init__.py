"""Recipe finder agent: AllRecipes search over chrome-devtools MCP."""

from .config import runtime, settings
from .events import AgentEvent, DoneEvent, ResultEvent, TextEvent, ToolEvent, UsageEvent
from .exceptions import AgentStreamError, RecipeFinderError
from .options import ALLOWED_TOOLS, AgentConfig, build_chrome_devtools_args, build_config, get_options
from .relay import relay, stream_agent, translate

__all__ = [
    "ALLOWED_TOOLS",
    "AgentConfig",
    "AgentEvent",
    "AgentStreamError",
    "DoneEvent",
    "RecipeFinderError",
    "ResultEvent",
    "TextEvent",
    "ToolEvent",
    "UsageEvent",
    "build_chrome_devtools_args",
    "build_config",
    "get_options",
    "relay",
    "runtime",
    "settings",
    "stream_agent",
    "translate",
]
