"""Query options for the recipe finder agent.

The bundle built here is everything the query service needs besides the
prompt: model, system prompt, tool allowlist, turn limit and, when the agent
runs on its own, how to launch the chrome-devtools tool server.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from claude_agent_sdk import ClaudeAgentOptions

from .config import CONTAINER_CHROME_PATH, AppSettings, RuntimeEnvironment
from .config import runtime as default_runtime
from .config import settings as default_settings
from .prompts import SYSTEM_PROMPT

TOOL_SERVER_NAME = "chrome-devtools"
TOOL_PREFIX = f"mcp__{TOOL_SERVER_NAME}__"

# Names advertised by chrome-devtools-mcp; must match the server exactly
BROWSER_TOOLS: tuple[str, ...] = (
    "click",
    "fill",
    "fill_form",
    "hover",
    "press_key",
    "navigate_page",
    "new_page",
    "list_pages",
    "select_page",
    "close_page",
    "wait_for",
    "take_screenshot",
    "take_snapshot",
)

ALLOWED_TOOLS: tuple[str, ...] = tuple(f"{TOOL_PREFIX}{name}" for name in BROWSER_TOOLS)

BASE_CHROME_ARGS: tuple[str, ...] = (
    "-y",
    "chrome-devtools-mcp@latest",
    "--headless",
    "--isolated",
    "--no-category-emulation",
    "--no-category-performance",
    "--no-category-network",
)

CONTAINER_CHROME_ARGS: tuple[str, ...] = (
    f"--executable-path={CONTAINER_CHROME_PATH}",
    "--chrome-arg=--no-sandbox",
    "--chrome-arg=--disable-setuid-sandbox",
    "--chrome-arg=--disable-dev-shm-usage",
    "--chrome-arg=--disable-gpu",
)


def build_chrome_devtools_args(is_container: bool) -> list[str]:
    """Build the npx argument list for chrome-devtools-mcp.

    Inside the container Chrome lives at a fixed path and cannot use its
    sandbox; locally chrome-devtools-mcp finds Chrome by itself.
    """
    if is_container:
        return [*BASE_CHROME_ARGS, *CONTAINER_CHROME_ARGS]
    return list(BASE_CHROME_ARGS)


@dataclass(frozen=True)
class ToolServerDescriptor:
    """How to launch the browser-control tool server."""

    args: tuple[str, ...]
    command: str = "npx"
    type: Literal["stdio"] = "stdio"

    @classmethod
    def for_runtime(cls, env: RuntimeEnvironment) -> "ToolServerDescriptor":
        return cls(args=tuple(build_chrome_devtools_args(env.is_container)))

    def to_sdk(self) -> dict:
        return {"type": self.type, "command": self.command, "args": list(self.args)}


@dataclass(frozen=True)
class AgentConfig:
    """Immutable options bundle for a single query."""

    system_prompt: str
    model: str
    allowed_tools: tuple[str, ...]
    max_turns: int
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    tool_server: ToolServerDescriptor | None = None

    def __post_init__(self) -> None:
        if len(set(self.allowed_tools)) != len(self.allowed_tools):
            raise ValueError("allowed_tools must not contain duplicates")

    @property
    def standalone(self) -> bool:
        return self.tool_server is not None

    def to_sdk_options(self) -> ClaudeAgentOptions:
        """Convert to the query service's options object."""
        kwargs: dict = {
            "env": dict(self.env),
            "system_prompt": self.system_prompt,
            "model": self.model,
            "allowed_tools": list(self.allowed_tools),
            "max_turns": self.max_turns,
        }
        if self.tool_server is not None:
            kwargs["mcp_servers"] = {TOOL_SERVER_NAME: self.tool_server.to_sdk()}
        return ClaudeAgentOptions(**kwargs)


def build_config(
    standalone: bool = False,
    *,
    runtime: RuntimeEnvironment | None = None,
    settings: AppSettings | None = None,
) -> AgentConfig:
    """Build the options bundle.

    Args:
        standalone: Launch the tool server ourselves instead of relying on the host
        runtime: Environment snapshot (default: the one taken at import time)
        settings: Application settings (default: the loaded settings)
    """
    env = runtime or default_runtime
    app_settings = settings or default_settings
    return AgentConfig(
        env=MappingProxyType(dict(env.env)),
        system_prompt=SYSTEM_PROMPT,
        model=app_settings.agent.model,
        allowed_tools=ALLOWED_TOOLS,
        max_turns=app_settings.agent.max_turns,
        tool_server=ToolServerDescriptor.for_runtime(env) if standalone else None,
    )


def get_options(
    standalone: bool = False,
    *,
    runtime: RuntimeEnvironment | None = None,
    settings: AppSettings | None = None,
) -> ClaudeAgentOptions:
    """Build SDK options for a query; never fails."""
    return build_config(standalone, runtime=runtime, settings=settings).to_sdk_options()
