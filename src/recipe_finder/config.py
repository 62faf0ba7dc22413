"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Optional

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# --- Paths ---

APP_NAME = "recipe-finder"

# Chromium location inside the published container image
CONTAINER_CHROME_PATH = "/usr/bin/chromium"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/recipe-finder)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()
    return base / APP_NAME


def get_default_results_dir() -> Path:
    """Get the default directory for saving recipe results."""
    base = Path("~/Documents").expanduser()
    if not base.exists():
        base = Path.home()
    return base / "recipe-finder-results"


CONFIG_FILE = get_config_dir() / "config.json"


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    path = path or CONFIG_FILE
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        data = json.loads(text)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config_file(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Save settings to the JSON config file."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_data, indent=2), encoding="utf-8")
    return path


class ConfigFileSection(PydanticBaseSettingsSource):
    """Reads one top-level section of the JSON config file."""

    def __init__(self, settings_cls: type[BaseSettings], section: str):
        super().__init__(settings_cls)
        data = load_config_file().get(section)
        self.data: dict[str, Any] = data if isinstance(data, dict) else {}

    def get_field_value(self, field_info: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {name: value for name, value in self.data.items() if name in self.settings_cls.model_fields}


class SectionSettings(BaseSettings):
    """Settings section backed by env vars first, then its config file section."""

    config_section: ClassVar[str]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, ConfigFileSection(settings_cls, cls.config_section), file_secret_settings)


class AgentSettings(SectionSettings):
    """Agent query configuration."""

    model_config = SettingsConfigDict(env_prefix="RECIPE_AGENT_")
    config_section: ClassVar[str] = "agent"

    model: str = Field(default="haiku", description="Model alias passed to the query service")
    max_turns: int = Field(default=50, ge=1, description="Upper bound on agent turns per query")


class LoggingSettings(SectionSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="RECIPE_LOG_")
    config_section: ClassVar[str] = "logging"

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, description="Render log lines as JSON instead of console format")


class OutputSettings(SectionSettings):
    """Result persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="RECIPE_OUTPUT_")
    config_section: ClassVar[str] = "output"

    results_dir: Optional[str] = Field(default=None, description="Directory to save recipe results")


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults. Each section
    resolves its own sources when it is built.
    """

    model_config = SettingsConfigDict(env_prefix="RECIPE_", extra="ignore")

    agent: AgentSettings = Field(default_factory=AgentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    def save(self, path: Path | None = None) -> Path:
        """Save current configuration to file."""
        data = self.model_dump(mode="json", exclude_none=True)
        return save_config_file(data, path)

    def get_results_dir(self) -> Path:
        """Get the results directory, creating if needed."""
        if self.output.results_dir:
            path = Path(self.output.results_dir).expanduser()
        else:
            path = get_default_results_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Process environment snapshot taken once at startup."""

    is_container: bool
    env: Mapping[str, str] = field(default_factory=dict)


def detect_runtime(environ: Mapping[str, str] | None = None) -> RuntimeEnvironment:
    """Snapshot the environment and decide whether we run inside the container image.

    Only an exact ``CHROME_PATH`` match counts; there is no probing for the binary.
    """
    env = dict(os.environ if environ is None else environ)
    return RuntimeEnvironment(is_container=env.get("CHROME_PATH") == CONTAINER_CHROME_PATH, env=env)


def _load_settings() -> AppSettings:
    """Load settings; every section layers env vars over the config file."""
    return AppSettings()


settings = _load_settings()
runtime = detect_runtime()
