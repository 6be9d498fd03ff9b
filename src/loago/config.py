"""Settings for the loago CLI.

Settings Loading Priority (highest to lowest):
    1. Constructor arguments
    2. Environment variables (LOAGO_* prefix)
    3. Project config (./.loago/settings.json)
    4. User config (~/.loago/settings.json)
    5. .env file
    6. Default values
"""

import os
from pathlib import Path
from typing import Literal, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

__all__ = [
    "APP_NAME",
    "LoagoSettings",
    "default_data_dir",
    "get_settings",
    "set_settings",
    "reload_settings",
]

APP_NAME = "loago"


def default_data_dir() -> Path:
    """Local data directory for the record file.

    Follows the XDG base directory layout: ``$XDG_DATA_HOME/loago``,
    falling back to ``~/.local/share/loago``.
    """
    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home).expanduser() / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def _get_json_config_source(
    settings_cls: Type[BaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists."""
    if not json_file.exists():
        return None
    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class LoagoSettings(BaseSettings):
    """Settings for the loago CLI.

    Controls where the record file lives, how elapsed time is displayed
    and how verbose logging is.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOAGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default=APP_NAME,
        title="App Name",
        description="Application name, used for config directories",
    )

    data_dir: Path = Field(
        default_factory=default_data_dir,
        title="Data Directory",
        description="Directory holding the record file",
    )
    data_file_name: str = Field(
        default="loago.json",
        title="Data File Name",
        description="Name of the record file inside data_dir",
    )

    elapsed_format: Literal["auto", "days"] = Field(
        default="auto",
        title="Elapsed Format",
        description="auto picks days, hours or minutes; days always shows whole days",
    )

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for humans, json for machines)",
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("data_file_name")
    @classmethod
    def plain_file_name(cls, v: str) -> str:
        if not v.strip() or Path(v).name != v:
            raise ValueError("data_file_name must be a plain file name")
        return v

    @property
    def record_path(self) -> Path:
        """Full path of the record file."""
        return self.data_dir / self.data_file_name

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between the environment and .env.

        JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{APP_NAME}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{APP_NAME}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Global settings instance holder
_settings_instance: LoagoSettings | None = None


def get_settings() -> LoagoSettings:
    """Get the current settings instance, creating it on first access."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = LoagoSettings()
    return _settings_instance


def set_settings(settings: LoagoSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally
    """
    global _settings_instance
    _settings_instance = settings


def reload_settings() -> LoagoSettings:
    """Drop the cached instance and load settings again."""
    global _settings_instance
    _settings_instance = None
    return get_settings()
