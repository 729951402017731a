"""Process-wide settings for scope_guard."""

import logging
from collections.abc import Mapping
from typing import Any

import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scope_guard.exceptions import ConfigError

TOML_SECTION = "scope_guard"


class GuardSettings(BaseModel):
    """Settings consulted when guards fire."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    warn_on_return_value: bool = Field(
        default=True,
        description="Log a warning when an action returns a value at scope exit",
    )
    failed_action_log_level: str = Field(
        default="ERROR",
        description="Log level used by log_errors for contained failures",
    )

    @field_validator("failed_action_log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def failed_action_level(self) -> int:
        return logging.getLevelName(self.failed_action_log_level)


_settings = GuardSettings()


def get_settings() -> GuardSettings:
    return _settings


def init(settings: GuardSettings | Mapping[str, Any]) -> GuardSettings:
    global _settings  # noqa: PLW0603
    if not isinstance(settings, GuardSettings):
        try:
            settings = GuardSettings(**settings)
        except ValidationError as e:
            raise ConfigError(e) from None
    _settings = settings
    return _settings


def init_from_toml(configfile: str) -> GuardSettings:
    """Load settings from the [scope_guard] table of a toml file.

    A file without that table resets to the defaults.
    """
    try:
        data = toml.load(configfile)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"can not read {configfile}: {e!s}") from None
    section = data.get(TOML_SECTION, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{TOML_SECTION}] in {configfile} is not a table")
    return init(section)


def reset() -> GuardSettings:
    return init(GuardSettings())
