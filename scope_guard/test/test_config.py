import logging
from pathlib import Path

import pytest

from scope_guard import config
from scope_guard.exceptions import ConfigError


def test_default_settings() -> None:
    settings = config.get_settings()
    assert settings.warn_on_return_value
    assert settings.failed_action_level == logging.ERROR


def test_init_from_mapping() -> None:
    settings = config.init(
        {"warn_on_return_value": False, "failed_action_log_level": "debug"}
    )
    assert config.get_settings() is settings
    assert not settings.warn_on_return_value
    assert settings.failed_action_log_level == "DEBUG"
    assert settings.failed_action_level == logging.DEBUG


def test_init_from_settings_object() -> None:
    settings = config.GuardSettings(warn_on_return_value=False)
    assert config.init(settings) is settings


@pytest.mark.parametrize(
    "data",
    [
        {"unknown_option": True},
        {"failed_action_log_level": "LOUD"},
        {"warn_on_return_value": "sometimes"},
        {"check_return_annotation": False},
    ],
)
def test_init_rejects_invalid(data: dict) -> None:
    with pytest.raises(ConfigError):
        config.init(data)


def test_reset() -> None:
    config.init({"warn_on_return_value": False})
    assert config.reset().warn_on_return_value


def test_init_from_toml(tmp_path: Path) -> None:
    configfile = tmp_path / "config.toml"
    configfile.write_text(
        "[scope_guard]\n"
        "warn_on_return_value = false\n"
        'failed_action_log_level = "WARNING"\n'
    )
    settings = config.init_from_toml(str(configfile))
    assert not settings.warn_on_return_value
    assert settings.failed_action_level == logging.WARNING


def test_init_from_toml_without_section(tmp_path: Path) -> None:
    configfile = tmp_path / "config.toml"
    configfile.write_text('[other]\nkey = "value"\n')
    config.init({"warn_on_return_value": False})
    assert config.init_from_toml(str(configfile)) == config.GuardSettings()


def test_init_from_toml_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="can not read"):
        config.init_from_toml(str(tmp_path / "missing.toml"))


def test_init_from_toml_invalid_syntax(tmp_path: Path) -> None:
    configfile = tmp_path / "config.toml"
    configfile.write_text("[scope_guard\n")
    with pytest.raises(ConfigError, match="can not read"):
        config.init_from_toml(str(configfile))


def test_init_from_toml_section_not_a_table(tmp_path: Path) -> None:
    configfile = tmp_path / "config.toml"
    configfile.write_text('scope_guard = "on"\n')
    with pytest.raises(ConfigError, match="is not a table"):
        config.init_from_toml(str(configfile))
