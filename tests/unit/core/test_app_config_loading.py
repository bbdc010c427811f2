from pathlib import Path

import pytest
from dispatch_cli.core.common.exceptions import ConfigurationError
from dispatch_cli.core.config.app_config import AppConfig, LogLevel, load_config


def test_defaults() -> None:
    config = AppConfig()

    assert config.app_name == "dispatch-cli"
    assert config.version == "1.0.0"
    assert config.logging.level is LogLevel.WARNING
    assert config.plugins.enabled == ["calculator", "toolbox"]
    assert config.plugins.discover_entry_points is True


def test_from_env_reads_known_variables() -> None:
    # Arrange
    environ = {
        "LOG_LEVEL": "debug",
        "LOG_FILE_PATH": "logs/cli.log",
        "VERBOSE": "yes",
        "DISPATCH_CLI_PLUGINS": "calculator, ",
        "DISPATCH_CLI_DISCOVER_PLUGINS": "0",
        "WEATHER_API_KEY": "abc123",
        "EMPTY": "",
    }

    # Act
    config = AppConfig.from_env(environ=environ)

    # Assert
    assert config.logging.level is LogLevel.DEBUG
    assert config.logging.log_file == "logs/cli.log"
    assert config.logging.verbose is True
    assert config.plugins.enabled == ["calculator"]
    assert config.plugins.discover_entry_points is False
    assert config.settings["WEATHER_API_KEY"] == "abc123"
    assert "EMPTY" not in config.settings


def test_get_prefers_settings_then_dotted_paths() -> None:
    config = AppConfig(settings={"API_KEY": "secret"})

    assert config.get("API_KEY") == "secret"
    assert config.get("logging.level") is LogLevel.WARNING
    assert config.get("plugins.enabled") == ["calculator", "toolbox"]
    assert config.get("missing.path", "fallback") == "fallback"
    assert config.get("settings.API_KEY") == "secret"


def test_set_stores_string_values() -> None:
    config = AppConfig()

    config.set("TOOLBOX_RETRY_DELAY_MS", 250)

    assert config.get("TOOLBOX_RETRY_DELAY_MS") == "250"


def test_load_config_layers_yaml_and_environment(temp_config_path: Path) -> None:
    # Act
    config = load_config(
        temp_config_path,
        env_file=temp_config_path.parent / "none.env",
        environ={"LOG_LEVEL": "ERROR"},
    )

    # Assert
    assert config.app_name == "yaml-cli"
    assert config.plugins.enabled == ["calculator"]
    assert config.logging.level is LogLevel.ERROR


def test_load_config_reads_dotenv_file(tmp_path: Path) -> None:
    # Arrange
    env_file = tmp_path / "test.env"
    env_file.write_text("LOG_LEVEL=INFO\nSERVICE_TOKEN=tok\n", encoding="utf-8")

    # Act
    config = load_config(env_file=env_file, environ={})

    # Assert
    assert config.logging.level is LogLevel.INFO
    assert config.settings["SERVICE_TOKEN"] == "tok"


def test_process_environment_overrides_dotenv(tmp_path: Path) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text("LOG_LEVEL=INFO\n", encoding="utf-8")

    config = load_config(env_file=env_file, environ={"LOG_LEVEL": "CRITICAL"})

    assert config.logging.level is LogLevel.CRITICAL


def test_missing_config_file_is_ignored(tmp_path: Path) -> None:
    config = load_config(
        tmp_path / "absent.yaml", env_file=tmp_path / "none.env", environ={}
    )

    assert config.app_name == "dispatch-cli"


def test_non_yaml_config_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Unsupported configuration file"):
        load_config(path, env_file=tmp_path / "none.env", environ={})


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid configuration structure"):
        load_config(path, env_file=tmp_path / "none.env", environ={})


def test_repr_hides_settings() -> None:
    config = AppConfig(settings={"API_KEY": "secret"})

    assert repr(config) == '<AppConfig app_name="dispatch-cli">'


def test_invalid_environment_value_raises_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Invalid configuration") as exc_info:
        load_config(env_file=tmp_path / "none.env", environ={"LOG_LEVEL": "loud"})

    assert "level" in str(exc_info.value.cause)


def test_invalid_yaml_value_raises_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("plugins:\n  enabled: 5\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path, env_file=tmp_path / "none.env", environ={})


def test_from_env_rejects_invalid_values() -> None:
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        AppConfig.from_env(environ={"LOG_LEVEL": "loud"})
