"""Configuration management using TOML + environment variables."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

import tomli_w

from cmd_keeper.errors import ConfigDirNotFoundError, ConfigError

APP_DIR = "cmd-keeper"
CONFIG_FILENAME = "config.toml"
DB_FILENAME = "commands.json"
LOG_FILENAME = "cmd-keeper.log"


@dataclass
class StorageConfig:
    db_path: str = ""


@dataclass
class TuiConfig:
    poll_interval: float = 0.1
    list_width: int = 40
    confirm_width: int = 30


@dataclass
class ShellConfig:
    wait_for_enter: bool = True


@dataclass
class ClipboardConfig:
    backend: str = ""


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = ""


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    tui: TuiConfig = field(default_factory=TuiConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    clipboard: ClipboardConfig = field(default_factory=ClipboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Resolve the per-user config directory.

    Resolution order:
    1. CMD_KEEPER_HOME environment variable
    2. $XDG_CONFIG_HOME/cmd-keeper
    3. ~/.config/cmd-keeper
    """
    if env_home := os.environ.get("CMD_KEEPER_HOME"):
        return Path(env_home).expanduser()
    if xdg := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg).expanduser() / APP_DIR
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigDirNotFoundError() from e
    return home / ".config" / APP_DIR


def get_config_file() -> Path:
    return get_config_dir() / CONFIG_FILENAME


def get_db_path(config: AppConfig) -> Path:
    """Data file location, falling back to commands.json in the config dir."""
    if config.storage.db_path:
        return Path(config.storage.db_path).expanduser().resolve()
    return get_config_dir() / DB_FILENAME


def get_log_file(config: AppConfig) -> Path:
    if config.logging.file:
        return Path(config.logging.file).expanduser().resolve()
    return get_config_dir() / LOG_FILENAME


def ensure_config_dir() -> Path:
    """Create config directory with secure permissions."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    os.chmod(config_dir, 0o700)
    return config_dir


def load_config() -> AppConfig:
    """Load configuration from TOML file with env var overrides."""
    config = AppConfig()
    config_file = get_config_file()

    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_file}: {e}") from e

        storage = data.get("storage", {})
        config.storage.db_path = storage.get("db_path", config.storage.db_path)

        tui = data.get("tui", {})
        config.tui.poll_interval = float(tui.get("poll_interval", config.tui.poll_interval))
        config.tui.list_width = tui.get("list_width", config.tui.list_width)
        config.tui.confirm_width = tui.get("confirm_width", config.tui.confirm_width)

        shell = data.get("shell", {})
        config.shell.wait_for_enter = shell.get("wait_for_enter", config.shell.wait_for_enter)

        clipboard = data.get("clipboard", {})
        config.clipboard.backend = clipboard.get("backend", config.clipboard.backend)

        logging_cfg = data.get("logging", {})
        config.logging.level = logging_cfg.get("level", config.logging.level)
        config.logging.file = logging_cfg.get("file", config.logging.file)

    # Environment variable overrides
    if env_db := os.environ.get("CMD_KEEPER_DB_PATH"):
        config.storage.db_path = env_db
    if env_log_level := os.environ.get("CMD_KEEPER_LOG_LEVEL"):
        config.logging.level = env_log_level
    if env_clipboard := os.environ.get("CMD_KEEPER_CLIPBOARD"):
        config.clipboard.backend = env_clipboard

    return config


def save_config(config: AppConfig) -> None:
    """Save configuration to TOML file."""
    ensure_config_dir()

    data = {
        "storage": {
            "db_path": config.storage.db_path,
        },
        "tui": {
            "poll_interval": config.tui.poll_interval,
            "list_width": config.tui.list_width,
            "confirm_width": config.tui.confirm_width,
        },
        "shell": {
            "wait_for_enter": config.shell.wait_for_enter,
        },
        "clipboard": {
            "backend": config.clipboard.backend,
        },
        "logging": {
            "level": config.logging.level,
            "file": config.logging.file,
        },
    }

    config_file = get_config_file()
    with open(config_file, "wb") as f:
        tomli_w.dump(data, f)

    os.chmod(config_file, 0o600)


# Global singleton
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or load the global config singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global config (for testing)."""
    global _config
    _config = None
