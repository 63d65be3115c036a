"""Typed configuration loading and access.

The optional relres.toml file looks like:

    [feed]
    dir = "feeds"
    api_version = "8.x"

    [selection]
    strategy = "auto"
    show_all = false

    [installed]
    views = "8.x-3.0"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "FeedConfig",
    "SelectionConfig",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_NAME",
    "default_config_path",
    "load_config",
    "load_config_or_default",
]

CONFIG_ENV_VAR = "RELRES_CONFIG"
DEFAULT_CONFIG_NAME = "relres.toml"

DEFAULT_FEED_DIR = "feeds"
DEFAULT_API_VERSION = "8.x"
DEFAULT_STRATEGY = "auto"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Where release documents come from."""

    dir: str = DEFAULT_FEED_DIR
    api_version: str = DEFAULT_API_VERSION


@dataclass(frozen=True, slots=True)
class SelectionConfig:
    """Defaults for resolution commands.

    ``strategy`` is kept as text; it is validated when a command uses it so
    an unknown value is reported the same way as a bad --strategy flag.
    """

    strategy: str = DEFAULT_STRATEGY
    show_all: bool = False


def _empty_installed() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    installed: dict[str, str] = field(default_factory=_empty_installed)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        feed: StrDict = get_table(data, "feed") or {}
        selection: StrDict = get_table(data, "selection") or {}
        installed_table: StrDict = get_table(data, "installed") or {}

        installed: dict[str, str] = {}
        for name in installed_table:
            version = get_str(installed_table, name)
            if version is None:
                raise ValueError(f"installed.{name} must be a non-empty string")
            installed[name] = version

        show_all = get_bool(selection, "show_all")
        return cls(
            feed=FeedConfig(
                dir=get_str(feed, "dir") or DEFAULT_FEED_DIR,
                api_version=get_str(feed, "api_version") or DEFAULT_API_VERSION,
            ),
            selection=SelectionConfig(
                strategy=get_str(selection, "strategy") or DEFAULT_STRATEGY,
                show_all=show_all if show_all is not None else False,
            ),
            installed=installed,
        )


def default_config_path() -> Path:
    """Config path from $RELRES_CONFIG, else ./relres.toml."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relres.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or the defaults if it cannot be loaded."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
