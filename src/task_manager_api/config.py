"""Load server configuration from an optional YAML file and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .constants import (
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PORT,
    ENV_PREFIX,
)
from .errors import ConfigError


@dataclass(frozen=True)
class ServerConfig:
    """Settings for the HTTP server and the task engine it wraps."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    enable_cors: bool = True
    default_page_size: int = DEFAULT_PAGE_SIZE


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_config_file(path: Path) -> tuple[dict[str, Any], str | None]:
    """Load a YAML config file.

    Args:
        path: Config file location.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    if not path.exists():
        return {}, None
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        return {}, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except yaml.YAMLError as exc:
        return {}, f"{path.name}: YAMLError: {exc}"
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"{path.name}: expected mapping, got {type(data).__name__}"
    return data, None


def _coerce_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key}: expected integer, got {value!r}") from exc
    if number < 1:
        raise ConfigError(f"{key}: must be positive, got {number}")
    return number


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key}: expected boolean, got {value!r}")


def _apply(config: ServerConfig, raw: Mapping[str, Any]) -> ServerConfig:
    known = {f.name for f in fields(ServerConfig)}
    changes: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known or value is None:
            continue
        if key in {"port", "default_page_size"}:
            changes[key] = _coerce_int(key, value)
        elif key == "enable_cors":
            changes[key] = _coerce_bool(key, value)
        elif key == "log_level":
            changes[key] = str(value).upper()
        else:
            changes[key] = str(value)
    return replace(config, **changes)


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    mapping = {
        "HOST": "host",
        "PORT": "port",
        "LOG_LEVEL": "log_level",
        "CORS": "enable_cors",
        "DEFAULT_PAGE_SIZE": "default_page_size",
    }
    out: dict[str, Any] = {}
    for suffix, key in mapping.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw != "":
            out[key] = raw
    return out


def load_server_config(
    path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ServerConfig:
    """Resolve the server configuration.

    Later sources win: built-in defaults, then the YAML file at *path*, then
    ``TASK_API_*`` environment variables, then *overrides* (CLI flags).

    Raises:
        ConfigError: The file cannot be parsed or a value has the wrong type.
    """
    config = ServerConfig()
    if path is not None:
        data, err = load_config_file(path)
        if err:
            raise ConfigError(err)
        config = _apply(config, data)
    config = _apply(config, _from_env(os.environ if env is None else env))
    if overrides:
        config = _apply(config, overrides)
    return config
