"""Runtime settings assembled from CLI flags, environment and a YAML file.

Precedence, highest first: CLI flags, environment variables (GitHub Action
inputs), the ``--config`` YAML file, built-in defaults.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants, EolBehaviour

logger = logging.getLogger(__name__)

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off", ""}


class ConfigError(ValueError):
    """Raised when a setting has an invalid value."""


@dataclass
class Settings:
    """Resolved runtime settings."""
    path_prefix: str = "."
    manifest_name: str = Constants.MANIFEST_FILE
    network_timeout: float = float(Constants.REQUEST_TIMEOUT)
    max_retries: int = Constants.HTTP_RETRY_MAX
    eol_behaviour: EolBehaviour = EolBehaviour.WARN
    offline_mode: bool = False
    exclude_eol: bool = False
    log_level: str = "INFO"
    github_output: Optional[str] = None

    @property
    def manifest_path(self) -> str:
        """Full path of the manifest."""
        return os.path.join(self.path_prefix, self.manifest_name)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load settings from a YAML file.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded config from %s", path)
    return data


def parse_bool(value: Any, name: str) -> bool:
    """Interpret common truthy/falsy spellings."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def parse_timeout(value: Any) -> float:
    """Positive, finite number of seconds."""
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"network_timeout must be a number, got '{value}'") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"network_timeout must be a positive finite number, got '{value}'")
    return timeout


def parse_retries(value: Any) -> int:
    """Non-negative integer."""
    try:
        retries = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigError(f"max_retries must be an integer, got '{value}'") from None
    if retries < 0:
        raise ConfigError(f"max_retries must not be negative, got '{value}'")
    return retries


def parse_eol_behaviour(value: Any) -> EolBehaviour:
    """One of warn, strip, fail (case-insensitive)."""
    try:
        return EolBehaviour(str(value).strip().lower())
    except ValueError:
        raise ConfigError(
            f"eol_behaviour must be one of {', '.join(Constants.EOL_BEHAVIOURS)}, got '{value}'"
        ) from None


def _first_set(*values: Any) -> Any:
    for value in values:
        if value is not None and value != "":
            return value
    return None


def load_settings(args: Any, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Merge CLI args, environment and config file into Settings.

    Args:
        args: Parsed CLI namespace (see args.parse_args)
        environ: Environment mapping, defaults to os.environ

    Raises:
        ConfigError: On any invalid value.
    """
    env = os.environ if environ is None else environ
    file_cfg = load_config_file(getattr(args, "CONFIG", None))

    def pick(attr: str, env_name: Optional[str], key: str) -> Any:
        return _first_set(
            getattr(args, attr, None),
            env.get(env_name) if env_name else None,
            file_cfg.get(key),
        )

    settings = Settings()
    settings.path_prefix = str(
        pick("PATH_PREFIX", Constants.ENV_PATH_PREFIX, "path_prefix") or settings.path_prefix
    )
    settings.manifest_name = str(pick("MANIFEST", None, "manifest_name") or settings.manifest_name)

    timeout = pick("NETWORK_TIMEOUT", Constants.ENV_NETWORK_TIMEOUT, "network_timeout")
    if timeout is not None:
        settings.network_timeout = parse_timeout(timeout)

    retries = pick("MAX_RETRIES", Constants.ENV_MAX_RETRIES, "max_retries")
    if retries is not None:
        settings.max_retries = parse_retries(retries)

    eol = pick("EOL_BEHAVIOUR", Constants.ENV_EOL_BEHAVIOUR, "eol_behaviour")
    if eol is not None:
        settings.eol_behaviour = parse_eol_behaviour(eol)

    offline = pick("OFFLINE_MODE", Constants.ENV_OFFLINE_MODE, "offline_mode")
    if offline is not None:
        settings.offline_mode = parse_bool(offline, "offline_mode")

    exclude_eol = pick("EXCLUDE_EOL", Constants.ENV_EXCLUDE_EOL, "exclude_eol")
    if exclude_eol is not None:
        settings.exclude_eol = parse_bool(exclude_eol, "exclude_eol")

    level = pick("LOG_LEVEL", Constants.ENV_LOG_LEVEL, "log_level")
    if level is not None:
        level = str(level).upper()
        if level not in Constants.LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(Constants.LEVELS)}, got '{level}'")
        settings.log_level = level

    settings.github_output = pick("GITHUB_OUTPUT", Constants.ENV_GITHUB_OUTPUT, "github_output")
    return settings
