"""
Configuration loading for wgshow.

Settings come from, in increasing priority: built-in defaults, an optional
YAML file (with ``${VAR}`` environment substitution) and ``WGSHOW_*``
environment variables. A ``.env`` file in the working directory is loaded
into the environment first.
"""
import os
import re
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger('wgshow.config')

# Environment variable pattern: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r'\${([A-Za-z0-9_]+)}')
ENV_PREFIX = 'WGSHOW_'
DEFAULT_CONFIG_NAME = Path('.config', 'wgshow', 'config.yaml')

TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off', '')


@dataclass
class Settings:
    """Runtime settings."""
    wg_binary: str = 'wg'
    use_sudo: bool = False
    runtime_dir: str = '/var/run/wireguard'
    log_file: Optional[str] = None
    debug: bool = False


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Build the effective settings.

    Args:
        config_path: Explicit YAML file. Falls back to ``$WGSHOW_CONFIG`` and
            then to ``~/.config/wgshow/config.yaml`` when that file exists.

    Raises:
        ConfigurationError: If the file is missing, unparsable or has unknown keys.
    """
    load_dotenv(find_dotenv(usecwd=True))

    values: Dict[str, Any] = {}
    path = _resolve_config_path(config_path)
    if path is not None:
        values.update(_load_yaml(path))

    for f in fields(Settings):
        env_value = os.environ.get(ENV_PREFIX + f.name.upper())
        if env_value is not None:
            values[f.name] = env_value

    return _build_settings(values)


def default_config_path() -> Optional[Path]:
    """~/.config/wgshow/config.yaml, or None without a home directory."""
    try:
        return Path.home() / DEFAULT_CONFIG_NAME
    except RuntimeError:
        return None


def _resolve_config_path(config_path) -> Optional[Path]:
    if config_path:
        return Path(config_path)
    env_path = os.environ.get(ENV_PREFIX + 'CONFIG')
    if env_path:
        return Path(env_path)
    default_path = default_config_path()
    if default_path is not None and default_path.exists():
        return default_path
    return None


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            raw_yaml = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}")

    try:
        data = yaml.safe_load(_substitute_env_vars(raw_yaml))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML in {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    logger.debug(f"Configuration loaded from {path}")
    return data


def _substitute_env_vars(raw_yaml: str) -> str:
    def replace_env_var(match):
        value = os.environ.get(match.group(1))
        if value is None:
            logger.warning(f"Environment variable not found: {match.group(1)}")
            return match.group(0)
        return value

    return ENV_VAR_PATTERN.sub(replace_env_var, raw_yaml)


def _build_settings(values: Dict[str, Any]) -> Settings:
    known = {f.name: f for f in fields(Settings)}
    unknown = sorted(set(values) - set(known))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    kwargs = {}
    for name, value in values.items():
        if known[name].type is bool:
            kwargs[name] = _to_bool(name, value)
        elif value is None:
            kwargs[name] = None
        else:
            kwargs[name] = str(value)
    return Settings(**kwargs)


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")
