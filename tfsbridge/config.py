#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

import logging
import sys

import yaml

from .exit_codes import ConfigError

logger = logging.getLogger("tfsbridge")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def configure_logging(config: Optional[Dict[str, Any]] = None, verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger using the logging config."""
    settings = (config or get_default_config()).get("logging", {})
    level_name = "DEBUG" if verbose else str(settings.get("level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)

    if not logger.handlers:
        logger.addHandler(logging.StreamHandler(sys.stderr))
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            # sys.stderr may have been replaced since the handler was made
            handler.setStream(sys.stderr)
        handler.setFormatter(logging.Formatter(settings.get("format", "%(levelname)s: %(message)s")))
    logger.setLevel(level)


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Checks in order:
    1. TFSBRIDGE_CONFIG environment variable
    2. ~/.tfsbridge/ directory
    """
    if 'TFSBRIDGE_CONFIG' in os.environ:
        path = Path(os.environ['TFSBRIDGE_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.tfsbridge'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.json'


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "git": {
            "executable": "git",
            "dir": "",
            "work_tree": "",
            "subdir": "",
            "timeout_seconds": 0
        },
        "remotes": {
            "namespace": "tfs-remote"
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        },
        "output": {
            "format": "jsonl"
        }
    }


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        elif suffix in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
        else:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return file_config


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from file.

    Defaults are merged with the file (if any), then environment
    variable overrides are applied.

    Raises:
        ConfigError: If the config file exists but cannot be parsed
    """
    path = Path(config_path).expanduser() if config_path else get_config_path()

    config = get_default_config()

    if path.exists():
        config = merge_configs(config, _read_config_file(path))
        logger.debug(f"Loaded config from {path}")

    return apply_env_overrides(config)


def save_config(config: Dict[str, Any], config_path: Optional[Union[str, Path]] = None) -> Path:
    """Save configuration to file, in the format its suffix names."""
    path = Path(config_path).expanduser() if config_path else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() in ['.yaml', '.yml']:
        with open(path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    elif path.suffix.lower() == '.toml':
        raise ConfigError("Saving TOML config is not supported; use .json or .yaml")
    else:
        with open(path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {path}")
    return path


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: TFSBRIDGE_SECTION_KEY
    For example: TFSBRIDGE_GIT_WORK_TREE=/src/project
    """
    env_prefix = "TFSBRIDGE_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == 'TFSBRIDGE_CONFIG':
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Longest config key that is a prefix of the remaining parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i:i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key is None:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                break

    return config
