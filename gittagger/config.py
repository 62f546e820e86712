#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import toml
import yaml

import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("gittagger")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GITTAGGER_CONFIG environment variable
    2. ~/.gittagger/ directory
    """
    if 'GITTAGGER_CONFIG' in os.environ:
        path = Path(os.environ['GITTAGGER_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.gittagger'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "git": {
            "timeout": 30
        },
        "tagging": {
            "default_baseline": "v0.0.0",
            "annotation": "Automated tagging for commit {commit}"
        },
        "hooks": {
            "hook_path": ".git/hooks/post-commit",
            "marker_env": "GIT_POST_COMMIT",
            "header": "# Added by gittagger"
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        }
    }


def read_config_file(config_path):
    """
    Parse a config file by extension (.toml, .yaml/.yml, else JSON).

    Raises:
        ValueError: the file is not a mapping or cannot be parsed
    """
    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                data = tomllib.load(f)
        elif suffix in ('.yaml', '.yml'):
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        else:
            with open(config_path, 'r') as f:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ValueError(f"Error loading config from {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data


def load_config():
    """
    Load configuration: defaults, then the config file, then environment.

    Raises:
        ValueError: the config file exists but is invalid
    """
    config_path = get_config_path()
    config = get_default_config()

    if config_path.exists():
        config = merge_configs(config, read_config_file(config_path))
        logger.debug(f"Loaded config from {config_path}")

    return apply_env_overrides(config)


def save_config(config, config_path=None):
    """Save configuration to file, in the format implied by its extension."""
    config_path = Path(config_path) if config_path else get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'w') as f:
            toml.dump(config, f)
    elif suffix in ('.yaml', '.yml'):
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


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
    Environment variables follow the pattern: GITTAGGER_SECTION_KEY
    For example: GITTAGGER_GIT_TIMEOUT=60, GITTAGGER_HOOKS_MARKER_ENV=MY_HOOK
    GITTAGGER_CONFIG itself is the config file location and is skipped.
    """
    env_prefix = "GITTAGGER_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "GITTAGGER_CONFIG":
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

            if not matched_key:
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


def configure_logging(config, verbose=False):
    """Apply the logging section of the config to the gittagger logger."""
    logging_config = config.get("logging", {})
    level_name = "DEBUG" if verbose else str(logging_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    fmt = logging_config.get("format")
    if fmt:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(fmt))
