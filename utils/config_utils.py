"""
This module contains utility functions for loading configuration files.
"""

import os
from typing import Any

import yaml

MAIN_CONFIG_PATH = os.path.abspath(os.path.join(__file__, "../../config.yaml"))
REQUIRED_SECTIONS = ("ellipsoid", "logging", "output")
OUTPUT_UNITS = ("degrees", "radians")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively merge two configuration dictionaries. Values in override take precedence.
    Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """
    Check that a configuration has every required section, a known log level and a known output unit.

    :param config: The configuration dictionary.
    :raises ValueError: If the configuration is incomplete or invalid.
    """
    missing = [section for section in REQUIRED_SECTIONS if section not in config]
    if missing:
        raise ValueError(f"Configuration is missing section(s): {', '.join(missing)}")
    for section in REQUIRED_SECTIONS:
        if not isinstance(config[section], dict):
            raise ValueError(
                f"Configuration section {section!r} must be a mapping, got {config[section]!r}"
            )

    level = config["logging"].get("level")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid logging level {level!r}, expected one of {LOG_LEVELS}")
    if config["output"].get("units") not in OUTPUT_UNITS:
        raise ValueError(
            f"Invalid output units {config['output'].get('units')!r}, expected one of {OUTPUT_UNITS}"
        )


def load_config(config_path: str = MAIN_CONFIG_PATH) -> dict[str, Any]:
    """
    Loads a YAML configuration file.

    Sections or keys missing from a user-supplied file are filled in from the main configuration file.

    :param config_path: The path to the configuration file. If not provided, the main configuration file is loaded.
    :return: The contents of the configuration file.
    """
    with open(config_path, "r", encoding="utf-8") as file:
        config = yaml.safe_load(file) or {}

    if os.path.abspath(config_path) != MAIN_CONFIG_PATH:
        config = merge_config(load_config(), config)
    validate_config(config)
    return config
