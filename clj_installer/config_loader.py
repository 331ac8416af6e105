# clj_installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, environment variables
and an optional YAML file, applying this order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (via Pydantic's BaseSettings initialization)
3. YAML Configuration File
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from clj_installer.exceptions import ConfigError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.config/clj-installer/config.yaml"


def _deep_merge_dicts(
    d1: Dict[str, Any], d2: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively merges two dictionaries.

    If a key exists in both dictionaries and both values are dictionaries,
    the sub-dictionaries are merged. Otherwise the value from ``d2`` wins.

    Parameters:
        d1: The dictionary to merge into. Modified in place.
        d2: The dictionary whose values take precedence.

    Returns:
        Dict[str, Any]: The merged dictionary.
    """
    for k, v in d2.items():
        if k in d1 and isinstance(d1[k], dict) and isinstance(v, dict):
            d1[k] = _deep_merge_dicts(d1[k], v)
        else:
            d1[k] = v
    return d1


def load_yaml_file(
    config_file_path: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Reads a YAML mapping from disk.

    A missing file yields an empty mapping. A file that is not valid YAML, or
    whose top level is not a mapping, raises ConfigError.
    """
    logger_to_use = current_logger if current_logger else module_logger
    path = Path(config_file_path).expanduser()

    if not path.is_file():
        logger_to_use.debug(
            f"Config file {path} not found, using defaults and environment."
        )
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", e) from e
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}", e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Top level of {path} must be a mapping, got {type(data).__name__}"
        )
    logger_to_use.info(f"Loaded configuration overrides from {path}")
    return data


def load_app_settings(
    config_file_path: Optional[Union[str, Path]] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads installer settings.

    Args:
        config_file_path: Path to a YAML configuration file. Defaults to
            ``~/.config/clj-installer/config.yaml``.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        ConfigError: If the file is unreadable or its values fail validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # BaseSettings reads the environment here, so values hold defaults < ENV.
    current_values = AppSettings().model_dump()

    overrides = load_yaml_file(
        config_file_path or DEFAULT_CONFIG_FILE, logger_to_use
    )
    if overrides:
        current_values = _deep_merge_dicts(current_values, overrides)

    try:
        return AppSettings.model_validate(current_values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", e) from e
