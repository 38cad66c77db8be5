"""Configuration file loading and CLI override precedence.

Precedence is CLI flag, then config file, then ``Constants`` defaults. A bad
config file is logged and ignored; it never stops the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from versioning.comparable import QualifierTable, DEFAULT_QUALIFIERS, qualifier_table_from_dict

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Effective runtime settings after merging CLI arguments and config."""

    strategy: str = Constants.DEFAULT_STRATEGY
    module: Optional[str] = None
    maven_executable: str = Constants.MAVEN_EXECUTABLE
    fail_on_new: bool = Constants.FAIL_ON_NEW
    qualifiers: QualifierTable = DEFAULT_QUALIFIERS


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the ``conflictdiff`` section of a YAML or JSON config file.

    Args:
        config_path: Path to the config file, or None.

    Returns:
        The section as a dict; the whole document if it has no such section;
        an empty dict when nothing usable was found.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}

    if not isinstance(data, dict):
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def resolve_settings(args: Any, config: Optional[Dict[str, Any]] = None) -> Settings:
    """Merge parsed CLI arguments over the config file values."""
    config = config or {}
    settings = Settings()

    strategy = getattr(args, "STRATEGY", None) or config.get("strategy")
    if strategy:
        strategy = str(strategy).lower()
        if strategy in Constants.SUPPORTED_STRATEGIES:
            settings.strategy = strategy
        else:
            logger.warning("Ignoring unknown strategy in config: %s", strategy)

    settings.module = getattr(args, "MODULE", None) or config.get("module") or None
    settings.maven_executable = (
        getattr(args, "MAVEN_EXECUTABLE", None)
        or config.get("maven_executable")
        or Constants.MAVEN_EXECUTABLE
    )

    if getattr(args, "FAIL_ON_NEW", False):
        settings.fail_on_new = True
    elif "fail_on_new" in config:
        settings.fail_on_new = _coerce_bool(config.get("fail_on_new"))

    qualifiers = config.get("qualifiers")
    if qualifiers:
        try:
            settings.qualifiers = qualifier_table_from_dict(qualifiers)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error("Invalid qualifier table in config, using defaults: %s", e)

    return settings
