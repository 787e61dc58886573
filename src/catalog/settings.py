"""Registry configuration.

Precedence, lowest to highest: built-in defaults from ``Constants``, the
``registry`` section of the YAML config, TYPESREG_* environment variables,
and explicit overrides (CLI flags).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from constants import Constants, _load_yaml_config

logger = logging.getLogger(__name__)

_ENV_KEYS = {
    "scope_name": Constants.ENV_SCOPE_NAME,
    "output_dir": Constants.ENV_OUTPUT_DIR,
    "data_dir": Constants.ENV_DATA_DIR,
}


@dataclass(frozen=True)
class RegistrySettings:
    """Values injected into a registry and every package it builds."""
    scope_name: str = Constants.SCOPE_NAME
    output_dir: str = Constants.OUTPUT_DIR
    data_dir: str = Constants.DATA_DIR


DEFAULT_SETTINGS = RegistrySettings()


def _coerce_section(section: Any) -> Dict[str, str]:
    """Keep the known string keys of a YAML ``registry`` section."""
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Ignoring 'registry' config section: expected a mapping")
        return {}
    result: Dict[str, str] = {}
    for key, value in section.items():
        if key not in _ENV_KEYS:
            logger.warning("Ignoring unknown registry config key: %s", key)
            continue
        if value is None:
            continue
        result[key] = str(value)
    return result


def load_settings(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Optional[str]]] = None,
) -> RegistrySettings:
    """Build RegistrySettings from config file, environment and overrides."""
    settings = DEFAULT_SETTINGS

    cfg = _load_yaml_config(config_path)
    from_file = _coerce_section(cfg.get("registry"))
    if from_file:
        settings = replace(settings, **from_file)

    from_env = {
        field: os.environ[env]
        for field, env in _ENV_KEYS.items()
        if os.environ.get(env)
    }
    if from_env:
        settings = replace(settings, **from_env)

    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    unknown = set(explicit) - set(_ENV_KEYS)
    if unknown:
        raise ValueError(f"Unknown registry settings: {', '.join(sorted(unknown))}")
    if explicit:
        settings = replace(settings, **explicit)

    logger.debug("Registry settings: %s", settings)
    return settings
