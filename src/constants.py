"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    NOT_FOUND = 2
    MALFORMED_INPUT = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SCOPE_NAME = "types"
    OUTPUT_DIR = "output"
    DATA_DIR = "data"
    TYPES_DATA_FILENAME = "definitions.json"
    NOT_NEEDED_FILENAME = "notNeededPackages.json"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3

    # TypeScript versions a typings package may declare as its minimum; ascending.
    SUPPORTED_TS_VERSIONS = ["2.0", "2.1", "2.2", "2.3", "2.4", "2.5", "2.6", "2.7", "2.8", "2.9", "3.0", "3.1", "3.2"]

    ENV_CONFIG = "TYPESREG_CONFIG"
    ENV_LOG_LEVEL = "TYPESREG_LOG_LEVEL"
    ENV_SCOPE_NAME = "TYPESREG_SCOPE_NAME"
    ENV_OUTPUT_DIR = "TYPESREG_OUTPUT_DIR"
    ENV_DATA_DIR = "TYPESREG_DATA_DIR"


def _config_candidates() -> List[str]:
    """Return the config file locations in lookup order."""
    candidates = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        candidates.append(env_path)
    candidates.extend([
        os.path.join(os.getcwd(), "typesreg.yml"),
        os.path.join(os.getcwd(), "typesreg.yaml"),
        os.path.join(os.path.expanduser("~"), ".config", "typesreg", "typesreg.yml"),
    ])
    return candidates


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML config from an explicit path or the default locations.

    Returns an empty dict when no config file exists. A file that exists but
    does not hold a mapping is ignored with a warning.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = [path] if path else _config_candidates()
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        with open(candidate, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded config from %s", candidate)
        return data
    return {}
