"""One-shot readers for the catalog's backing JSON files.

``definitions.json`` lives in the configured data directory, which may also be
an http(s) URL. ``notNeededPackages.json`` lives at the root of a
DefinitelyTyped checkout.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Union

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

from .errors import CatalogLoadError, MalformedPackageError
from .models import NotNeededPackage
from .settings import DEFAULT_SETTINGS, RegistrySettings

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _read_json_file(path: PathLike) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise CatalogLoadError(f"Data file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Data file {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise CatalogLoadError(f"Unable to read {path}: {exc}") from exc


def _read_json_url(url: str) -> Any:
    """GET ``url`` and decode its JSON body, retrying connection failures.

    Raises:
        CatalogLoadError: on a non-200 status, an undecodable body, or once
            every attempt has failed.
    """
    last_exc = None
    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        try:
            response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            last_exc = exc
            logger.warning(
                "Catalog request failed",
                extra=extra_context(
                    event="http_error",
                    component="loader",
                    target=safe_url(url),
                    attempt=attempt,
                    error=type(exc).__name__
                )
            )
            continue
        if response.status_code != 200:
            raise CatalogLoadError(f"Unable to fetch {safe_url(url)} (status {response.status_code})")
        try:
            return json.loads(response.text)
        except ValueError as exc:
            raise CatalogLoadError(f"Response from {safe_url(url)} is not valid JSON: {exc}") from exc
    raise CatalogLoadError(
        f"Unable to fetch {safe_url(url)} after {Constants.HTTP_RETRY_MAX} attempts"
    ) from last_exc


def read_data_file(filename: str, settings: RegistrySettings = DEFAULT_SETTINGS) -> Any:
    """Read and decode ``filename`` from the configured data location."""
    location = settings.data_dir
    with Timer() as t:
        if _is_url(location):
            data = _read_json_url(f"{location.rstrip('/')}/{filename}")
        else:
            data = _read_json_file(os.path.join(location, filename))
    if is_debug_enabled(logger):
        logger.debug(
            "Read data file",
            extra=extra_context(
                event="load",
                component="loader",
                action="read_data_file",
                target=safe_url(location) if _is_url(location) else location,
                filename=filename,
                duration_ms=t.duration_ms()
            )
        )
    return data


def read_types_data_file(settings: RegistrySettings = DEFAULT_SETTINGS) -> Dict[str, Dict[str, Any]]:
    """Return the parsed ``definitions.json`` mapping."""
    data = read_data_file(Constants.TYPES_DATA_FILENAME, settings)
    if not isinstance(data, dict):
        raise CatalogLoadError(f"{Constants.TYPES_DATA_FILENAME} must contain a JSON object")
    return data


def read_not_needed_packages(
    dt_path: PathLike,
    settings: RegistrySettings = DEFAULT_SETTINGS,
) -> List[NotNeededPackage]:
    """Build every stub listed in ``<dt_path>/notNeededPackages.json``."""
    raw_json = _read_json_file(os.path.join(dt_path, Constants.NOT_NEEDED_FILENAME))
    if not isinstance(raw_json, dict) or not isinstance(raw_json.get("packages"), list):
        raise MalformedPackageError(f"{Constants.NOT_NEEDED_FILENAME} must contain a 'packages' list")
    packages = [NotNeededPackage(raw, settings) for raw in raw_json["packages"]]
    logger.debug("Loaded %d not-needed packages", len(packages))
    return packages
