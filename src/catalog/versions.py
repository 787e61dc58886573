"""Per-package index of every tracked typings version."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import DependencyVersion, TypingVersion, format_typing_version, is_any_version
from versioning.semver import Semver

from .errors import MalformedPackageError, VersionNotFoundError
from .models import TypingsData
from .settings import DEFAULT_SETTINGS, RegistrySettings

logger = logging.getLogger(__name__)


class TypingsVersions:
    """All tracked versions of one package, newest first.

    The newest version is the only one flagged ``is_latest``.
    """

    def __init__(self, data: Mapping[str, Any], settings: RegistrySettings = DEFAULT_SETTINGS):
        """Parse every version label of ``data`` and build its TypingsData.

        Args:
            data: Mapping of version label (e.g. "1.2") to raw typings record.
            settings: Passed on to each TypingsData.

        Raises:
            MalformedPackageError: for an empty mapping, an unparseable label,
                or two labels naming the same version.
        """
        if not isinstance(data, Mapping):
            raise MalformedPackageError(f"Expected a mapping of versions, got {type(data).__name__}")
        if not data:
            raise MalformedPackageError("A typings package must have at least one version")

        labels: Dict[Semver, str] = {}
        for label in data:
            version = Semver.try_parse(label, coerce=True)
            if version is None:
                raise MalformedPackageError(f"Unable to parse version {label}")
            if version in labels:
                raise MalformedPackageError(f"Versions {labels[version]} and {label} are the same version")
            labels[version] = label

        # Sorted from latest to oldest so that the current version is published first.
        self.versions: List[Semver] = sorted(labels, reverse=True)
        self._map: Dict[Semver, TypingsData] = {
            version: TypingsData(data[labels[version]], version == self.versions[0], settings)
            for version in self.versions
        }

        if is_debug_enabled(logger):
            latest = self._map[self.versions[0]]
            logger.debug(
                "Indexed typings versions",
                extra=extra_context(
                    event="index",
                    component="versions",
                    package=latest.name,
                    version_count=len(self.versions),
                    latest=str(self.versions[0])
                )
            )

    def __len__(self) -> int:
        return len(self.versions)

    def get_all(self) -> Iterator[TypingsData]:
        """Fresh iterator over every version, newest first."""
        return (self._map[v] for v in self.versions)

    def get(self, version: DependencyVersion) -> TypingsData:
        return self.get_latest() if is_any_version(version) else self.get_latest_match(version)

    def try_get(self, version: DependencyVersion) -> Optional[TypingsData]:
        return self.get_latest() if is_any_version(version) else self.try_get_latest_match(version)

    def get_latest(self) -> TypingsData:
        return self._map[self.versions[0]]

    def get_latest_match(self, version: TypingVersion) -> TypingsData:
        data = self.try_get_latest_match(version)
        if data is None:
            raise VersionNotFoundError(
                f"Could not find version {format_typing_version(version)} of {self.get_latest().name}"
            )
        return data

    def try_get_latest_match(self, version: TypingVersion) -> Optional[TypingsData]:
        """Newest tracked version on the requested major (and minor, if given)."""
        for candidate in self.versions:
            if candidate.major == version.major and (version.minor is None or candidate.minor == version.minor):
                return self._map[candidate]
        return None
