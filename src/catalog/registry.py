"""The full typings catalog: every typed package plus the not-needed stubs."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, TypeVar, Union

from common.logging_utils import extra_context, is_debug_enabled, Timer
from versioning.models import PackageId

from .errors import InvariantError, MalformedPackageError, MultipleVersionsError, PackageNotFoundError
from .loader import PathLike, read_not_needed_packages, read_types_data_file
from .models import NotNeededPackage, PackageBase, TypingsData
from .names import get_mangled_name_for_scoped_package
from .settings import DEFAULT_SETTINGS, RegistrySettings
from .versions import TypingsVersions

logger = logging.getLogger(__name__)

AnyPackage = Union[TypingsData, NotNeededPackage]

T = TypeVar("T")


def assert_sorted(items: Iterable[T], key: Callable[[T], str]) -> List[T]:
    """Return ``items`` as a list after checking it is already ordered by ``key``.

    Equal neighbours are allowed. This never sorts; an out-of-order pair
    raises InvariantError naming both keys.
    """
    result = list(items)
    previous = None
    for item in result:
        current = key(item)
        if previous is not None and current < previous:
            raise InvariantError(f"{previous} and {current} are not sorted")
        previous = current
    return result


class AllPackages:
    """Read-only snapshot of the catalog.

    Lookups go through the mangled package name, so "@foo/bar" and
    "foo__bar" address the same package.
    """

    def __init__(
        self,
        data: Mapping[str, TypingsVersions],
        not_needed: Sequence[NotNeededPackage],
        settings: RegistrySettings = DEFAULT_SETTINGS,
    ):
        self._data: Dict[str, TypingsVersions] = dict(data)
        self._not_needed: List[NotNeededPackage] = list(not_needed)
        self.settings = settings

    @classmethod
    def from_data(
        cls,
        data: Mapping[str, Mapping[str, Any]],
        not_needed: Sequence[NotNeededPackage],
        settings: RegistrySettings = DEFAULT_SETTINGS,
    ) -> "AllPackages":
        """Build a registry from a decoded ``definitions.json`` and a stub list.

        Raises:
            MalformedPackageError: when two names canonicalize to the same key,
                a name is both typed and not-needed, or any record is invalid.
        """
        with Timer() as t:
            versions: Dict[str, TypingsVersions] = {}
            for name, raw in data.items():
                key = get_mangled_name_for_scoped_package(name)
                if key in versions:
                    raise MalformedPackageError(f"Package {name} is listed more than once")
                versions[key] = TypingsVersions(raw, settings)
                for pkg in versions[key].get_all():
                    if pkg.name != key:
                        raise MalformedPackageError(f"Package {pkg.name} is filed under {name}")

            for stub in not_needed:
                if get_mangled_name_for_scoped_package(stub.name) in versions:
                    raise MalformedPackageError(f"Package {stub.name} is both typed and not-needed")

        if is_debug_enabled(logger):
            logger.debug(
                "Built typings registry",
                extra=extra_context(
                    event="build",
                    component="registry",
                    package_count=len(versions),
                    not_needed_count=len(not_needed),
                    duration_ms=t.duration_ms()
                )
            )
        return cls(versions, not_needed, settings)

    @classmethod
    def read(cls, dt_path: PathLike, settings: RegistrySettings = DEFAULT_SETTINGS) -> "AllPackages":
        return cls.from_data(read_types_data_file(settings), read_not_needed_packages(dt_path, settings), settings)

    @classmethod
    def read_typings(cls, settings: RegistrySettings = DEFAULT_SETTINGS) -> List[TypingsData]:
        return cls.from_data(read_types_data_file(settings), [], settings).all_typings()

    @classmethod
    def read_latest_typings(cls, settings: RegistrySettings = DEFAULT_SETTINGS) -> List[TypingsData]:
        return cls.from_data(read_types_data_file(settings), [], settings).all_latest_typings()

    @staticmethod
    def read_single(name: str, settings: RegistrySettings = DEFAULT_SETTINGS) -> TypingsData:
        """Use for single-package tasks only. Do *not* call this in a loop!"""
        data = read_types_data_file(settings)
        raw = data.get(name) or data.get(get_mangled_name_for_scoped_package(name))
        if not raw:
            raise PackageNotFoundError(f"Can't find package {name}")
        if not isinstance(raw, Mapping):
            raise MalformedPackageError(f"Expected a mapping of versions for {name}, got {type(raw).__name__}")
        if len(raw) > 1:
            raise MultipleVersionsError(f"Package {name} has multiple versions.")
        return TypingsData(next(iter(raw.values())), True, settings)

    @staticmethod
    def read_single_not_needed(
        name: str,
        dt_path: PathLike,
        settings: RegistrySettings = DEFAULT_SETTINGS,
    ) -> NotNeededPackage:
        for pkg in read_not_needed_packages(dt_path, settings):
            if pkg.name == name:
                return pkg
        raise PackageNotFoundError(f"Cannot find not-needed package {name}")

    def _versions(self, name: str) -> Optional[TypingsVersions]:
        return self._data.get(get_mangled_name_for_scoped_package(name))

    def get_not_needed_package(self, name: str) -> Optional[NotNeededPackage]:
        return next((p for p in self._not_needed if p.name == name), None)

    def has_typing_for(self, dep: PackageId) -> bool:
        return self.try_get_typings_data(dep) is not None

    def try_resolve(self, dep: PackageId) -> PackageId:
        """Id of the version ``dep`` resolves to, or ``dep`` itself for untracked names.

        Raises VersionNotFoundError when the name is tracked but no version matches.
        """
        versions = self._versions(dep.name)
        return versions.get(dep.version).id if versions is not None else dep

    def get_latest(self, pkg: TypingsData) -> TypingsData:
        """Latest version of the package, e.g. node v10 for node v6 (before node v11 came out)."""
        return pkg if pkg.is_latest else self.get_latest_version(pkg.name)

    def get_latest_version(self, package_name: str) -> TypingsData:
        latest = self.try_get_latest_version(package_name)
        if latest is None:
            raise PackageNotFoundError(f"No such package {package_name}.")
        return latest

    def try_get_latest_version(self, package_name: str) -> Optional[TypingsData]:
        versions = self._versions(package_name)
        return versions.get_latest() if versions is not None else None

    def get_typings_data(self, pkg_id: PackageId) -> TypingsData:
        pkg = self.try_get_typings_data(pkg_id)
        if pkg is None:
            raise PackageNotFoundError(f"No typings available for {pkg_id}")
        return pkg

    def try_get_typings_data(self, pkg_id: PackageId) -> Optional[TypingsData]:
        versions = self._versions(pkg_id.name)
        return versions.try_get(pkg_id.version) if versions is not None else None

    def all_packages(self) -> List[AnyPackage]:
        return [*self.all_typings(), *self.all_not_needed()]

    def all_typings(self) -> List[TypingsData]:
        """Note: this includes older version directories (``foo/v0``)."""
        return assert_sorted(
            (pkg for versions in self._data.values() for pkg in versions.get_all()),
            PackageBase.compare,
        )

    def all_latest_typings(self) -> List[TypingsData]:
        return assert_sorted((versions.get_latest() for versions in self._data.values()), PackageBase.compare)

    def all_not_needed(self) -> List[NotNeededPackage]:
        return list(self._not_needed)

    def all_dependency_typings(self, pkg: TypingsData) -> Iterator[TypingsData]:
        """Yield the dependencies of ``pkg`` that have typings, then its test dependencies.

        Test dependencies always resolve to their latest version.
        """
        for dep in pkg.dependencies:
            versions = self._versions(dep.name)
            if versions is not None:
                yield versions.get(dep.version)
        for name in pkg.test_dependencies:
            versions = self._versions(name)
            if versions is not None:
                yield versions.get_latest()
