"""Typings package metadata: the typed variant and the not-needed stub.

Raw catalog records use the camelCase keys of ``definitions.json`` and
``notNeededPackages.json``. They are validated once here, so everything
downstream can rely on well-formed attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from constants import Constants
from common.util import join_paths
from versioning.models import PackageId, DependencyVersion, TypingVersion, format_dependency_version
from versioning.parser import version_from_raw
from versioning.semver import Semver

from .errors import MalformedPackageError
from .names import get_full_escaped_npm_name, get_full_npm_name, unmangle_scoped_package
from .settings import DEFAULT_SETTINGS, RegistrySettings


class License(Enum):
    """Licenses a typings package may be published under."""
    MIT = "MIT"
    APACHE_20 = "Apache-2.0"


ALL_LICENSES = [lic.value for lic in License]

LOWEST_TS_VERSION = Constants.SUPPORTED_TS_VERSIONS[0]

NOT_NEEDED_KEYS = ("libraryName", "typingsPackageName", "sourceRepoURL", "asOfVersion")


def get_license_from_package_json(package_json_license: Any) -> License:
    """Validate the "license" field of a typings package.json.

    An absent license means MIT; spelling out MIT is rejected as redundant.
    """
    if package_json_license is None:
        return License.MIT
    if package_json_license == License.MIT.value:
        raise MalformedPackageError("Specifying '\"license\": \"MIT\"' is redundant, this is the default.")
    if package_json_license in ALL_LICENSES:
        return License(package_json_license)
    raise MalformedPackageError(
        f"'package.json' license is {package_json_license!r}.\nExpected one of: {ALL_LICENSES}"
    )


def is_supported_ts_version(version: Any) -> bool:
    return version in Constants.SUPPORTED_TS_VERSIONS


@dataclass(frozen=True)
class TypingsDependency:
    """A declared dependency on another typings package."""
    name: str
    version: DependencyVersion

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "version": format_dependency_version(self.version)}


@dataclass(frozen=True)
class PathMapping:
    """A "paths" override pinning a dependency to an older version directory."""
    package_name: str
    version: TypingVersion


@dataclass(frozen=True)
class PackageJsonDependency:
    """An npm dependency taken verbatim from the package's own package.json."""
    name: str
    version: str


@dataclass(frozen=True)
class Contributor:
    name: str
    url: str
    github_username: Optional[str] = None


class PackageBase:
    """Attributes shared by typed and not-needed packages.

    Subclasses provide ``major``, ``minor``, ``is_latest``, ``license``,
    ``declared_modules``, ``globals``, ``project_name`` and
    ``min_typescript_version``.
    """

    major: int
    minor: int
    is_latest: bool

    def __init__(self, name: str, library_name: str, settings: RegistrySettings = DEFAULT_SETTINGS):
        self.name = name
        self.library_name = library_name
        self.settings = settings

    @staticmethod
    def compare(pkg: "PackageBase") -> str:
        """Sort key ordering packages by name."""
        return pkg.name

    @property
    def unescaped_name(self) -> str:
        """'@scope/name' for a mangled 'scope__name', else the name itself."""
        return unmangle_scoped_package(self.name) or self.name

    @property
    def desc(self) -> str:
        """Short description for debug output."""
        return self.name if self.is_latest else f"{self.name} v{self.major}.{self.minor}"

    def is_not_needed(self) -> bool:
        return isinstance(self, NotNeededPackage)

    @property
    def full_npm_name(self) -> str:
        return get_full_npm_name(self.name, self.settings)

    @property
    def full_escaped_npm_name(self) -> str:
        return get_full_escaped_npm_name(self.name, self.settings)

    @property
    def id(self) -> PackageId:
        return PackageId(name=self.name, version=TypingVersion(self.major, self.minor))

    @property
    def output_directory(self) -> str:
        return join_paths(self.settings.output_dir, self.desc)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.major}.{self.minor})"


def _fail(name: str, key: str, detail: str) -> MalformedPackageError:
    return MalformedPackageError(f"Invalid '{key}' in typings for {name}: {detail}")


def _required_str(raw: Mapping[str, Any], key: str, name: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise _fail(name, key, "expected a non-empty string")
    return value


def _required_int(raw: Mapping[str, Any], key: str, name: str) -> int:
    value = raw.get(key)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise _fail(name, key, "expected a non-negative integer")
    return value


def _str_list(raw: Mapping[str, Any], key: str, name: str) -> List[str]:
    value = raw.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _fail(name, key, "expected a list of strings")
    return list(value)


def _dict_list(raw: Mapping[str, Any], key: str, name: str) -> List[Mapping[str, Any]]:
    value = raw.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise _fail(name, key, "expected a list of objects")
    return value


class TypingsData(PackageBase):
    """One tracked version of a typings package, validated from its raw record."""

    def __init__(self, raw: Mapping[str, Any], is_latest: bool, settings: RegistrySettings = DEFAULT_SETTINGS):
        if not isinstance(raw, Mapping):
            raise MalformedPackageError(f"Typings record must be an object, got {type(raw).__name__}")
        name = raw.get("typingsPackageName")
        if not isinstance(name, str) or not name:
            raise MalformedPackageError("Typings record is missing 'typingsPackageName'")
        super().__init__(name, _required_str(raw, "libraryName", name), settings)
        self.is_latest = is_latest
        self.major = _required_int(raw, "libraryMajorVersion", name)
        self.minor = _required_int(raw, "libraryMinorVersion", name)

        self.dependencies = [self._parse_dependency(d) for d in _dict_list(raw, "dependencies", name)]
        self.test_dependencies = _str_list(raw, "testDependencies", name)
        self.path_mappings = [self._parse_path_mapping(m) for m in _dict_list(raw, "pathMappings", name)]
        self.package_json_dependencies = [
            self._parse_package_json_dependency(d) for d in _dict_list(raw, "packageJsonDependencies", name)
        ]
        self.contributors = [self._parse_contributor(c) for c in _dict_list(raw, "contributors", name)]
        self.files = _str_list(raw, "files", name)
        self.declared_modules = _str_list(raw, "declaredModules", name)
        self.globals = _str_list(raw, "globals", name)
        self.types_versions = _str_list(raw, "typesVersions", name)

        content_hash = raw.get("contentHash", "")
        if not isinstance(content_hash, str):
            raise _fail(name, "contentHash", "expected a string")
        self.content_hash = content_hash

        project_name = raw.get("projectName", "")
        if not isinstance(project_name, str):
            raise _fail(name, "projectName", "expected a string")
        self.project_name = project_name

        license_value = raw.get("license", License.MIT.value)
        if license_value not in ALL_LICENSES:
            raise _fail(name, "license", f"expected one of {ALL_LICENSES}, got {license_value!r}")
        self.license = License(license_value)

        min_ts = raw.get("minTsVersion")
        self.min_typescript_version = min_ts if is_supported_ts_version(min_ts) else LOWEST_TS_VERSION

        directory_name = raw.get("libraryVersionDirectoryName")
        if directory_name is not None and not isinstance(directory_name, (str, int)):
            raise _fail(name, "libraryVersionDirectoryName", "expected a string or number")
        self.library_version_directory_name = None if directory_name is None else str(directory_name)

    def _parse_dependency(self, raw: Mapping[str, Any]) -> TypingsDependency:
        dep_name = raw.get("name")
        if not isinstance(dep_name, str) or not dep_name:
            raise _fail(self.name, "dependencies", f"dependency without a name: {raw!r}")
        try:
            version = version_from_raw(raw.get("version"))
        except ValueError as exc:
            raise _fail(self.name, "dependencies", str(exc)) from exc
        return TypingsDependency(dep_name, version)

    def _parse_path_mapping(self, raw: Mapping[str, Any]) -> PathMapping:
        package_name = raw.get("packageName")
        try:
            version = version_from_raw(raw.get("version"))
        except ValueError as exc:
            raise _fail(self.name, "pathMappings", str(exc)) from exc
        if not isinstance(package_name, str) or not isinstance(version, TypingVersion):
            raise _fail(self.name, "pathMappings", f"bad mapping {raw!r}")
        return PathMapping(package_name, version)

    def _parse_package_json_dependency(self, raw: Mapping[str, Any]) -> PackageJsonDependency:
        dep_name, version = raw.get("name"), raw.get("version")
        if not isinstance(dep_name, str) or not isinstance(version, str):
            raise _fail(self.name, "packageJsonDependencies", f"bad dependency {raw!r}")
        return PackageJsonDependency(dep_name, version)

    def _parse_contributor(self, raw: Mapping[str, Any]) -> Contributor:
        contributor_name, url = raw.get("name"), raw.get("url")
        github_username = raw.get("githubUsername")
        if not isinstance(contributor_name, str) or not isinstance(url, str):
            raise _fail(self.name, "contributors", f"bad contributor {raw!r}")
        if github_username is not None and not isinstance(github_username, str):
            raise _fail(self.name, "contributors", f"bad githubUsername {github_username!r}")
        return Contributor(contributor_name, url, github_username)

    @property
    def version_directory_name(self) -> Optional[str]:
        """"v2" for a package kept in a "v2" directory, else None."""
        if not self.library_version_directory_name:
            return None
        return f"v{self.library_version_directory_name}"

    @property
    def sub_directory_path(self) -> str:
        """Path to this package, relative to the DefinitelyTyped checkout."""
        return self.name if self.is_latest else f"{self.name}/{self.version_directory_name}"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view, keyed like the catalog records."""
        return {
            "typingsPackageName": self.name,
            "libraryName": self.library_name,
            "libraryMajorVersion": self.major,
            "libraryMinorVersion": self.minor,
            "isLatest": self.is_latest,
            "license": self.license.value,
            "fullNpmName": self.full_npm_name,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "testDependencies": list(self.test_dependencies),
            "pathMappings": [
                {"packageName": m.package_name, "version": str(m.version)} for m in self.path_mappings
            ],
            "packageJsonDependencies": [
                {"name": d.name, "version": d.version} for d in self.package_json_dependencies
            ],
            "contributors": [
                {"name": c.name, "url": c.url, "githubUsername": c.github_username} for c in self.contributors
            ],
            "files": list(self.files),
            "declaredModules": list(self.declared_modules),
            "globals": list(self.globals),
            "typesVersions": list(self.types_versions),
            "minTsVersion": self.min_typescript_version,
            "contentHash": self.content_hash,
            "projectName": self.project_name,
            "outputDirectory": self.output_directory,
        }


class NotNeededPackage(PackageBase):
    """Stub entry for a library that now ships its own type definitions."""

    def __init__(self, raw: Mapping[str, Any], settings: RegistrySettings = DEFAULT_SETTINGS):
        if not isinstance(raw, Mapping):
            raise MalformedPackageError(f"Not-needed package must be an object, got {type(raw).__name__}")
        for key in raw:
            if key not in NOT_NEEDED_KEYS:
                raise MalformedPackageError(f"Unexpected key in not-needed package: {key}")
        missing = [key for key in NOT_NEEDED_KEYS if not raw.get(key)]
        if missing:
            raise MalformedPackageError(
                f"Not-needed package {raw.get('typingsPackageName')!r} is missing: {', '.join(missing)}"
            )
        super().__init__(raw["typingsPackageName"], raw["libraryName"], settings)
        self.source_repo_url: str = raw["sourceRepoURL"]
        try:
            self.version = Semver.parse(raw["asOfVersion"])
        except ValueError as exc:
            raise MalformedPackageError(
                f"Invalid asOfVersion {raw['asOfVersion']!r} for not-needed package {self.name}"
            ) from exc

    @property
    def major(self) -> int:  # type: ignore[override]
        return self.version.major

    @property
    def minor(self) -> int:  # type: ignore[override]
        return self.version.minor

    @property
    def is_latest(self) -> bool:  # type: ignore[override]
        # A not-needed package has no other versions.
        return True

    @property
    def license(self) -> License:
        return License.MIT

    @property
    def project_name(self) -> str:
        return self.source_repo_url

    @property
    def declared_modules(self) -> List[str]:
        return []

    @property
    def globals(self) -> List[str]:
        return []

    @property
    def min_typescript_version(self) -> str:
        return LOWEST_TS_VERSION

    def readme(self) -> str:
        return (
            f"This is a stub types definition for {self.library_name} ({self.source_repo_url}).\n\n"
            f"{self.library_name} provides its own type definitions, "
            f"so you don't need {self.full_npm_name} installed!"
        )

    def deprecated_message(self) -> str:
        return (
            f"This is a stub types definition. {self.name} provides its own type definitions, "
            "so you do not need this installed."
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "typingsPackageName": self.name,
            "libraryName": self.library_name,
            "sourceRepoURL": self.source_repo_url,
            "asOfVersion": str(self.version),
            "isLatest": True,
            "fullNpmName": self.full_npm_name,
        }
