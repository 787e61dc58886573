"""In-memory registry over a typings package catalog."""

from .errors import (
    CatalogError,
    CatalogLoadError,
    InvariantError,
    MalformedPackageError,
    MultipleVersionsError,
    PackageNotFoundError,
    VersionNotFoundError,
)
from .models import License, NotNeededPackage, PackageBase, TypingsData
from .names import get_full_npm_name, get_mangled_name_for_scoped_package, unmangle_scoped_package
from .registry import AllPackages, AnyPackage
from .settings import RegistrySettings, load_settings
from .versions import TypingsVersions

__all__ = [
    "AllPackages",
    "AnyPackage",
    "CatalogError",
    "CatalogLoadError",
    "InvariantError",
    "License",
    "MalformedPackageError",
    "MultipleVersionsError",
    "NotNeededPackage",
    "PackageBase",
    "PackageNotFoundError",
    "RegistrySettings",
    "TypingsData",
    "TypingsVersions",
    "VersionNotFoundError",
    "get_full_npm_name",
    "get_mangled_name_for_scoped_package",
    "load_settings",
    "unmangle_scoped_package",
]
