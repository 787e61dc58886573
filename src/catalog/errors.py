"""Exception types raised by the typings catalog."""


class CatalogError(Exception):
    """Base class for every catalog failure."""


class PackageNotFoundError(CatalogError, LookupError):
    """An unknown package name, version, or not-needed entry was requested."""


class VersionNotFoundError(PackageNotFoundError):
    """No tracked version of a known package matches the requested specifier."""


class MalformedPackageError(CatalogError, ValueError):
    """A raw catalog record failed validation."""


class InvariantError(CatalogError, AssertionError):
    """An internal ordering or uniqueness invariant does not hold."""


class MultipleVersionsError(CatalogError):
    """A single-version reader was used on a package with several versions."""


class CatalogLoadError(CatalogError, OSError):
    """The backing data source could not be read or decoded."""
