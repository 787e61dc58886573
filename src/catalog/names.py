"""npm naming rules for typings packages."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from catalog.settings import RegistrySettings

SCOPED_SEPARATOR = "__"


def get_mangled_name_for_scoped_package(package_name: str) -> str:
    """Collapse "@scope/name" into "scope__name"; other names pass through.

    Mirrors TypeScript's module name resolution so typings for scoped
    packages live in a flat directory.
    """
    if package_name.startswith("@"):
        replaced = package_name.replace("/", SCOPED_SEPARATOR, 1)
        if replaced != package_name:
            return replaced[1:]
    return package_name


def unmangle_scoped_package(package_name: str) -> Optional[str]:
    """Reverse of the mangling: "scope__name" -> "@scope/name", else None."""
    separator = package_name.find(SCOPED_SEPARATOR)
    if separator == -1:
        return None
    return f"@{package_name[:separator]}/{package_name[separator + len(SCOPED_SEPARATOR):]}"


def get_full_npm_name(package_name: str, settings: "RegistrySettings") -> str:
    """'@types/foo' for a package 'foo'."""
    return f"@{settings.scope_name}/{get_mangled_name_for_scoped_package(package_name)}"


def get_full_escaped_npm_name(package_name: str, settings: "RegistrySettings") -> str:
    """'@types%2ffoo' for a package 'foo'."""
    return f"@{settings.scope_name}%2f{get_mangled_name_for_scoped_package(package_name)}"
