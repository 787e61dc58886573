"""Version specifiers and package identities."""

from dataclasses import dataclass
from typing import Optional, Union

# Wildcard dependency version: always resolves to the latest tracked release.
ANY_VERSION = "*"


@dataclass(frozen=True)
class TypingVersion:
    """A (major, optional minor) library version of a typings package."""
    major: int
    minor: Optional[int] = None

    def __str__(self) -> str:
        return format_typing_version(self)


DependencyVersion = Union[TypingVersion, str]


@dataclass(frozen=True)
class PackageId:
    """Identity of one resolvable unit: a name plus a version specifier."""
    name: str
    version: DependencyVersion

    def __str__(self) -> str:
        return f"{self.name}@{format_dependency_version(self.version)}"


def is_any_version(version: DependencyVersion) -> bool:
    """True for the wildcard specifier."""
    return version == ANY_VERSION


def format_typing_version(version: TypingVersion) -> str:
    """Render "major" when minor is absent, else "major.minor"."""
    if version.minor is None:
        return f"{version.major}"
    return f"{version.major}.{version.minor}"


def format_dependency_version(version: DependencyVersion) -> str:
    """Render a dependency version, keeping the wildcard as "*"."""
    return ANY_VERSION if is_any_version(version) else format_typing_version(version)
