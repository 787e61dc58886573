"""Release versions of typings packages, parsed with semantic_version."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import semantic_version


@dataclass(frozen=True, order=True)
class Semver:
    """A plain ``major.minor.patch`` release; prereleases are not tracked."""
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str, coerce: bool = False) -> "Semver":
        """Parse ``text`` or raise ValueError.

        With ``coerce`` missing components are filled with zeroes, so "1.2"
        becomes 1.2.0. Prerelease and build suffixes are always rejected.
        """
        parsed = cls.try_parse(text, coerce)
        if parsed is None:
            raise ValueError(f"Unexpected semver: {text}")
        return parsed

    @classmethod
    def try_parse(cls, text: str, coerce: bool = False) -> Optional["Semver"]:
        """Like parse() but returns None for unparseable input."""
        if not isinstance(text, str):
            return None
        try:
            version = semantic_version.Version.coerce(text) if coerce else semantic_version.Version(text)
        except ValueError:
            return None
        if version.prerelease or version.build:
            return None
        return cls(version.major, version.minor, version.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def compare(a: Semver, b: Semver) -> int:
    """Three-way comparison, negative when ``a`` is older than ``b``."""
    if a == b:
        return 0
    return -1 if a < b else 1
