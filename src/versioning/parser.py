"""Token parsing utilities for package identities and version specifiers."""

from typing import Any, Optional, Tuple

from .models import ANY_VERSION, DependencyVersion, PackageId, TypingVersion


def tokenize_rightmost_at(s: str) -> Tuple[str, Optional[str]]:
    """Return (name, spec or None) using the rightmost-"@" rule.

    A leading "@" is the npm scope marker and never splits the token.
    """
    s = s.strip()
    at = s.rfind('@')
    if at <= 0:
        return s, None
    name = s[:at].strip()
    spec_part = s[at + 1:].strip()
    return name, (spec_part if spec_part else None)


def parse_typing_version(spec: str) -> TypingVersion:
    """Parse "major" or "major.minor" into a TypingVersion.

    A leading "v" is tolerated, matching version directory names like "v2".
    """
    text = spec.strip()
    if text[:1] in ('v', 'V'):
        text = text[1:]
    parts = text.split('.')
    if not 1 <= len(parts) <= 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid version specifier: {spec!r}")
    major = int(parts[0])
    minor = int(parts[1]) if len(parts) == 2 else None
    return TypingVersion(major, minor)


def parse_dependency_version(spec: Optional[str]) -> DependencyVersion:
    """Parse a textual specifier; None, "*" and "latest" mean the wildcard."""
    if spec is None or spec.strip() in (ANY_VERSION, '') or spec.strip().lower() == 'latest':
        return ANY_VERSION
    return parse_typing_version(spec)


def parse_package_token(token: str) -> PackageId:
    """Parse a CLI token like "node@6", "@babel/core@7.1" or "lodash"."""
    name, spec = tokenize_rightmost_at(token)
    if not name:
        raise ValueError(f"Missing package name in {token!r}")
    return PackageId(name=name, version=parse_dependency_version(spec))


def version_from_raw(raw: Any) -> DependencyVersion:
    """Convert a JSON dependency version ("*" or {"major", "minor"?}).

    Raises:
        ValueError: when ``raw`` has neither shape.
    """
    if raw == ANY_VERSION:
        return ANY_VERSION
    if isinstance(raw, dict):
        major = raw.get("major")
        minor = raw.get("minor")
        if isinstance(major, int) and not isinstance(major, bool) and (
                minor is None or (isinstance(minor, int) and not isinstance(minor, bool))):
            return TypingVersion(major, minor)
    raise ValueError(f"Invalid dependency version: {raw!r}")
