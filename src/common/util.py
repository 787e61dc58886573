"""Small helpers shared across the catalog modules."""

from __future__ import annotations

import posixpath


def join_paths(*parts: str) -> str:
    """Join path segments with forward slashes regardless of platform."""
    return posixpath.join(*parts)
