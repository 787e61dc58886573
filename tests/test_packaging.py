"""Checks on the project metadata in pyproject.toml."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_readme_is_not_the_design_ledger():
    with PYPROJECT.open("rb") as fh:
        project = tomllib.load(fh)["project"]
    assert project.get("readme") != "DESIGN.md"


def test_runtime_dependencies_declared():
    with PYPROJECT.open("rb") as fh:
        deps = " ".join(tomllib.load(fh)["project"]["dependencies"])
    for name in ("semantic-version", "PyYAML", "requests"):
        assert name in deps
