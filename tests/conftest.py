"""Shared fixtures for catalog tests."""

import json
import logging

import pytest


def _record(name, major, minor, **extra):
    record = {
        "typingsPackageName": name,
        "libraryName": f"{name} library",
        "libraryMajorVersion": major,
        "libraryMinorVersion": minor,
        "dependencies": [],
        "testDependencies": [],
        "files": ["index.d.ts"],
        "contentHash": f"hash-{name}-{major}-{minor}",
        "projectName": f"https://example.com/{name}",
        "contributors": [],
        "declaredModules": [name],
        "globals": [],
        "pathMappings": [],
        "packageJsonDependencies": [],
        "typesVersions": [],
        "minTsVersion": "2.0",
    }
    record.update(extra)
    return record


@pytest.fixture
def make_record():
    """Factory for raw definitions.json records."""
    return _record


@pytest.fixture
def catalog_data():
    """A small definitions.json payload, names in sorted order."""
    return {
        "a": {
            "1.0": _record("a", 1, 0),
            "1.1": _record("a", 1, 1),
        },
        "b": {
            "2.0": _record("b", 2, 0),
        },
        "foo__bar": {
            "3.2": _record("foo__bar", 3, 2),
        },
        "node": {
            "6.0": _record("node", 6, 0, libraryVersionDirectoryName="6"),
            "10.1": _record("node", 10, 1),
            "8.0": _record("node", 8, 0, libraryVersionDirectoryName="8"),
        },
        "uses-deps": {
            "1.0": _record(
                "uses-deps", 1, 0,
                dependencies=[
                    {"name": "a", "version": {"major": 1}},
                    {"name": "untracked", "version": "*"},
                    {"name": "@foo/bar", "version": "*"},
                ],
                testDependencies=["b", "missing"],
            ),
        },
    }


@pytest.fixture
def stub_raw():
    return {
        "libraryName": "Moment",
        "typingsPackageName": "moment",
        "sourceRepoURL": "https://github.com/moment/moment",
        "asOfVersion": "2.10.5",
    }


@pytest.fixture
def data_dir(tmp_path, catalog_data):
    """Directory holding a definitions.json written from catalog_data."""
    path = tmp_path / "data"
    path.mkdir()
    (path / "definitions.json").write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


@pytest.fixture
def dt_dir(tmp_path, stub_raw):
    """Fake DefinitelyTyped checkout with a notNeededPackages.json."""
    path = tmp_path / "DefinitelyTyped"
    path.mkdir()
    payload = {"packages": [stub_raw]}
    (path / "notNeededPackages.json").write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep user config files and TYPESREG_* variables out of every test."""
    for var in ("TYPESREG_CONFIG", "TYPESREG_SCOPE_NAME", "TYPESREG_OUTPUT_DIR",
                "TYPESREG_DATA_DIR", "TYPESREG_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo configure_logging level changes and handlers added during a test."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    for handler in root.handlers[:]:
        # only the stream and file handlers configure_logging and --logfile install
        if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
