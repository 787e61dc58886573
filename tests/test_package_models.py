"""Tests for TypingsData and NotNeededPackage."""

import pytest

from catalog.errors import MalformedPackageError
from catalog.models import (
    License,
    NotNeededPackage,
    PathMapping,
    TypingsData,
    TypingsDependency,
    get_license_from_package_json,
)
from catalog.settings import RegistrySettings
from versioning.models import ANY_VERSION, PackageId, TypingVersion


class TestNotNeededPackage:
    """Stub package validation and fixed attributes."""

    def test_valid_stub(self, stub_raw):
        pkg = NotNeededPackage(stub_raw)
        assert pkg.is_latest is True
        assert pkg.license is License.MIT
        assert (pkg.major, pkg.minor) == (2, 10)
        assert pkg.project_name == "https://github.com/moment/moment"
        assert pkg.declared_modules == []
        assert pkg.globals == []
        assert pkg.is_not_needed()

    def test_extraneous_key(self, stub_raw):
        stub_raw["extra"] = 1
        with pytest.raises(MalformedPackageError, match="Unexpected key in not-needed package: extra"):
            NotNeededPackage(stub_raw)

    @pytest.mark.parametrize("key", ["libraryName", "typingsPackageName", "sourceRepoURL", "asOfVersion"])
    def test_missing_required_field(self, stub_raw, key):
        del stub_raw[key]
        with pytest.raises(MalformedPackageError, match=key):
            NotNeededPackage(stub_raw)

    def test_empty_required_field(self, stub_raw):
        stub_raw["sourceRepoURL"] = ""
        with pytest.raises(MalformedPackageError):
            NotNeededPackage(stub_raw)

    def test_bad_as_of_version(self, stub_raw):
        stub_raw["asOfVersion"] = "2.10"
        with pytest.raises(MalformedPackageError, match="asOfVersion"):
            NotNeededPackage(stub_raw)

    def test_readme_and_deprecation(self, stub_raw):
        pkg = NotNeededPackage(stub_raw)
        assert "Moment provides its own type definitions" in pkg.readme()
        assert "@types/moment" in pkg.readme()
        assert pkg.deprecated_message().startswith("This is a stub types definition. moment")

    def test_output_directory_uses_name(self, stub_raw):
        pkg = NotNeededPackage(stub_raw, RegistrySettings(output_dir="/out"))
        assert pkg.output_directory == "/out/moment"


class TestTypingsData:
    """Validated typed package records."""

    def test_fields(self, make_record):
        raw = make_record(
            "jquery", 3, 3,
            dependencies=[{"name": "sizzle", "version": "*"}, {"name": "node", "version": {"major": 8, "minor": 0}}],
            testDependencies=["mocha"],
            pathMappings=[{"packageName": "node", "version": {"major": 8}}],
            license="Apache-2.0",
            contributors=[{"name": "Ann", "url": "https://github.com/ann", "githubUsername": "ann"}],
        )
        pkg = TypingsData(raw, is_latest=True)
        assert pkg.dependencies == [
            TypingsDependency("sizzle", ANY_VERSION),
            TypingsDependency("node", TypingVersion(8, 0)),
        ]
        assert pkg.test_dependencies == ["mocha"]
        assert pkg.path_mappings == [PathMapping("node", TypingVersion(8))]
        assert pkg.license is License.APACHE_20
        assert pkg.contributors[0].github_username == "ann"
        assert pkg.id == PackageId("jquery", TypingVersion(3, 3))
        assert not pkg.is_not_needed()

    def test_derived_names(self, make_record):
        pkg = TypingsData(make_record("foo__bar", 1, 2), is_latest=False, settings=RegistrySettings(scope_name="acme"))
        assert pkg.unescaped_name == "@foo/bar"
        assert pkg.full_npm_name == "@acme/foo__bar"
        assert pkg.full_escaped_npm_name == "@acme%2ffoo__bar"
        assert pkg.desc == "foo__bar v1.2"

    def test_output_directory(self, make_record):
        settings = RegistrySettings(output_dir="output")
        assert TypingsData(make_record("node", 10, 1), True, settings).output_directory == "output/node"
        assert TypingsData(make_record("node", 6, 0), False, settings).output_directory == "output/node v6.0"

    def test_sub_directory_path(self, make_record):
        old = TypingsData(make_record("node", 6, 0, libraryVersionDirectoryName="6"), is_latest=False)
        assert old.version_directory_name == "v6"
        assert old.sub_directory_path == "node/v6"
        latest = TypingsData(make_record("node", 10, 1), is_latest=True)
        assert latest.version_directory_name is None
        assert latest.sub_directory_path == "node"

    def test_unsupported_ts_version_falls_back(self, make_record):
        assert TypingsData(make_record("a", 1, 0, minTsVersion="1.8"), True).min_typescript_version == "2.0"
        assert TypingsData(make_record("a", 1, 0, minTsVersion="2.8"), True).min_typescript_version == "2.8"

    def test_default_license(self, make_record):
        assert TypingsData(make_record("a", 1, 0), True).license is License.MIT

    def test_disallowed_license(self, make_record):
        with pytest.raises(MalformedPackageError, match="license"):
            TypingsData(make_record("a", 1, 0, license="GPL-3.0"), True)

    @pytest.mark.parametrize("key", ["typingsPackageName", "libraryName", "libraryMajorVersion", "libraryMinorVersion"])
    def test_missing_required(self, make_record, key):
        raw = make_record("a", 1, 0)
        del raw[key]
        with pytest.raises(MalformedPackageError):
            TypingsData(raw, True)

    def test_bad_dependency_version(self, make_record):
        raw = make_record("a", 1, 0, dependencies=[{"name": "b", "version": "^1.0"}])
        with pytest.raises(MalformedPackageError, match="dependencies"):
            TypingsData(raw, True)

    def test_to_dict(self, make_record):
        record = TypingsData(make_record("a", 1, 0, dependencies=[{"name": "b", "version": {"major": 2}}]), True).to_dict()
        assert record["typingsPackageName"] == "a"
        assert record["dependencies"] == [{"name": "b", "version": "2"}]
        assert record["fullNpmName"] == "@types/a"


class TestLicenseFromPackageJson:
    """License validation of package.json values."""

    def test_absent_is_mit(self):
        assert get_license_from_package_json(None) is License.MIT

    def test_explicit_mit_is_redundant(self):
        with pytest.raises(MalformedPackageError, match="redundant"):
            get_license_from_package_json("MIT")

    def test_apache(self):
        assert get_license_from_package_json("Apache-2.0") is License.APACHE_20

    def test_other(self):
        with pytest.raises(MalformedPackageError, match="Expected one of"):
            get_license_from_package_json("BSD")
