"""Tests for the typesreg command line."""

import json

import pytest

from args import parse_args
from constants import ExitCodes
from typesreg import run


@pytest.fixture
def cli(data_dir, capsys):
    """Run typesreg against the fixture catalog, returning (code, stdout)."""
    def _run(*argv):
        code = run(parse_args(["--data-dir", str(data_dir), *argv]))
        return code, capsys.readouterr().out
    return _run


class TestArgParsing:
    """Argument parsing."""

    def test_defaults(self):
        ns = parse_args(["list"])
        assert ns.COMMAND == "list"
        assert ns.OUTPUT_FORMAT == "text"
        assert ns.LOG_LEVEL == "INFO"

    def test_spec_commands(self):
        ns = parse_args(["-f", "JSON", "resolve", "node@6"])
        assert ns.SPEC == "node@6"
        assert ns.OUTPUT_FORMAT == "json"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestCommands:
    """End-to-end command behavior."""

    def test_list(self, cli):
        code, out = cli("list")
        assert code == ExitCodes.SUCCESS.value
        assert out.splitlines()[:3] == ["a", "a v1.0", "b"]

    def test_list_latest_json(self, cli):
        code, out = cli("-f", "json", "list", "--latest")
        assert code == 0
        assert [p["name"] for p in json.loads(out)] == ["a", "b", "foo__bar", "node", "uses-deps"]

    def test_list_all_with_stubs(self, cli, dt_dir):
        code, out = cli("--dt", str(dt_dir), "list", "--all")
        assert code == 0
        assert out.splitlines()[-1] == "moment"

    def test_list_not_needed_requires_dt(self, cli):
        code, _ = cli("list", "--not-needed")
        assert code == ExitCodes.MALFORMED_INPUT.value

    def test_resolve(self, cli):
        code, out = cli("resolve", "node@8")
        assert code == 0
        assert out.strip() == "node@8.0"

    def test_resolve_passthrough(self, cli):
        code, out = cli("resolve", "left-pad@1")
        assert code == 0
        assert out.strip() == "left-pad@1"

    def test_resolve_unknown_version(self, cli):
        code, _ = cli("resolve", "node@99")
        assert code == ExitCodes.NOT_FOUND.value

    def test_info_json(self, cli):
        code, out = cli("-f", "json", "info", "@foo/bar")
        assert code == 0
        assert json.loads(out)["fullNpmName"] == "@types/foo__bar"

    def test_info_stub(self, cli, dt_dir):
        code, out = cli("--dt", str(dt_dir), "info", "moment")
        assert code == 0
        assert "sourceRepoURL: https://github.com/moment/moment" in out

    def test_deps(self, cli):
        code, out = cli("deps", "uses-deps")
        assert code == 0
        assert out.splitlines() == ["a", "foo__bar", "b"]

    def test_single(self, cli):
        code, out = cli("single", "node")
        assert code == ExitCodes.MALFORMED_INPUT.value
        assert out == ""

    def test_not_needed(self, cli, dt_dir):
        code, out = cli("--dt", str(dt_dir), "-f", "json", "not-needed", "moment")
        assert code == 0
        assert json.loads(out)["asOfVersion"] == "2.10.5"

    def test_missing_data_file(self, tmp_path, capsys):
        code = run(parse_args(["--data-dir", str(tmp_path / "nope"), "list"]))
        assert code == ExitCodes.FILE_ERROR.value

    def test_bad_token(self, cli):
        code, _ = cli("resolve", "node@^1")
        assert code == ExitCodes.MALFORMED_INPUT.value
