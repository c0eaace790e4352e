"""
CLI Tests

Argument parsing and the commands that run without a store.
"""

import json

import pytest

from admin.main import UsageError, check_arity, main, parse_args

# ============================================================================
# parse_args
# ============================================================================


class TestParseArgs:
    def test_command_and_params(self):
        args = parse_args(["move", "home", "sec_1", "0"])
        assert args["command"] == "move"
        assert args["params"] == ["home", "sec_1", "0"]

    def test_options(self):
        args = parse_args(["--api-url", "http://x:1", "add", "home", "HERO", "p.json", "--at", "2", "--log-level", "debug"])
        assert args["api_url"] == "http://x:1"
        assert args["at"] == 2
        assert args["log_level"] == "DEBUG"
        assert args["params"] == ["home", "HERO", "p.json"]

    def test_kind_option(self):
        args = parse_args(["reorder", "home", "--kind", "HERO", "b", "a"])
        assert args["kind"] == "HERO"
        assert args["params"] == ["home", "b", "a"]

    def test_missing_option_value(self):
        with pytest.raises(UsageError):
            parse_args(["show", "--api-url"])

    def test_bad_at(self):
        with pytest.raises(UsageError):
            parse_args(["add", "--at", "first"])

    def test_unknown_option(self):
        with pytest.raises(UsageError):
            parse_args(["--verbose"])


class TestArity:
    def test_exact(self):
        check_arity("show", ["home"])
        with pytest.raises(UsageError):
            check_arity("show", [])
        with pytest.raises(UsageError):
            check_arity("show", ["home", "extra"])

    def test_variadic(self):
        check_arity("reorder", ["home", "a", "b", "c"])
        with pytest.raises(UsageError):
            check_arity("reorder", ["home"])

    def test_unknown_command(self):
        with pytest.raises(UsageError):
            check_arity("publish", [])

    def test_move_index_must_be_integer(self):
        check_arity("move", ["home", "sec_1", "-1"])
        with pytest.raises(UsageError):
            check_arity("move", ["home", "sec_1", "top"])


# ============================================================================
# Local commands
# ============================================================================


class TestLocalCommands:
    def test_help(self, capsys):
        assert main(["--help"]) == 0
        assert "Usage:" in capsys.readouterr().out

    def test_usage_error_exit_code(self, capsys):
        assert main(["frobnicate"]) == 2
        assert "Unknown command" in capsys.readouterr().out

    def test_bad_move_index_is_usage_error(self, capsys, monkeypatch):
        monkeypatch.setattr("admin.main.run_remote", None)
        assert main(["move", "home", "sec_1", "top"]) == 2
        assert "index must be an integer" in capsys.readouterr().out

    def test_kinds(self, capsys):
        assert main(["kinds"]) == 0
        out = capsys.readouterr().out
        assert "HERO" in out
        assert "Hero Section" in out

    def test_validate_ok_prints_canonical(self, tmp_path, capsys):
        path = tmp_path / "hero.json"
        path.write_text(json.dumps({"title": "Hi", "subtitle": None, "junk": 1}))
        assert main(["validate", "HERO", str(path)]) == 0
        assert json.loads(capsys.readouterr().out) == {"title": "Hi"}

    def test_validate_invalid(self, tmp_path, capsys):
        path = tmp_path / "hero.json"
        path.write_text("{}")
        assert main(["validate", "HERO", str(path)]) == 1
        assert "title: Field required" in capsys.readouterr().out

    def test_validate_malformed(self, tmp_path, capsys):
        path = tmp_path / "hero.json"
        path.write_text("{")
        assert main(["validate", "HERO", str(path)]) == 1
        assert "Invalid JSON" in capsys.readouterr().out

    def test_validate_missing_file(self, tmp_path, capsys):
        assert main(["validate", "HERO", str(tmp_path / "nope.json")]) == 1
        assert "Error:" in capsys.readouterr().out
