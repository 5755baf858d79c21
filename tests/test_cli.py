"""Tests for the command line interface."""

from __future__ import annotations

import json
import runpy

import pytest

from locale_sync import cli

GREETING_BASE = '{\n  "farewell": "Bye",\n  "greeting": "Hello"\n}'


def test_in_sync_tree_succeeds(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("greeting.json", GREETING_BASE)
    write_file("greeting.fr.json", '{\n  "farewell": "Adieu",\n  "greeting": "Bonjour"\n}')

    code = cli.main([str(tmp_path), "--newline", "lf"])

    assert code == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["All files in sync.", "Result: success"]


def test_missing_keys_are_listed(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("greeting.json", GREETING_BASE)
    write_file("greeting.fr.json", '{\n  "greeting": "Bonjour"\n}')

    code = cli.main([str(tmp_path), "--newline", "lf"])

    assert code == 1
    out = capsys.readouterr().out
    assert "greeting.fr.json" in out
    assert "Missing Keys: farewell" in out
    assert "Out of sync: 1 file(s)." in out
    assert out.rstrip().endswith("Result: failure")


def test_superfluous_keys_are_listed(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("greeting.json", GREETING_BASE)
    write_file(
        "greeting.fr.json",
        '{\n  "farewell": "Adieu",\n  "greeting": "Bonjour",\n  "obsolete": "x",\n  "old": "y"\n}',
    )

    assert cli.main([str(tmp_path), "--newline", "lf"]) == 1
    assert "Superfluous Keys: obsolete, old" in capsys.readouterr().out


def test_formatting_drift_is_listed(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("strings.json", '{"b":1,"a":2}')

    assert cli.main([str(tmp_path), "--newline", "lf"]) == 1
    out = capsys.readouterr().out
    assert "strings.json\n  Formatting differs from canonical form" in out


def test_fix_repairs_and_succeeds(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("greeting.json", GREETING_BASE)
    translation = write_file("greeting.fr.json", '{"greeting":"Bonjour","obsolete":1}')

    code = cli.main([str(tmp_path), "--fix", "--newline", "lf"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Missing Keys: farewell" in out
    assert "Superfluous Keys: obsolete" in out
    assert "  Fixed" in out
    assert "Fixed 1 file(s)." in out
    assert "Result: success" in out
    assert json.loads(translation.read_text(encoding="utf-8")) == {
        "farewell": "Bye",
        "greeting": "Bonjour",
    }

    assert cli.main([str(tmp_path), "--newline", "lf"]) == 0


def test_parse_errors_fail_the_run(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("greeting.json", GREETING_BASE)
    write_file("greeting.fr.json", "{")

    assert cli.main([str(tmp_path), "--fix", "--newline", "lf"]) == 1
    out = capsys.readouterr().out
    assert "Error: Invalid JSON" in out
    assert "Result: failure" in out


def test_quiet_prints_summary_only(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("strings.json", '{"b":1,"a":2}')

    assert cli.main([str(tmp_path), "--quiet"]) == 1
    assert capsys.readouterr().out.splitlines() == ["Out of sync: 1 file(s).", "Result: failure"]


def test_paths_are_shown_relative_to_root(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("locales/strings.json", '{"b":1,"a":2}')

    cli.main([str(tmp_path)])

    assert capsys.readouterr().out.splitlines()[0] == "locales/strings.json"


def test_default_root_is_current_directory(
    write_file, tmp_path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    write_file("strings.json", '{"b":1,"a":2}')
    monkeypatch.chdir(tmp_path)

    assert cli.main(["--quiet"]) == 1


def test_indent_option(write_file, tmp_path) -> None:
    path = write_file("strings.json", '{"a":1}')

    assert cli.main([str(tmp_path), "--fix", "--indent", "4", "--newline", "lf"]) == 0
    assert path.read_bytes() == b'{\n    "a": 1\n}'


def test_negative_indent_is_a_usage_error(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(tmp_path), "--indent", "-1"]) == 2
    assert "indent must be zero or greater" in capsys.readouterr().err


def test_exclude_option_replaces_defaults(write_file, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    write_file("vendor/strings.json", '{"b":1,"a":2}')
    write_file("node_modules/ok.json", '{"b":1,"a":2}')

    assert cli.main([str(tmp_path), "--exclude", "vendor"]) == 1
    out = capsys.readouterr().out
    assert "node_modules/ok.json" in out
    assert "vendor/strings.json" not in out


def test_missing_root_is_a_usage_error(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(tmp_path / "nope")]) == 2
    assert "invalid root" in capsys.readouterr().err


def test_config_file_supplies_defaults(write_file, tmp_path, isolated_config) -> None:
    isolated_config.write_text(json.dumps({"indent_width": 3, "newline": "crlf"}), encoding="utf-8")
    path = write_file("strings.json", '{"a":1}')

    assert cli.main([str(tmp_path), "--fix"]) == 0
    assert path.read_bytes() == b'{\r\n   "a": 1\r\n}'


def test_explicit_config_path(write_file, tmp_path) -> None:
    config_path = tmp_path / "settings" / "custom.cfg"
    config_path.parent.mkdir()
    config_path.write_text(json.dumps({"indent_width": 1, "newline": "lf"}), encoding="utf-8")
    path = write_file("strings.json", '{"a":1}')

    assert cli.main([str(tmp_path), "--fix", "--config", str(config_path)]) == 0
    assert path.read_bytes() == b'{\n "a": 1\n}'


def test_invalid_config_is_a_usage_error(tmp_path, isolated_config, capsys: pytest.CaptureFixture[str]) -> None:
    isolated_config.write_text(json.dumps({"indent_width": "wide"}), encoding="utf-8")

    assert cli.main([str(tmp_path)]) == 2
    assert "indent_width" in capsys.readouterr().err


def test_unknown_option_exits_with_usage_code(tmp_path) -> None:
    with pytest.raises(SystemExit) as info:
        cli._create_parser().parse_args([str(tmp_path), "--bogus"])
    assert info.value.code == 2


def test_module_entry_point(write_file, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_file("strings.json", '{\n  "a": 1\n}')
    monkeypatch.setattr("sys.argv", ["locale-sync", str(tmp_path), "--newline", "lf"])

    with pytest.raises(SystemExit) as info:
        runpy.run_module("locale_sync", run_name="__main__")
    assert info.value.code == 0
