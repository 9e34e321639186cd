"""Tests for the ``cmfuncs`` command."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cmfuncs import cli

MANIFEST = """
vars:
  site: lan
calls:
  - function: bracket_expansion
    args: ["db[1-2].$site"]
    register: hosts
  - function: join
    args: ["$hosts", " "]
"""


def extract_json_from_stdout(output: str) -> str:
    """Return the JSON payload from stdout that may include status lines."""
    json_start = output.find("{")
    return output[json_start:] if json_start != -1 else output


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    path = tmp_path / "hosts.yaml"
    path.write_text(MANIFEST)
    return path


# Call command


def test_call_prints_json_result(capsys) -> None:
    cli.main(["call", "bracket_expansion", "web[1-2]"])
    assert json.loads(capsys.readouterr().out) == ["web1", "web2"]


def test_call_passes_strings_by_default(capsys) -> None:
    cli.main(["call", "bracket_expansion", "x[1-5]", "2"])
    assert json.loads(capsys.readouterr().out) == ["x1", "x3", "x5"]


def test_call_with_yaml_args(capsys) -> None:
    cli.main(["call", "--yaml-args", "values_at", "[a, b, c, d]", "1..2"])
    assert json.loads(capsys.readouterr().out) == ["b", "c"]


def test_call_failure_exits_with_error(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["call", "bracket_expansion", "no-brackets"])
    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "❌ ERROR" in out
    assert "InvalidPatternError" in out


def test_call_unknown_function(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["call", "no_such_function"])
    assert exc_info.value.code == 1
    assert "Unknown function" in capsys.readouterr().out


# Run command


def test_run_prints_results_without_results_path(manifest_path: Path, capsys) -> None:
    cli.main(["run", str(manifest_path)])
    payload = json.loads(capsys.readouterr().out)
    assert [c["result"] for c in payload["calls"]] == [
        ["db1.lan", "db2.lan"],
        "db1.lan db2.lan",
    ]
    assert payload["calls"][0]["register"] == "hosts"


def test_run_writes_results_file(manifest_path: Path, tmp_path: Path, capsys) -> None:
    results_path = tmp_path / "out" / "res.json"
    cli.main(["run", str(manifest_path), "--results", str(results_path)])

    assert results_path.exists()
    data = json.loads(results_path.read_text())
    assert data["calls"][1]["result"] == "db1.lan db2.lan"
    out = capsys.readouterr().out
    assert "Results written to" in out
    assert "calls" not in out


def test_run_results_and_stdout(manifest_path: Path, tmp_path: Path, capsys) -> None:
    results_path = tmp_path / "res.json"
    cli.main(["run", str(manifest_path), "-r", str(results_path), "--stdout"])
    payload = json.loads(extract_json_from_stdout(capsys.readouterr().out))
    assert payload == json.loads(results_path.read_text())


def test_run_missing_file(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 1
    assert "Manifest file not found" in capsys.readouterr().out


def test_run_invalid_manifest(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("calls: []\nextra: 1\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    assert "Unrecognized top-level key" in capsys.readouterr().out


def test_run_failing_call(tmp_path: Path, capsys) -> None:
    path = tmp_path / "fail.yaml"
    path.write_text("calls:\n  - function: bracket_expansion\n    args: ['[5-1]']\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    assert "InvalidRangeError" in capsys.readouterr().out


# List command


def test_list_shows_table(capsys) -> None:
    cli.main(["list"])
    out = capsys.readouterr().out
    assert "Function" in out and "Signature" in out
    assert "bracket_expansion" in out
    assert "integer_to_mac" in out


def test_list_filters_group(capsys) -> None:
    cli.main(["list", "--group", "digests"])
    out = capsys.readouterr().out
    assert "sha256sum" in out
    assert "bracket_expansion" not in out


def test_list_unknown_group(capsys) -> None:
    cli.main(["list", "-g", "nothing"])
    assert "No functions registered in group: nothing" in capsys.readouterr().out


# Global behaviour


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: cmfuncs" in capsys.readouterr().out


def test_verbose_and_quiet_switch_levels(manifest_path: Path, caplog, capsys) -> None:
    with caplog.at_level(logging.DEBUG, logger="cmfuncs"):
        cli.main(["--verbose", "run", str(manifest_path)])
        assert logging.getLogger("cmfuncs").level == logging.DEBUG
    assert any(r.levelno == logging.DEBUG for r in caplog.records)

    caplog.clear()
    cli.main(["--quiet", "run", str(manifest_path)])
    assert logging.getLogger("cmfuncs").level == logging.WARNING
    assert not any(r.levelno == logging.INFO for r in caplog.records)
    cli.main(["list", "--group", "digests"])
    assert logging.getLogger("cmfuncs").level == logging.INFO
