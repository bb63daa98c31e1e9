"""CLI tests for dump and compare subcommands."""

import json
from pathlib import Path
import sys

import pytest

from asmsnap import cli


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["asmsnap"] + args)
    return cli.main()


def _write_json(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def test_dump_to_stdout(monkeypatch, capsys, tmp_path, scenario_snapshot):
    snapshot = _write_json(tmp_path / "snapshot.json", scenario_snapshot)
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["dump", str(snapshot)], monkeypatch)
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("Assembly [Test]\n")
    assert out.endswith("!!EndTypes\n")


def test_dump_to_file(monkeypatch, capsys, tmp_path, scenario_snapshot):
    snapshot = _write_json(tmp_path / "snapshot.json", scenario_snapshot)
    out_path = tmp_path / "dump.txt"
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["dump", str(snapshot), "--out", str(out_path)], monkeypatch)
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "[OK] Dump complete" in out
    assert "Types: 1" in out
    assert out_path.read_text(encoding="utf-8").startswith("Assembly [Test]\n")


def test_dump_include_fields_flag(monkeypatch, capsys, tmp_path, scenario_snapshot):
    snapshot = _write_json(tmp_path / "snapshot.json", scenario_snapshot)
    with pytest.raises(SystemExit):
        _run_cli(["dump", str(snapshot), "--include-fields"], monkeypatch)
    assert "    !!BeginFields\n    !!EndFields\n" in capsys.readouterr().out


def test_dump_config_file(monkeypatch, capsys, tmp_path, scenario_snapshot):
    snapshot = _write_json(tmp_path / "snapshot.json", scenario_snapshot)
    config = _write_json(tmp_path / "options.json", {"include_fields": True})
    with pytest.raises(SystemExit):
        _run_cli(["dump", str(snapshot), "--config", str(config)], monkeypatch)
    assert "!!BeginFields" in capsys.readouterr().out


def test_dump_invalid_snapshot_fails(monkeypatch, capsys, tmp_path):
    snapshot = _write_json(tmp_path / "snapshot.json", {"assembly": {"types": "nope"}})
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["dump", str(snapshot)], monkeypatch)
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_compare_identical(monkeypatch, capsys, tmp_path, scenario_snapshot):
    reference = _write_json(tmp_path / "reference.json", scenario_snapshot)
    candidate = _write_json(tmp_path / "candidate.json", scenario_snapshot)
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["compare", str(reference), str(candidate)], monkeypatch)
    assert excinfo.value.code == 0
    assert "[OK] Dumps identical" in capsys.readouterr().out


def test_compare_different_writes_report(monkeypatch, capsys, tmp_path, scenario_snapshot):
    changed = json.loads(json.dumps(scenario_snapshot))
    changed["assembly"]["references"] = ["Lib, Version=2.0.0.0"]
    reference = _write_json(tmp_path / "reference.json", scenario_snapshot)
    candidate = _write_json(tmp_path / "candidate.json", changed)
    out_dir = tmp_path / "reports"

    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["compare", str(reference), str(candidate), "--out", str(out_dir)], monkeypatch)
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "[DIFF] Dumps differ" in out
    assert "First difference: line 3" in out

    report = json.loads((out_dir / "comparison.json").read_text(encoding="utf-8"))
    assert report["identical"] is False
    assert report["first_difference_line"] == 3
    assert "+ -- AssemblyName [Lib, Version=2.0.0.0]" in report["diff"]


def test_compare_prints_diff_without_out(monkeypatch, capsys, tmp_path, scenario_snapshot):
    changed = json.loads(json.dumps(scenario_snapshot))
    changed["assembly"]["full_name"] = "Other"
    reference = _write_json(tmp_path / "reference.json", scenario_snapshot)
    candidate = _write_json(tmp_path / "candidate.json", changed)
    with pytest.raises(SystemExit):
        _run_cli(["compare", str(reference), str(candidate)], monkeypatch)
    out = capsys.readouterr().out
    assert "-Assembly [Test]" in out
    assert "+Assembly [Other]" in out


def test_quiet_suppresses_output(monkeypatch, capsys, tmp_path, scenario_snapshot):
    reference = _write_json(tmp_path / "reference.json", scenario_snapshot)
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["compare", str(reference), str(reference), "--quiet"], monkeypatch)
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == ""


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
