import json
from pathlib import Path

import pytest

from authlint import cli

SAMPLES = Path(__file__).resolve().parent.parent / "samples"


def run(tmp_path, *extra):
    output_path = tmp_path / "scan.json"
    exit_code = cli.main(
        ["--config", str(tmp_path / "missing.yaml"), "--out", str(output_path), *extra]
    )
    return exit_code, json.loads(output_path.read_text(encoding="utf-8"))


def test_cli_generates_json_report(tmp_path, capsys):
    exit_code, data = run(tmp_path, "--source", str(SAMPLES / "vulnerable"))

    captured = capsys.readouterr()
    assert "Scan Summary" in captured.out
    assert exit_code == 1
    assert data["summary"]["warning"] == 4
    assert data["passed"] is False
    finding = data["findings"][0]
    assert finding["rule_id"] == "NoLiteralStringsInAuth"
    assert finding["message"] == "The arguments should not be literal strings"
    assert finding["severity"] == "WARNING"
    assert finding["location"] == {"line": 5, "column": 8, "end_line": 5, "end_column": 21}


def test_cli_passes_on_clean_sources(tmp_path, capsys):
    exit_code, data = run(tmp_path, "--source", str(SAMPLES / "safe"))

    captured = capsys.readouterr()
    assert "Status    : PASS" in captured.out
    assert exit_code == 0
    assert data["summary"]["warning"] == 0
    assert data["files_scanned"] == 2
    assert data["passed"] is True


def test_fail_on_error_lets_warnings_pass(tmp_path):
    exit_code, data = run(tmp_path, "--source", str(SAMPLES / "vulnerable"), "--fail-on", "error")

    assert exit_code == 0
    assert data["summary"]["warning"] == 4


def test_suggest_fixes_adds_proposals(tmp_path):
    _, data = run(tmp_path, "--source", str(SAMPLES / "vulnerable"), "--suggest-fixes")

    replacements = [finding["fix"]["replacement"] for finding in data["findings"] if "fix" in finding]
    assert "user.has_role(ADMINISTRATOR)" in replacements
    assert "principal.claims.get(TENANT_ID)" in replacements


def test_config_file_settings_apply(tmp_path):
    config = tmp_path / "authlint.yaml"
    config.write_text("exclude: ['*/vulnerable/*']\n", encoding="utf-8")
    output_path = tmp_path / "scan.json"

    exit_code = cli.main(
        ["--config", str(config), "--source", str(SAMPLES), "--out", str(output_path)]
    )

    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert exit_code == 0
    assert data["files_scanned"] == 2


def test_malformed_config_exits(tmp_path):
    config = tmp_path / "authlint.yaml"
    config.write_text("fail_on: fatal\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(config), "--source", str(SAMPLES / "safe")])

    assert "fail_on" in str(excinfo.value) or "fatal" in str(excinfo.value)


def test_config_directory_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path), "--source", str(SAMPLES / "safe")])

    assert "cannot read settings" in str(excinfo.value)
