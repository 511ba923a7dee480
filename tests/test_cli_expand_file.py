import json
from pathlib import Path

import yaml
from typer.testing import CliRunner

from margin_shorthand.cli import app
from margin_shorthand.core.observability import setup_logging

runner = CliRunner()


def _load_yaml(p: Path) -> dict:
    return yaml.safe_load(p.read_text(encoding="utf-8"))


def test_expand_file_matches_expected(tmp_path: Path):
    out_path = tmp_path / "nested" / "expanded.yaml"
    r = runner.invoke(app, ["expand-file", "examples/basic-margins.yaml", "--out", str(out_path)])
    assert r.exit_code == 0, r.stdout + r.stderr
    assert "wrote 16 declarations" in r.stdout

    got = _load_yaml(out_path)
    expected = _load_yaml(Path("examples/expand-expected.yaml"))
    assert got == expected


def test_expand_file_is_deterministic(tmp_path: Path):
    out1 = tmp_path / "expanded1.yaml"
    out2 = tmp_path / "expanded2.yaml"

    r1 = runner.invoke(app, ["expand-file", "examples/basic-margins.yaml", "--out", str(out1)])
    r2 = runner.invoke(app, ["expand-file", "examples/basic-margins.yaml", "--out", str(out2)])

    assert r1.exit_code == 0
    assert r2.exit_code == 0

    assert out1.read_text(encoding="utf-8") == out2.read_text(encoding="utf-8")


def test_expand_file_json_stdout():
    r = runner.invoke(app, ["expand-file", "examples/basic-margins.json", "--format", "json"])
    assert r.exit_code == 0, r.stdout + r.stderr
    payload = json.loads(r.stdout)
    assert payload["command"] == "expand-file"
    assert [(d["property"], d["value"]) for d in payload["declarations"]] == [
        ("margin-top", "0"),
        ("margin-bottom", "0"),
        ("margin-right", "0"),
        ("margin-left", "0"),
    ]
    assert {d["origin"] for d in payload["declarations"]} == {"user-agent"}


def test_expand_file_yaml_stdout():
    r = runner.invoke(app, ["expand-file", "examples/basic-margins.yaml", "--format", "yaml"])
    assert r.exit_code == 0, r.stdout + r.stderr
    assert yaml.safe_load(r.stdout) == _load_yaml(Path("examples/expand-expected.yaml"))


def test_expand_file_invalid_arity():
    r = runner.invoke(app, ["expand-file", "examples/invalid-arity.yaml"])
    assert r.exit_code == 2
    assert "E_INVALID_ARITY" in (r.stdout + r.stderr)


def test_expand_file_missing():
    r = runner.invoke(app, ["expand-file", "examples/does-not-exist.yaml"])
    assert r.exit_code == 1
    assert "E_FILE_NOT_FOUND" in (r.stdout + r.stderr)


def test_expand_file_logs_source_index():
    try:
        r = runner.invoke(
            app,
            ["--log-level", "DEBUG", "--log-format", "json", "expand-file", "examples/basic-margins.yaml"],
        )
    finally:
        setup_logging("WARNING", "text")
    assert r.exit_code == 0, r.stdout + r.stderr
    records = [json.loads(line) for line in r.stderr.splitlines() if line.startswith("{")]
    indexed = [rec for rec in records if "index" in rec]
    assert [rec["index"] for rec in indexed] == [0, 1, 2, 3]
    assert [rec["arity"] for rec in indexed] == [1, 2, 3, 4]
    assert indexed[2]["message"] == "declarations[2]: margin with 3 values"
