import json
from pathlib import Path

from typer.testing import CliRunner

from opscribe.cli import app

runner = CliRunner()

TESTS_DIR = str(Path(__file__).resolve().parent)


def read_json(tmp_path: Path, *args: str) -> dict:
    out = tmp_path / "operation.json"
    result = runner.invoke(app, ["read", *args, "--format", "json", "--out", str(out), "--app-dir", TESTS_DIR])
    assert result.exit_code == 0, result.output
    return json.loads(out.read_text(encoding="utf-8"))


def test_ping():
    result = runner.invoke(app, ["ping"])
    assert result.exit_code == 0
    assert "pong" in result.output


def test_read_json(tmp_path: Path):
    payload = read_json(tmp_path, "sample_handlers:list_pets", "--param", "limit")
    assert payload["nickname"] == "list_pets"
    assert payload["http_method"] == "GET"
    assert payload["response_class"] == "List[Pet]"
    assert [p["param_type"] for p in payload["parameters"]] == ["query", "unknown"]


def test_read_without_signature_names(tmp_path: Path):
    payload = read_json(tmp_path, "sample_handlers:sample_method", "--no-signature-names")
    names = [p["name"] for p in payload["parameters"]]
    assert names == ["documentationNameA", "mvcNameB", "modelAttributeC", "arg3", "requestParam1"]


def test_read_table_with_config(tmp_path: Path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(
        json.dumps(
            {
                "exception_statuses": [
                    {"exception": "sample_handlers:NotFoundException", "code": 404, "reason": "Invalid ID supplied"}
                ]
            }
        ),
        encoding="utf-8",
    )
    result = runner.invoke(
        app,
        ["read", "sample_handlers:exception_method_c", "--config", str(cfg), "--app-dir", TESTS_DIR],
    )
    assert result.exit_code == 0, result.output
    assert "exception_method_c" in result.output
    assert "404" in result.output
    assert "Invalid ID supplied" in result.output


def test_read_table_to_file(tmp_path: Path):
    out = tmp_path / "op.txt"
    result = runner.invoke(
        app,
        ["read", "sample_handlers:find_by_status", "--out", str(out), "--app-dir", TESTS_DIR],
    )
    assert result.exit_code == 0, result.output
    text = out.read_text(encoding="utf-8")
    assert "findPetsByStatus" in text
    assert "X-Trace-Id" in text


def test_read_rejects_bad_target_method_and_format():
    result = runner.invoke(app, ["read", "sample_handlers:nope", "--app-dir", TESTS_DIR])
    assert result.exit_code != 0

    result = runner.invoke(app, ["read", "sample_handlers:list_pets", "--method", "FETCH", "--app-dir", TESTS_DIR])
    assert result.exit_code != 0

    result = runner.invoke(app, ["read", "sample_handlers:list_pets", "--format", "xml", "--app-dir", TESTS_DIR])
    assert result.exit_code != 0
