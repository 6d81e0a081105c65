from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from conftest import build_form
from safepermit.cli.app import app

runner = CliRunner()


def test_cli_submit_show_and_delete(tmp_path: Path) -> None:
    form_file = tmp_path / "form.json"
    form_file.write_text(json.dumps(build_form(), ensure_ascii=False), encoding="utf-8")

    submitted = runner.invoke(app, ["submit", "--file", str(form_file)])
    assert submitted.exit_code == 0, submitted.output
    number = json.loads(submitted.stdout)["applicationNumber"]

    shown = runner.invoke(app, ["show", "--number", number])
    assert shown.exit_code == 0
    assert json.loads(shown.stdout)["workType"] == "质量返工"

    history = runner.invoke(app, ["history", "--phone", "13800138000"])
    assert json.loads(history.stdout)["total"] == 1

    deleted = runner.invoke(app, ["delete", "--number", number])
    assert deleted.exit_code == 0
    assert json.loads(deleted.stdout)["rows_deleted"] == 1

    missing = runner.invoke(app, ["delete", "--number", number])
    assert missing.exit_code == 1


def test_cli_submit_reports_validation_errors(tmp_path: Path) -> None:
    form_file = tmp_path / "form.json"
    form_file.write_text(json.dumps(build_form(phoneNumber="1"), ensure_ascii=False), encoding="utf-8")

    result = runner.invoke(app, ["submit", "--file", str(form_file)])
    assert result.exit_code == 1
    assert "phoneNumber" in json.loads(result.stdout)["details"]
