"""Tests for JSON emission helpers."""

import json

import pytest

from procexec.cli.json_output import emit_json, emit_json_error
from procexec.cli.json_schemas import ExecutionResponse
from procexec.core.types import ExecutionResult


def test_emit_json_prints_model_dump(capsys: pytest.CaptureFixture[str]) -> None:
    result = ExecutionResult(0, b"raw\xff", "", argv=("cat",), pid=7, duration_seconds=0.5)

    emit_json(ExecutionResponse.from_result(result).model_dump(mode="json"))

    data = json.loads(capsys.readouterr().out)
    assert data["argv"] == ["cat"]
    assert data["stdout"] == "raw�"
    assert data["pid"] == 7


def test_emit_json_error_exits_with_code(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        emit_json_error("Shell not found: fish", "InvocationError", 127, "shell_not_found")

    assert exc_info.value.code == 127
    assert json.loads(capsys.readouterr().out) == {
        "error": "Shell not found: fish",
        "error_type": "InvocationError",
        "kind": "shell_not_found",
        "exit_code": 127,
    }
