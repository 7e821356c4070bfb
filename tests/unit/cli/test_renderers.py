"""Unit tests for the JSON envelope renderer."""

import json

from pydantic import BaseModel

from depsight.cli.renderers import JsonRenderer
from depsight.core.exceptions import IssuesNotFoundError


class _Data(BaseModel):
    value: int


class TestJsonRenderer:
    def test_success_envelope(self, capsys):
        JsonRenderer("status").render_success(_Data(value=3))
        payload = json.loads(capsys.readouterr().out)
        assert payload == {"ok": True, "command": "status", "data": {"value": 3}}

    def test_error_envelope(self, capsys):
        JsonRenderer("insights").render_error(IssuesNotFoundError("nothing here"))
        payload = json.loads(capsys.readouterr().out)
        assert payload["ok"] is False
        assert payload["error"]["type"] == "IssuesNotFoundError"
        assert "nothing here" in payload["error"]["message"]

    def test_capture_moves_stray_output_to_stderr(self, capsys):
        renderer = JsonRenderer("insights")
        with renderer.capture():
            print("stray line")
        renderer.render_success(_Data(value=1))

        captured = capsys.readouterr()
        assert json.loads(captured.out)["data"] == {"value": 1}
        assert "stray line" in captured.err

    def test_capture_quiet_block_writes_nothing(self, capsys):
        with JsonRenderer("insights").capture():
            pass
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
