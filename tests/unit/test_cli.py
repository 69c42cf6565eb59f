"""Test the xapi command-line interface."""

from __future__ import annotations

import json
import logging
import re

import pytest
import structlog
from click.testing import CliRunner

from xapi_client.cli import main
from xapi_client.client import LRSClient
from xapi_client.observability.logger import HANDLER_NAME

UUID4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)
CREDENTIALS = [
    "--endpoint", "https://lrs.example.com/api",
    "--username", "u",
    "--password", "p",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("XAPI_LRS__ENDPOINT", "XAPI_LRS__USERNAME", "XAPI_LRS__PASSWORD"):
        monkeypatch.delenv(var, raising=False)
    # keep log lines out of the captured JSON output
    monkeypatch.setenv("XAPI_OBSERVABILITY__LOG_LEVEL", "ERROR")
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def wired_lrs(monkeypatch, fake_lrs):
    """Route every client the CLI builds to ``fake_lrs``."""
    original = LRSClient.from_settings.__func__

    def from_settings(cls, settings, **kwargs):
        kwargs["transport"] = fake_lrs.transport
        return original(cls, settings, **kwargs)

    monkeypatch.setattr(LRSClient, "from_settings", classmethod(from_settings))
    return fake_lrs


class TestNewId:
    def test_prints_uuid(self):
        result = CliRunner().invoke(main, ["new-id"])
        assert result.exit_code == 0
        assert UUID4_RE.match(result.stdout.strip())


class TestSend:
    def test_single_statement(self, tmp_path, wired_lrs, sample_statement):
        path = tmp_path / "statement.json"
        path.write_text(json.dumps(sample_statement.to_wire()))

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["stored-id"]
        assert str(wired_lrs.last_request.url) == "https://lrs.example.com/api/statements"
        assert wired_lrs.last_payload["id"] == sample_statement.id

    def test_batch(self, tmp_path, wired_lrs, bare_statement):
        path = tmp_path / "batch.json"
        path.write_text(json.dumps([bare_statement.to_wire()] * 2))

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 0, result.output
        payload = wired_lrs.last_payload
        assert len(payload) == 2
        assert all(UUID4_RE.match(s["id"]) for s in payload)

    def test_config_file(self, tmp_path, wired_lrs, sample_statement):
        config = tmp_path / "xapi.toml"
        config.write_text(
            '[lrs]\n'
            'endpoint = "https://file.example.com/xapi/"\n'
            'username = "key"\n'
            'password = "secret"\n'
            'version = "1.0.1"\n'
        )
        path = tmp_path / "statement.json"
        path.write_text(json.dumps(sample_statement.to_wire()))

        result = CliRunner().invoke(main, ["send", str(path), "--config", str(config)])

        assert result.exit_code == 0, result.output
        request = wired_lrs.last_request
        assert str(request.url) == "https://file.example.com/xapi/statements"
        assert request.headers["X-Experience-API-Version"] == "1.0.1"

    def test_unconfigured_fails(self, tmp_path, wired_lrs, sample_statement):
        path = tmp_path / "statement.json"
        path.write_text(json.dumps(sample_statement.to_wire()))

        result = CliRunner().invoke(main, ["send", str(path)])

        assert result.exit_code == 1
        assert "not configured" in result.output
        assert wired_lrs.requests == []

    def test_lrs_error_fails(self, tmp_path, wired_lrs, sample_statement):
        wired_lrs.status_code = 409
        wired_lrs.text = "duplicate id"
        path = tmp_path / "statement.json"
        path.write_text(json.dumps(sample_statement.to_wire()))

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 1
        assert "409" in result.output
        assert "duplicate id" in result.output

    def test_invalid_json_fails(self, tmp_path, wired_lrs):
        path = tmp_path / "statement.json"
        path.write_text("{not json")

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output
        assert wired_lrs.requests == []

    def test_scalar_json_fails(self, tmp_path, wired_lrs):
        path = tmp_path / "statement.json"
        path.write_text("42")

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 1
        assert "statement object" in result.output

    def test_non_utf8_file_fails(self, tmp_path, wired_lrs):
        path = tmp_path / "statement.json"
        path.write_bytes(b"\xff\xfe\xfa")

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 1
        assert "UTF-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert wired_lrs.requests == []

    def test_non_json_response_fails(self, tmp_path, wired_lrs, sample_statement):
        wired_lrs.text = "<html>stored</html>"
        path = tmp_path / "statement.json"
        path.write_text(json.dumps(sample_statement.to_wire()))

        result = CliRunner().invoke(main, ["send", str(path), *CREDENTIALS])

        assert result.exit_code == 1
        assert "non-JSON response" in result.output
        assert not isinstance(result.exception, json.JSONDecodeError)
