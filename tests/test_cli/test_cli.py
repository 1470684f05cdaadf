"""Tests for the xml-validator command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import xmlvalidator.cli as cli
from xmlvalidator.engine.base import ProcessOutcome, ValidationEngine
from xmlvalidator.errors import InvocationError

runner = CliRunner()


class MockEngine(ValidationEngine):
    """Engine stub that answers every run with a fixed outcome."""

    def __init__(
        self,
        executable: str = "xmllint",
        outcome: ProcessOutcome | None = None,
        available: bool = True,
        fail: bool = False,
    ) -> None:
        self._executable = executable
        self._outcome = outcome or ProcessOutcome(returncode=0)
        self._available = available
        self._fail = fail

    def build_command(self, schema_path: str, document_path: str) -> list[str]:
        return [self._executable, schema_path, document_path]

    def run(self, argv: list[str]) -> ProcessOutcome:
        if self._fail:
            raise InvocationError("Could not run xmllint: permission denied")
        return self._outcome

    async def run_async(self, argv: list[str]) -> ProcessOutcome:
        return self.run(argv)

    def health_check(self) -> bool:
        return self._available


@pytest.fixture(autouse=True)
def _no_options_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XMLVALIDATOR_OPTIONS_PATH", str(tmp_path / "absent.json"))
    monkeypatch.delenv("XMLVALIDATOR_XMLLINT", raising=False)
    monkeypatch.delenv("XMLVALIDATOR_TMPDIR", raising=False)
    monkeypatch.delenv("XMLVALIDATOR_DEV_MODE", raising=False)


def _use_engine(monkeypatch: pytest.MonkeyPatch, **kwargs) -> list[str]:
    """Patch the CLI's engine class; returns the executables it was built with."""
    built: list[str] = []

    def factory(executable: str = "xmllint") -> MockEngine:
        built.append(executable)
        return MockEngine(executable, **kwargs)

    monkeypatch.setattr(cli, "XmllintEngine", factory)
    return built


INVALID = ProcessOutcome(returncode=3, stderr="doc.xml:4: bad age\ndoc.xml fails to validate\n")


def test_valid_document(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch)
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert result.exit_code == 0
    assert "Validating XML: doc.xml" in result.output
    assert "Using XSD: schema.xsd" in result.output
    assert "XML is valid." in result.output


def test_invalid_document_prints_table(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch, outcome=INVALID)
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert result.exit_code == 1
    assert "XML validation errors:" in result.output
    assert "File" in result.output
    assert "bad age" in result.output


def test_unparsed_failure_shows_raw_output(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch, outcome=ProcessOutcome(returncode=5, stderr="WXS schema failed to compile\n"))
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert result.exit_code == 1
    assert "no errors could be extracted" in result.output
    assert "WXS schema failed to compile" in result.output


def test_missing_argument_prints_usage() -> None:
    result = runner.invoke(cli.app, ["schema.xsd"])
    assert result.exit_code != 0
    assert "Usage" in result.output


def test_engine_not_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch, available=False)
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert result.exit_code == 2
    assert "An error occurred:" in result.output


def test_invocation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch, fail=True)
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert result.exit_code == 2
    assert "permission denied" in result.output


def test_json_output(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch, outcome=INVALID)
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml", "--format", "json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["valid"] is False
    assert payload["status"] == "invalid"
    assert payload["errors"] == [{"file": "doc.xml", "line": 4, "message": "bad age"}]


def test_yaml_output(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_engine(monkeypatch)
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml", "--format", "yaml"])
    assert result.exit_code == 0
    assert "status: valid" in result.output
    assert "valid: true" in result.output


def test_xmllint_option_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XMLVALIDATOR_XMLLINT", "/usr/local/bin/xmllint")
    built = _use_engine(monkeypatch)
    runner.invoke(cli.app, ["schema.xsd", "doc.xml", "--xmllint", "/opt/xmllint"])
    assert built == ["/opt/xmllint"]


def test_env_selects_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XMLVALIDATOR_XMLLINT", "/usr/local/bin/xmllint")
    built = _use_engine(monkeypatch)
    runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert built == ["/usr/local/bin/xmllint"]


def test_bad_options_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    opts = tmp_path / "opts.json"
    opts.write_text("{not json")
    monkeypatch.setenv("XMLVALIDATOR_OPTIONS_PATH", str(opts))
    result = runner.invoke(cli.app, ["schema.xsd", "doc.xml"])
    assert result.exit_code == 2
    assert "Cannot read options file" in result.output
