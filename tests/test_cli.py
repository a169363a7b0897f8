"""Tests for the chatrefs CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from chatrefs.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep settings independent of the developer's environment and .env files."""

    for key in ("CHATREFS_ENV_FILE", "CHATREFS_OUTPUT_FORMAT", "CHATREFS_MAX_TEXT_CHARS", "CHATREFS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_extract_json() -> None:
    result = runner.invoke(
        app,
        ["extract", "[2](https://b.example.com/x) [1](https://a.example.com/doc)", "--format", "json"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [d["citationNumber"] for d in data] == [1, 2]
    assert data[0]["url"] == "https://a.example.com/doc"


def test_extract_text_from_file(tmp_path: Path) -> None:
    path = tmp_path / "message.txt"
    path.write_text("See [Guide](https://b.example.com/guide).", encoding="utf-8")

    result = runner.invoke(app, ["extract", "--text-file", str(path), "--format", "text"])

    assert result.exit_code == 0, result.output
    assert "References" in result.stdout
    assert "1. SRC Guide (https://b.example.com/guide)" in result.stdout


def test_extract_default_format_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHATREFS_OUTPUT_FORMAT", "json")

    result = runner.invoke(app, ["extract", "nothing to cite"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == []


def test_extract_table() -> None:
    result = runner.invoke(app, ["extract", "[1](https://a.example.com/doc)", "--format", "table"])

    assert result.exit_code == 0, result.output
    assert "References" in result.stdout
    assert "[1]" in result.stdout


def test_extract_requires_input() -> None:
    result = runner.invoke(app, ["extract"])

    assert result.exit_code == 2


def test_extract_rejects_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("  \n", encoding="utf-8")

    result = runner.invoke(app, ["extract", "--text-file", str(path)])

    assert result.exit_code == 2


def test_extract_rejects_unknown_format() -> None:
    result = runner.invoke(app, ["extract", "https://a.example.com", "--format", "xml"])

    assert result.exit_code == 2


def test_extract_enforces_text_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHATREFS_MAX_TEXT_CHARS", "10")

    result = runner.invoke(app, ["extract", "https://a.example.com/long", "--format", "json"])

    assert result.exit_code == 2


def test_conversation_command(tmp_path: Path) -> None:
    path = tmp_path / "conv.json"
    path.write_text(
        json.dumps(
            {
                "id": "conv-1",
                "messages": [
                    {"id": "m1", "text": "question"},
                    {"id": "m2", "text": "Answer [1](https://a.example.com/doc)"},
                ],
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["conversation", str(path), "--format", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data == [
        {
            "url": "https://a.example.com/doc",
            "label": "doc",
            "domain": "a.example.com",
            "citationNumber": 1,
            "occurrences": 2,
        }
    ]


def test_conversation_command_rejects_invalid_file(tmp_path: Path) -> None:
    path = tmp_path / "conv.json"
    path.write_text('{"messages": []}', encoding="utf-8")

    result = runner.invoke(app, ["conversation", str(path)])

    assert result.exit_code == 2


def test_conversation_command_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["conversation", str(tmp_path / "missing.json")])

    assert result.exit_code == 2


def test_extract_missing_text_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", "--text-file", str(tmp_path / "nope.txt")])

    assert result.exit_code == 2


def test_extract_non_utf8_text_file(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes("résumé https://a.example.com".encode("latin-1"))

    result = runner.invoke(app, ["extract", "--text-file", str(path)])

    assert result.exit_code == 2
