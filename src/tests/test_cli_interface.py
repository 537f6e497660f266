from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from extrepo import cli
from extrepo.exceptions import RepositoryRequestError
from extrepo.remote import RemoteExtensionRepository

runner = CliRunner()

RECORD = """
{
  // exported from the repository
  "id": "org.example:sample",
  "version": "1.2",
  "name": "Sample",
  "authors": [{"name": "Ann", "url": "not a url"}],
  "licenses": [{"name": "MIT"}, {"content": "orphan"}],
  "properties": [{"key": "k", "value": "1"}, {"key": "k", "value": "2"}],
  "repositories": [
    {"id": "ok", "type": "maven", "uri": "https://repo.example.org/"},
    {"id": "bad", "type": "maven", "uri": "::not a uri::"},
  ],
}
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_show_prints_adapted_extension(tmp_path: Path) -> None:
    record_path = _write(tmp_path, "record.json5", RECORD)
    licenses_path = _write(tmp_path, "licenses.json", '{"mit": "MIT text"}')

    result = runner.invoke(
        cli.app,
        [
            "show",
            str(record_path),
            "--repository-uri",
            "https://extensions.example.org/rest",
            "--licenses",
            str(licenses_path),
            "--log-level",
            "warning",
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["id"] == "org.example:sample"
    assert data["version"] == "1.2"
    assert data["authors"] == [{"name": "Ann", "url": None}]
    assert data["licenses"] == [{"name": "mit", "content": ["MIT text"]}]
    assert data["properties"] == {"k": "2"}
    assert data["repositories"] == [
        {"id": "ok", "type": "maven", "uri": "https://repo.example.org/"}
    ]
    assert data["rating"] is None
    assert data["scm"] is None
    assert data["file"] == (
        "https://extensions.example.org/rest/"
        "repository/extensions/org.example%3Asample/versions/1.2/file"
    )


def test_show_uses_repository_uri_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    record_path = _write(tmp_path, "record.json", '{"id": "ext"}')
    monkeypatch.setenv("EXTREPO_REPOSITORY_URI", "https://env.example.org/rest")

    result = runner.invoke(
        cli.app, ["show", str(record_path), "--log-level", "warning"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["version"] is None
    assert data["file"].startswith("https://env.example.org/rest/")


def test_show_fails_for_record_without_id(tmp_path: Path) -> None:
    record_path = _write(tmp_path, "record.json", '{"name": "anonymous"}')

    result = runner.invoke(cli.app, ["show", str(record_path)])

    assert result.exit_code == 1


@pytest.mark.parametrize("content", ["{broken", '["not", "a", "record"]'])
def test_show_fails_for_unreadable_record(tmp_path: Path, content: str) -> None:
    record_path = _write(tmp_path, "record.json", content)

    result = runner.invoke(cli.app, ["show", str(record_path)])

    assert result.exit_code == 1


def test_show_fails_for_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["show", str(tmp_path / "missing.json")])

    assert result.exit_code == 1


def test_fetch_prints_remote_extension(monkeypatch: pytest.MonkeyPatch) -> None:
    requested: list[tuple[str, str, str]] = []

    def _fetch_record(self, extension_id: str, version: str) -> dict:
        requested.append((self.descriptor.uri, extension_id, version))
        return {"id": extension_id, "version": version, "category": "macro"}

    monkeypatch.setattr(RemoteExtensionRepository, "fetch_record", _fetch_record)

    result = runner.invoke(
        cli.app,
        [
            "fetch",
            "org.example:macro",
            "3.0",
            "--repository-uri",
            "https://extensions.example.org/rest",
            "--log-level",
            "warning",
        ],
    )

    assert result.exit_code == 0, result.output
    assert requested == [
        ("https://extensions.example.org/rest", "org.example:macro", "3.0")
    ]
    data = json.loads(result.stdout)
    assert data["id"] == "org.example:macro"
    assert data["version"] == "3.0"
    assert data["category"] == "macro"


def test_fetch_fails_on_repository_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fetch_record(self, extension_id: str, version: str) -> dict:
        raise RepositoryRequestError("connection refused")

    monkeypatch.setattr(RemoteExtensionRepository, "fetch_record", _fetch_record)

    result = runner.invoke(cli.app, ["fetch", "org.example:macro", "3.0"])

    assert result.exit_code == 1


@pytest.mark.parametrize("command", ["show", "fetch"])
def test_invalid_log_level_is_rejected(tmp_path: Path, command: str) -> None:
    record_path = _write(tmp_path, "record.json", '{"id": "ext"}')
    arguments = [str(record_path)] if command == "show" else ["ext", "1.0"]

    result = runner.invoke(cli.app, [command, *arguments, "--log-level", "bogus"])

    assert result.exit_code == 1
    assert isinstance(result.exception, ValueError)
    assert "Invalid log level: 'bogus'" in str(result.exception)
