import json
import os

import requests

from conftest import FakeResponse
from locsync.cli import EXIT_CONFIG, EXIT_FAIL, EXIT_OK, main


def _args(tmp_path, *extra):
    return [
        "download",
        "--base-url", "https://l10n.example.com",
        "--pid", "PID168",
        "--loc-version", "2.0",
        "--group", "LG725",
        "--output-path", str(tmp_path),
        *extra,
    ]


def test_missing_base_url_is_config_error(capsys):
    assert main(["upload", "--pid", "P", "--group", "G"]) == EXIT_CONFIG
    assert "Missing base URL" in capsys.readouterr().err


def test_download_requires_a_language(tmp_path, capsys):
    assert main(_args(tmp_path)) == EXIT_CONFIG
    assert "Missing language" in capsys.readouterr().err


def test_download_end_to_end(tmp_path, monkeypatch, capsys):
    seen = []

    def fake_get(url, **kwargs):
        seen.append((url, kwargs))
        return FakeResponse('"GREETING" = "Hallo";\n')

    monkeypatch.setattr(requests, "get", fake_get)

    assert main(_args(tmp_path, "--language", "de", "--insecure")) == EXIT_OK

    assert os.listdir(tmp_path) == ["de.json"]
    with open(tmp_path / "de.json", encoding="utf-8") as f:
        assert json.load(f) == {"GREETING": "Hallo"}
    url, kwargs = seen[0]
    assert url == "https://l10n.example.com/getStrings.php?pid=PID168&version=2.0&group=LG725&lang=de"
    assert kwargs["verify"] is False
    assert "Loading translations for de" in capsys.readouterr().out


def test_download_exit_code_reflects_failed_language(tmp_path, monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kw: FakeResponse("", status_code=404))

    assert main(_args(tmp_path, "--language", "de")) == EXIT_FAIL


def test_fail_empty_flag(tmp_path, monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kw: FakeResponse(""))

    assert main(_args(tmp_path, "--language", "de", "--fail-empty")) == EXIT_FAIL
    assert os.listdir(tmp_path) == []


def test_upload_conflict_exit_code(tmp_path, monkeypatch, capsys):
    (tmp_path / "a.json").write_text(json.dumps([
        {"id": "A", "defaultMessage": "Hello"},
        {"id": "A", "defaultMessage": "Bye"},
    ]), encoding="utf-8")
    posted = []
    monkeypatch.setattr(requests, "post", lambda *a, **kw: posted.append(a))

    code = main([
        "upload",
        "--base-url", "https://l10n.example.com",
        "--pid", "PID168",
        "--group", "LG725",
        "--file-pattern", str(tmp_path / "*.json"),
    ])

    assert code == EXIT_FAIL
    assert posted == []
    assert 'Duplicate message id "A"' in capsys.readouterr().err
