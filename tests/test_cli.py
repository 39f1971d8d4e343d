from __future__ import annotations

from pathlib import Path

import pytest

from deepseektrans import cli
from deepseektrans.http import FetchResponse


class StubFetch:
    def __init__(self, response: FetchResponse):
        self.response = response
        self.calls = []

    async def __call__(self, url, *, method, headers, body):  # noqa: ANN001
        self.calls.append(body.payload)
        return self.response


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text('[deepseek]\napi_key = "sk-cli"\n', encoding="utf-8")
    return path


def _install(monkeypatch, response: FetchResponse) -> StubFetch:
    stub = StubFetch(response)
    monkeypatch.setattr(cli, "HttpxFetch", lambda timeout=None: stub)
    return stub


def test_cli_prints_translation(monkeypatch, capsys, config_file: Path):
    data = {"choices": [{"message": {"content": '"# Bonjour"'}}]}
    stub = _install(monkeypatch, FetchResponse(ok=True, status=200, data=data))

    code = cli.main(["--config", str(config_file), "--to", "fr", "hello", "world"])

    assert code == 0
    assert capsys.readouterr().out == "Bonjour\n"
    assert stub.calls[0]["messages"][1]["content"] == "Translate into fr:\nhello world"


def test_cli_reports_http_error(monkeypatch, capsys, config_file: Path):
    _install(
        monkeypatch,
        FetchResponse(ok=False, status=401, data={"error": "bad key"}),
    )

    code = cli.main(["--config", str(config_file), "hello"])

    assert code == 1
    err = capsys.readouterr().err
    assert "401" in err
    assert "bad key" in err


def test_cli_writes_default_config(tmp_path: Path, capsys):
    path = tmp_path / "config.toml"
    code = cli.main(["--config", str(path), "hello"])
    assert code == 2
    assert path.exists()
    assert "api_key" in capsys.readouterr().out


def test_cli_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("deepseektrans ")
