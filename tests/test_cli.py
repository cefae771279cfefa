import pathlib

import pytest

import earthgif.__main__ as main
from earthgif.config import Settings
from earthgif.errors import ConfigurationError


def test_settings_require_api_key(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="There is no API_KEY"):
        Settings.from_env()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv("EARTHGIF_API_BASE", "http://localhost:9/api")
    s = Settings.from_env(concurrency=2, loop=None, output=pathlib.Path("x.gif"))
    assert s.api_key == "k"
    assert s.api_base == "http://localhost:9/api"
    assert s.concurrency == 2
    assert s.loop is None
    assert s.output == pathlib.Path("x.gif")


def test_settings_reject_zero_concurrency(monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    with pytest.raises(ConfigurationError):
        Settings.from_env(concurrency=0)


def test_cli_exits_without_api_key(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    with pytest.raises(SystemExit, match="There is no API_KEY"):
        main.cli(["--no-serve"])


def test_cli_rejects_bad_date(monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    with pytest.raises(SystemExit, match="not a valid date"):
        main.cli(["--date", "01/02/2022", "--no-serve"])


def test_cli_runs_pipeline_then_serves(monkeypatch, tmp_path):
    monkeypatch.setenv("API_KEY", "k")
    calls = {}

    async def fake_run(settings, date, style=None):
        calls["run"] = (settings, date, style)
        return settings.output

    monkeypatch.setattr(main, "run", fake_run)
    monkeypatch.setattr(main, "serve", lambda settings: calls.setdefault("serve", settings))

    main.cli(["--date", "2022-01-01", "-o", str(tmp_path / "out.gif"), "--font", "", "--loop", "0"])

    settings, date, style = calls["run"]
    assert date == "2022-01-01"
    assert settings.output == tmp_path / "out.gif"
    assert settings.loop == 0
    assert style.font_path is None
    assert calls["serve"] is settings
