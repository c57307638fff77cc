from __future__ import annotations

import pytest

from maytapi_relay import cli
from maytapi_relay.config import get_settings


def test_main_exits_before_binding_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAYTAPI_INSTANCE_ID", raising=False)
    monkeypatch.setenv("MAYTAPI_TOKEN", "tok")
    get_settings.cache_clear()

    started: list[object] = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: started.append(a))

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert started == []
    get_settings.cache_clear()


def test_main_starts_server_with_configured_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAYTAPI_INSTANCE_ID", "abc")
    monkeypatch.setenv("MAYTAPI_TOKEN", "tok")
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()

    calls: list[dict[str, object]] = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kw: calls.append(kw))

    cli.main(["--host", "127.0.0.1"])

    assert calls == [{"host": "127.0.0.1", "port": 4000, "log_level": "info"}]
    get_settings.cache_clear()


def test_unknown_log_level_env_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "trace")

    args = cli.parse_args([])

    assert args.log_level == "info"


def test_explicit_port_zero_is_honoured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAYTAPI_INSTANCE_ID", "abc")
    monkeypatch.setenv("MAYTAPI_TOKEN", "tok")
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()

    calls: list[dict[str, object]] = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kw: calls.append(kw))

    cli.main(["--port", "0", "--host", ""])

    assert calls == [{"host": "", "port": 0, "log_level": "info"}]
    get_settings.cache_clear()
