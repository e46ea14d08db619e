from __future__ import annotations

import json
import logging


def test_settings_read_from_environment(monkeypatch):
    from currency_converter.core.config import Settings

    monkeypatch.setenv("API_KEY", "from-env")
    monkeypatch.setenv("REQUEST_TIMEOUT_S", "2.5")
    monkeypatch.delenv("DEFAULT_BASE_CURRENCY", raising=False)

    s = Settings(_env_file=None)
    assert s.api_key == "from-env"
    assert s.request_timeout_s == 2.5
    assert s.default_base_currency == "PLN"


def test_settings_read_dotenv_file(monkeypatch, tmp_path):
    from currency_converter.core.config import Settings

    monkeypatch.delenv("API_KEY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("API_KEY=from-dotenv\nUNRELATED=1\n")

    s = Settings(_env_file=env_file)
    assert s.api_key == "from-dotenv"


def test_json_formatter_includes_event_fields_and_run_id():
    from currency_converter.core.logging import JsonFormatter, _merge_fields, end_run, start_run

    token = start_run("run-1")
    try:
        fields = _merge_fields({"base_currency": "USD", "status_code": None})
    finally:
        end_run(token)

    record = logging.LogRecord(
        name="currency_converter.modules.rates.client",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="rates.fetch.success",
        args=(),
        exc_info=None,
    )
    record.event = "rates.fetch.success"
    record.fields = fields

    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "rates.fetch.success"
    assert payload["level"] == "INFO"
    assert payload["run_id"] == "run-1"
    assert payload["base_currency"] == "USD"
    assert "status_code" not in payload
    assert payload["ts"].endswith("Z")


def test_log_level_read_from_dotenv_file(monkeypatch, tmp_path):
    from currency_converter.core.config import Settings
    from currency_converter.core.logging import resolve_level

    monkeypatch.delenv("LOG_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=debug\n")

    s = Settings(_env_file=env_file)
    assert s.log_level == "debug"
    assert resolve_level(s.log_level) == logging.DEBUG


def test_resolve_level_falls_back_to_warning():
    from currency_converter.core.logging import resolve_level

    assert resolve_level("INFO") == logging.INFO
    assert resolve_level(" error ") == logging.ERROR
    assert resolve_level("chatty") == logging.WARNING
    assert resolve_level(None) == logging.WARNING
