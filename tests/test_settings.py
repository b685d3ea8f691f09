from datetime import date, datetime
from pathlib import Path

import pytest

from hisab.core import settings
from hisab.domain.timefmt import days_in_month, format_day_label, parse_iso_date, shift_month
from hisab.logger import get_logging_config


def test_read_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "# Hisab configuration\n"
        "OPENAI_MODEL: gpt-test  # inline comment\n"
        'OPENAI_BASE_URL: "http://localhost:11434/v1"\n'
        "DATA_DIR:\n"
        "not a setting\n",
        encoding="utf-8",
    )

    values = settings.read_config_file(str(config_path))

    assert values == {
        "OPENAI_MODEL": "gpt-test",
        "OPENAI_BASE_URL": "http://localhost:11434/v1",
    }


def test_read_config_file_missing() -> None:
    assert settings.read_config_file(None) == {}
    assert settings.read_config_file("/nonexistent/config.yaml") == {}


def test_get_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INSIGHT_TRANSACTION_LIMIT", "20")
    assert settings.get_env_int("INSIGHT_TRANSACTION_LIMIT", 50, min_value=1) == 20

    monkeypatch.setenv("INSIGHT_TRANSACTION_LIMIT", "zero")
    assert settings.get_env_int("INSIGHT_TRANSACTION_LIMIT", 50, min_value=1) == 50

    monkeypatch.setenv("INSIGHT_TRANSACTION_LIMIT", "0")
    assert settings.get_env_int("INSIGHT_TRANSACTION_LIMIT", 50, min_value=1) == 50


def test_secret_values_are_masked() -> None:
    assert settings._mask_env_value("OPENAI_API_KEY", "sk-abcdef123") == "sk...23"
    assert settings._mask_env_value("OPENAI_MODEL", "gpt-4o-mini") == "gpt-4o-mini"
    assert settings._mask_env_value("OPENAI_API_KEY", "abc") == "****"


def test_logging_config_adds_file_handler(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = get_logging_config()

    assert config["loggers"][""]["level"] == "DEBUG"
    assert config["loggers"][""]["handlers"] == ["console", "file"]
    assert config["handlers"]["file"]["filename"] == str(tmp_path / "app.log")


def test_date_helpers() -> None:
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2100, 2) == 28
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 5, 0) == (2024, 5)
    assert format_day_label(date(2023, 10, 5)) == "05.10.2023"
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_iso_date(datetime(2024, 1, 2, 15, 30)) == date(2024, 1, 2)
    assert parse_iso_date(None) == date.today()
    with pytest.raises(ValueError):
        parse_iso_date("29/02/2024")
