from pathlib import Path

import config


def _write_config(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


def test_load_config_copies_example_when_missing(isolated_config):
    isolated_config.unlink()

    loaded = config.load_config()

    assert isolated_config.exists()
    assert loaded["schedule"]["daily_goal"] == 10
    assert loaded["drills"]["rate_limit_per_minute"] == 10
    assert loaded["logging"]["level"] == "INFO"


def test_load_config_fills_defaults_for_missing_sections(isolated_config):
    _write_config(isolated_config, "[ollama]\nmodel = \"mistral\"\n")

    loaded = config.load_config()

    assert loaded["ollama"] == {"model": "mistral", "timeout": 60}
    assert loaded["schedule"] == {"daily_goal": 10, "timezone": ""}
    assert loaded["drills"]["delay_seconds"] == 1.0


def test_env_overrides_win_over_file(isolated_config, monkeypatch):
    monkeypatch.setenv("OLLAMA_MODEL", "qwen2.5")
    monkeypatch.setenv("ACTCOACH_DAILY_GOAL", "15")
    monkeypatch.setenv("ACTCOACH_TIMEZONE", "Asia/Seoul")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    loaded = config.load_config()

    assert loaded["ollama"]["model"] == "qwen2.5"
    assert loaded["schedule"]["daily_goal"] == 15
    assert loaded["schedule"]["timezone"] == "Asia/Seoul"
    assert loaded["logging"]["level"] == "DEBUG"


def test_get_config_value_falls_back_to_default(isolated_config):
    assert config.get_config_value("ollama", "timeout") == 5
    assert config.get_config_value("ollama", "missing", "fallback") == "fallback"
    assert config.get_config_value("nope", "key") is None
