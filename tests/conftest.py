from pathlib import Path
from typing import Dict, List, Sequence

import pytest

import config
from db import database
from db.store import RecordStore
from errors import DrillGenerationError
from models.drill import DrillContent
from utils.drills import DrillGenerator


def _write_test_config(config_path: Path) -> None:
    config_path.write_text(
        "\n".join(
            [
                "[ollama]",
                "model = \"llama3.2\"",
                "timeout = 5",
                "",
                "[schedule]",
                "daily_goal = 10",
                "timezone = \"\"",
                "",
                "[drills]",
                "rate_limit_per_minute = 10",
                "delay_after = 8",
                "delay_seconds = 0.0",
            ]
        ),
        encoding="utf-8",
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / ".actcoach"
    config_dir.mkdir()
    config_path = config_dir / "config.toml"
    _write_test_config(config_path)
    for var in ("OLLAMA_MODEL", "OLLAMA_TIMEOUT", "ACTCOACH_DAILY_GOAL", "ACTCOACH_TIMEZONE",
                "DRILL_RATE_LIMIT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    monkeypatch.setattr(database, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(database, "DB_PATH", config_dir / "actcoach.db")
    return config_path


@pytest.fixture
def store(isolated_config) -> RecordStore:
    database.init_db()
    return database.get_store()


def make_drill(word: str, **extra) -> DrillContent:
    return DrillContent.model_validate(
        {
            "type": "Cloned",
            "content": f"The committee chose to _____ the proposal ({word}).",
            "options": [word, "lessen", "eliminate", "alleviate"],
            "correctAnswer": word,
            "explanation": f"Why {word}: it fits the formal register.",
            **extra,
        }
    )


class FakeDrillGenerator(DrillGenerator):
    """Counts batch calls and returns a canned drill per word."""

    def __init__(self, fail: bool = False, skip: Sequence[str] = ()):
        self.fail = fail
        self.skip = {word.lower() for word in skip}
        self.calls: List[List[str]] = []

    async def generate_batch(self, words: Sequence[str]) -> Dict[str, DrillContent]:
        self.calls.append(list(words))
        if self.fail:
            raise DrillGenerationError("model offline", words=list(words))
        return {
            word.lower(): make_drill(word.lower())
            for word in words
            if word.lower() not in self.skip
        }


@pytest.fixture
def generator() -> FakeDrillGenerator:
    return FakeDrillGenerator()
