import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".actcoach"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"

def load_config() -> Dict[str, Any]:
    """Load config from ~/.actcoach/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # Load .env for overrides (e.g., OLLAMA_MODEL env var)
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    ollama_cfg = config.get("ollama", {})
    config["ollama"] = {
        "model": os.getenv("OLLAMA_MODEL", ollama_cfg.get("model", "llama3.2")),
        "timeout": int(os.getenv("OLLAMA_TIMEOUT", ollama_cfg.get("timeout", 60))),
    }
    schedule_cfg = config.get("schedule", {})
    config["schedule"] = {
        "daily_goal": int(os.getenv("ACTCOACH_DAILY_GOAL", schedule_cfg.get("daily_goal", 10))),
        # Empty timezone means the machine's local zone
        "timezone": os.getenv("ACTCOACH_TIMEZONE", schedule_cfg.get("timezone", "")),
    }
    drills_cfg = config.get("drills", {})
    config["drills"] = {
        "rate_limit_per_minute": int(os.getenv(
            "DRILL_RATE_LIMIT", drills_cfg.get("rate_limit_per_minute", 10)
        )),
        "delay_after": int(drills_cfg.get("delay_after", 8)),
        "delay_seconds": float(drills_cfg.get("delay_seconds", 1.0)),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("LOG_LEVEL", logging_cfg.get("level", "INFO")).upper(),
    }
    return config

def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('ollama', 'model')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value
