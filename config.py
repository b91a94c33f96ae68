"""
Settings for the relay and the client, read from the environment.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_PORT = 3001
DEFAULT_BACKEND_URL = "http://localhost:3001"
DEFAULT_STORAGE_PATH = Path.home() / ".starlight_weaver" / "local_storage.json"


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var; unknown values fall back to the default."""
    value = os.getenv(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Read an integer env var; unparseable values fall back to the default."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime configuration."""

    # Upstream model
    gemini_api_key: Optional[str] = None
    gemini_base_url: str = DEFAULT_BASE_URL
    gemini_model: str = DEFAULT_MODEL

    # Relay server
    port: int = DEFAULT_PORT

    # Client
    backend_url: str = DEFAULT_BACKEND_URL
    storage_path: Path = DEFAULT_STORAGE_PATH

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def log_level_value(self) -> int:
        level = getattr(logging, self.log_level.strip().upper(), None)
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> Settings:
    """Build settings from the current environment."""
    storage_path = os.getenv("STORAGE_PATH")
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        port=_env_int("PORT", DEFAULT_PORT),
        backend_url=os.getenv("BACKEND_URL", DEFAULT_BACKEND_URL).rstrip("/"),
        storage_path=Path(storage_path).expanduser() if storage_path else DEFAULT_STORAGE_PATH,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=_env_bool("LOG_JSON", False),
    )
