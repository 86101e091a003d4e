from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


@dataclass
class Settings:
    interval_ms: int = int(os.getenv("SMOOTH_STREAM_INTERVAL_MS", "20"))
    mode: str = os.getenv("SMOOTH_STREAM_MODE", "word")
    replace_mode: bool = _get_bool("SMOOTH_STREAM_REPLACE")

    log_level: str = os.getenv("SMOOTH_STREAM_LOG_LEVEL", "INFO")


settings = Settings()
