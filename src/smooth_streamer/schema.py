from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from smooth_streamer.config import Settings, settings as default_settings
from smooth_streamer.strategies import StreamingMode


class StreamerOptions(BaseModel):
    interval_ms: int = Field(0, ge=0)
    mode: StreamingMode = StreamingMode.WORD
    replace_mode: bool = False

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, value):
        return StreamingMode.parse(value)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StreamerOptions":
        cfg = settings or default_settings
        return cls(interval_ms=cfg.interval_ms, mode=cfg.mode, replace_mode=cfg.replace_mode)


__all__ = ["StreamerOptions"]
