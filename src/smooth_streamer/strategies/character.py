from __future__ import annotations

from smooth_streamer.strategies.base import Emit


class CharacterStreamingStrategy:
    """Reveals one more character per step."""

    async def stream(self, text: str, cursor: int, emit: Emit) -> int:
        cursor += 1
        emit(text[:cursor])
        return cursor
