from __future__ import annotations

from smooth_streamer.strategies.base import Emit


class WholeStreamingStrategy:
    """Reveals the whole text in a single step."""

    async def stream(self, text: str, cursor: int, emit: Emit) -> int:
        emit(text)
        return len(text)
