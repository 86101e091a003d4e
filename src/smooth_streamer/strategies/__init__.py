from __future__ import annotations

from typing import Dict, Type

from .base import Emit, StreamingMode, StreamingStrategy
from .character import CharacterStreamingStrategy
from .whole import WholeStreamingStrategy
from .word import WordStreamingStrategy

_STRATEGIES: Dict[StreamingMode, Type] = {
    StreamingMode.CHARACTER: CharacterStreamingStrategy,
    StreamingMode.WORD: WordStreamingStrategy,
    StreamingMode.WHOLE: WholeStreamingStrategy,
}


def get_streaming_strategy(mode: StreamingMode | str) -> StreamingStrategy:
    """Return a fresh strategy instance for ``mode`` ("character", "word" or "whole")."""
    return _STRATEGIES[StreamingMode.parse(mode)]()


__all__ = [
    "Emit",
    "StreamingMode",
    "StreamingStrategy",
    "CharacterStreamingStrategy",
    "WordStreamingStrategy",
    "WholeStreamingStrategy",
    "get_streaming_strategy",
]
