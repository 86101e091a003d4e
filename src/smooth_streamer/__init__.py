"""Paced, typewriter-style reveal of text that arrives in chunks."""

from .observable import Observable, Observer, Subscription
from .schema import StreamerOptions
from .strategies import (
    CharacterStreamingStrategy,
    StreamingMode,
    StreamingStrategy,
    WholeStreamingStrategy,
    WordStreamingStrategy,
    get_streaming_strategy,
)
from .streamer import SmoothStreamer, StrategyError, StreamState

__all__ = [
    "SmoothStreamer",
    "StreamState",
    "StrategyError",
    "StreamerOptions",
    "Observable",
    "Observer",
    "Subscription",
    "StreamingStrategy",
    "StreamingMode",
    "CharacterStreamingStrategy",
    "WordStreamingStrategy",
    "WholeStreamingStrategy",
    "get_streaming_strategy",
]
