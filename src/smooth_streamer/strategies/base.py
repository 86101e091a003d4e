from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol, runtime_checkable

Emit = Callable[[str], None]


@runtime_checkable
class StreamingStrategy(Protocol):
    """Decides how much of ``text`` becomes visible on one reveal step.

    ``stream`` emits the visible prefix through ``emit`` and returns the new
    cursor. The returned cursor never moves backwards and is strictly greater
    than ``cursor`` whenever ``cursor < len(text)``.
    """

    async def stream(self, text: str, cursor: int, emit: Emit) -> int:
        ...


class StreamingMode(str, Enum):
    CHARACTER = "character"
    WORD = "word"
    WHOLE = "whole"

    @classmethod
    def parse(cls, value: "StreamingMode | str") -> "StreamingMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown streaming mode {value!r}; expected one of: {choices}") from None


__all__ = ["Emit", "StreamingStrategy", "StreamingMode"]
