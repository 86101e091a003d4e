from __future__ import annotations

from typing import Callable

from smooth_streamer.strategies.base import Emit


class WordStreamingStrategy:
    """Reveals one word per step, keeping tag-like ``<...>`` spans whole.

    A step optionally swallows a tag span starting at the cursor, then the
    following run of non-space characters, emits the text up to that point
    and finally skips the spaces before the next word so they never form a
    fragment of their own.

    The tag scan only counts ``<`` and ``>``. It knows nothing about quoted
    attributes, and an unbalanced ``<`` makes it run to the end of the text.
    """

    @staticmethod
    def _skip_until(text: str, cursor: int, condition: Callable[[int], bool]) -> int:
        while cursor < len(text) and not condition(cursor):
            cursor += 1
        return cursor

    @staticmethod
    def _skip_tag(text: str, cursor: int) -> int:
        if cursor >= len(text) or text[cursor] != "<":
            return cursor
        depth = 0
        while True:
            if text[cursor] == "<":
                depth += 1
            elif text[cursor] == ">":
                depth -= 1
            cursor += 1
            if depth <= 0 or cursor >= len(text):
                return cursor

    async def stream(self, text: str, cursor: int, emit: Emit) -> int:
        cursor = self._skip_tag(text, cursor)
        cursor = self._skip_until(text, cursor, lambda i: text[i] == " ")
        emit(text[:cursor])
        return self._skip_until(text, cursor, lambda i: text[i] != " ")
