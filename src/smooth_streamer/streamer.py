from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections import deque
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Deque, Optional

from smooth_streamer.observable import Observable, Observer, Subscription
from smooth_streamer.schema import StreamerOptions
from smooth_streamer.strategies import StreamingMode, StreamingStrategy, get_streaming_strategy

Callback = Callable[[], Optional[Awaitable[Any]]]


class StrategyError(RuntimeError):
    pass


class StreamState(str, Enum):
    IDLE = "idle"
    REVEALING = "revealing"
    RUNNING_CALLBACK = "running_callback"


@dataclass(frozen=True)
class StreamSnapshot:
    """Cadence and strategy captured for one queued chunk."""

    interval_ms: int
    strategy: StreamingStrategy


@dataclass(frozen=True)
class QueuedUpdate:
    text: str
    snapshot: StreamSnapshot
    callback: Optional[Callback] = None


async def _delay(ms: float) -> None:
    await asyncio.sleep(ms / 1000)


def common_prefix_length(previous: str, current: str) -> int:
    limit = min(len(previous), len(current))
    for i in range(limit):
        if previous[i] != current[i]:
            return i
    return limit


def _check_interval(interval_ms: int) -> None:
    if interval_ms < 0:
        raise ValueError(f"interval_ms must be non-negative, got {interval_ms}")


class SmoothStreamer:
    """Reveals queued text chunks at a steady pace.

    Chunks passed to :meth:`enqueue` are processed strictly in order by a
    single asyncio task. Each chunk is merged into the target text (appended,
    or in ``replace_mode`` swapped in with the cursor rewound to the common
    prefix) and then revealed step by step with the strategy captured when
    the chunk was queued, sleeping ``interval_ms`` between steps minus the
    time the step itself took. Fragments go to :meth:`subscribe` observers;
    :meth:`on_stream_end` observers fire whenever the queue runs dry.
    """

    def __init__(
        self,
        interval_ms: int = 0,
        strategy: Optional[StreamingStrategy] = None,
        replace_mode: bool = False,
    ):
        _check_interval(interval_ms)
        self.interval_ms = interval_ms
        self.strategy = strategy or get_streaming_strategy(StreamingMode.WORD)
        self.replace_mode = replace_mode
        self.logger = logging.getLogger(__name__)

        self._text = ""
        self._cursor = 0
        self._queue: Deque[QueuedUpdate] = deque()
        self._state = StreamState.IDLE
        # bumped by flush(); a processing task from an older epoch stops at its next check
        self._epoch = 0
        self._task: Optional[asyncio.Task] = None

        self._fragments: Observable[str] = Observable()
        self._stream_end: Observable[None] = Observable()

    @classmethod
    def from_options(cls, options: StreamerOptions | None = None) -> "SmoothStreamer":
        opts = options or StreamerOptions.from_settings()
        return cls(opts.interval_ms, get_streaming_strategy(opts.mode), opts.replace_mode)

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_streaming(self) -> bool:
        return self._state is StreamState.REVEALING

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def pending(self) -> int:
        return len(self._queue)

    def set_interval(self, interval_ms: int, force: bool = False) -> "SmoothStreamer":
        _check_interval(interval_ms)
        self.interval_ms = interval_ms
        if force:
            self._rewrite_snapshots(lambda snap: replace(snap, interval_ms=interval_ms))
        return self

    def set_streaming_strategy(self, strategy: StreamingStrategy, force: bool = False) -> "SmoothStreamer":
        self.strategy = strategy
        if force:
            self._rewrite_snapshots(lambda snap: replace(snap, strategy=strategy))
        return self

    def _rewrite_snapshots(self, update: Callable[[StreamSnapshot], StreamSnapshot]) -> None:
        self._queue = deque(replace(item, snapshot=update(item.snapshot)) for item in self._queue)
        self.logger.debug("SmoothStreamer: rewrote queued snapshots pending=%s", len(self._queue))

    def subscribe(
        self,
        next: Optional[Callable[[str], Any]] = None,
        error: Optional[Callable[[BaseException], Any]] = None,
        complete: Optional[Callable[[], Any]] = None,
    ) -> Subscription:
        return self._fragments.subscribe(Observer(next=next, error=error, complete=complete))

    def on_stream_end(self, callback: Callable[[], Any]) -> Subscription:
        return self._stream_end.subscribe(Observer(next=lambda _: callback()))

    def flush(self) -> None:
        self._epoch += 1
        self.logger.debug("SmoothStreamer: flush dropped=%s text_len=%s", len(self._queue), len(self._text))
        self._queue = deque()
        self._text = ""
        self._cursor = 0
        # a running completion callback keeps its guard; its task resumes the queue afterwards
        if self._state is not StreamState.RUNNING_CALLBACK:
            self._state = StreamState.IDLE

    def enqueue(self, text: str, callback: Optional[Callback] = None) -> None:
        self._queue.append(QueuedUpdate(text, StreamSnapshot(self.interval_ms, self.strategy), callback))
        self.logger.debug("SmoothStreamer: enqueue len=%s pending=%s state=%s", len(text), len(self._queue), self._state.value)
        if self._state is StreamState.IDLE:
            self._task = asyncio.get_running_loop().create_task(self._process_queue(self._epoch))
            self._state = StreamState.REVEALING

    next = enqueue

    async def join(self) -> None:
        """Wait until the queue has been fully processed."""
        while self._task is not None and not self._task.done():
            await self._task

    async def _process_queue(self, epoch: int) -> None:
        try:
            while True:
                if epoch != self._epoch:
                    self._finish_flushed()
                    return
                if not self._queue:
                    self._fragments.complete()
                    self._stream_end.next(None)
                    if epoch != self._epoch:
                        return
                    # an observer may have queued more text while being notified
                    if self._queue:
                        continue
                    self.logger.debug("SmoothStreamer: queue drained text_len=%s", len(self._text))
                    self._state = StreamState.IDLE
                    return

                head = self._queue[0]
                self._state = StreamState.REVEALING
                previous = (self._text, self._cursor)
                self._reconcile(head.text)
                try:
                    await self._reveal(epoch)
                except Exception as exc:
                    if epoch != self._epoch:
                        continue
                    self._queue.popleft()
                    self._text, self._cursor = previous
                    self.logger.exception("SmoothStreamer: reveal failed, dropping chunk len=%s", len(head.text))
                    self._fragments.error(exc)
                    continue

                if epoch != self._epoch:
                    continue
                self._queue.popleft()
                await self._run_callback(head.callback)
                # flush() leaves the callback guard in place, so this task still owns the queue
                epoch = self._epoch
        except BaseException:
            if epoch == self._epoch:
                self._state = StreamState.IDLE
            raise

    def _finish_flushed(self) -> None:
        """Report the drain of a flushed queue unless a newer task has taken over."""
        if self._task is not asyncio.current_task() or self._queue:
            return
        if self._state is not StreamState.IDLE:
            return
        self.logger.debug("SmoothStreamer: flushed queue drained")
        self._fragments.complete()
        self._stream_end.next(None)

    def _reconcile(self, text: str) -> None:
        if self.replace_mode:
            self._cursor = common_prefix_length(self._text, text)
            self._text = text
        else:
            self._text += text

    async def _reveal(self, epoch: int) -> None:
        def emit(fragment: str) -> None:
            if epoch == self._epoch:
                self._fragments.next(fragment)

        while epoch == self._epoch and self._cursor < len(self._text):
            # re-read every step so a forced reconfiguration applies mid-chunk
            snapshot = self._queue[0].snapshot
            started = time.perf_counter()
            cursor = await snapshot.strategy.stream(self._text, self._cursor, emit)
            if epoch != self._epoch:
                return
            if cursor <= self._cursor:
                raise StrategyError(
                    f"{type(snapshot.strategy).__name__} made no progress at cursor={self._cursor}"
                )
            self._cursor = min(cursor, len(self._text))
            elapsed_ms = (time.perf_counter() - started) * 1000
            await _delay(max(0.0, snapshot.interval_ms - elapsed_ms))

    async def _run_callback(self, callback: Optional[Callback]) -> None:
        if callback is None:
            return
        self._state = StreamState.RUNNING_CALLBACK
        try:
            result = callback()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            self.logger.exception("SmoothStreamer: completion callback failed")
            self._fragments.error(exc)
        finally:
            self._state = StreamState.REVEALING


__all__ = [
    "SmoothStreamer",
    "StreamState",
    "StreamSnapshot",
    "QueuedUpdate",
    "StrategyError",
    "common_prefix_length",
]
