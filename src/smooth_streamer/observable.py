from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(eq=False)
class Observer(Generic[T]):
    """Handlers attached to an Observable. Every slot is optional."""

    next: Optional[Callable[[T], Any]] = None
    error: Optional[Callable[[BaseException], Any]] = None
    complete: Optional[Callable[[], Any]] = None


class Subscription:
    """Token returned by Observable.subscribe; calling it detaches the observer."""

    def __init__(self, observable: "Observable[Any]", observer: Observer[Any]):
        self._observable: Optional[Observable[Any]] = observable
        self._observer = observer

    @property
    def closed(self) -> bool:
        return self._observable is None

    def unsubscribe(self) -> None:
        if self._observable is None:
            return
        self._observable._remove(self._observer)
        self._observable = None

    __call__ = unsubscribe


class Observable(Generic[T]):
    """Minimal multi-subscriber channel.

    Observers are notified in registration order. Notification works on a
    copy of the observer list, so a handler may unsubscribe itself (or others)
    while a value is being delivered. Observers stay registered after
    ``complete``; the channel can complete many times over its lifetime.
    """

    def __init__(self) -> None:
        self._observers: List[Observer[T]] = []

    def __len__(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Observer[T]) -> Subscription:
        self._observers.append(observer)
        return Subscription(self, observer)

    def _remove(self, observer: Observer[T]) -> None:
        self._observers = [obs for obs in self._observers if obs is not observer]

    def next(self, value: T) -> None:
        for observer in list(self._observers):
            if observer.next is not None:
                observer.next(value)

    def error(self, exc: BaseException) -> None:
        for observer in list(self._observers):
            if observer.error is not None:
                observer.error(exc)

    def complete(self) -> None:
        for observer in list(self._observers):
            if observer.complete is not None:
                observer.complete()


__all__ = ["Observer", "Observable", "Subscription"]
