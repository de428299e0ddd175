"""Observable state holder with synchronous notification."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]


@dataclass
class Observable(Generic[T]):
    """Current value plus subscribers notified on every replacement."""

    value: T
    _subscribers: list[Subscriber] = field(default_factory=list)

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> T:
        """Replace the value and notify subscribers in subscription order."""
        self.value = value
        for subscriber in list(self._subscribers):
            subscriber(value)
        return value

    def update(self, func: Callable[[T], T]) -> T:
        """Derive the next value from the current one."""
        return self.set(func(self.value))

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe
