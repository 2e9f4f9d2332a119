"""Small lock-backed atomic cells for state shared between event producers.

Chat and tick events may be delivered from different threads, so every
read-modify-write on notifier state goes through one of these. The lock is
held only while the new value is computed and committed.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class AtomicReference(Generic[T]):
    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value

    def get_and_set(self, value: T) -> T:
        with self._lock:
            old = self._value
            self._value = value
            return old

    def compare_and_set(self, expected: T, value: T) -> bool:
        """Commit ``value`` only if the current value is still ``expected``."""
        with self._lock:
            if self._value is not expected and self._value != expected:
                return False
            self._value = value
            return True

    def get_and_update(self, fn: Callable[[T], T]) -> T:
        with self._lock:
            old = self._value
            self._value = fn(old)
            return old

    def update_and_get(self, fn: Callable[[T], T]) -> T:
        with self._lock:
            self._value = fn(self._value)
            return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get()!r})"


class AtomicInteger(AtomicReference[int]):
    def __init__(self, value: int = 0) -> None:
        super().__init__(value)

    def increment_and_get(self) -> int:
        return self.update_and_get(lambda i: i + 1)

    def get_and_increment(self) -> int:
        return self.get_and_update(lambda i: i + 1)

    def decrement_floor(self, floor: int = 0) -> int:
        """Decrement without going below ``floor``. Returns the previous value."""
        return self.get_and_update(lambda i: max(i - 1, floor))
