"""Per-element transient feedback with expiring deadlines."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, TypeVar

V = TypeVar("V")


@dataclass
class FeedbackEntry(Generic[V]):
    """Feedback value shown until ``expires_at``."""

    value: V
    expires_at: float


class FeedbackTimers(Generic[V]):
    """One pending revert per UI element key.

    Showing feedback on a key that already has some replaces its deadline, so
    a control activated twice in quick succession reverts once, after the
    later activation.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._data: Dict[str, FeedbackEntry[V]] = {}

    def show(self, key: str, value: V, seconds: float) -> None:
        """Display ``value`` on ``key`` for ``seconds``."""
        self._data[key] = FeedbackEntry(value=value, expires_at=self.clock() + seconds)

    def get(self, key: str) -> Optional[V]:
        """Return the active feedback for ``key``, if any."""
        entry = self._data.get(key)
        if entry is None or entry.expires_at <= self.clock():
            return None
        return entry.value

    def active_keys(self) -> List[str]:
        """Return keys whose feedback has not expired yet."""
        now = self.clock()
        return [key for key, entry in self._data.items() if entry.expires_at > now]

    def cancel(self, key: str) -> None:
        """Drop pending feedback for ``key`` without waiting for it to expire."""
        self._data.pop(key, None)

    def expire(self) -> List[str]:
        """Remove and return every key whose deadline has passed."""
        now = self.clock()
        expired = [key for key, entry in self._data.items() if entry.expires_at <= now]
        for key in expired:
            del self._data[key]
        return expired
