"""Conversion history tracking."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

from modules.codec.base64_codec import CodecMode
from modules.services.storage_service import StorageService, StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A single successful conversion."""

    mode: CodecMode
    input: str
    output: str
    timestamp: Optional[datetime]  # None when a stored date could not be parsed

    def to_dict(self) -> dict[str, str]:
        """Return the persisted representation."""
        return {
            "mode": self.mode.value,
            "input": self.input,
            "output": self.output,
            "date": format_timestamp(self.timestamp or datetime.now(timezone.utc)),
        }

    @classmethod
    def from_dict(cls, payload: Any) -> Optional["HistoryEntry"]:
        """Build an entry from stored data, or None when the data is unusable."""
        if not isinstance(payload, dict):
            return None
        try:
            mode = CodecMode(payload.get("mode"))
        except ValueError:
            return None
        source = payload.get("input")
        output = payload.get("output")
        if not isinstance(source, str) or not isinstance(output, str) or not source or not output:
            return None
        return cls(mode=mode, input=source, output=output, timestamp=parse_timestamp(payload.get("date")))


def format_timestamp(value: datetime) -> str:
    """Return an ISO-8601 UTC string with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string; naive values are treated as UTC."""
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class HistoryService:
    """Bounded, newest-first history persisted in a single storage slot."""

    def __init__(self, storage: StorageService, key: str, capacity: int = 10) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.storage = storage
        self.key = key
        self.capacity = capacity
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    def load(self) -> List[HistoryEntry]:
        """Return the persisted history; never raises."""
        with self._lock:
            try:
                raw = self.storage.get_item(self.key)
            except StorageUnavailableError as exc:
                logger.warning("History storage unavailable, using session history: %s", exc)
                return list(self._entries)
            self._entries = self._parse(raw)
            return list(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        """Prepend ``entry``, drop the oldest beyond capacity and persist."""
        with self._lock:
            self._entries = [entry, *self._entries][: self.capacity]
            payload = json.dumps([item.to_dict() for item in self._entries], ensure_ascii=False)
            try:
                self.storage.set_item(self.key, payload)
            except StorageUnavailableError as exc:
                logger.warning("History not persisted: %s", exc)

    def clear(self) -> None:
        """Remove the persisted history."""
        with self._lock:
            self._entries = []
            try:
                self.storage.remove_item(self.key)
            except StorageUnavailableError as exc:
                logger.warning("History not cleared from storage: %s", exc)

    def _parse(self, raw: Optional[str]) -> List[HistoryEntry]:
        if not raw or not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt history in slot '%s'", self.key)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring non-list history in slot '%s'", self.key)
            return []
        entries = [entry for entry in map(HistoryEntry.from_dict, data) if entry is not None]
        return entries[: self.capacity]
