"""HTML rendering of the conversion history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Collection, Optional, Sequence

from modules.services.history_service import HistoryEntry
from modules.utils.text import format_relative_time, truncate_text

EMPTY_HISTORY_HTML = '<p class="empty-history">No history yet...</p>'

_COPY_ICON = (
    '<svg width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    '<rect x="9" y="9" width="13" height="13" rx="2" ry="2"></rect>'
    '<path d="M5 15H4a2 2 0 0 1-2-2V4a2 2 0 0 1 2-2h9a2 2 0 0 1 2 2v1"></path></svg>'
)
_COPIED_ICON = (
    '<svg width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    '<polyline points="20 6 9 17 4 12"></polyline></svg>'
)

ACTION_REPLAY = "replay"
ACTION_COPY = "copy"


@dataclass(frozen=True, slots=True)
class HistoryAction:
    """A click on a rendered history entry."""

    verb: str
    index: int


def parse_history_action(raw: str) -> Optional[HistoryAction]:
    """Decode ``verb:index[:nonce]`` sent by the page script."""
    if not raw:
        return None
    parts = raw.strip().split(":")
    if len(parts) < 2 or parts[0] not in (ACTION_REPLAY, ACTION_COPY):
        return None
    try:
        index = int(parts[1])
    except ValueError:
        return None
    if index < 0:
        return None
    return HistoryAction(verb=parts[0], index=index)


class HistoryPresenter:
    """Turn history entries into the markup shown in the history panel."""

    def __init__(self, truncate_length: int = 80) -> None:
        self.truncate_length = truncate_length

    def render(
        self,
        entries: Sequence[HistoryEntry],
        now: Optional[datetime] = None,
        copied: Collection[int] = (),
    ) -> str:
        """Return one item per entry, newest first, or a placeholder."""
        if not entries:
            return EMPTY_HISTORY_HTML
        items = [
            self._render_item(index, entry, now, index in copied)
            for index, entry in enumerate(entries)
        ]
        return '<div class="history-list">' + "".join(items) + "</div>"

    def _render_item(
        self, index: int, entry: HistoryEntry, now: Optional[datetime], copied: bool
    ) -> str:
        mode = entry.mode.value
        copy_class = "copy-output copied" if copied else "copy-output"
        icon = _COPIED_ICON if copied else _COPY_ICON
        return (
            f'<div class="history-item" data-index="{index}">'
            '<div class="history-item-header">'
            f'<span class="history-mode {mode}">{mode.upper()}</span>'
            f'<span class="history-date">{format_relative_time(entry.timestamp, now)}</span>'
            "</div>"
            '<div class="history-content">'
            '<div class="history-text"><strong>Input:</strong> '
            f"{truncate_text(entry.input, self.truncate_length)}</div>"
            '<div class="history-output"><strong>Output:</strong> '
            f"{truncate_text(entry.output, self.truncate_length)}"
            f'<button class="{copy_class}" title="Copy output" data-index="{index}">{icon}</button>'
            "</div>"
            "</div>"
            "</div>"
        )
