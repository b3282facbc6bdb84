"""Session controller mediating between the codec, history and presenter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from config.settings import AppConfig
from modules.codec import base64_codec
from modules.codec.base64_codec import CodecError, CodecMode
from modules.services.history_service import HistoryEntry, HistoryService
from modules.ui.presenter import HistoryPresenter
from modules.utils.feedback import FeedbackTimers

logger = logging.getLogger(__name__)

RESULT_PLACEHOLDER = "The result will appear here..."
EMPTY_INPUT_MESSAGE = "Enter some text first! 🤔"
NOTHING_TO_COPY_MESSAGE = "Nothing to copy! 📋"
DECODE_ERROR_MESSAGE = "Decoding error! Check if it's valid Base64. 😵"
ENCODE_ERROR_MESSAGE = "Encoding error! 😵"
COPY_ERROR_MESSAGE = "Copy error! 😞"

RESULT_KEY = "result"
COPY_RESULT_KEY = "copy_result"
HISTORY_COPY_PREFIX = "history:"


class ValidationError(ValueError):
    """Raised when the user supplied nothing to work with."""


class ClipboardError(RuntimeError):
    """Raised when the browser refused a clipboard write."""


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Text shown in the result area, flagged as success or error."""

    text: str
    is_error: bool = False


@dataclass
class SessionState:
    """Per-session UI state."""

    mode: CodecMode = CodecMode.ENCODE
    input_text: str = ""
    result: Optional[ConversionResult] = None
    pending_copy: Optional[str] = None
    feedback: FeedbackTimers[str] = field(default_factory=FeedbackTimers)

    @property
    def result_text(self) -> str:
        return self.result.text if self.result else ""

    def copied_history_indices(self) -> set[int]:
        indices: set[int] = set()
        for key in self.feedback.active_keys():
            if key.startswith(HISTORY_COPY_PREFIX):
                indices.add(int(key[len(HISTORY_COPY_PREFIX):]))
        return indices


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlaygroundController:
    """Implements the user actions of the playground."""

    def __init__(
        self,
        config: AppConfig,
        history: HistoryService,
        presenter: HistoryPresenter,
        converter: Callable[[CodecMode, str], str] = base64_codec.convert,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config
        self.history = history
        self.presenter = presenter
        self.converter = converter
        self.clock = clock

    def switch_mode(self, state: SessionState, mode: CodecMode | str) -> SessionState:
        """Change the conversion direction and blank the result."""
        state.mode = CodecMode(mode)
        state.result = None
        state.feedback.cancel(RESULT_KEY)
        return state

    def submit(self, state: SessionState, raw_input: str) -> ConversionResult:
        """Convert ``raw_input`` in the current mode and record it on success."""
        state.input_text = raw_input or ""
        try:
            text = self._require_text(raw_input)
            output = self.converter(state.mode, text)
            if not output:
                raise CodecError(state.mode, "Conversion produced no output")
        except ValidationError as exc:
            return self._show_error(state, str(exc))
        except CodecError as exc:
            logger.debug("Conversion failed (%s): %s", state.mode.value, exc)
            message = DECODE_ERROR_MESSAGE if state.mode is CodecMode.DECODE else ENCODE_ERROR_MESSAGE
            return self._show_error(state, message)

        state.result = ConversionResult(text=output)
        state.feedback.cancel(RESULT_KEY)
        self.history.append(
            HistoryEntry(mode=state.mode, input=text, output=output, timestamp=self.clock())
        )
        logger.debug("Recorded %s conversion of %d characters", state.mode.value, len(text))
        return state.result

    def copy_result(self, state: SessionState) -> Optional[str]:
        """Return the text to place on the clipboard, or None after reporting why not."""
        result = state.result
        if result is None or result.is_error or not result.text:
            self._show_error(state, NOTHING_TO_COPY_MESSAGE)
            return None
        state.pending_copy = COPY_RESULT_KEY
        return result.text

    def clear_input(self, state: SessionState) -> SessionState:
        """Reset the input and result areas; history is left alone."""
        state.input_text = ""
        state.result = None
        state.feedback.cancel(RESULT_KEY)
        return state

    def clear_history(self, confirmed: bool) -> bool:
        """Clear history when the user confirmed; return whether it happened."""
        if not confirmed:
            return False
        self.history.clear()
        logger.info("History cleared")
        return True

    def replay_entry(self, state: SessionState, index: int) -> Optional[HistoryEntry]:
        """Load a history entry back into the input area."""
        entry = self._entry_at(index)
        if entry is None:
            return None
        state.mode = entry.mode
        state.input_text = entry.input
        state.result = ConversionResult(text=entry.output)
        state.feedback.cancel(RESULT_KEY)
        return entry

    def copy_entry_output(self, state: SessionState, index: int) -> Optional[str]:
        """Return a history entry's output for the clipboard."""
        entry = self._entry_at(index)
        if entry is None:
            return None
        state.pending_copy = f"{HISTORY_COPY_PREFIX}{index}"
        return entry.output

    def report_clipboard(self, state: SessionState, outcome: str) -> bool:
        """Complete a pending clipboard write with the browser's outcome."""
        target = state.pending_copy
        if target is None or not outcome:
            return False
        state.pending_copy = None
        try:
            self._check_clipboard_outcome(outcome)
        except ClipboardError as exc:
            logger.warning("Clipboard write failed: %s", exc)
            self._show_error(state, COPY_ERROR_MESSAGE)
            return False

        seconds = (
            self.config.copy_feedback_seconds
            if target == COPY_RESULT_KEY
            else self.config.history_feedback_seconds
        )
        state.feedback.show(target, "copied", seconds)
        return True

    def tick(self, state: SessionState) -> list[str]:
        """Expire transient feedback; error results disappear with it."""
        expired = state.feedback.expire()
        if RESULT_KEY in expired and state.result is not None and state.result.is_error:
            state.result = None
        return expired

    def render_history(self, state: Optional[SessionState] = None) -> str:
        """Render the current history with the session's copy indicators."""
        copied = state.copied_history_indices() if state is not None else set()
        return self.presenter.render(self.history.load(), now=self.clock(), copied=copied)

    # Internal helpers ---------------------------------------------------------
    def _require_text(self, raw_input: Optional[str]) -> str:
        text = (raw_input or "").strip()
        if not text:
            raise ValidationError(EMPTY_INPUT_MESSAGE)
        return text

    def _check_clipboard_outcome(self, outcome: str) -> None:
        if outcome == "ok":
            return
        detail = outcome.split(":", 1)[1] if ":" in outcome else outcome
        raise ClipboardError(detail or "clipboard unavailable")

    def _show_error(self, state: SessionState, message: str) -> ConversionResult:
        state.result = ConversionResult(text=message, is_error=True)
        state.feedback.show(RESULT_KEY, message, self.config.error_display_seconds)
        return state.result

    def _entry_at(self, index: int) -> Optional[HistoryEntry]:
        entries = self.history.load()
        if 0 <= index < len(entries):
            return entries[index]
        return None
