"""Callback implementations for the Gradio interface."""

from __future__ import annotations

from typing import Any, Optional

from config.settings import AppConfig
from modules.codec.base64_codec import CodecMode
from modules.services.history_service import HistoryService
from modules.services.storage_service import StorageService
from modules.ui.controller import COPY_RESULT_KEY, PlaygroundController, SessionState
from modules.ui.presenter import ACTION_COPY, HistoryPresenter, parse_history_action

COPY_LABEL = "📋 Copy"
COPIED_LABEL = "✓ Copied!"


def go_label(mode: CodecMode) -> str:
    """Return the submit button caption for ``mode``."""
    return "Encode!" if mode is CodecMode.ENCODE else "Decode!"


def build_controller(config: AppConfig) -> PlaygroundController:
    """Wire the history store and presenter described by ``config``."""
    storage = StorageService(config.storage_dir)
    history = HistoryService(storage, key=config.storage_key, capacity=config.max_history_items)
    presenter = HistoryPresenter(truncate_length=config.history_truncate_length)
    return PlaygroundController(config, history=history, presenter=presenter)


def build_callbacks(
    config: AppConfig,
    controller: Optional[PlaygroundController] = None,
) -> dict[str, Any]:
    """Return a dictionary of Gradio callback functions."""

    ctrl = controller or build_controller(config)

    def _session(state: Optional[SessionState]) -> SessionState:
        return state if isinstance(state, SessionState) else SessionState()

    def _copy_label(state: SessionState) -> str:
        return COPIED_LABEL if state.feedback.get(COPY_RESULT_KEY) else COPY_LABEL

    def on_load(state: Optional[SessionState]) -> tuple[str, str, bool, SessionState]:
        session = _session(state)
        return (
            ctrl.render_history(session),
            go_label(session.mode),
            session.mode is CodecMode.DECODE,
            session,
        )

    def on_toggle_mode(decode: bool, state: Optional[SessionState]) -> tuple[str, str, SessionState]:
        session = _session(state)
        ctrl.switch_mode(session, CodecMode.DECODE if decode else CodecMode.ENCODE)
        return go_label(session.mode), session.result_text, session

    def on_submit(raw_input: str, state: Optional[SessionState]) -> tuple[str, str, SessionState]:
        session = _session(state)
        result = ctrl.submit(session, raw_input)
        return result.text, ctrl.render_history(session), session

    def on_copy_result(state: Optional[SessionState]) -> tuple[str, str, SessionState]:
        session = _session(state)
        payload = ctrl.copy_result(session)
        return payload or "", session.result_text, session

    def on_clipboard_outcome(
        outcome: str, state: Optional[SessionState]
    ) -> tuple[str, str, str, SessionState]:
        session = _session(state)
        ctrl.report_clipboard(session, outcome or "")
        return _copy_label(session), session.result_text, ctrl.render_history(session), session

    def on_clear_input(state: Optional[SessionState]) -> tuple[str, str, SessionState]:
        session = _session(state)
        ctrl.clear_input(session)
        return "", "", session

    def on_clear_history(confirmed: bool, state: Optional[SessionState]) -> tuple[str, SessionState]:
        session = _session(state)
        ctrl.clear_history(bool(confirmed))
        return ctrl.render_history(session), session

    def on_history_action(
        raw_action: str, current_input: str, state: Optional[SessionState]
    ) -> tuple[str, bool, str, str, str, SessionState]:
        session = _session(state)
        action = parse_history_action(raw_action)
        payload = ""
        input_text = current_input or ""
        if action is not None:
            if action.verb == ACTION_COPY:
                payload = ctrl.copy_entry_output(session, action.index) or ""
            elif ctrl.replay_entry(session, action.index) is not None:
                input_text = session.input_text
        return (
            input_text,
            session.mode is CodecMode.DECODE,
            go_label(session.mode),
            session.result_text,
            payload,
            session,
        )

    def on_tick(state: Optional[SessionState]) -> tuple[str, str, str, SessionState]:
        session = _session(state)
        ctrl.tick(session)
        return _copy_label(session), session.result_text, ctrl.render_history(session), session

    return {
        "on_load": on_load,
        "on_toggle_mode": on_toggle_mode,
        "on_submit": on_submit,
        "on_copy_result": on_copy_result,
        "on_clipboard_outcome": on_clipboard_outcome,
        "on_clear_input": on_clear_input,
        "on_clear_history": on_clear_history,
        "on_history_action": on_history_action,
        "on_tick": on_tick,
    }
