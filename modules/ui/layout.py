"""Gradio layout composition for the Base64 playground."""

from __future__ import annotations

from typing import Any

try:
    import gradio as gr
except ImportError:  # pragma: no cover
    gr = None  # type: ignore

from config.settings import AppConfig
from modules.ui.callbacks import COPY_LABEL, build_callbacks, build_controller
from modules.ui.controller import RESULT_PLACEHOLDER, SessionState
from modules.ui.scripts import (
    CLEAR_BUTTON_ID,
    CLIPBOARD_JS,
    CONFIRM_CLEAR_JS,
    GO_BUTTON_ID,
    HISTORY_ACTION_ID,
    PAGE_CSS,
    PAGE_JS,
)


def build_app(config: AppConfig) -> Any:
    """Compose and return the Gradio application."""
    if gr is None:
        raise RuntimeError("Gradio is not installed; install the project dependencies first.")

    controller = build_controller(config)
    callbacks_map = build_callbacks(config, controller=controller)

    with gr.Blocks(title="Base64 Playground", css=PAGE_CSS, js=PAGE_JS) as demo:
        gr.Markdown("## Base64 Playground")
        session = gr.State(SessionState())

        with gr.Row():
            with gr.Column():
                decode_toggle = gr.Checkbox(label="Decode mode", value=False)
                input_text = gr.Textbox(
                    label="Input",
                    lines=5,
                    placeholder="Type or paste your text here...",
                )
                with gr.Row():
                    go_btn = gr.Button("Encode!", variant="primary", elem_id=GO_BUTTON_ID)
                    clear_btn = gr.Button("Clear", elem_id=CLEAR_BUTTON_ID)

            with gr.Column():
                result_text = gr.Textbox(
                    label="Result",
                    lines=5,
                    interactive=False,
                    placeholder=RESULT_PLACEHOLDER,
                )
                copy_btn = gr.Button(COPY_LABEL)

        with gr.Row():
            gr.Markdown("### History")
            clear_history_btn = gr.Button("Clear history", variant="stop", size="sm")
        history_html = gr.HTML()

        # Bridges between page scripts and Python callbacks, hidden with CSS.
        history_action = gr.Textbox(elem_id=HISTORY_ACTION_ID, elem_classes=["bridge-field"])
        clipboard_payload = gr.Textbox(elem_classes=["bridge-field"])
        clipboard_outcome = gr.Textbox(elem_classes=["bridge-field"])
        confirm_clear = gr.Checkbox(elem_classes=["bridge-field"])

        timer = gr.Timer(config.feedback_tick_seconds)

        demo.load(
            fn=callbacks_map["on_load"],
            inputs=[session],
            outputs=[history_html, go_btn, decode_toggle, session],
        )

        decode_toggle.input(
            fn=callbacks_map["on_toggle_mode"],
            inputs=[decode_toggle, session],
            outputs=[go_btn, result_text, session],
        )

        go_btn.click(
            fn=callbacks_map["on_submit"],
            inputs=[input_text, session],
            outputs=[result_text, history_html, session],
        )

        clear_btn.click(
            fn=callbacks_map["on_clear_input"],
            inputs=[session],
            outputs=[input_text, result_text, session],
        )

        copy_btn.click(
            fn=callbacks_map["on_copy_result"],
            inputs=[session],
            outputs=[clipboard_payload, result_text, session],
        ).then(
            fn=None,
            inputs=[clipboard_payload],
            outputs=[clipboard_outcome],
            js=CLIPBOARD_JS,
        ).then(
            fn=callbacks_map["on_clipboard_outcome"],
            inputs=[clipboard_outcome, session],
            outputs=[copy_btn, result_text, history_html, session],
        )

        history_action.input(
            fn=callbacks_map["on_history_action"],
            inputs=[history_action, input_text, session],
            outputs=[input_text, decode_toggle, go_btn, result_text, clipboard_payload, session],
        ).then(
            fn=None,
            inputs=[clipboard_payload],
            outputs=[clipboard_outcome],
            js=CLIPBOARD_JS,
        ).then(
            fn=callbacks_map["on_clipboard_outcome"],
            inputs=[clipboard_outcome, session],
            outputs=[copy_btn, result_text, history_html, session],
        )

        clear_history_btn.click(
            fn=None,
            outputs=[confirm_clear],
            js=CONFIRM_CLEAR_JS,
        ).then(
            fn=callbacks_map["on_clear_history"],
            inputs=[confirm_clear, session],
            outputs=[history_html, session],
        )

        timer.tick(
            fn=callbacks_map["on_tick"],
            inputs=[session],
            outputs=[copy_btn, result_text, history_html, session],
        )

    return demo
