"""Browser-side snippets wired into the Gradio layout."""

from __future__ import annotations

HISTORY_ACTION_ID = "history-action"
GO_BUTTON_ID = "go-button"
CLEAR_BUTTON_ID = "clear-button"

# Writes to the clipboard and reports "ok" or "error:<reason>" back to Python.
CLIPBOARD_JS = """
async (text) => {
    if (!text) {
        return "";
    }
    try {
        await navigator.clipboard.writeText(text);
        return "ok";
    } catch (err) {
        return "error:" + ((err && err.message) ? err.message : String(err));
    }
}
"""

CONFIRM_CLEAR_JS = """
() => confirm("Clear all history? 🗑")
"""

# Installed once per page: history clicks and keyboard shortcuts.
PAGE_JS = (
    """
() => {
    const bridgeId = "%(bridge)s";
    const send = (verb, index) => {
        const box = document.querySelector(`#${bridgeId} textarea, #${bridgeId} input`);
        if (!box) {
            return;
        }
        box.value = `${verb}:${index}:${Date.now()}`;
        box.dispatchEvent(new Event("input", { bubbles: true }));
    };

    document.addEventListener("click", (event) => {
        const copyButton = event.target.closest(".copy-output");
        if (copyButton) {
            event.stopPropagation();
            event.preventDefault();
            send("copy", copyButton.dataset.index);
            return;
        }
        const item = event.target.closest(".history-item");
        if (item) {
            send("replay", item.dataset.index);
        }
    });

    document.addEventListener("keydown", (event) => {
        if (!(event.ctrlKey || event.metaKey)) {
            return;
        }
        if (event.key === "Enter") {
            event.preventDefault();
            document.getElementById("%(go)s")?.click();
        } else if (event.key === "k") {
            event.preventDefault();
            document.getElementById("%(clear)s")?.click();
        }
    });
}
"""
    % {"bridge": HISTORY_ACTION_ID, "go": GO_BUTTON_ID, "clear": CLEAR_BUTTON_ID}
)

PAGE_CSS = """
.bridge-field { display: none !important; }
.history-item { cursor: pointer; padding: 8px; border-bottom: 1px solid #444; }
.history-mode.encode { color: #4caf50; }
.history-mode.decode { color: #2196f3; }
.history-date { float: right; opacity: 0.7; }
.copy-output { margin-left: 6px; background: none; border: 1px solid currentColor; cursor: pointer; }
.empty-history { opacity: 0.7; font-style: italic; }
"""
