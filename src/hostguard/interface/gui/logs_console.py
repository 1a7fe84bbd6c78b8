from __future__ import annotations

"""
Diagnostics Console.

Read-only, terminal-like customtkinter frame that displays the messages
received by a QueueSink: mirrored error-log lines and reports about
failures of the logging path. The sink is filled from any thread; the
frame drains it from the Tk event loop.
"""

from typing import Any, Optional

import customtkinter as ctk

from hostguard.domain.constants import HINT_COLORS, HINT_INFO
from hostguard.infra.logging.secondary import QueueSink

# -----------------------------------------------------------------------------
# LOGS VIEW CLASS
# -----------------------------------------------------------------------------

class LogsConsole(ctk.CTkFrame):
    """
    Secondary-sink console frame.

    Utilizes a monospaced text buffer with one colour tag per hint.
    """

    POLL_INTERVAL_MS = 100
    MAX_BATCH = 200

    def __init__(self, master: Any, sink: Optional[QueueSink] = None, **kwargs: Any):
        """
        Initialize the console view.

        Args:
            master: Parent UI container.
            sink: Queue to drain. A new one is created when omitted.
        """
        super().__init__(master, corner_radius=10, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.sink = sink or QueueSink()
        self._poll_job: Optional[str] = None

        self.textbox = ctk.CTkTextbox(self, state="disabled", font=("Consolas", 10))
        self.textbox.grid(row=0, column=0, sticky="nsew")
        for hint, color in HINT_COLORS.items():
            self.textbox.tag_config(hint, foreground=color)

        self.btn_copy = ctk.CTkButton(self, text="Copy", command=self._copy_logs)
        self.btn_copy.grid(row=1, column=0, pady=10, sticky="e")

    def append_log(self, msg: str, hint: str = HINT_INFO) -> None:
        """
        Append a message, coloured by its hint.

        Keeps the buffer read-only to the user while allowing programmatic
        writes.
        """
        tag = hint if hint in HINT_COLORS else HINT_INFO
        self.textbox.configure(state="normal")
        self.textbox.insert("end", msg + "\n", tag)
        self.textbox.see("end")
        self.textbox.configure(state="disabled")

    def start_polling(self) -> None:
        """Begin draining the sink on the Tk event loop."""
        if self._poll_job is None:
            self._poll_job = self.after(self.POLL_INTERVAL_MS, self._poll)

    def stop_polling(self) -> None:
        if self._poll_job is not None:
            self.after_cancel(self._poll_job)
            self._poll_job = None

    def flush(self) -> int:
        """Drain pending messages into the buffer. Returns how many were shown."""
        items = self.sink.drain(self.MAX_BATCH)
        for text, hint in items:
            self.append_log(text, hint)
        return len(items)

    def _poll(self) -> None:
        self.flush()
        self._poll_job = self.after(self.POLL_INTERVAL_MS, self._poll)

    def _copy_logs(self) -> None:
        """Synchronize the entire console buffer to the system clipboard."""
        self.master.clipboard_clear()
        self.master.clipboard_append(self.textbox.get("1.0", "end"))
