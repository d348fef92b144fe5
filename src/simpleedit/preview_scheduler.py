"""
Debounced regeneration of the HTML preview.
"""

import logging
from typing import Callable

from simpleedit.debounce_timer import DebounceTimer


class PreviewScheduler:
    """
    Renders the latest text to HTML once edits pause.

    The scheduler keeps only the most recent text it was given; intermediate
    versions are never rendered.
    """

    DEFAULT_INTERVAL_MS = 500

    def __init__(
        self,
        renderer: Callable[[str], str],
        timer: DebounceTimer,
        sink: Callable[[str], None],
        interval_ms: int = DEFAULT_INTERVAL_MS
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            renderer: Converts Markdown text to a complete HTML document
            timer: Debounce timer
            sink: Receives each rendered document
            interval_ms: Debounce interval in milliseconds
        """
        self._renderer = renderer
        self._timer = timer
        self._sink = sink
        self._interval_ms = interval_ms
        self._pending_text: str | None = None
        self._logger = logging.getLogger("PreviewScheduler")

    def schedule(self, text: str) -> None:
        """Record new text and restart the debounce timer."""
        self._pending_text = text
        self._timer.start(self._interval_ms, self.flush)

    def flush(self) -> None:
        """Render any pending text immediately."""
        self._timer.stop()
        if self._pending_text is None:
            return

        text = self._pending_text
        self._pending_text = None
        html = self._renderer(text)
        self._logger.debug("Rendered preview for %d characters", len(text))
        self._sink(html)

    def cancel(self) -> None:
        """Drop any pending render."""
        self._timer.stop()
        self._pending_text = None

    def is_pending(self) -> bool:
        """Check whether a render is waiting to run."""
        return self._pending_text is not None
