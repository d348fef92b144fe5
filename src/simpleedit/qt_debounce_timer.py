"""
DebounceTimer backed by a single-shot QTimer.
"""

from typing import Callable

from PySide6.QtCore import QObject, QTimer

from simpleedit.debounce_timer import DebounceTimer


class QtDebounceTimer(DebounceTimer):
    """Debounce timer that fires on the Qt event loop."""

    def __init__(self, parent: QObject | None = None) -> None:
        """
        Initialize the timer.

        Args:
            parent: Optional owner of the underlying QTimer
        """
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Callable[[], None] | None = None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start(interval_ms)

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()
