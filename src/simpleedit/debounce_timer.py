"""
Restartable one-shot timer used to coalesce bursts of edits.
"""

from abc import ABC, abstractmethod
from typing import Callable


class DebounceTimer(ABC):
    """
    A one-shot timer that can be restarted.

    Starting the timer while it is already running cancels the pending callback,
    so only the last of a burst of starts ever fires.
    """

    @abstractmethod
    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        """
        Start, or restart, the timer.

        Args:
            interval_ms: Delay before the callback fires
            callback: Function to call when the timer fires
        """

    @abstractmethod
    def stop(self) -> None:
        """Cancel any pending callback."""

    @abstractmethod
    def is_active(self) -> bool:
        """Check whether a callback is pending."""
