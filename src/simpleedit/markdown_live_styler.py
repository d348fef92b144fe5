"""
Keeps a styled buffer's attributes in step with its text while it is edited.
"""

import logging
from enum import Enum, auto

from mdspan import MarkdownParser, TextRange

from simpleedit.debounce_timer import DebounceTimer
from simpleedit.markdown_styler import MarkdownStyler
from simpleedit.styled_buffer import StyledBuffer


class LiveStylerState(Enum):
    """States of the live styling cycle."""
    IDLE = auto()
    EDIT_PENDING = auto()
    STYLING = auto()


class MarkdownLiveStyler:
    """
    Re-styles a buffer after its characters change.

    Each character edit immediately resets the edited paragraph to the base
    attributes, then (re)starts a debounce timer.  When the timer fires the
    whole buffer is re-parsed and re-styled.

    Change notifications that arrive while the buffer has an attribute write
    bracket open come from our own writes and are ignored.  A character edit
    that arrives while a pass is running causes another pass to be scheduled
    once the current one completes.
    """

    DEFAULT_INTERVAL_MS = 50

    def __init__(
        self,
        buffer: StyledBuffer,
        parser: MarkdownParser,
        styler: MarkdownStyler,
        timer: DebounceTimer,
        interval_ms: int = DEFAULT_INTERVAL_MS
    ) -> None:
        """
        Initialize the live styler.

        Args:
            buffer: The buffer to keep styled
            parser: Parser used for each pass
            styler: Styler used for each pass
            timer: Debounce timer
            interval_ms: Debounce interval in milliseconds
        """
        self._buffer = buffer
        self._parser = parser
        self._styler = styler
        self._timer = timer
        self._interval_ms = interval_ms
        self._state = LiveStylerState.IDLE
        self._is_styling = False
        self._restyle_requested = False
        self._attached = True
        self._logger = logging.getLogger("MarkdownLiveStyler")

    def state(self) -> LiveStylerState:
        """Get the current state."""
        return self._state

    def is_styling(self) -> bool:
        """Check whether a styling pass is in progress."""
        return self._is_styling

    def buffer(self) -> StyledBuffer:
        """Get the buffer being styled."""
        return self._buffer

    def styler(self) -> MarkdownStyler:
        """Get the styler used for each pass."""
        return self._styler

    def characters_edited(self, location: int, removed: int, added: int) -> None:
        """
        Handle a change to the buffer's characters.

        Args:
            location: Offset of the change
            removed: Number of characters removed
            added: Number of characters inserted
        """
        if not self._attached or self._buffer.is_editing():
            return

        if self._is_styling:
            self._restyle_requested = True
            return

        self._logger.debug("Characters edited at %d (-%d +%d)", location, removed, added)
        self._reset_paragraph(TextRange(location, added))
        self._state = LiveStylerState.EDIT_PENDING
        self._timer.start(self._interval_ms, self._on_timer)

    def attributes_edited(self) -> None:
        """Handle an attribute-only change; these never trigger styling."""

    def apply_styling(self) -> None:
        """
        Re-parse and re-style the whole buffer now.

        Any pending debounced pass is cancelled.  Calls made while a pass is
        already running are ignored.
        """
        if not self._attached or self._is_styling:
            return

        self._timer.stop()
        self._state = LiveStylerState.STYLING
        self._is_styling = True
        self._restyle_requested = False
        try:
            spans = self._parser.parse(self._buffer.text())
            self._styler.apply(spans, self._buffer)
            self._logger.debug("Styled %d spans", len(spans))

        finally:
            self._is_styling = False

        if self._restyle_requested:
            self._restyle_requested = False
            self._state = LiveStylerState.EDIT_PENDING
            self._timer.start(self._interval_ms, self._on_timer)
            return

        self._state = LiveStylerState.IDLE

    def detach(self) -> None:
        """Stop reacting to edits and cancel any pending pass."""
        self._timer.stop()
        self._attached = False
        self._restyle_requested = False
        self._state = LiveStylerState.IDLE

    def _on_timer(self) -> None:
        self.apply_styling()

    def _reset_paragraph(self, edited: TextRange) -> None:
        """Give the edited paragraph the base attributes until the next pass."""
        if self._buffer.length() == 0:
            return

        paragraph = self._buffer.paragraph_range(edited)
        if paragraph.is_empty():
            return

        with self._buffer.editing():
            self._buffer.set_attributes(paragraph, self._styler.base_attributes())
