"""Shared fixtures and test doubles for editor tests."""

import os
from typing import Callable, List, Tuple

import pytest

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from mdspan import MarkdownParser, TextRange

from simpleedit.debounce_timer import DebounceTimer
from simpleedit.editor_style import LIGHT
from simpleedit.markdown_styler import MarkdownStyler
from simpleedit.styled_buffer import StyledBuffer, TextAttributes


class InMemoryStyledBuffer(StyledBuffer):
    """Styled buffer keeping one TextAttributes per character."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text
        self.attributes: List[TextAttributes] = [TextAttributes() for _ in text]
        self.edit_blocks = 0
        self.writes: List[Tuple[str, TextRange]] = []
        self.listener: Callable[[int, int, int], None] | None = None

    def text(self) -> str:
        return self._text

    def _begin_edit_block(self) -> None:
        self.edit_blocks += 1

    def set_attributes(self, text_range: TextRange, attributes: TextAttributes) -> None:
        self.writes.append(("set", text_range))
        for index in range(text_range.location, min(text_range.end, len(self._text))):
            self.attributes[index] = attributes

        self._notify(text_range)

    def add_attributes(self, text_range: TextRange, attributes: TextAttributes) -> None:
        self.writes.append(("add", text_range))
        for index in range(text_range.location, min(text_range.end, len(self._text))):
            self.attributes[index] = self.attributes[index].merged(attributes)

        self._notify(text_range)

    def replace_characters(self, location: int, removed: int, inserted: str) -> None:
        """Edit the text the way a user would, notifying the listener."""
        self._text = self._text[:location] + inserted + self._text[location + removed:]
        self.attributes[location:location + removed] = [TextAttributes() for _ in inserted]
        if self.listener is not None:
            self.listener(location, removed, len(inserted))

    def attributes_at(self, index: int) -> TextAttributes:
        """Get the attributes of one character."""
        return self.attributes[index]

    def _notify(self, text_range: TextRange) -> None:
        # Attribute writes are reported like a real document does
        if self.listener is not None:
            self.listener(text_range.location, text_range.length, text_range.length)


class ManualDebounceTimer(DebounceTimer):
    """Debounce timer that only fires when told to."""

    def __init__(self) -> None:
        self.callback: Callable[[], None] | None = None
        self.interval_ms: int | None = None
        self.start_count = 0

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.interval_ms = interval_ms
        self.start_count += 1

    def stop(self) -> None:
        self.callback = None

    def is_active(self) -> bool:
        return self.callback is not None

    def fire(self) -> None:
        """Run the pending callback, if any."""
        callback = self.callback
        self.callback = None
        if callback is not None:
            callback()


@pytest.fixture
def make_buffer():
    """Provide a factory for in-memory buffers."""
    return InMemoryStyledBuffer


@pytest.fixture
def timer():
    """Provide a manual debounce timer."""
    return ManualDebounceTimer()


@pytest.fixture
def parser():
    """Provide a Markdown parser."""
    return MarkdownParser()


@pytest.fixture
def styler():
    """Provide a styler using the light theme."""
    return MarkdownStyler(LIGHT)


@pytest.fixture(scope="session")
def qt_app():
    """Provide the Qt application needed by documents and widgets."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
