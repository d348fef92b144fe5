"""
Markdown source editor with live styling.
"""

import logging
from typing import List

from PySide6.QtCore import Qt, QUrl, Signal
from PySide6.QtGui import (
    QColor, QDesktopServices, QKeyEvent, QKeySequence, QMouseEvent, QPalette, QTextCursor
)
from PySide6.QtWidgets import QTextEdit, QWidget

from mdspan import MarkdownParser, OutlineItem, TextRange, extract_outline

from simpleedit.color_role import ColorRole
from simpleedit.document_statistics import DocumentStatistics
from simpleedit.edit_history import EditHistory, TextChange
from simpleedit.markdown_formatter import format_action
from simpleedit.markdown_live_styler import MarkdownLiveStyler
from simpleedit.markdown_styler import MarkdownStyler
from simpleedit.preview_document import build_preview_html
from simpleedit.preview_scheduler import PreviewScheduler
from simpleedit.qt_debounce_timer import QtDebounceTimer
from simpleedit.style_manager import StyleManager
from simpleedit.text_document_buffer import TextDocumentBuffer
from simpleedit.view_mode import ViewMode


class MarkdownEditorWidget(QTextEdit):
    """
    Plain-text Markdown editor.

    In STYLED_SOURCE mode a MarkdownLiveStyler keeps the document's formats in
    step with its text.  In SOURCE mode every character gets the base format.

    Attributes:
        statistics_changed (Signal): Emitted with a DocumentStatistics after each text change
        preview_html_changed (Signal): Emitted with a full HTML document once edits pause
    """

    statistics_changed = Signal(object)
    preview_html_changed = Signal(str)

    def __init__(
        self,
        style_manager: StyleManager,
        parser: MarkdownParser,
        hide_markers: bool = False,
        parent: QWidget | None = None
    ) -> None:
        """
        Initialize the editor.

        Args:
            style_manager: Source of the editor theme
            parser: Parser shared with the rest of the editor
            hide_markers: Whether syntax markers start hidden
            parent: Optional parent widget
        """
        super().__init__(parent)
        self._logger = logging.getLogger("MarkdownEditorWidget")
        self.setAcceptRichText(False)
        self.setMouseTracking(True)

        self._style_manager = style_manager
        self._parser = parser
        self._buffer = TextDocumentBuffer(self.document())
        self._history = EditHistory(self._replay_change)
        self._history.stack().cleanChanged.connect(self._on_clean_changed)
        self._last_text = ""
        self._styler = MarkdownStyler(style_manager.current_style(), hide_markers)
        self._live_styler: MarkdownLiveStyler | None = None
        self._view_mode = ViewMode.SOURCE

        self._preview_scheduler = PreviewScheduler(
            self._render_preview,
            QtDebounceTimer(self),
            self.preview_html_changed.emit
        )

        self.document().contentsChange.connect(self._on_contents_change)
        self._style_manager.style_changed.connect(self._handle_style_changed)
        self._apply_palette()
        self.set_view_mode(ViewMode.STYLED_SOURCE)

    def buffer(self) -> TextDocumentBuffer:
        """Get the styled buffer wrapping this editor's document."""
        return self._buffer

    def view_mode(self) -> ViewMode:
        """Get the current view mode."""
        return self._view_mode

    def set_view_mode(self, mode: ViewMode) -> None:
        """
        Switch between plain and styled source.

        PREVIEW keeps the source styled; the main window hides the editor.
        """
        self._view_mode = mode
        if mode == ViewMode.SOURCE:
            if self._live_styler is not None:
                self._live_styler.detach()
                self._live_styler = None

            self._reset_formats()
            return

        if self._live_styler is None:
            self._live_styler = MarkdownLiveStyler(
                self._buffer, self._parser, self._styler, QtDebounceTimer(self)
            )

        self._live_styler.apply_styling()

    def set_hide_markers(self, hide: bool) -> None:
        """Hide or dim syntax markers, restyling immediately."""
        self._styler.set_hide_markers(hide)
        self._restyle()

    def set_markdown(self, text: str) -> None:
        """Replace the document text, starting a fresh undo history."""
        self.setPlainText(text)
        self._last_text = self._buffer.text()
        self._history.clear()
        self.mark_saved()
        self._restyle()
        self._preview_scheduler.schedule(text)
        self._preview_scheduler.flush()

    def history(self) -> EditHistory:
        """Get the text undo history."""
        return self._history

    def undo(self) -> None:
        """Undo the last text change."""
        self._history.undo()

    def redo(self) -> None:
        """Redo the last undone text change."""
        self._history.redo()

    def mark_saved(self) -> None:
        """Record the current text as saved."""
        self._history.set_clean()
        self.document().setModified(False)

    def markdown(self) -> str:
        """Get the document text."""
        return self._buffer.text()

    def outline(self) -> List[OutlineItem]:
        """Get the headings of the document."""
        return extract_outline(self._buffer.text(), self._parser.parse(self._buffer.text()))

    def go_to(self, location: int) -> None:
        """Move the cursor to a text offset and scroll it into view."""
        cursor = self.textCursor()
        cursor.setPosition(self._buffer.to_utf16(location))
        self.setTextCursor(cursor)
        self.ensureCursorVisible()
        self.setFocus()

    def statistics(self) -> DocumentStatistics:
        """Get the counts for the current text."""
        return DocumentStatistics.from_text(self._buffer.text())

    def apply_format(self, action: str) -> None:
        """
        Apply a named formatting action to the current selection.

        Args:
            action: Name from markdown_formatter.FORMAT_ACTIONS
        """
        cursor = self.textCursor()
        start = self._buffer.from_utf16(cursor.selectionStart())
        end = self._buffer.from_utf16(cursor.selectionEnd())
        edit = format_action(action, self._buffer.text(), TextRange(start, end - start))

        cursor.beginEditBlock()
        cursor.setPosition(self._buffer.to_utf16(edit.range.location))
        cursor.setPosition(self._buffer.to_utf16(edit.range.end), QTextCursor.MoveMode.KeepAnchor)
        cursor.insertText(edit.replacement)
        cursor.endEditBlock()

        cursor.setPosition(self._buffer.to_utf16(edit.selection.location))
        cursor.setPosition(self._buffer.to_utf16(edit.selection.end), QTextCursor.MoveMode.KeepAnchor)
        self.setTextCursor(cursor)

    def keyPressEvent(self, e: QKeyEvent) -> None:
        """Route undo and redo keys to the text history."""
        if e.matches(QKeySequence.StandardKey.Undo):
            self.undo()
            e.accept()
            return

        if e.matches(QKeySequence.StandardKey.Redo):
            self.redo()
            e.accept()
            return

        super().keyPressEvent(e)

    def mouseMoveEvent(self, e: QMouseEvent) -> None:
        """Show a pointing hand over links."""
        super().mouseMoveEvent(e)
        char_format = self.cursorForPosition(e.pos()).charFormat()
        if char_format.boolProperty(TextDocumentBuffer.POINTING_CURSOR_PROPERTY):
            self.viewport().setCursor(Qt.CursorShape.PointingHandCursor)
            return

        self.viewport().setCursor(Qt.CursorShape.IBeamCursor)

    def mouseReleaseEvent(self, e: QMouseEvent) -> None:
        """Open links on ctrl-click."""
        super().mouseReleaseEvent(e)
        if not e.modifiers() & Qt.KeyboardModifier.ControlModifier:
            return

        href = self.anchorAt(e.pos())
        if href:
            QDesktopServices.openUrl(QUrl(href))

    def _on_contents_change(self, position: int, removed: int, added: int) -> None:
        # Our own format writes
        if self._buffer.is_editing():
            if self._live_styler is not None:
                self._live_styler.attributes_edited()

            return

        text = self._buffer.text()
        change = TextChange.between(self._last_text, text)
        self._last_text = text
        if change is not None:
            self._history.record(change)

        location = self._buffer.from_utf16(position)
        added_chars = self._buffer.from_utf16(position + added) - location
        if self._live_styler is not None:
            self._live_styler.characters_edited(location, removed, added_chars)

        self.statistics_changed.emit(DocumentStatistics.from_text(text))
        self._preview_scheduler.schedule(text)

    def _replay_change(self, change: TextChange) -> None:
        """Write an undo or redo change into the document."""
        cursor = QTextCursor(self.document())
        cursor.setPosition(self._buffer.to_utf16(change.location))
        cursor.setPosition(
            self._buffer.to_utf16(change.location + len(change.removed)), QTextCursor.MoveMode.KeepAnchor
        )
        cursor.insertText(change.inserted)
        self.setTextCursor(cursor)
        self.ensureCursorVisible()

    def _on_clean_changed(self, clean: bool) -> None:
        self.document().setModified(not clean)

    def _render_preview(self, text: str) -> str:
        return build_preview_html(self._parser.to_html(text), self._style_manager.current_style())

    def _handle_style_changed(self) -> None:
        self._styler.set_style(self._style_manager.current_style())
        self._apply_palette()
        self._restyle()
        self._preview_scheduler.schedule(self._buffer.text())

    def _apply_palette(self) -> None:
        style = self._styler.style()
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Base, QColor(style.get_color_str(ColorRole.EDITOR_BACKGROUND)))
        palette.setColor(QPalette.ColorRole.Text, QColor(style.get_color_str(ColorRole.EDITOR_TEXT)))
        self.setPalette(palette)

    def _restyle(self) -> None:
        if self._live_styler is not None:
            self._live_styler.apply_styling()
            return

        self._reset_formats()

    def _reset_formats(self) -> None:
        """Give every character the base format."""
        with self._buffer.editing():
            self._buffer.set_attributes(TextRange(0, self._buffer.length()), self._styler.base_attributes())
