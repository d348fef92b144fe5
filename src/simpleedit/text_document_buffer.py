"""
StyledBuffer implementation backed by a QTextDocument.
"""

import logging
from typing import List

from PySide6.QtGui import (
    QColor, QFont, QTextBlockFormat, QTextCharFormat, QTextCursor, QTextDocument, QTextFormat
)

from mdspan import TextRange

from simpleedit.styled_buffer import StyledBuffer, TextAttributes


class TextDocumentBuffer(StyledBuffer):
    """
    Adapts a QTextDocument to the StyledBuffer interface.

    Ranges arrive as code point offsets and are translated to the UTF-16
    positions Qt uses.  The writes made inside one editing bracket form one
    edit block and leave the document's modified flag as it was.

    Formats are derived from the text, so the document keeps no undo history
    of its own; the editor records text changes in an EditHistory instead.
    """

    # Char format property marking text that should show a pointing hand cursor
    POINTING_CURSOR_PROPERTY = QTextFormat.Property.UserProperty + 1

    # Qt rejects a point size of zero, so hidden text uses the smallest usable size
    HIDDEN_POINT_SIZE = 0.1

    def __init__(self, document: QTextDocument) -> None:
        """
        Initialize the buffer.

        Args:
            document: The document to style
        """
        super().__init__()
        self._document = document
        self._document.setUndoRedoEnabled(False)
        self._cursor: QTextCursor | None = None
        self._was_modified = False
        self._text_snapshot: str | None = None
        self._utf16_offsets: List[int] | None = None
        self._logger = logging.getLogger("TextDocumentBuffer")

    def document(self) -> QTextDocument:
        """Get the underlying document."""
        return self._document

    def text(self) -> str:
        if self._text_snapshot is not None:
            return self._text_snapshot

        return self._document.toPlainText()

    def _begin_edit_block(self) -> None:
        # The text cannot change while we only write attributes, so snapshot it
        self._snapshot_text(self._document.toPlainText())
        self._was_modified = self._document.isModified()
        self._cursor = QTextCursor(self._document)
        self._cursor.beginEditBlock()

    def _end_edit_block(self) -> None:
        cursor = self._cursor
        self._cursor = None
        self._text_snapshot = None
        self._utf16_offsets = None
        if cursor is None:
            return

        cursor.endEditBlock()
        self._document.setModified(self._was_modified)

    def set_attributes(self, text_range: TextRange, attributes: TextAttributes) -> None:
        cursor = self._select(text_range)
        if cursor is None:
            return

        cursor.setCharFormat(self._char_format(attributes))
        cursor.setBlockFormat(self._block_format(attributes))

    def add_attributes(self, text_range: TextRange, attributes: TextAttributes) -> None:
        cursor = self._select(text_range)
        if cursor is None:
            return

        cursor.mergeCharFormat(self._char_format(attributes))
        if attributes.head_indent is not None or attributes.first_line_head_indent is not None:
            cursor.mergeBlockFormat(self._block_format(attributes))

    def to_utf16(self, offset: int) -> int:
        """
        Convert a code point offset into a Qt document position.

        Args:
            offset: Offset into text()

        Returns:
            The matching UTF-16 position
        """
        offsets = self._offsets()
        if offsets is None:
            return offset

        return offsets[max(0, min(offset, len(offsets) - 1))]

    def from_utf16(self, position: int) -> int:
        """
        Convert a Qt document position into a code point offset.

        Args:
            position: UTF-16 position in the document

        Returns:
            The matching offset into text(); positions inside a surrogate pair
            map to the start of the character
        """
        offsets = self._offsets()
        if offsets is None:
            return position

        low = 0
        high = len(offsets) - 1
        while low < high:
            mid = (low + high + 1) // 2
            if offsets[mid] <= position:
                low = mid

            else:
                high = mid - 1

        return low

    def _snapshot_text(self, text: str) -> None:
        self._text_snapshot = text
        self._utf16_offsets = self._build_offsets(text)

    def _offsets(self) -> List[int] | None:
        if self._text_snapshot is not None:
            return self._utf16_offsets

        return self._build_offsets(self._document.toPlainText())

    def _build_offsets(self, text: str) -> List[int] | None:
        """
        Build the code point to UTF-16 position table.

        Returns:
            None when the text has no characters outside the BMP, in which
            case offsets and positions are identical
        """
        if all(ord(c) <= 0xFFFF for c in text):
            return None

        offsets = [0]
        position = 0
        for c in text:
            position += 2 if ord(c) > 0xFFFF else 1
            offsets.append(position)

        return offsets

    def _select(self, text_range: TextRange) -> QTextCursor | None:
        """Get a cursor selecting a range, or None if there is nothing to write."""
        if text_range.is_empty():
            return None

        start = self.to_utf16(text_range.location)
        end = self.to_utf16(text_range.end)

        # The last document position is the implicit final paragraph separator
        limit = self._document.characterCount() - 1
        start = min(start, limit)
        end = min(end, limit)
        if start >= end:
            self._logger.debug("Ignoring write outside the document: %s", text_range)
            return None

        cursor = self._cursor if self._cursor is not None else QTextCursor(self._document)
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
        return cursor

    def _char_format(self, attributes: TextAttributes) -> QTextCharFormat:
        """Build a char format carrying only the attributes that are set."""
        char_format = QTextCharFormat()

        font = attributes.font
        if font is not None:
            char_format.setFontFamilies(list(font.families))
            char_format.setFontPointSize(font.point_size)
            char_format.setFontWeight(QFont.Weight.Bold if font.bold else QFont.Weight.Normal)
            char_format.setFontItalic(font.italic)
            char_format.setFontFixedPitch(font.fixed_pitch)

        # Qt draws strike-out lines in the text colour
        foreground = attributes.foreground
        if foreground is None and attributes.strikethrough_color is not None:
            foreground = attributes.strikethrough_color

        if foreground is not None:
            char_format.setForeground(QColor(foreground))

        if attributes.background is not None:
            char_format.setBackground(QColor(attributes.background))

        if attributes.underline is not None:
            char_format.setFontUnderline(attributes.underline)

        if attributes.strikethrough is not None:
            char_format.setFontStrikeOut(attributes.strikethrough)

        if attributes.link is not None:
            char_format.setAnchor(True)
            char_format.setAnchorHref(attributes.link)

        if attributes.pointing_cursor is not None:
            char_format.setProperty(self.POINTING_CURSOR_PROPERTY, attributes.pointing_cursor)

        if attributes.hidden:
            char_format.setFontPointSize(self.HIDDEN_POINT_SIZE)
            char_format.setForeground(QColor(0, 0, 0, 0))
            char_format.setBackground(QColor(0, 0, 0, 0))

        return char_format

    def _block_format(self, attributes: TextAttributes) -> QTextBlockFormat:
        """
        Build a block format from the paragraph indents.

        Qt indents wrapped lines with the left margin and the first line by the
        left margin plus the text indent.
        """
        head_indent = attributes.head_indent or 0.0
        first_line_indent = attributes.first_line_head_indent
        if first_line_indent is None:
            first_line_indent = head_indent

        block_format = QTextBlockFormat()
        block_format.setLeftMargin(head_indent)
        block_format.setTextIndent(first_line_indent - head_indent)
        return block_format
