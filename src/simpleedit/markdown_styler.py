"""
Map Markdown spans to presentation attributes in a styled buffer.
"""

import logging
from dataclasses import replace
from typing import Dict, Sequence, Tuple

from mdspan import MarkdownSpan, MarkdownSpanKind, TextRange

from simpleedit.color_role import ColorRole
from simpleedit.editor_style import EditorStyle
from simpleedit.styled_buffer import FontSpec, StyledBuffer, TextAttributes


class MarkdownStyler:
    """
    Applies span styling to a StyledBuffer.

    Every pass starts by resetting the whole buffer to the base attributes of
    the current style, then writes each span in list order so later spans win
    where ranges overlap.  In hide-markers mode the syntax markers keep their
    place in the text but are drawn invisibly.
    """

    # Heading sizes for a 13pt body font; other body sizes scale them
    HEADING_SIZES: Dict[int, float] = {1: 24, 2: 20, 3: 17, 4: 15, 5: 13, 6: 12}
    BASE_FONT_SIZE = 13.0

    BLOCKQUOTE_INDENT = (20.0, 20.0)     # (head indent, first line head indent)
    LIST_INDENT = (24.0, 8.0)
    TABLE_INDENT = (8.0, 8.0)

    def __init__(self, style: EditorStyle, hide_markers: bool = False) -> None:
        """
        Initialize the styler.

        Args:
            style: Theme supplying colours and fonts
            hide_markers: If True, draw syntax markers invisibly instead of dimmed
        """
        self._style = style
        self._hide_markers = hide_markers
        self._logger = logging.getLogger("MarkdownStyler")

    def style(self) -> EditorStyle:
        """Get the current theme."""
        return self._style

    def set_style(self, style: EditorStyle) -> None:
        """Set the theme used by subsequent passes."""
        self._style = style

    def hide_markers(self) -> bool:
        """Check whether markers are hidden rather than dimmed."""
        return self._hide_markers

    def set_hide_markers(self, hide: bool) -> None:
        """Set whether markers are hidden rather than dimmed."""
        self._hide_markers = hide

    def body_font(self) -> FontSpec:
        """Font for ordinary text."""
        return FontSpec(tuple(self._style.font_families), self._style.font_size)

    def code_font(self) -> FontSpec:
        """Fixed-pitch font for inline code and code blocks."""
        return FontSpec(tuple(self._style.code_font_families), self._style.font_size, fixed_pitch=True)

    def heading_font(self, level: int) -> FontSpec:
        """
        Font for a heading.

        Args:
            level: Heading level, 1 to 6

        Returns:
            Bold font sized for the level
        """
        size = self.HEADING_SIZES.get(level, self.HEADING_SIZES[6])
        size *= self._style.font_size / self.BASE_FONT_SIZE
        return FontSpec(tuple(self._style.heading_font_families), size, bold=True)

    def base_attributes(self) -> TextAttributes:
        """Attributes every character gets before spans are applied."""
        return TextAttributes(
            font=self.body_font(),
            foreground=self._style.get_color_str(ColorRole.EDITOR_TEXT)
        )

    def apply(self, spans: Sequence[MarkdownSpan], buffer: StyledBuffer) -> None:
        """
        Style a buffer from a span list.

        Spans that reach past the end of the buffer come from an older version
        of the text and are skipped.

        Args:
            spans: Spans parsed from the buffer's text
            buffer: The buffer to style
        """
        with buffer.editing():
            length = buffer.length()
            buffer.set_attributes(TextRange(0, length), self.base_attributes())

            for span in spans:
                if span.full_range.end > length or span.content_range.end > length:
                    self._logger.debug("Skipping stale span %s at %s", span.kind.name, span.full_range)
                    continue

                self._apply_span(span, buffer)

    def _apply_span(self, span: MarkdownSpan, buffer: StyledBuffer) -> None:
        """Write the attributes for a single span."""
        color = self._style.get_color_str

        match span.kind:
            case MarkdownSpanKind.HEADING:
                font = self.heading_font(span.level)
                buffer.add_attributes(span.full_range, TextAttributes(
                    font=font,
                    foreground=color(ColorRole.HEADING)
                ))
                self._style_markers(span, buffer, font)

            case MarkdownSpanKind.BOLD:
                buffer.add_attributes(span.content_range, TextAttributes(
                    font=replace(self.body_font(), bold=True),
                    foreground=color(ColorRole.BOLD)
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.ITALIC:
                buffer.add_attributes(span.content_range, TextAttributes(
                    font=replace(self.body_font(), italic=True),
                    foreground=color(ColorRole.ITALIC)
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.BOLD_ITALIC:
                buffer.add_attributes(span.content_range, TextAttributes(
                    font=replace(self.body_font(), bold=True, italic=True),
                    foreground=color(ColorRole.BOLD)
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.CODE:
                buffer.add_attributes(span.full_range, self._code_attributes())
                self._style_markers(span, buffer)

            case MarkdownSpanKind.CODE_BLOCK:
                buffer.add_attributes(span.full_range, self._code_attributes())
                if self._hide_markers:
                    self._hide_fence_lines(span, buffer)

            case MarkdownSpanKind.LINK:
                buffer.add_attributes(span.full_range, TextAttributes(
                    foreground=color(ColorRole.LINK),
                    underline=True,
                    link=span.url,
                    pointing_cursor=True
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.IMAGE:
                buffer.add_attributes(span.full_range, TextAttributes(
                    foreground=color(ColorRole.LINK),
                    underline=True
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.BLOCKQUOTE:
                head_indent, first_line_indent = self.BLOCKQUOTE_INDENT
                buffer.add_attributes(span.full_range, TextAttributes(
                    foreground=color(ColorRole.BLOCKQUOTE_TEXT),
                    head_indent=head_indent,
                    first_line_head_indent=first_line_indent
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.UNORDERED_LIST_ITEM | MarkdownSpanKind.ORDERED_LIST_ITEM:
                self._indent(span.full_range, buffer, self.LIST_INDENT)

            case MarkdownSpanKind.TABLE:
                self._indent(span.full_range, buffer, self.TABLE_INDENT)

            case MarkdownSpanKind.HORIZONTAL_RULE:
                buffer.add_attributes(span.full_range, TextAttributes(
                    foreground=color(ColorRole.HORIZONTAL_RULE),
                    strikethrough=True,
                    strikethrough_color=color(ColorRole.HORIZONTAL_RULE)
                ))

            case MarkdownSpanKind.STRIKETHROUGH:
                buffer.add_attributes(span.content_range, TextAttributes(
                    strikethrough=True,
                    foreground=color(ColorRole.STRIKETHROUGH)
                ))
                self._style_markers(span, buffer)

            case MarkdownSpanKind.CHECKBOX:
                # Checkbox markers stay as plain text
                pass

    def _code_attributes(self) -> TextAttributes:
        return TextAttributes(
            font=self.code_font(),
            foreground=self._style.get_color_str(ColorRole.CODE),
            background=self._style.get_color_str(ColorRole.CODE_BACKGROUND)
        )

    def _indent(self, text_range: TextRange, buffer: StyledBuffer, indent: Tuple[float, float]) -> None:
        head_indent, first_line_indent = indent
        buffer.add_attributes(text_range, TextAttributes(
            head_indent=head_indent,
            first_line_head_indent=first_line_indent
        ))

    def _marker_attributes(self, font: FontSpec | None = None) -> TextAttributes:
        """
        Attributes for syntax markers.

        Args:
            font: Font the markers should share with their content, if any

        Returns:
            Hidden or dimmed marker attributes
        """
        if self._hide_markers:
            return TextAttributes(font=font, hidden=True)

        return TextAttributes(font=font, foreground=self._style.get_color_str(ColorRole.SYNTAX_MARKER))

    def _style_markers(self, span: MarkdownSpan, buffer: StyledBuffer, font: FontSpec | None = None) -> None:
        """Dim or hide the markers either side of a span's content."""
        attributes = self._marker_attributes(font)
        length = buffer.length()
        for marker_range in span.marker_ranges():
            if marker_range.end <= length:
                buffer.add_attributes(marker_range, attributes)

    def _hide_fence_lines(self, span: MarkdownSpan, buffer: StyledBuffer) -> None:
        """Hide the opening and closing fence lines of a code block."""
        text = buffer.text()
        block_start = span.full_range.location
        block_end = span.full_range.end

        first_line_end = text.find("\n", block_start, block_end)
        if first_line_end == -1:
            first_line_end = block_end

        last_line_start = text.rfind("\n", block_start, block_end) + 1
        if last_line_start <= block_start:
            last_line_start = block_start

        attributes = self._marker_attributes()
        buffer.add_attributes(TextRange(block_start, first_line_end - block_start), attributes)
        buffer.add_attributes(TextRange(last_line_start, block_end - last_line_start), attributes)
