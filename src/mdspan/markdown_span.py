"""
Span model shared by the Markdown parsers, the styler and the outline.

A span is a typed, range-tagged record describing one recognised Markdown
construct.  Ranges are expressed in Python string indices over the source text.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List


@dataclass(frozen=True)
class TextRange:
    """A half-open range of characters: [location, location + length)."""

    location: int
    length: int

    @property
    def end(self) -> int:
        """Offset one past the last character of the range."""
        return self.location + self.length

    def is_empty(self) -> bool:
        """Return True if the range covers no characters."""
        return self.length == 0

    def contains(self, other: "TextRange") -> bool:
        """
        Check whether another range lies entirely within this one.

        Args:
            other: The range to test

        Returns:
            True if other starts at or after our start and ends at or before our end
        """
        return self.location <= other.location and other.end <= self.end


class MarkdownSpanKind(Enum):
    """Kinds of Markdown construct that the parsers recognise."""
    HEADING = auto()
    BOLD = auto()
    ITALIC = auto()
    BOLD_ITALIC = auto()
    CODE = auto()
    CODE_BLOCK = auto()
    LINK = auto()
    IMAGE = auto()
    BLOCKQUOTE = auto()
    UNORDERED_LIST_ITEM = auto()
    ORDERED_LIST_ITEM = auto()
    HORIZONTAL_RULE = auto()
    STRIKETHROUGH = auto()
    CHECKBOX = auto()
    TABLE = auto()


@dataclass(frozen=True)
class MarkdownTableCell:
    """A single table cell; range covers the trimmed cell text."""

    range: TextRange
    row: int  # 0 = header, 1+ = data rows
    column: int


@dataclass(frozen=True)
class MarkdownTable:
    """Structure of a pipe table."""

    columns: int
    header_cells: List[MarkdownTableCell]
    separator_range: TextRange
    rows: List[List[MarkdownTableCell]] = field(default_factory=list)


@dataclass(frozen=True)
class MarkdownSpan:
    """
    One recognised Markdown construct.

    full_range covers the syntax markers and the content; content_range is the
    part without markers.  Only the payload fields relevant to the kind are set.
    """

    kind: MarkdownSpanKind
    full_range: TextRange
    content_range: TextRange
    level: int = 0
    language: str | None = None
    url: str = ""
    title: str | None = None
    alt: str = ""
    checked: bool = False
    table: MarkdownTable | None = None

    def marker_ranges(self) -> List[TextRange]:
        """
        Get the marker regions flanking the content range.

        Returns:
            Zero, one or two non-empty ranges: before and after the content
        """
        markers: List[TextRange] = []
        if self.content_range.location > self.full_range.location:
            markers.append(TextRange(
                self.full_range.location,
                self.content_range.location - self.full_range.location
            ))

        if self.content_range.end < self.full_range.end:
            markers.append(TextRange(
                self.content_range.end,
                self.full_range.end - self.content_range.end
            ))

        return markers
