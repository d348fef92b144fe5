"""
Abstract mutable text-plus-attributes store backing the styled editor view.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Iterator, Tuple

from mdspan import TextRange


@dataclass(frozen=True)
class FontSpec:
    """Description of a font, independent of any toolkit."""

    families: Tuple[str, ...]
    point_size: float
    bold: bool = False
    italic: bool = False
    fixed_pitch: bool = False


@dataclass(frozen=True)
class TextAttributes:
    """
    Presentation attributes for a run of characters.

    A field left as None means "not specified": when merged into existing
    attributes it leaves the existing value alone.
    """

    font: FontSpec | None = None
    foreground: str | None = None
    background: str | None = None
    underline: bool | None = None
    strikethrough: bool | None = None
    strikethrough_color: str | None = None
    head_indent: float | None = None
    first_line_head_indent: float | None = None
    link: str | None = None
    pointing_cursor: bool | None = None
    hidden: bool | None = None

    def merged(self, other: "TextAttributes") -> "TextAttributes":
        """
        Overlay another set of attributes on this one.

        Args:
            other: Attributes whose specified fields take precedence

        Returns:
            New attributes combining both
        """
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)


class StyledBuffer(ABC):
    """
    Text buffer whose attributes can be rewritten by the styler.

    The buffer owns its characters.  Attributes are derived data: a styling pass
    rewrites them inside one begin_editing()/end_editing() bracket.  Brackets
    may nest; only the outermost one opens and closes an edit block.
    """

    def __init__(self) -> None:
        """Initialize the edit bracket depth."""
        self._edit_depth = 0

    @abstractmethod
    def text(self) -> str:
        """Get the current text."""

    def length(self) -> int:
        """Get the number of characters in the buffer."""
        return len(self.text())

    def begin_editing(self) -> None:
        """Start a group of attribute writes."""
        self._edit_depth += 1
        if self._edit_depth == 1:
            self._begin_edit_block()

    def end_editing(self) -> None:
        """
        Finish a group of attribute writes.

        The buffer still reports is_editing() while the outermost edit block is
        closed, so change notifications raised at that point are recognised as
        coming from the writes.
        """
        if self._edit_depth == 0:
            return

        if self._edit_depth == 1:
            self._end_edit_block()

        self._edit_depth -= 1

    def is_editing(self) -> bool:
        """Check whether an attribute write bracket is open."""
        return self._edit_depth > 0

    def _begin_edit_block(self) -> None:
        """Hook called when the outermost bracket opens."""

    def _end_edit_block(self) -> None:
        """Hook called when the outermost bracket closes."""

    @abstractmethod
    def set_attributes(self, text_range: TextRange, attributes: TextAttributes) -> None:
        """
        Replace the attributes of a range.

        Args:
            text_range: Characters to update
            attributes: The new attributes; unspecified fields are cleared
        """

    @abstractmethod
    def add_attributes(self, text_range: TextRange, attributes: TextAttributes) -> None:
        """
        Merge attributes into a range.

        Args:
            text_range: Characters to update
            attributes: Attributes whose specified fields override existing ones
        """

    @contextmanager
    def editing(self) -> Iterator["StyledBuffer"]:
        """Bracket a group of writes with begin_editing() and end_editing()."""
        self.begin_editing()
        try:
            yield self

        finally:
            self.end_editing()

    def paragraph_range(self, text_range: TextRange) -> TextRange:
        """
        Get the range of the paragraphs touched by a range.

        Args:
            text_range: Range inside the buffer

        Returns:
            From the start of the first touched line to the end of the last one,
            including its terminating newline if it has one
        """
        text = self.text()
        start = min(max(0, text_range.location), len(text))
        end = min(max(start, text_range.end), len(text))

        line_start = text.rfind("\n", 0, start) + 1
        line_end = text.find("\n", end)
        if line_end == -1:
            line_end = len(text)

        else:
            line_end += 1

        return TextRange(line_start, line_end - line_start)
