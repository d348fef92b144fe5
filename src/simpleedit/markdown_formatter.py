"""
Markdown formatting actions.

Each action looks at the text and the current selection and returns the single
edit that applies the formatting.  Applying the edit is left to the caller.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from mdspan import TextRange


@dataclass(frozen=True)
class TextEdit:
    """
    A replacement of one range of text.

    Attributes:
        range: Characters to replace
        replacement: Text to put in their place
        selection: Selection to show once the edit is applied, in post-edit offsets
    """
    range: TextRange
    replacement: str
    selection: TextRange

    def apply(self, text: str) -> str:
        """Apply the edit to a string."""
        return text[:self.range.location] + self.replacement + text[self.range.end:]


def wrap_selection(text: str, selection: TextRange, prefix: str, suffix: str) -> TextEdit:
    """
    Wrap the selection in markers, or remove them if they are already there.

    Args:
        text: The document text
        selection: The selected range
        prefix: Marker to put before the selection
        suffix: Marker to put after the selection

    Returns:
        The edit to apply
    """
    selected = text[selection.location:selection.end]
    before_start = selection.location - len(prefix)
    after_end = selection.end + len(suffix)

    if (
        before_start >= 0
        and after_end <= len(text)
        and text[before_start:selection.location] == prefix
        and text[selection.end:after_end] == suffix
    ):
        return TextEdit(
            TextRange(before_start, after_end - before_start),
            selected,
            TextRange(before_start, len(selected))
        )

    return TextEdit(
        selection,
        prefix + selected + suffix,
        TextRange(selection.location + len(prefix), len(selected))
    )


def _line_span(text: str, selection: TextRange) -> TextRange:
    """Get the lines touched by a selection, without the final newline."""
    start = text.rfind("\n", 0, selection.location) + 1

    # A selection ending at the start of a line doesn't include that line
    end_search = selection.end
    if selection.length > 0 and text[selection.end - 1:selection.end] == "\n":
        end_search -= 1

    end = text.find("\n", max(end_search, start))
    if end == -1:
        end = len(text)

    return TextRange(start, end - start)


def toggle_line_prefix(text: str, selection: TextRange, prefix: str) -> TextEdit:
    """
    Add a prefix to each selected line, or remove it if every line has it.

    Leading whitespace before an existing prefix is kept.

    Args:
        text: The document text
        selection: The selected range
        prefix: Line prefix such as "> " or "- "

    Returns:
        The edit to apply
    """
    line_range = _line_span(text, selection)
    lines = text[line_range.location:line_range.end].split("\n")

    has_prefix = all(line.lstrip(" \t").startswith(prefix) for line in lines)
    new_lines: List[str] = []
    for line in lines:
        if has_prefix:
            indent = len(line) - len(line.lstrip(" \t"))
            new_lines.append(line[:indent] + line[indent + len(prefix):])
            continue

        new_lines.append(prefix + line)

    replacement = "\n".join(new_lines)
    return TextEdit(line_range, replacement, TextRange(line_range.location, len(replacement)))


def insert_code(text: str, selection: TextRange) -> TextEdit:
    """
    Format the selection as code.

    Multi-line selections become a fenced code block; anything else is
    wrapped in backticks.

    Args:
        text: The document text
        selection: The selected range

    Returns:
        The edit to apply
    """
    selected = text[selection.location:selection.end]
    if "\n" not in selected:
        return wrap_selection(text, selection, "`", "`")

    replacement = "```\n" + selected + "\n```"
    return TextEdit(selection, replacement, TextRange(selection.location + 4, len(selected)))


def insert_link(text: str, selection: TextRange) -> TextEdit:
    """
    Turn the selection into a link, selecting the URL placeholder.

    Args:
        text: The document text
        selection: The selected range; if empty, placeholder link text is used

    Returns:
        The edit to apply
    """
    label = text[selection.location:selection.end] or "link text"
    replacement = f"[{label}](url)"
    url_start = selection.location + len(label) + 3
    return TextEdit(selection, replacement, TextRange(url_start, 3))


def insert_horizontal_rule(selection: TextRange) -> TextEdit:
    """Replace the selection with a horizontal rule on its own line."""
    replacement = "\n---\n"
    return TextEdit(selection, replacement, TextRange(selection.location + len(replacement), 0))


FORMAT_ACTIONS: Dict[str, Callable[[str, TextRange], TextEdit]] = {
    "heading": lambda text, selection: toggle_line_prefix(text, selection, "## "),
    "bold": lambda text, selection: wrap_selection(text, selection, "**", "**"),
    "italic": lambda text, selection: wrap_selection(text, selection, "*", "*"),
    "strikethrough": lambda text, selection: wrap_selection(text, selection, "~~", "~~"),
    "code": insert_code,
    "link": insert_link,
    "bullet_list": lambda text, selection: toggle_line_prefix(text, selection, "- "),
    "numbered_list": lambda text, selection: toggle_line_prefix(text, selection, "1. "),
    "blockquote": lambda text, selection: toggle_line_prefix(text, selection, "> "),
    "horizontal_rule": lambda _text, selection: insert_horizontal_rule(selection),
    "checkbox": lambda text, selection: toggle_line_prefix(text, selection, "- [ ] "),
}


def format_action(name: str, text: str, selection: TextRange) -> TextEdit:
    """
    Run a named formatting action.

    Args:
        name: One of the keys of FORMAT_ACTIONS
        text: The document text
        selection: The selected range

    Returns:
        The edit to apply

    Raises:
        KeyError: If the action name is unknown
    """
    return FORMAT_ACTIONS[name](text, selection)
