"""Tests for the Markdown formatting actions."""

import pytest

from mdspan import TextRange

from simpleedit.markdown_formatter import (
    format_action, insert_code, insert_horizontal_rule, insert_link, toggle_line_prefix, wrap_selection
)


class TestWrapSelection:
    """Test wrapping and unwrapping selections."""

    def test_wrap(self):
        """Test markers are added around the selection, which stays selected."""
        text = "hello world"
        edit = wrap_selection(text, TextRange(0, 5), "**", "**")

        assert edit.apply(text) == "**hello** world"
        assert edit.selection == TextRange(2, 5)

    def test_unwrap(self):
        """Test markers already around the selection are removed."""
        text = "**hello** world"
        edit = wrap_selection(text, TextRange(2, 5), "**", "**")

        assert edit.range == TextRange(0, 9)
        assert edit.apply(text) == "hello world"
        assert edit.selection == TextRange(0, 5)

    def test_wrap_empty_selection(self):
        """Test an empty selection gets a marker pair with the cursor between."""
        text = "ab"
        edit = wrap_selection(text, TextRange(1, 0), "~~", "~~")

        assert edit.apply(text) == "a~~~~b"
        assert edit.selection == TextRange(3, 0)

    def test_wrap_at_document_edges(self):
        """Test unwrapping checks do not run off either end of the text."""
        text = "x"
        assert wrap_selection(text, TextRange(0, 1), "*", "*").apply(text) == "*x*"


class TestLinePrefix:
    """Test toggling line prefixes."""

    def test_add_prefix_to_every_line(self):
        """Test each selected line gets the prefix."""
        text = "one\ntwo"
        edit = toggle_line_prefix(text, TextRange(0, 7), "- ")

        assert edit.apply(text) == "- one\n- two"

    def test_remove_prefix(self):
        """Test the prefix is removed when every line has it."""
        text = "- one\n- two"
        assert toggle_line_prefix(text, TextRange(0, len(text)), "- ").apply(text) == "one\ntwo"

    def test_only_touched_lines(self):
        """Test lines outside the selection are untouched."""
        text = "a\nb\nc"
        assert toggle_line_prefix(text, TextRange(2, 1), "> ").apply(text) == "a\n> b\nc"

    def test_selection_ending_at_line_start(self):
        """Test a selection ending just after a newline excludes the next line."""
        text = "a\nb"
        assert toggle_line_prefix(text, TextRange(0, 2), "> ").apply(text) == "> a\nb"

    def test_remove_keeps_indent(self):
        """Test removing a prefix keeps the whitespace before it."""
        text = "  - x"
        assert toggle_line_prefix(text, TextRange(0, 0), "- ").apply(text) == "  x"

    def test_cursor_on_empty_line(self):
        """Test a cursor on an empty line still gets a prefix."""
        text = "a\n\nb"
        assert toggle_line_prefix(text, TextRange(2, 0), "## ").apply(text) == "a\n## \nb"


class TestInsertions:
    """Test code, links and rules."""

    def test_inline_code(self):
        """Test a single-line selection gets backticks."""
        text = "x = 1"
        assert insert_code(text, TextRange(0, 5)).apply(text) == "`x = 1`"

    def test_code_block(self):
        """Test a multi-line selection gets a fence."""
        text = "a\nb"
        edit = insert_code(text, TextRange(0, 3))

        assert edit.apply(text) == "```\na\nb\n```"
        assert edit.selection == TextRange(4, 3)

    def test_link_from_selection(self):
        """Test the selection becomes the link text and the URL is selected."""
        text = "site"
        edit = insert_link(text, TextRange(0, 4))
        result = edit.apply(text)

        assert result == "[site](url)"
        assert result[edit.selection.location:edit.selection.end] == "url"

    def test_link_placeholder(self):
        """Test an empty selection gets placeholder link text."""
        edit = insert_link("", TextRange(0, 0))
        result = edit.apply("")

        assert result == "[link text](url)"
        assert result[edit.selection.location:edit.selection.end] == "url"

    def test_horizontal_rule(self):
        """Test the rule goes on its own line."""
        text = "abc"
        assert insert_horizontal_rule(TextRange(3, 0)).apply(text) == "abc\n---\n"


class TestNamedActions:
    """Test the named toolbar actions."""

    @pytest.mark.parametrize("action,expected", [
        ("heading", "## task"),
        ("bold", "**task**"),
        ("italic", "*task*"),
        ("strikethrough", "~~task~~"),
        ("code", "`task`"),
        ("link", "[task](url)"),
        ("bullet_list", "- task"),
        ("numbered_list", "1. task"),
        ("blockquote", "> task"),
        ("checkbox", "- [ ] task"),
        ("horizontal_rule", "\n---\n"),
    ])
    def test_action(self, action, expected):
        """Test each action applied to a fully selected word."""
        text = "task"
        assert format_action(action, text, TextRange(0, 4)).apply(text) == expected

    def test_unknown_action(self):
        """Test unknown action names are rejected."""
        with pytest.raises(KeyError):
            format_action("underline", "x", TextRange(0, 1))
