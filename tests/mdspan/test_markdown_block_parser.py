"""Tests for the block-level Markdown parser."""

from mdspan import MarkdownSpanKind, TextRange, is_separator_row, is_table_line


class TestHeadings:
    """Test ATX heading recognition."""

    def test_heading_levels(self, block_parser, helpers):
        """Test headings of several levels, with content ranges excluding markers."""
        text = "# H1\n## H2\n### H3"
        headings = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.HEADING)

        assert [h.level for h in headings] == [1, 2, 3]
        assert [h.full_range for h in headings] == [TextRange(0, 4), TextRange(5, 5), TextRange(11, 6)]
        assert [helpers.text_of(text, h.content_range) for h in headings] == ["H1", "H2", "H3"]

    def test_level_clamped_to_six(self, block_parser, helpers):
        """Test more than six hashes still give a level 6 heading with the right content."""
        text = "####### deep"
        headings = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.HEADING)

        assert len(headings) == 1
        assert headings[0].level == 6
        assert helpers.text_of(text, headings[0].content_range) == "deep"

    def test_indented_heading(self, block_parser, helpers):
        """Test leading whitespace is skipped when locating the content."""
        text = "  ## Title"
        headings = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.HEADING)

        assert len(headings) == 1
        assert headings[0].full_range == TextRange(0, 10)
        assert helpers.text_of(text, headings[0].content_range) == "Title"

    def test_hash_without_space_is_not_heading(self, block_parser):
        """Test hashes must be followed by a space."""
        assert not block_parser.parse("#hashtag")
        assert not block_parser.parse("#")
        assert not block_parser.parse("##")


class TestLineConstructs:
    """Test horizontal rules, blockquotes and list items."""

    def test_horizontal_rules(self, block_parser, helpers):
        """Test the three rule forms, with surrounding whitespace allowed."""
        text = "---\n***\n___\n  ---  "
        rules = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.HORIZONTAL_RULE)

        assert len(rules) == 4
        assert rules[3].full_range == TextRange(12, 7)

    def test_blockquote(self, block_parser, helpers):
        """Test a blockquote's content starts after the '> ' marker."""
        text = "> quoted\n  > indented"
        quotes = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.BLOCKQUOTE)

        assert len(quotes) == 2
        assert helpers.text_of(text, quotes[0].content_range) == "quoted"
        assert helpers.text_of(text, quotes[1].content_range) == "indented"

    def test_blockquote_needs_space(self, block_parser):
        """Test '>' without a following space is plain text."""
        assert not block_parser.parse(">quoted")

    def test_unordered_list_items(self, block_parser, helpers):
        """Test all three bullet characters."""
        text = "- a\n* b\n+ c"
        items = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.UNORDERED_LIST_ITEM)

        assert [item.full_range for item in items] == [TextRange(0, 3), TextRange(4, 3), TextRange(8, 3)]

    def test_ordered_list_items(self, block_parser, helpers):
        """Test numbered items, including multi-digit numbers."""
        text = "1. one\n10. ten\n1.nospace"
        items = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.ORDERED_LIST_ITEM)

        assert len(items) == 2
        assert items[1].full_range == TextRange(7, 7)

    def test_checkboxes(self, block_parser, helpers):
        """Test checkbox items replace plain list items."""
        text = "- [ ] a\n- [x] b\n- [X] c"
        spans = block_parser.parse(text)
        checkboxes = helpers.of_kind(spans, MarkdownSpanKind.CHECKBOX)

        assert [c.checked for c in checkboxes] == [False, True, True]
        assert not helpers.of_kind(spans, MarkdownSpanKind.UNORDERED_LIST_ITEM)


class TestCodeBlocks:
    """Test fenced code blocks."""

    def test_code_block_with_language(self, block_parser, helpers):
        """Test a closed fence covers everything from opening to closing fence."""
        text = "```python\nx = 1\n```"
        blocks = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.CODE_BLOCK)

        assert len(blocks) == 1
        assert blocks[0].full_range == TextRange(0, 19)
        assert blocks[0].content_range == blocks[0].full_range
        assert blocks[0].language == "python"

    def test_code_block_without_language(self, block_parser, helpers):
        """Test a bare fence has no language."""
        blocks = helpers.of_kind(block_parser.parse("```\ncode\n```"), MarkdownSpanKind.CODE_BLOCK)

        assert len(blocks) == 1
        assert blocks[0].language is None

    def test_lines_inside_fence_are_not_classified(self, block_parser):
        """Test block rules are suspended inside a fence."""
        spans = block_parser.parse("```\n# not heading\n- not item\n```")

        assert [span.kind for span in spans] == [MarkdownSpanKind.CODE_BLOCK]

    def test_unterminated_fence(self, block_parser):
        """Test an unclosed fence gives no span and suppresses the lines after it."""
        assert not block_parser.parse("```swift\nlet x = 1\n# heading")

    def test_two_blocks(self, block_parser, helpers):
        """Test consecutive fences pair up in order."""
        text = "```\na\n```\ntext\n```js\nb\n```"
        blocks = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.CODE_BLOCK)

        assert [b.language for b in blocks] == [None, "js"]
        assert blocks[1].full_range.end == len(text)


class TestTables:
    """Test pipe tables."""

    def test_simple_table(self, block_parser, helpers):
        """Test the header, separator and data cells of a table."""
        text = "| A | B |\n|---|---|\n| 1 | 2 |"
        tables = helpers.of_kind(block_parser.parse(text), MarkdownSpanKind.TABLE)

        assert len(tables) == 1
        table = tables[0].table
        assert tables[0].full_range == TextRange(0, 29)
        assert table.columns == 2
        assert [helpers.text_of(text, c.range) for c in table.header_cells] == ["A", "B"]
        assert table.separator_range == TextRange(10, 9)
        assert len(table.rows) == 1
        assert [helpers.text_of(text, c.range) for c in table.rows[0]] == ["1", "2"]
        assert [(c.row, c.column) for c in table.rows[0]] == [(1, 0), (1, 1)]

    def test_short_row_is_padded(self, block_parser):
        """Test missing cells become empty ranges at the end of the row."""
        text = "| A | B |\n|---|---|\n| 1 |"
        table = block_parser.parse(text)[0].table

        assert len(table.rows[0]) == 2
        assert table.rows[0][1].range == TextRange(len(text), 0)

    def test_long_row_is_truncated(self, block_parser):
        """Test extra cells beyond the header's column count are dropped."""
        table = block_parser.parse("| A | B |\n|---|---|\n| 1 | 2 | 3 |")[0].table

        assert len(table.rows[0]) == 2

    def test_empty_cell(self, block_parser):
        """Test a blank cell gives a zero-length range."""
        table = block_parser.parse("| A |   |\n|---|---|\n| 1 | 2 |")[0].table

        assert table.header_cells[1].range.is_empty()

    def test_table_needs_data_row(self, block_parser, helpers):
        """Test a header and separator alone are not a table."""
        spans = block_parser.parse("| A | B |\n|---|---|")
        assert not helpers.of_kind(spans, MarkdownSpanKind.TABLE)

    def test_table_needs_separator(self, block_parser, helpers):
        """Test three pipe lines without a separator are not a table."""
        spans = block_parser.parse("| A |\n| B |\n| C |")
        assert not helpers.of_kind(spans, MarkdownSpanKind.TABLE)

    def test_table_inside_fence_is_ignored(self, block_parser, helpers):
        """Test pipe lines inside a code fence are code, not a table."""
        spans = block_parser.parse("```\n| A | B |\n|---|---|\n| 1 | 2 |\n```")

        assert not helpers.of_kind(spans, MarkdownSpanKind.TABLE)
        assert len(helpers.of_kind(spans, MarkdownSpanKind.CODE_BLOCK)) == 1

    def test_tables_come_first(self, block_parser):
        """Test table spans precede the per-line spans."""
        spans = block_parser.parse("# T\n| A |\n|---|\n| 1 |")

        assert [span.kind for span in spans] == [MarkdownSpanKind.TABLE, MarkdownSpanKind.HEADING]


class TestTablePredicates:
    """Test the table line helpers."""

    def test_is_table_line(self):
        """Test lines must be wrapped in pipes."""
        assert is_table_line("| a |")
        assert not is_table_line("|")
        assert not is_table_line("| a")

    def test_is_separator_row(self):
        """Test separator rows allow dashes and colons only."""
        assert is_separator_row("|---|---|")
        assert is_separator_row("| :-- | :-: | --: |")
        assert not is_separator_row("| a | b |")
        assert not is_separator_row("|   |")
