"""Tests for the combined Markdown parser."""

from mdspan import MarkdownSpanKind, TextRange


class TestParse:
    """Test parsing whole documents."""

    def test_parse_is_deterministic(self, parser):
        """Test repeated parses give identical span lists."""
        text = "# Title\n\nSome **bold** and *italic*.\n\n- [x] done\n\n```py\nx = 1\n```"
        assert parser.parse(text) == parser.parse(text)

    def test_heading_levels(self, parser, helpers):
        """Test three headings come back in order."""
        spans = parser.parse("# H1\n## H2\n### H3")
        headings = helpers.of_kind(spans, MarkdownSpanKind.HEADING)

        assert len(spans) == 3
        assert [h.level for h in headings] == [1, 2, 3]

    def test_bold_only(self, parser):
        """Test a bold word gives exactly one span whose content skips the markers."""
        spans = parser.parse("**bold**")

        assert len(spans) == 1
        assert spans[0].kind == MarkdownSpanKind.BOLD
        assert spans[0].content_range == TextRange(2, 4)

    def test_code_block(self, parser):
        """Test a fenced block gives one span covering the whole fence."""
        text = "```swift\nlet x = 1\n```"
        spans = parser.parse(text)

        assert len(spans) == 1
        assert spans[0].kind == MarkdownSpanKind.CODE_BLOCK
        assert spans[0].language == "swift"
        assert spans[0].full_range == TextRange(0, len(text))

    def test_unterminated_code_block(self, parser, helpers):
        """Test an unclosed fence gives no code block span."""
        spans = parser.parse("```swift\nlet x = 1")
        assert not helpers.of_kind(spans, MarkdownSpanKind.CODE_BLOCK)

    def test_code_block_hides_inline_constructs(self, parser):
        """Test nothing inside a fence is parsed as inline Markdown."""
        spans = parser.parse("```\n**not bold** and `x`\n```")

        assert [span.kind for span in spans] == [MarkdownSpanKind.CODE_BLOCK]

    def test_checkboxes(self, parser, helpers):
        """Test unchecked and checked items."""
        checkboxes = helpers.of_kind(parser.parse("- [ ] a\n- [x] b"), MarkdownSpanKind.CHECKBOX)

        assert [c.checked for c in checkboxes] == [False, True]

    def test_plain_text_has_no_spans(self, parser):
        """Test text without Markdown syntax gives no spans."""
        assert not parser.parse("")
        assert not parser.parse("hello world")
        assert not parser.parse("just some text\nand another line")

    def test_block_and_inline_spans_together(self, parser, helpers):
        """Test inline constructs inside block constructs."""
        text = "# **Bold** title\n> a [link](http://x.org)"
        spans = parser.parse(text)

        assert len(helpers.of_kind(spans, MarkdownSpanKind.HEADING)) == 1
        assert len(helpers.of_kind(spans, MarkdownSpanKind.BOLD)) == 1
        assert len(helpers.of_kind(spans, MarkdownSpanKind.BLOCKQUOTE)) == 1
        links = helpers.of_kind(spans, MarkdownSpanKind.LINK)
        assert [link.url for link in links] == ["http://x.org"]

    def test_block_spans_precede_inline_spans(self, parser):
        """Test the list holds block spans first."""
        spans = parser.parse("**a**\n# b")

        assert [span.kind for span in spans] == [MarkdownSpanKind.HEADING, MarkdownSpanKind.BOLD]


class TestParseTables:
    """Test tables through the combined parser."""

    def test_table(self, parser, helpers):
        """Test a two column table with one data row."""
        text = "| Name | Value |\n|------|-------|\n|  a   |   1   |"
        tables = helpers.of_kind(parser.parse(text), MarkdownSpanKind.TABLE)

        assert len(tables) == 1
        table = tables[0].table
        assert len(table.header_cells) == 2
        assert len(table.rows) == 1
        assert [helpers.text_of(text, c.range) for c in table.rows[0]] == ["a", "1"]

    def test_cell_content_is_inline_parsed(self, parser, helpers):
        """Test inline constructs inside table cells."""
        text = "| **A** | B |\n|---|---|\n| `1` | 2 |"
        spans = parser.parse(text)

        assert len(helpers.of_kind(spans, MarkdownSpanKind.BOLD)) == 1
        assert len(helpers.of_kind(spans, MarkdownSpanKind.CODE)) == 1

    def test_separator_row_is_not_inline_parsed(self, parser):
        """Test no inline span falls inside the separator row."""
        text = "| A | B |\n|:--|--:|\n| 1 | 2 |"
        spans = parser.parse(text)
        separator = spans[0].table.separator_range

        assert not [s for s in spans[1:] if separator.contains(s.full_range)]


class TestToHTML:
    """Test the parser's HTML entry point."""

    def test_plain_text(self, parser):
        """Test plain text becomes a single paragraph."""
        assert parser.to_html("hello world") == "<p>hello world</p>"

    def test_table(self, parser):
        """Test a table becomes one HTML table with matching cells."""
        html = parser.to_html("| A | B |\n|---|---|\n| 1 | 2 |")

        assert html.count("<table>") == 1
        assert "<th>A</th><th>B</th>" in html
        assert "<td>1</td><td>2</td>" in html
