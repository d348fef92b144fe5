"""Tests for the inline Markdown parser."""

import pytest

from mdspan import MarkdownSpanKind, TextRange, subtract_ranges


class TestEmphasis:
    """Test bold, italic, strikethrough and code."""

    @pytest.mark.parametrize("text", ["**bold**", "__bold__"])
    def test_bold(self, inline_parser, text):
        """Test both bold marker styles."""
        spans = inline_parser.parse(text)

        assert len(spans) == 1
        assert spans[0].kind == MarkdownSpanKind.BOLD
        assert spans[0].full_range == TextRange(0, 8)
        assert spans[0].content_range == TextRange(2, 4)

    @pytest.mark.parametrize("text", ["*it*", "_it_"])
    def test_italic(self, inline_parser, text):
        """Test both italic marker styles."""
        spans = inline_parser.parse(text)

        assert len(spans) == 1
        assert spans[0].kind == MarkdownSpanKind.ITALIC
        assert spans[0].content_range == TextRange(1, 2)

    def test_bold_italic_is_a_single_span(self, inline_parser, helpers):
        """Test triple markers give bold-italic and nothing else."""
        text = "***both***"
        spans = inline_parser.parse(text)

        assert [span.kind for span in spans] == [MarkdownSpanKind.BOLD_ITALIC]
        assert helpers.text_of(text, spans[0].content_range) == "both"

    def test_strikethrough(self, inline_parser, helpers):
        """Test strikethrough content excludes the tildes."""
        text = "a ~~gone~~ b"
        spans = inline_parser.parse(text)

        assert [span.kind for span in spans] == [MarkdownSpanKind.STRIKETHROUGH]
        assert helpers.text_of(text, spans[0].content_range) == "gone"

    def test_inline_code(self, inline_parser, helpers):
        """Test inline code content excludes the backticks."""
        text = "use `print()` here"
        spans = inline_parser.parse(text)

        assert [span.kind for span in spans] == [MarkdownSpanKind.CODE]
        assert spans[0].full_range == TextRange(4, 9)
        assert helpers.text_of(text, spans[0].content_range) == "print()"

    def test_emphasis_inside_sentence(self, inline_parser):
        """Test offsets are absolute within the text."""
        spans = inline_parser.parse("say **hi** now")

        assert spans[0].full_range == TextRange(4, 6)
        assert spans[0].content_range == TextRange(6, 2)

    def test_underscores_inside_words(self, inline_parser):
        """Test identifiers with underscores are not emphasis."""
        assert not inline_parser.parse("snake_case_name and my_var")

    def test_spaced_asterisks(self, inline_parser):
        """Test asterisks surrounded by spaces are not italic."""
        assert not inline_parser.parse("2 * 3 * 4")

    def test_no_match_across_lines(self, inline_parser):
        """Test constructs never span a newline."""
        assert not inline_parser.parse("**a\nb**")
        assert not inline_parser.parse("`a\nb`")

    def test_nested_italic_in_bold(self, inline_parser):
        """Test nested constructs give one span each."""
        kinds = sorted(span.kind.name for span in inline_parser.parse("**bold _it_**"))

        assert kinds == ["BOLD", "ITALIC"]


class TestLinksAndImages:
    """Test links and images."""

    def test_link(self, inline_parser, helpers):
        """Test link text is the content and the URL is extracted."""
        text = "see [text](http://example.com) here"
        spans = inline_parser.parse(text)

        assert [span.kind for span in spans] == [MarkdownSpanKind.LINK]
        assert helpers.text_of(text, spans[0].content_range) == "text"
        assert helpers.text_of(text, spans[0].full_range) == "[text](http://example.com)"
        assert spans[0].url == "http://example.com"
        assert spans[0].title is None

    def test_link_with_title(self, inline_parser):
        """Test a quoted title is stored separately from the URL."""
        spans = inline_parser.parse('[t](http://x.org "The Title")')

        assert spans[0].url == "http://x.org"
        assert spans[0].title == "The Title"

    def test_image(self, inline_parser, helpers):
        """Test an image is not also reported as a link."""
        text = "![alt text](pic.png)"
        spans = inline_parser.parse(text)

        assert [span.kind for span in spans] == [MarkdownSpanKind.IMAGE]
        assert spans[0].alt == "alt text"
        assert spans[0].url == "pic.png"
        assert helpers.text_of(text, spans[0].content_range) == "alt text"


class TestExcludedRanges:
    """Test scanning around excluded ranges."""

    def test_excluded_range_is_skipped(self, inline_parser):
        """Test constructs inside an excluded range are ignored."""
        spans = inline_parser.parse("**a** **b**", [TextRange(0, 5)])

        assert len(spans) == 1
        assert spans[0].content_range == TextRange(8, 1)

    def test_construct_straddling_exclusion(self, inline_parser):
        """Test a construct cut by an exclusion is not matched."""
        assert not inline_parser.parse("**ab**", [TextRange(3, 1)])


class TestSubtractRanges:
    """Test range subtraction."""

    def test_no_exclusions(self):
        """Test the full range comes back unchanged."""
        assert subtract_ranges(TextRange(0, 10), []) == [TextRange(0, 10)]

    def test_overlapping_exclusions(self):
        """Test overlapping exclusions merge."""
        remaining = subtract_ranges(TextRange(0, 10), [TextRange(4, 2), TextRange(2, 3)])

        assert remaining == [TextRange(0, 2), TextRange(6, 4)]

    def test_exclusion_past_end(self):
        """Test exclusions running past the end are clipped."""
        assert subtract_ranges(TextRange(0, 5), [TextRange(3, 10)]) == [TextRange(0, 3)]

    def test_everything_excluded(self):
        """Test nothing is left when the exclusion covers the range."""
        assert not subtract_ranges(TextRange(0, 5), [TextRange(0, 5)])
