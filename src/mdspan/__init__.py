"""Markdown span parsing and HTML rendering for the editor."""

from mdspan.markdown_block_parser import MarkdownBlockParser, is_separator_row, is_table_line
from mdspan.markdown_html_renderer import MarkdownHTMLRenderer
from mdspan.markdown_inline_parser import MarkdownInlineParser, subtract_ranges
from mdspan.markdown_outline import OutlineItem, extract_outline
from mdspan.markdown_parser import MarkdownParser
from mdspan.markdown_span import (
    MarkdownSpan,
    MarkdownSpanKind,
    MarkdownTable,
    MarkdownTableCell,
    TextRange
)


__all__ = [
    "MarkdownBlockParser",
    "MarkdownHTMLRenderer",
    "MarkdownInlineParser",
    "MarkdownParser",
    "MarkdownSpan",
    "MarkdownSpanKind",
    "MarkdownTable",
    "MarkdownTableCell",
    "OutlineItem",
    "TextRange",
    "extract_outline",
    "is_separator_row",
    "is_table_line",
    "subtract_ranges"
]
