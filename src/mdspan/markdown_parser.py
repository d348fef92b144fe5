"""
Entry point combining the block and inline parsers.
"""

from typing import List

from mdspan.markdown_block_parser import MarkdownBlockParser
from mdspan.markdown_html_renderer import MarkdownHTMLRenderer
from mdspan.markdown_inline_parser import MarkdownInlineParser
from mdspan.markdown_span import MarkdownSpan, MarkdownSpanKind, TextRange


class MarkdownParser:
    """
    Stateless Markdown parser producing a flat span list.

    Each call to parse() works from scratch on the text it is given; the parser
    keeps no state between calls.
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self._block_parser = MarkdownBlockParser()
        self._inline_parser = MarkdownInlineParser()
        self._html_renderer = MarkdownHTMLRenderer()

    def parse(self, text: str) -> List[MarkdownSpan]:
        """
        Parse text into block and inline spans.

        Code blocks and table separator rows are excluded from inline parsing.
        Table cell content is still scanned for inline constructs.

        Args:
            text: The Markdown source

        Returns:
            Block spans followed by inline spans
        """
        spans = self._block_parser.parse(text)

        excluded: List[TextRange] = []
        for span in spans:
            if span.kind == MarkdownSpanKind.CODE_BLOCK:
                excluded.append(span.full_range)

            elif span.kind == MarkdownSpanKind.TABLE and span.table is not None:
                excluded.append(span.table.separator_range)

        spans.extend(self._inline_parser.parse(text, excluded))
        return spans

    def to_html(self, text: str) -> str:
        """
        Render text as an HTML fragment.

        Args:
            text: The Markdown source

        Returns:
            HTML fragment for the preview
        """
        return self._html_renderer.to_html(text)
