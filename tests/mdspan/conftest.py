"""Shared fixtures and utilities for Markdown span parser tests."""

from typing import List

import pytest

from mdspan import (
    MarkdownBlockParser, MarkdownHTMLRenderer, MarkdownInlineParser, MarkdownParser,
    MarkdownSpan, MarkdownSpanKind, TextRange
)


class SpanHelpers:
    """Helpers for inspecting span lists."""

    @staticmethod
    def of_kind(spans: List[MarkdownSpan], kind: MarkdownSpanKind) -> List[MarkdownSpan]:
        """Get the spans of one kind, in list order."""
        return [span for span in spans if span.kind == kind]

    @staticmethod
    def text_of(text: str, text_range: TextRange) -> str:
        """Get the text covered by a range."""
        return text[text_range.location:text_range.end]


@pytest.fixture
def helpers():
    """Provide span inspection helpers."""
    return SpanHelpers


@pytest.fixture
def parser():
    """Provide a combined Markdown parser."""
    return MarkdownParser()


@pytest.fixture
def block_parser():
    """Provide a block parser."""
    return MarkdownBlockParser()


@pytest.fixture
def inline_parser():
    """Provide an inline parser."""
    return MarkdownInlineParser()


@pytest.fixture
def renderer():
    """Provide an HTML renderer."""
    return MarkdownHTMLRenderer()
