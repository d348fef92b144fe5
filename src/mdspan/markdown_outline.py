"""
Document outline built from heading spans.
"""

from dataclasses import dataclass
from typing import List, Sequence

from mdspan.markdown_parser import MarkdownParser
from mdspan.markdown_span import MarkdownSpan, MarkdownSpanKind


@dataclass(frozen=True)
class OutlineItem:
    """A heading entry in the document outline."""

    level: int
    title: str
    location: int  # Offset of the heading line in the source text


def extract_outline(text: str, spans: Sequence[MarkdownSpan] | None = None) -> List[OutlineItem]:
    """
    Extract the heading outline of a document.

    Args:
        text: The Markdown source
        spans: Spans already parsed from text; parsed on demand if not given

    Returns:
        Outline items in source order
    """
    if spans is None:
        spans = MarkdownParser().parse(text)

    headings = sorted(
        (span for span in spans if span.kind == MarkdownSpanKind.HEADING),
        key=lambda span: span.full_range.location
    )

    return [
        OutlineItem(
            level=span.level,
            title=text[span.content_range.location:span.content_range.end].strip(),
            location=span.full_range.location
        )
        for span in headings
    ]
