"""
Regex-driven parser for inline Markdown constructs.
"""

import re
from typing import Iterable, List, Tuple

from mdspan.markdown_span import MarkdownSpan, MarkdownSpanKind, TextRange


# Inline patterns.  None of them can match across a newline.  The HTML renderer
# uses the same expressions so both outputs agree on what is emphasis.
BOLD_ITALIC_STAR_PATTERN = r'(?<!\*)\*\*\*(?!\*)(.+?)(?<!\*)\*\*\*(?!\*)'
BOLD_ITALIC_UNDERSCORE_PATTERN = r'(?<!\w)___(?!_)(.+?)(?<!_)___(?!\w)'
BOLD_STAR_PATTERN = r'(?<!\*)\*\*(?!\*)(.+?)(?<!\*)\*\*(?!\*)'
BOLD_UNDERSCORE_PATTERN = r'(?<!\w)__(?!_)(.+?)(?<!_)__(?!\w)'
ITALIC_STAR_PATTERN = r'(?<!\*)\*(?![\s*])(.+?)(?<![\s*])\*(?!\*)'
ITALIC_UNDERSCORE_PATTERN = r'(?<!\w)_(?![\s_])(.+?)(?<![\s_])_(?!\w)'
STRIKETHROUGH_PATTERN = r'~~(.+?)~~'
INLINE_CODE_PATTERN = r'`([^`\n]+)`'
LINK_PATTERN = r'(?<!!)\[([^\]\n]+)\]\(([^)\s]+)(?:[ \t]+"([^"\n]*)")?\)'
IMAGE_PATTERN = r'!\[([^\]\n]*)\]\(([^)\n]+)\)'


def subtract_ranges(full: TextRange, excluded: Iterable[TextRange]) -> List[TextRange]:
    """
    Remove excluded ranges from a range, keeping the gaps as separate ranges.

    Args:
        full: The range to subtract from
        excluded: Ranges to remove; may overlap and need not be sorted

    Returns:
        The remaining non-empty ranges in order
    """
    remaining: List[TextRange] = []
    current = full.location
    for exclusion in sorted(excluded, key=lambda r: r.location):
        if exclusion.location > current:
            remaining.append(TextRange(current, min(exclusion.location, full.end) - current))

        current = max(current, exclusion.end)
        if current >= full.end:
            break

    if current < full.end:
        remaining.append(TextRange(current, full.end - current))

    return [r for r in remaining if r.length > 0]


class MarkdownInlineParser:
    """
    Matches inline constructs over the parts of the text not covered by code
    blocks or table separator rows.

    Patterns are applied independently in priority order, so a run of text may
    carry more than one span when constructs nest.
    """

    def __init__(self) -> None:
        """Initialize the inline parser with its compiled patterns."""
        self._emphasis_patterns: List[Tuple[MarkdownSpanKind, re.Pattern[str]]] = [
            (MarkdownSpanKind.BOLD_ITALIC, re.compile(BOLD_ITALIC_STAR_PATTERN)),
            (MarkdownSpanKind.BOLD_ITALIC, re.compile(BOLD_ITALIC_UNDERSCORE_PATTERN)),
            (MarkdownSpanKind.BOLD, re.compile(BOLD_STAR_PATTERN)),
            (MarkdownSpanKind.BOLD, re.compile(BOLD_UNDERSCORE_PATTERN)),
            (MarkdownSpanKind.ITALIC, re.compile(ITALIC_STAR_PATTERN)),
            (MarkdownSpanKind.ITALIC, re.compile(ITALIC_UNDERSCORE_PATTERN)),
            (MarkdownSpanKind.STRIKETHROUGH, re.compile(STRIKETHROUGH_PATTERN)),
            (MarkdownSpanKind.CODE, re.compile(INLINE_CODE_PATTERN)),
        ]
        self._link_pattern = re.compile(LINK_PATTERN)
        self._image_pattern = re.compile(IMAGE_PATTERN)

    def parse(self, text: str, excluded_ranges: Iterable[TextRange] = ()) -> List[MarkdownSpan]:
        """
        Parse inline constructs.

        Args:
            text: The full source text
            excluded_ranges: Ranges that must not be scanned

        Returns:
            Inline spans with absolute offsets
        """
        spans: List[MarkdownSpan] = []
        for region in subtract_ranges(TextRange(0, len(text)), excluded_ranges):
            spans.extend(self._parse_region(text[region.location:region.end], region.location))

        return spans

    def _parse_region(self, region_text: str, base: int) -> List[MarkdownSpan]:
        """
        Parse a single scan region.

        Args:
            region_text: Text of the region
            base: Offset of the region in the full text

        Returns:
            Spans found in the region
        """
        spans: List[MarkdownSpan] = []

        for kind, pattern in self._emphasis_patterns:
            for match in pattern.finditer(region_text):
                spans.append(MarkdownSpan(
                    kind=kind,
                    full_range=self._match_range(match, 0, base),
                    content_range=self._match_range(match, 1, base)
                ))

        for match in self._link_pattern.finditer(region_text):
            spans.append(MarkdownSpan(
                kind=MarkdownSpanKind.LINK,
                full_range=self._match_range(match, 0, base),
                content_range=self._match_range(match, 1, base),
                url=match.group(2),
                title=match.group(3)
            ))

        for match in self._image_pattern.finditer(region_text):
            spans.append(MarkdownSpan(
                kind=MarkdownSpanKind.IMAGE,
                full_range=self._match_range(match, 0, base),
                content_range=self._match_range(match, 1, base),
                url=match.group(2),
                alt=match.group(1)
            ))

        return spans

    def _match_range(self, match: re.Match[str], group: int, base: int) -> TextRange:
        """Translate a match group into an absolute range."""
        start, end = match.span(group)
        return TextRange(base + start, end - start)
