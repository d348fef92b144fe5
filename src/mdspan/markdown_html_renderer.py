"""
Convert Markdown source into an HTML fragment for the preview pane.

This is a sequence of text substitutions applied to the raw source rather than a
walk over parsed spans.  The order of the substitutions is significant.
"""

import html
import re
from typing import List, Tuple

from mdspan.markdown_block_parser import LINE_WHITESPACE, is_separator_row, is_table_line
from mdspan.markdown_inline_parser import (
    BOLD_ITALIC_STAR_PATTERN, BOLD_ITALIC_UNDERSCORE_PATTERN, BOLD_STAR_PATTERN,
    BOLD_UNDERSCORE_PATTERN, IMAGE_PATTERN, INLINE_CODE_PATTERN, ITALIC_STAR_PATTERN,
    ITALIC_UNDERSCORE_PATTERN, LINK_PATTERN, STRIKETHROUGH_PATTERN
)


# Marks the place of a code block while the other substitutions run
_CODE_BLOCK_PLACEHOLDER = "\x00CODEBLOCK{}\x00"


class MarkdownHTMLRenderer:
    """Renders Markdown text to an HTML fragment."""

    def __init__(self) -> None:
        """Initialize the renderer with its compiled substitutions."""
        self._code_block_pattern = re.compile(
            r'^[ \t]*```[ \t]*([^\n`]*?)[ \t]*\n([\s\S]*?)^[ \t]*```[^\n]*$',
            re.MULTILINE
        )
        self._code_block_placeholder_pattern = re.compile('\x00CODEBLOCK(\\d+)\x00')
        self._code_block_split_pattern = re.compile('\n?(\x00CODEBLOCK\\d+\x00)\n?')

        # Level 6 absorbs longer runs of '#' to match the span parser's clamping
        self._heading_patterns: List[Tuple[int, re.Pattern[str]]] = [
            (6, re.compile(r'^[ \t]*#{6,} (.+)$', re.MULTILINE))
        ]
        for level in range(5, 0, -1):
            self._heading_patterns.append(
                (level, re.compile(rf'^[ \t]*#{{{level}}} (.+)$', re.MULTILINE))
            )

        self._horizontal_rule_pattern = re.compile(r'^[ \t]*(?:---|\*\*\*|___)[ \t]*$', re.MULTILINE)

        self._inline_substitutions: List[Tuple[re.Pattern[str], str]] = [
            (re.compile(BOLD_ITALIC_STAR_PATTERN), r'<strong><em>\1</em></strong>'),
            (re.compile(BOLD_ITALIC_UNDERSCORE_PATTERN), r'<strong><em>\1</em></strong>'),
            (re.compile(BOLD_STAR_PATTERN), r'<strong>\1</strong>'),
            (re.compile(BOLD_UNDERSCORE_PATTERN), r'<strong>\1</strong>'),
            (re.compile(ITALIC_STAR_PATTERN), r'<em>\1</em>'),
            (re.compile(ITALIC_UNDERSCORE_PATTERN), r'<em>\1</em>'),
            (re.compile(STRIKETHROUGH_PATTERN), r'<del>\1</del>'),
            (re.compile(INLINE_CODE_PATTERN), r'<code>\1</code>'),
            (re.compile(IMAGE_PATTERN), r'<img src="\2" alt="\1">'),
        ]
        self._link_pattern = re.compile(LINK_PATTERN)

        self._line_substitutions: List[Tuple[re.Pattern[str], str]] = [
            (re.compile(r'^[ \t]*> (.+)$', re.MULTILINE), r'<blockquote>\1</blockquote>'),
            (re.compile(r'^[ \t]*[*+-] (?!\[[ xX]\] )(.+)$', re.MULTILINE), r'<li>\1</li>'),
            (re.compile(r'^[ \t]*\d+\.[ \t](.+)$', re.MULTILINE), r'<li>\1</li>'),
            (
                re.compile(r'^[ \t]*- \[[xX]\] (.+)$', re.MULTILINE),
                r'<li><input type="checkbox" checked disabled> \1</li>'
            ),
            (
                re.compile(r'^[ \t]*- \[ \] (.+)$', re.MULTILINE),
                r'<li><input type="checkbox" disabled> \1</li>'
            ),
        ]

        self._block_start_pattern = re.compile(
            r'^\s*(?:<(?:h[1-6]|hr|pre|table|blockquote|li)\b|\x00CODEBLOCK)'
        )

    def to_html(self, markdown: str) -> str:
        """
        Convert Markdown to an HTML fragment.

        Args:
            markdown: The Markdown source

        Returns:
            The HTML fragment
        """
        code_blocks: List[str] = []

        def stash_code_block(match: re.Match[str]) -> str:
            language = match.group(1)
            code = html.escape(match.group(2), quote=False)
            language_class = f' class="language-{language}"' if language else ""
            code_blocks.append(f"<pre><code{language_class}>{code}</code></pre>")
            return _CODE_BLOCK_PLACEHOLDER.format(len(code_blocks) - 1)

        text = self._code_block_pattern.sub(stash_code_block, markdown)
        text = self._convert_tables(text)

        for level, pattern in self._heading_patterns:
            text = pattern.sub(rf'<h{level}>\1</h{level}>', text)

        text = self._horizontal_rule_pattern.sub('<hr>', text)

        for pattern, replacement in self._inline_substitutions:
            text = pattern.sub(replacement, text)

        text = self._link_pattern.sub(self._render_link, text)

        for pattern, replacement in self._line_substitutions:
            text = pattern.sub(replacement, text)

        text = self._wrap_paragraphs(text)

        return self._code_block_placeholder_pattern.sub(
            lambda match: code_blocks[int(match.group(1))],
            text
        )

    def _render_link(self, match: re.Match[str]) -> str:
        """Render a link match, keeping the title when one is given."""
        title = match.group(3)
        title_attr = f' title="{html.escape(title)}"' if title is not None else ""
        return f'<a href="{match.group(2)}"{title_attr}>{match.group(1)}</a>'

    def _wrap_paragraphs(self, text: str) -> str:
        """
        Wrap blank-line-delimited chunks in <p> elements.

        Chunks that already start with a block-level element are left alone.
        Code blocks stand on their own, so text either side of one becomes a
        separate paragraph.

        Args:
            text: Partially converted HTML

        Returns:
            HTML with paragraphs wrapped
        """
        chunks: List[str] = []
        for chunk in text.split("\n\n"):
            parts = self._code_block_split_pattern.split(chunk)
            if len(parts) == 1:
                chunks.append(chunk)
                continue

            chunks.extend(part for part in parts if part)

        wrapped: List[str] = []
        for chunk in chunks:
            if self._block_start_pattern.match(chunk):
                wrapped.append(chunk)
                continue

            wrapped.append(f"<p>{chunk}</p>")

        return "".join(wrapped)

    def _convert_tables(self, text: str) -> str:
        """
        Convert pipe tables into HTML tables.

        A table is a header line that starts a run of pipe-wrapped lines, then a
        separator row and at least one data row.

        Args:
            text: Source text

        Returns:
            Text with tables replaced by HTML
        """
        lines = text.split("\n")
        result: List[str] = []
        i = 0

        while i < len(lines):
            trimmed = lines[i].strip(LINE_WHITESPACE)
            starts_run = i == 0 or not is_table_line(lines[i - 1].strip(LINE_WHITESPACE))
            if (
                starts_run
                and is_table_line(trimmed)
                and i + 2 < len(lines)
                and is_separator_row(lines[i + 1].strip(LINE_WHITESPACE))
                and is_table_line(lines[i + 2].strip(LINE_WHITESPACE))
            ):
                header_cells = self._table_cells(trimmed)
                parts = ["<table>\n<thead>\n<tr>"]
                parts.extend(f"<th>{cell}</th>" for cell in header_cells)
                parts.append("</tr>\n</thead>\n<tbody>")

                i += 2
                while i < len(lines):
                    row = lines[i].strip(LINE_WHITESPACE)
                    if not is_table_line(row):
                        break

                    parts.append("\n<tr>")
                    parts.extend(f"<td>{cell}</td>" for cell in self._table_cells(row))
                    parts.append("</tr>")
                    i += 1

                parts.append("\n</tbody>\n</table>")
                result.append("".join(parts))
                continue

            result.append(lines[i])
            i += 1

        return "\n".join(result)

    def _table_cells(self, trimmed: str) -> List[str]:
        """Split a pipe-wrapped line into trimmed cell texts."""
        return [cell.strip(LINE_WHITESPACE) for cell in trimmed[1:-1].split("|")]
