"""
Line-oriented parser for block-level Markdown constructs.
"""

import logging
import re
from typing import List, Set, Tuple

from mdspan.markdown_span import (
    MarkdownSpan, MarkdownSpanKind, MarkdownTable, MarkdownTableCell, TextRange
)


# Characters trimmed from either end of a line before classification
LINE_WHITESPACE = " \t"


def is_table_line(trimmed: str) -> bool:
    """
    Check whether a trimmed line is wrapped in pipes.

    Args:
        trimmed: Line with surrounding whitespace removed

    Returns:
        True if the line starts and ends with '|' and is longer than one character
    """
    return len(trimmed) > 1 and trimmed.startswith("|") and trimmed.endswith("|")


def is_separator_row(trimmed: str) -> bool:
    """
    Check whether a trimmed line is a table separator row such as `|---|:--:|`.

    Every non-empty cell must consist only of '-' and ':' characters.

    Args:
        trimmed: Line with surrounding whitespace removed

    Returns:
        True if the line is a separator row
    """
    cells = [cell.strip(LINE_WHITESPACE) for cell in trimmed.split("|")]
    cells = [cell for cell in cells if cell]
    if not cells:
        return False

    return all(not cell.replace("-", "").replace(":", "") for cell in cells)


class MarkdownBlockParser:
    """
    Scans text line by line and emits block-level spans.

    Tables are found in a pre-pass so that their lines are kept away from the
    per-line classifiers.  Code fences suppress every other block rule while open
    and only closed fences produce a span.
    """

    def __init__(self) -> None:
        """Initialize the block parser."""
        self._ordered_list_pattern = re.compile(r'^\d+\.\s')
        self._logger = logging.getLogger("MarkdownBlockParser")

    def parse(self, text: str) -> List[MarkdownSpan]:
        """
        Parse block-level constructs.

        Args:
            text: The full source text

        Returns:
            Block spans: tables first, then the remaining kinds in source order
        """
        lines = text.split("\n")
        offsets = self._line_offsets(lines)

        spans: List[MarkdownSpan] = []
        table_lines: Set[int] = set()
        for start, end in self._find_table_blocks(lines):
            table_span = self._parse_table(lines, offsets, start, end)
            if table_span is None:
                continue

            spans.append(table_span)
            table_lines.update(range(start, end))

        in_code_block = False
        code_block_start = 0
        code_block_language: str | None = None

        for index, line in enumerate(lines):
            if index in table_lines:
                continue

            offset = offsets[index]
            line_range = TextRange(offset, len(line))
            trimmed = line.strip(LINE_WHITESPACE)

            if trimmed.startswith("```"):
                if in_code_block:
                    block_range = TextRange(code_block_start, line_range.end - code_block_start)
                    spans.append(MarkdownSpan(
                        kind=MarkdownSpanKind.CODE_BLOCK,
                        full_range=block_range,
                        content_range=block_range,
                        language=code_block_language
                    ))
                    in_code_block = False
                    continue

                in_code_block = True
                code_block_start = offset
                language = trimmed[3:].strip(LINE_WHITESPACE)
                code_block_language = language if language else None
                continue

            if in_code_block:
                continue

            spans.extend(self._classify_line(line, trimmed, line_range))

        return spans

    def _classify_line(self, line: str, trimmed: str, line_range: TextRange) -> List[MarkdownSpan]:
        """
        Apply the per-line block rules.

        The rules are independent; a line may match more than one.

        Args:
            line: The raw line
            trimmed: The line with surrounding whitespace removed
            line_range: Range of the raw line in the source text

        Returns:
            Spans for every rule that matched
        """
        spans: List[MarkdownSpan] = []
        indent = len(line) - len(line.lstrip(LINE_WHITESPACE))

        heading = self._match_heading(trimmed)
        if heading is not None:
            level, marker_count = heading
            content_start = line_range.location + indent + marker_count + 1
            spans.append(MarkdownSpan(
                kind=MarkdownSpanKind.HEADING,
                full_range=line_range,
                content_range=TextRange(content_start, max(0, line_range.end - content_start)),
                level=level
            ))

        if trimmed in ("---", "***", "___"):
            spans.append(MarkdownSpan(
                kind=MarkdownSpanKind.HORIZONTAL_RULE,
                full_range=line_range,
                content_range=line_range
            ))

        if trimmed.startswith("> "):
            content_start = line_range.location + line.index(">") + 2
            spans.append(MarkdownSpan(
                kind=MarkdownSpanKind.BLOCKQUOTE,
                full_range=line_range,
                content_range=TextRange(content_start, max(0, line_range.end - content_start))
            ))

        if trimmed.startswith(("- ", "* ", "+ ")):
            if trimmed.startswith(("- [x] ", "- [X] ")):
                spans.append(MarkdownSpan(
                    kind=MarkdownSpanKind.CHECKBOX,
                    full_range=line_range,
                    content_range=line_range,
                    checked=True
                ))

            elif trimmed.startswith("- [ ] "):
                spans.append(MarkdownSpan(
                    kind=MarkdownSpanKind.CHECKBOX,
                    full_range=line_range,
                    content_range=line_range,
                    checked=False
                ))

            else:
                spans.append(MarkdownSpan(
                    kind=MarkdownSpanKind.UNORDERED_LIST_ITEM,
                    full_range=line_range,
                    content_range=line_range
                ))

        if self._ordered_list_pattern.match(trimmed):
            spans.append(MarkdownSpan(
                kind=MarkdownSpanKind.ORDERED_LIST_ITEM,
                full_range=line_range,
                content_range=line_range
            ))

        return spans

    def _match_heading(self, trimmed: str) -> Tuple[int, int] | None:
        """
        Match an ATX heading marker.

        Leading '#' characters must be followed directly by a space; any other
        character first means the line is not a heading.

        Args:
            trimmed: The line with surrounding whitespace removed

        Returns:
            (level, marker_count) with level clamped to 6, or None
        """
        marker_count = 0
        for char in trimmed:
            if char == "#":
                marker_count += 1
                continue

            if char == " " and marker_count > 0:
                return min(marker_count, 6), marker_count

            return None

        return None

    def _line_offsets(self, lines: List[str]) -> List[int]:
        """Compute the start offset of every line."""
        offsets: List[int] = []
        offset = 0
        for line in lines:
            offsets.append(offset)
            offset += len(line) + 1

        return offsets

    def _find_table_blocks(self, lines: List[str]) -> List[Tuple[int, int]]:
        """
        Find runs of pipe-wrapped lines that form tables.

        A run qualifies when it is at least three lines long and its second line
        is a separator row.  Lines inside code fences never start or extend a run.

        Args:
            lines: All source lines

        Returns:
            List of (first_line, end_line) index pairs, end exclusive
        """
        blocks: List[Tuple[int, int]] = []
        run_start: int | None = None
        in_code_block = False

        def close_run(end: int) -> None:
            if run_start is None or end - run_start < 3:
                return

            if is_separator_row(lines[run_start + 1].strip(LINE_WHITESPACE)):
                blocks.append((run_start, end))

        for index, line in enumerate(lines):
            trimmed = line.strip(LINE_WHITESPACE)
            if trimmed.startswith("```"):
                in_code_block = not in_code_block

            if not in_code_block and is_table_line(trimmed):
                if run_start is None:
                    run_start = index

                continue

            close_run(index)
            run_start = None

        close_run(len(lines))
        return blocks

    def _parse_table(
        self,
        lines: List[str],
        offsets: List[int],
        start: int,
        end: int
    ) -> MarkdownSpan | None:
        """
        Build a table span from a run of table lines.

        Args:
            lines: All source lines
            offsets: Start offset of every line
            start: Index of the header line
            end: Index one past the last table line

        Returns:
            The table span, or None if the header has no cells
        """
        header_ranges = self._parse_cell_ranges(lines[start], offsets[start])
        columns = len(header_ranges)
        if columns == 0:
            return None

        header_cells = [
            MarkdownTableCell(range=cell_range, row=0, column=column)
            for column, cell_range in enumerate(header_ranges)
        ]

        separator_range = TextRange(offsets[start + 1], len(lines[start + 1]))

        rows: List[List[MarkdownTableCell]] = []
        for line_index in range(start + 2, end):
            line = lines[line_index]
            line_offset = offsets[line_index]
            cell_ranges = self._parse_cell_ranges(line, line_offset)[:columns]

            # Short rows are padded so every row has the same number of cells
            row_end = line_offset + len(line.rstrip(LINE_WHITESPACE))
            while len(cell_ranges) < columns:
                cell_ranges.append(TextRange(row_end, 0))

            rows.append([
                MarkdownTableCell(range=cell_range, row=line_index - start - 1, column=column)
                for column, cell_range in enumerate(cell_ranges)
            ])

        table_range = TextRange(offsets[start], offsets[end - 1] + len(lines[end - 1]) - offsets[start])
        table = MarkdownTable(
            columns=columns,
            header_cells=header_cells,
            separator_range=separator_range,
            rows=rows
        )
        return MarkdownSpan(
            kind=MarkdownSpanKind.TABLE,
            full_range=table_range,
            content_range=table_range,
            table=table
        )

    def _parse_cell_ranges(self, line: str, line_offset: int) -> List[TextRange]:
        """
        Find the trimmed content range of every cell between consecutive pipes.

        Args:
            line: The raw table line
            line_offset: Offset of the line in the source text

        Returns:
            One range per cell; empty or all-space cells give zero-length ranges
        """
        pipes = [index for index, char in enumerate(line) if char == "|"]
        ranges: List[TextRange] = []
        for left, right in zip(pipes, pipes[1:]):
            content_start = left + 1
            content_end = right
            while content_start < content_end and line[content_start] == " ":
                content_start += 1

            while content_end > content_start and line[content_end - 1] == " ":
                content_end -= 1

            ranges.append(TextRange(line_offset + content_start, content_end - content_start))

        return ranges
