"""Word, character and line counts shown in the status bar."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentStatistics:
    """Counts for a piece of text."""
    words: int
    characters: int
    lines: int

    @classmethod
    def from_text(cls, text: str) -> "DocumentStatistics":
        """
        Count the words, characters and lines in some text.

        Words are runs of non-whitespace.  An empty text still has one line.
        """
        return cls(
            words=len(text.split()),
            characters=len(text),
            lines=len(text.split("\n"))
        )

    def summary(self) -> str:
        """Format the counts for display."""
        return f"{self.lines} lines  |  {self.words} words  |  {self.characters} chars"
