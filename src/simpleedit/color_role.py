"""Colour roles used when styling Markdown in the editor."""

from enum import Enum, auto


class ColorRole(Enum):
    """Enumeration of colour roles in the editor."""
    # Editor surface
    EDITOR_TEXT = auto()                # Body text
    EDITOR_BACKGROUND = auto()          # Editor background

    # Markdown constructs
    HEADING = auto()                    # Heading text
    BOLD = auto()                       # Bold and bold-italic text
    ITALIC = auto()                     # Italic text
    CODE = auto()                       # Inline code and code blocks
    CODE_BACKGROUND = auto()            # Background behind code
    LINK = auto()                       # Links and images
    BLOCKQUOTE_TEXT = auto()            # Quoted text
    HORIZONTAL_RULE = auto()            # Horizontal rules
    STRIKETHROUGH = auto()              # Struck-through text

    # Syntax
    SYNTAX_MARKER = auto()              # Dimmed syntax markers such as '#' or '**'
