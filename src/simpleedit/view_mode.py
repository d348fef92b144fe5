"""Editor view modes."""

from enum import Enum, auto


class ViewMode(Enum):
    """How the editor presents the Markdown source."""
    SOURCE = auto()           # Plain text, no styling
    STYLED_SOURCE = auto()    # Source with live Markdown styling
    PREVIEW = auto()          # Rendered HTML only
