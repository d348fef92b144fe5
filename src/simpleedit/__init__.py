"""SimpleEdit - A Markdown editor with live styling and preview."""

__version__ = "0.1"
