"""User settings module for storing editor-wide settings."""

from dataclasses import dataclass
import json
import logging
import os

from simpleedit.editor_style import LIGHT, find_editor_style
from simpleedit.view_mode import ViewMode


@dataclass
class UserSettings:
    """
    User-specific editor settings.
    """
    hide_markers: bool = False
    theme: str = LIGHT.name
    font_size: float | None = None  # None means use the theme's font size
    word_wrap: bool = True
    view_mode: ViewMode = ViewMode.STYLED_SOURCE
    preview_visible: bool = True

    @classmethod
    def create_default(cls) -> "UserSettings":
        """Create a new UserSettings object with default values."""
        return cls(
            hide_markers=False,
            theme=LIGHT.name,
            font_size=None,
            word_wrap=True,
            view_mode=ViewMode.STYLED_SOURCE,
            preview_visible=True
        )

    @classmethod
    def load(cls, path: str) -> "UserSettings":
        """
        Load user settings from file.

        Values that are missing or of the wrong type keep their defaults.

        Args:
            path: Path to the settings file

        Returns:
            UserSettings object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            OSError: If the file cannot be read
        """
        # Start with default settings
        settings = cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logging.getLogger("UserSettings").warning("Ignoring settings file %s: not a JSON object", path)
            return settings

        hide_markers = data.get("hideMarkers")
        if isinstance(hide_markers, bool):
            settings.hide_markers = hide_markers

        # Unknown themes fall back to the default
        theme = data.get("theme")
        if isinstance(theme, str):
            settings.theme = find_editor_style(theme).name

        font_size = data.get("fontSize")
        if isinstance(font_size, (int, float)) and not isinstance(font_size, bool) and font_size > 0:
            settings.font_size = float(font_size)

        word_wrap = data.get("wordWrap")
        if isinstance(word_wrap, bool):
            settings.word_wrap = word_wrap

        view_mode_str = data.get("viewMode", ViewMode.STYLED_SOURCE.name)
        try:
            settings.view_mode = ViewMode[view_mode_str]

        except (KeyError, TypeError):
            settings.view_mode = ViewMode.STYLED_SOURCE

        preview_visible = data.get("previewVisible")
        if isinstance(preview_visible, bool):
            settings.preview_visible = preview_visible

        return settings

    def save(self, path: str) -> None:
        """
        Save user settings to file.

        Args:
            path: Path to save the settings file

        Raises:
            OSError: If there's an issue creating the directory or writing the file
        """
        # Ensure directory exists
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, mode=0o700, exist_ok=True)

        data = {
            "hideMarkers": self.hide_markers,
            "theme": self.theme,
            "fontSize": self.font_size,
            "wordWrap": self.word_wrap,
            "viewMode": self.view_mode.name,
            "previewVisible": self.preview_visible,
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=4)
