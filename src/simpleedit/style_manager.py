"""Style manager holding the active editor theme, font size and zoom.

One instance is created at startup and passed to the components that need it.
"""

from dataclasses import replace
from typing import List

from PySide6.QtCore import QObject, Signal

from simpleedit.editor_style import EDITOR_STYLES, LIGHT, EditorStyle, find_editor_style


class StyleManager(QObject):
    """
    Manager for the editor's visual style.

    Attributes:
        style_changed (Signal): Emitted when the theme, font size or zoom changes
    """

    style_changed = Signal()

    MIN_ZOOM = 0.5
    MAX_ZOOM = 2.0

    def __init__(self, parent: QObject | None = None) -> None:
        """Initialize with the default theme and no zoom."""
        super().__init__(parent)
        self._theme = LIGHT
        self._user_font_size: float | None = None
        self._zoom_factor = 1.0

    def available_styles(self) -> List[EditorStyle]:
        """Get every theme the editor offers."""
        return list(EDITOR_STYLES)

    def theme(self) -> EditorStyle:
        """Get the selected theme, without font size or zoom applied."""
        return self._theme

    def set_theme(self, name: str) -> None:
        """
        Select a theme by name.

        Args:
            name: Theme name; unknown names select the default theme
        """
        theme = find_editor_style(name)
        if theme != self._theme:
            self._theme = theme
            self.style_changed.emit()

    def base_font_size(self) -> float:
        """Get the body font size before zoom."""
        return self._user_font_size or self._theme.font_size

    def set_user_font_size(self, size: float | None) -> None:
        """Set a user-specific font size override; None uses the theme's size."""
        if size != self._user_font_size:
            self._user_font_size = size
            self.style_changed.emit()

    def zoom_factor(self) -> float:
        """Current zoom scaling factor."""
        return self._zoom_factor

    def set_zoom(self, factor: float) -> None:
        """
        Set new zoom factor.

        Args:
            factor: New zoom factor to apply (clamped between 0.5 and 2.0)
        """
        new_factor = max(self.MIN_ZOOM, min(self.MAX_ZOOM, factor))
        if new_factor != self._zoom_factor:
            self._zoom_factor = new_factor
            self.style_changed.emit()

    def current_style(self) -> EditorStyle:
        """Get the selected theme with the font size and zoom applied."""
        return replace(self._theme, font_size=self.base_font_size() * self._zoom_factor)
