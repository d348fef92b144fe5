"""
Objects shared across the editor, built once at startup.
"""

from dataclasses import dataclass

from mdspan import MarkdownParser

from simpleedit.style_manager import StyleManager
from simpleedit.user_manager import UserManager


@dataclass
class AppContext:
    """Shared editor services, passed explicitly to the widgets that use them."""
    user_manager: UserManager
    style_manager: StyleManager
    parser: MarkdownParser

    @classmethod
    def create(cls, user_path: str | None = None) -> "AppContext":
        """
        Build the context and apply the saved settings to the style manager.

        Args:
            user_path: Directory holding the settings file; defaults to ~/.simpleedit

        Returns:
            The new context
        """
        user_manager = UserManager(user_path)
        style_manager = StyleManager()
        settings = user_manager.settings()
        style_manager.set_theme(settings.theme)
        style_manager.set_user_font_size(settings.font_size)
        return cls(user_manager=user_manager, style_manager=style_manager, parser=MarkdownParser())
