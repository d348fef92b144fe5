"""
Manages editor user settings.
"""

import json
import logging
import os
from typing import cast

from PySide6.QtCore import QObject, Signal

from simpleedit.user_settings import UserSettings


class UserError(Exception):
    """Base exception for user operations."""


class UserManager(QObject):
    """
    Manages editor user settings.

    Handles loading settings at startup and saving them whenever they change.
    """
    USER_DIR = ".simpleedit"
    SETTINGS_FILE = "user-settings.json"

    # Signal emitted when user settings change
    settings_changed = Signal()

    def __init__(self, user_path: str | None = None, parent: QObject | None = None) -> None:
        """
        Initialize the user manager and load the settings.

        Args:
            user_path: Directory holding the settings file; defaults to ~/.simpleedit
            parent: Optional QObject parent
        """
        super().__init__(parent)
        self._logger = logging.getLogger("UserManager")
        self._user_path = user_path or os.path.expanduser(f"~/{self.USER_DIR}")
        self._settings: UserSettings | None = None
        self._load_settings()

    def settings_path(self) -> str:
        """Get path to user settings file."""
        return os.path.join(self._user_path, self.SETTINGS_FILE)

    def _load_settings(self) -> None:
        """
        Load user settings from the settings file.

        Creates default settings if the file doesn't exist or can't be read.
        """
        settings_path = self.settings_path()
        try:
            if os.path.exists(settings_path):
                self._settings = UserSettings.load(settings_path)
                self._logger.info("Loaded user settings from %s", settings_path)
                return

            self._settings = UserSettings.create_default()
            self._logger.info("Created default user settings")

        except (OSError, json.JSONDecodeError):
            self._logger.exception("Failed to load user settings")
            # Create default settings as fallback
            self._settings = UserSettings.create_default()

    def update_settings(self, new_settings: UserSettings) -> None:
        """
        Update user settings and save them to file.

        Args:
            new_settings: UserSettings object with updated settings

        Raises:
            UserError: If settings cannot be saved
        """
        self._settings = new_settings
        settings_path = self.settings_path()
        try:
            new_settings.save(settings_path)

        except OSError as e:
            self._logger.error("Failed to save user settings: %s", str(e))
            raise UserError(f"Failed to save user settings: {str(e)}") from e

        self._logger.info("Saved user settings to %s", settings_path)

        # Emit signal to notify listeners
        self.settings_changed.emit()

    def settings(self) -> UserSettings:
        """
        Get the current user settings.

        Returns:
            The current UserSettings object
        """
        return cast(UserSettings, self._settings)
