"""Main window implementation for the SimpleEdit Markdown editor."""

import logging
import os
from dataclasses import replace
from typing import Callable, Dict

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog, QLabel, QMainWindow, QMenu, QMessageBox, QSplitter, QTextBrowser
)

from simpleedit.app_context import AppContext
from simpleedit.document_statistics import DocumentStatistics
from simpleedit.markdown_editor_widget import MarkdownEditorWidget
from simpleedit.user_manager import UserError
from simpleedit.user_settings import UserSettings
from simpleedit.view_mode import ViewMode


class MainWindow(QMainWindow):
    """Main window: a Markdown editor beside its HTML preview."""

    FORMAT_ACTIONS = [
        ("heading", "Heading", "Ctrl+1"),
        ("bold", "Bold", "Ctrl+B"),
        ("italic", "Italic", "Ctrl+I"),
        ("strikethrough", "Strikethrough", "Ctrl+Shift+X"),
        ("code", "Code", "Ctrl+E"),
        ("link", "Link", "Ctrl+K"),
        ("bullet_list", "Bullet List", None),
        ("numbered_list", "Numbered List", None),
        ("blockquote", "Blockquote", None),
        ("horizontal_rule", "Horizontal Rule", None),
        ("checkbox", "Checkbox", None),
    ]

    def __init__(self, context: AppContext) -> None:
        """
        Initialize the main window.

        Args:
            context: Shared editor services
        """
        super().__init__()

        self._logger = logging.getLogger("MainWindow")
        self._context = context
        self._path: str | None = None
        settings = context.user_manager.settings()

        self._editor = MarkdownEditorWidget(
            context.style_manager, context.parser, settings.hide_markers, self
        )
        self._preview = QTextBrowser(self)
        self._preview.setOpenExternalLinks(True)

        self._splitter = QSplitter(Qt.Orientation.Horizontal, self)
        self._splitter.addWidget(self._editor)
        self._splitter.addWidget(self._preview)
        self.setCentralWidget(self._splitter)

        self._status_label = QLabel(self)
        self.statusBar().addPermanentWidget(self._status_label)

        self._editor.statistics_changed.connect(self._update_status)
        self._editor.preview_html_changed.connect(self._preview.setHtml)
        self._editor.document().modificationChanged.connect(self._update_title)

        self._create_menus()
        self._apply_settings(settings)
        self._update_status(self._editor.statistics())
        self._update_title()
        self.resize(1200, 800)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        self._add_action(file_menu, "&New", self.new_file, QKeySequence.StandardKey.New)
        self._add_action(file_menu, "&Open...", self._open_file_dialog, QKeySequence.StandardKey.Open)
        self._add_action(file_menu, "&Save", self.save_file, QKeySequence.StandardKey.Save)
        self._add_action(file_menu, "Save &As...", self.save_file_as, QKeySequence.StandardKey.SaveAs)
        file_menu.addSeparator()
        self._add_action(file_menu, "&Quit", self.close, QKeySequence("Ctrl+Q"))

        edit_menu = menu_bar.addMenu("&Edit")
        self._add_action(edit_menu, "&Undo", self._editor.undo, QKeySequence.StandardKey.Undo)
        self._add_action(edit_menu, "&Redo", self._editor.redo, QKeySequence.StandardKey.Redo)
        edit_menu.addSeparator()
        self._add_action(edit_menu, "Cu&t", self._editor.cut, QKeySequence.StandardKey.Cut)
        self._add_action(edit_menu, "&Copy", self._editor.copy, QKeySequence.StandardKey.Copy)
        self._add_action(edit_menu, "&Paste", self._editor.paste, QKeySequence.StandardKey.Paste)

        format_menu = menu_bar.addMenu("F&ormat")
        for name, title, shortcut in self.FORMAT_ACTIONS:
            action = QAction(title, self)
            if shortcut is not None:
                action.setShortcut(QKeySequence(shortcut))

            action.triggered.connect(lambda _checked=False, n=name: self._editor.apply_format(n))
            format_menu.addAction(action)

        self._outline_menu = menu_bar.addMenu("O&utline")
        self._outline_menu.aboutToShow.connect(self._populate_outline_menu)

        view_menu = menu_bar.addMenu("&View")
        self._view_mode_group = QActionGroup(self)
        self._view_mode_actions: Dict[ViewMode, QAction] = {}
        for mode, title in (
            (ViewMode.SOURCE, "Source"),
            (ViewMode.STYLED_SOURCE, "Styled Source"),
            (ViewMode.PREVIEW, "Preview Only"),
        ):
            action = QAction(title, self, checkable=True)
            action.triggered.connect(lambda _checked=False, m=mode: self._update_settings(view_mode=m))
            self._view_mode_group.addAction(action)
            view_menu.addAction(action)
            self._view_mode_actions[mode] = action

        view_menu.addSeparator()
        self._hide_markers_action = QAction("Hide Markdown Markers", self, checkable=True)
        self._hide_markers_action.triggered.connect(lambda checked: self._update_settings(hide_markers=checked))
        view_menu.addAction(self._hide_markers_action)

        self._word_wrap_action = QAction("Word Wrap", self, checkable=True)
        self._word_wrap_action.triggered.connect(lambda checked: self._update_settings(word_wrap=checked))
        view_menu.addAction(self._word_wrap_action)

        self._preview_action = QAction("Show Preview", self, checkable=True)
        self._preview_action.setShortcut(QKeySequence("Ctrl+Shift+P"))
        self._preview_action.triggered.connect(lambda checked: self._update_settings(preview_visible=checked))
        view_menu.addAction(self._preview_action)

        theme_menu = view_menu.addMenu("Theme")
        self._theme_group = QActionGroup(self)
        self._theme_actions: Dict[str, QAction] = {}
        for style in self._context.style_manager.available_styles():
            action = QAction(style.name, self, checkable=True)
            action.triggered.connect(lambda _checked=False, n=style.name: self._update_settings(theme=n))
            self._theme_group.addAction(action)
            theme_menu.addAction(action)
            self._theme_actions[style.name] = action

        view_menu.addSeparator()
        self._add_action(view_menu, "Zoom In", lambda: self._zoom(1.125), QKeySequence("Ctrl+="))
        self._add_action(view_menu, "Zoom Out", lambda: self._zoom(1 / 1.125), QKeySequence("Ctrl+-"))
        self._add_action(
            view_menu, "Actual Size", lambda: self._context.style_manager.set_zoom(1.0), QKeySequence("Ctrl+0")
        )

    def _add_action(
        self,
        menu: QMenu,
        title: str,
        slot: Callable[[], object],
        shortcut: QKeySequence | QKeySequence.StandardKey
    ) -> QAction:
        action = QAction(title, self)
        action.setShortcut(shortcut)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    def _populate_outline_menu(self) -> None:
        self._outline_menu.clear()
        items = self._editor.outline()
        if not items:
            self._outline_menu.addAction("No Headings").setEnabled(False)
            return

        for item in items:
            indent = "    " * (item.level - 1)
            action = self._outline_menu.addAction(f"{indent}{item.title}")
            action.triggered.connect(lambda _checked=False, loc=item.location: self._editor.go_to(loc))

    def _zoom(self, factor: float) -> None:
        style_manager = self._context.style_manager
        style_manager.set_zoom(style_manager.zoom_factor() * factor)

    def _apply_settings(self, settings: UserSettings) -> None:
        """Push settings into the widgets and menus."""
        self._context.style_manager.set_theme(settings.theme)
        self._context.style_manager.set_user_font_size(settings.font_size)
        self._editor.set_hide_markers(settings.hide_markers)
        self._editor.set_view_mode(settings.view_mode)
        self._editor.setLineWrapMode(
            MarkdownEditorWidget.LineWrapMode.WidgetWidth if settings.word_wrap
            else MarkdownEditorWidget.LineWrapMode.NoWrap
        )

        self._editor.setVisible(settings.view_mode != ViewMode.PREVIEW)
        self._preview.setVisible(settings.preview_visible or settings.view_mode == ViewMode.PREVIEW)

        self._view_mode_actions[settings.view_mode].setChecked(True)
        self._hide_markers_action.setChecked(settings.hide_markers)
        self._word_wrap_action.setChecked(settings.word_wrap)
        self._preview_action.setChecked(settings.preview_visible)
        theme_action = self._theme_actions.get(settings.theme)
        if theme_action is not None:
            theme_action.setChecked(True)

    def _update_settings(self, **changes: object) -> None:
        settings = replace(self._context.user_manager.settings(), **changes)
        self._apply_settings(settings)
        try:
            self._context.user_manager.update_settings(settings)

        except UserError as e:
            QMessageBox.warning(self, "Settings", f"Could not save settings: {e}")

    def _update_status(self, statistics: DocumentStatistics) -> None:
        self._status_label.setText(statistics.summary())

    def _update_title(self) -> None:
        name = os.path.basename(self._path) if self._path else "Untitled"
        modified = "*" if self._editor.document().isModified() else ""
        self.setWindowTitle(f"{name}{modified} - SimpleEdit")

    def new_file(self) -> None:
        """Start an empty document."""
        if not self._confirm_discard():
            return

        self._path = None
        self._editor.set_markdown("")
        self._update_title()

    def open_file(self, path: str) -> bool:
        """
        Load a file into the editor.

        Args:
            path: File to open

        Returns:
            True if the file was loaded
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()

        except (OSError, UnicodeDecodeError) as e:
            self._logger.error("Failed to open %s: %s", path, str(e))
            QMessageBox.critical(self, "Open", f"Could not open {path}: {e}")
            return False

        self._path = path
        self._editor.set_markdown(text)
        self._update_title()
        self._logger.info("Opened %s", path)
        return True

    def save_file(self) -> bool:
        """Save to the current path, asking for one if there isn't one."""
        if self._path is None:
            return self.save_file_as()

        try:
            with open(self._path, 'w', encoding='utf-8') as f:
                f.write(self._editor.markdown())

        except OSError as e:
            self._logger.error("Failed to save %s: %s", self._path, str(e))
            QMessageBox.critical(self, "Save", f"Could not save {self._path}: {e}")
            return False

        self._editor.mark_saved()
        self._update_title()
        return True

    def save_file_as(self) -> bool:
        """Ask for a path and save there."""
        path, _ = QFileDialog.getSaveFileName(self, "Save As", self._path or "", "Markdown (*.md *.markdown);;All files (*)")
        if not path:
            return False

        self._path = path
        return self.save_file()

    def _open_file_dialog(self) -> None:
        if not self._confirm_discard():
            return

        path, _ = QFileDialog.getOpenFileName(self, "Open", "", "Markdown (*.md *.markdown);;All files (*)")
        if path:
            self.open_file(path)

    def _confirm_discard(self) -> bool:
        """Ask whether unsaved changes can be dropped; saves if asked to."""
        if not self._editor.document().isModified():
            return True

        result = QMessageBox.question(
            self,
            "Unsaved Changes",
            "Save changes to the current document?",
            QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel
        )
        if result == QMessageBox.StandardButton.Save:
            return self.save_file()

        return result == QMessageBox.StandardButton.Discard

    def closeEvent(self, event: QCloseEvent) -> None:
        """Check for unsaved changes before closing."""
        if not self._confirm_discard():
            event.ignore()
            return

        event.accept()
