"""
Text-only undo history for documents whose formats are derived from their text.

Styling rewrites character and block formats after every edit.  Those writes
must never become undo steps, so the document's own undo stack is disabled and
the editor records just the text changes here.
"""

from dataclasses import dataclass
import logging
from typing import Callable, cast

from PySide6.QtGui import QUndoCommand, QUndoStack


@dataclass(frozen=True)
class TextChange:
    """
    Replacement of one run of text by another.

    Attributes:
        location: Code point offset of the change
        removed: Text that was removed
        inserted: Text that was inserted in its place
    """
    location: int
    removed: str
    inserted: str

    @classmethod
    def between(cls, old: str, new: str) -> "TextChange | None":
        """
        Find the single change that turns one text into another.

        Args:
            old: Text before the change
            new: Text after the change

        Returns:
            The change, or None if the texts are equal
        """
        if old == new:
            return None

        limit = min(len(old), len(new))
        prefix = 0
        while prefix < limit and old[prefix] == new[prefix]:
            prefix += 1

        suffix = 0
        while suffix < limit - prefix and old[-1 - suffix] == new[-1 - suffix]:
            suffix += 1

        return cls(prefix, old[prefix:len(old) - suffix], new[prefix:len(new) - suffix])

    def inverse(self) -> "TextChange":
        """Get the change that reverses this one."""
        return TextChange(self.location, self.inserted, self.removed)

    def apply(self, text: str) -> str:
        """Apply the change to a string."""
        return text[:self.location] + self.inserted + text[self.location + len(self.removed):]

    def merged(self, later: "TextChange") -> "TextChange | None":
        """
        Combine this change with one made straight after it.

        Runs of typing and runs of deletion on one line merge, so a word is
        undone in one step.

        Args:
            later: The following change

        Returns:
            The combined change, or None if the two should stay separate
        """
        for change in (self, later):
            if "\n" in change.inserted or "\n" in change.removed:
                return None

        if not self.removed and not later.removed:
            if later.location == self.location + len(self.inserted):
                return TextChange(self.location, "", self.inserted + later.inserted)

            return None

        if not self.inserted and not later.inserted:
            # Backspace
            if later.location + len(later.removed) == self.location:
                return TextChange(later.location, later.removed + self.removed, "")

            # Forward delete
            if later.location == self.location:
                return TextChange(self.location, self.removed + later.removed, "")

        return None


class TextChangeCommand(QUndoCommand):
    """Undo command for one text change."""

    MERGE_ID = 1

    def __init__(self, history: "EditHistory", change: TextChange) -> None:
        """
        Initialize the command.

        Args:
            history: History that replays the change
            change: Change already applied to the document
        """
        super().__init__("Typing")
        self._history = history
        self._change = change

        # Pushing runs redo(), but the change is already in the document
        self._applied = True

    def change(self) -> TextChange:
        """Get the change this command undoes."""
        return self._change

    def id(self) -> int:
        return self.MERGE_ID

    def mergeWith(self, other: QUndoCommand) -> bool:
        if other.id() != self.MERGE_ID:
            return False

        merged = self._change.merged(cast(TextChangeCommand, other).change())
        if merged is None:
            return False

        self._change = merged
        return True

    def redo(self) -> None:
        if self._applied:
            self._applied = False
            return

        self._history.replay(self._change)

    def undo(self) -> None:
        self._history.replay(self._change.inverse())


class EditHistory:
    """
    Undo and redo of text changes.

    Changes are recorded after they reach the document.  Undo and redo hand
    the reversing change to a replay callback, and changes reported while a
    replay runs are not recorded again.
    """

    def __init__(self, apply_change: Callable[[TextChange], None]) -> None:
        """
        Initialize the history.

        Args:
            apply_change: Writes a change into the document
        """
        self._apply_change = apply_change
        self._stack = QUndoStack()
        self._replaying = False
        self._logger = logging.getLogger("EditHistory")

    def stack(self) -> QUndoStack:
        """Get the underlying undo stack."""
        return self._stack

    def is_replaying(self) -> bool:
        """Check whether an undo or redo is writing to the document."""
        return self._replaying

    def record(self, change: TextChange) -> None:
        """
        Record a change the user has made.

        Args:
            change: The change, already applied to the document
        """
        if self._replaying:
            return

        self._stack.push(TextChangeCommand(self, change))

    def replay(self, change: TextChange) -> None:
        """Write a change into the document without recording it."""
        self._replaying = True
        try:
            self._apply_change(change)

        finally:
            self._replaying = False

    def undo(self) -> None:
        """Undo the most recent change."""
        if not self._stack.canUndo():
            return

        self._logger.debug("Undo: %s", self._stack.undoText())
        self._stack.undo()

    def redo(self) -> None:
        """Redo the most recently undone change."""
        if not self._stack.canRedo():
            return

        self._stack.redo()

    def can_undo(self) -> bool:
        """Check whether there is a change to undo."""
        return self._stack.canUndo()

    def can_redo(self) -> bool:
        """Check whether there is a change to redo."""
        return self._stack.canRedo()

    def clear(self) -> None:
        """Forget every recorded change."""
        self._stack.clear()

    def set_clean(self) -> None:
        """Mark the current state as the saved one."""
        self._stack.setClean()

    def is_clean(self) -> bool:
        """Check whether the text matches the saved state."""
        return self._stack.isClean()
