from typing import List

from textual.widgets import ListView, ListItem, Label

from ..services.operations import Operation


class HistoryPane(ListView):
    """ListView showing the redo stack above the undo stack."""

    DEFAULT_CSS = """
    HistoryPane {
        height: 1fr;
    }
    """

    def populate(self, undo_ops: List[Operation], redo_ops: List[Operation]):
        """Populate the history pane.

        Newest entries are at the top. Redo entries sit dimmed above the
        current position, which is marked with ">".

        Args:
            undo_ops: Undoable operations, most recent first
            redo_ops: Redoable operations, next redo first
        """
        self.clear()
        for operation in reversed(redo_ops):
            item = ListItem(Label(f"[dim]  {operation.label}[/dim]"), classes="redo-entry")
            item.data = operation
            self.append(item)
        for position, operation in enumerate(undo_ops):
            marker = ">" if position == 0 else " "
            item = ListItem(Label(f"{marker} {operation.label}"), classes="undo-entry")
            item.data = operation
            self.append(item)

        if undo_ops:
            self.index = len(redo_ops)
