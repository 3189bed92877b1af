"""Modal dialogs for UndoCalc."""

from textual.screen import ModalScreen
from textual.app import ComposeResult
from textual.containers import Vertical, Horizontal
from textual.widgets import Static, Button


class ConfirmClearDialog(ModalScreen[bool]):
    """Asks before the undo/redo history is forgotten. Dismisses with True to clear."""

    def __init__(self, undo_size: int, redo_size: int):
        super().__init__()
        self.undo_size = undo_size
        self.redo_size = redo_size

    def compose(self) -> ComposeResult:
        question = (
            "[bold yellow]Clear History[/bold yellow]\n\n"
            f"Forget {self.undo_size} undoable and {self.redo_size} redoable operation(s)?\n\n"
            "The current value is kept. This action cannot be undone!"
        )
        yield Vertical(
            Static(question, id="question"),
            Horizontal(
                Button("Clear", variant="error", id="clear"),
                Button("Keep", variant="primary", id="keep"),
                id="dialog-buttons"
            ),
            id="dialog"
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "clear")
