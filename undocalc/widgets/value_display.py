from typing import Tuple

from textual.widgets import Static


class ValueDisplay(Static):
    """Shows the accumulator value and history depths."""

    DEFAULT_CSS = """
    ValueDisplay {
        height: auto;
        padding: 1 2;
    }
    """

    def show_state(self, value: float, depths: Tuple[int, int]) -> None:
        undo_size, redo_size = depths
        self.update(
            f"[bold]{value}[/bold]\n\n"
            f"[dim]undo: {undo_size}  redo: {redo_size}[/dim]"
        )
