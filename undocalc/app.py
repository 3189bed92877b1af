"""UndoCalc - Terminal calculator with undo/redo history."""

import argparse
import logging
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Input

from .commands import CommandHandler
from .constants import UI_IDS
from .demo import run_demo
from .services import CalcResult, CalculatorConfig, ConfigService, HistoryService
from .widgets import HistoryPane, ValueDisplay

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CalculatorTUI(App):
    """Main calculator TUI application."""

    CSS_PATH = "styles.tcss"
    TITLE = "UndoCalc"
    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", show=True, priority=True),
        Binding("ctrl+y", "redo", "Redo", show=True, priority=True),
        Binding(":", "command_mode", "Command", show=True),
        Binding("escape", "cancel_command", "Cancel", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(self, history_service: Optional[HistoryService] = None):
        """Initialize the application.

        Args:
            history_service: Engine to drive; a default one is created if omitted
        """
        super().__init__()
        self.history_service = history_service if history_service is not None else HistoryService()
        self.command_handler = CommandHandler(self)

        self.value_display = ValueDisplay(id=UI_IDS['VALUE_DISPLAY'])
        self.history_pane = HistoryPane(id=UI_IDS['HISTORY_PANE'])

    def compose(self) -> ComposeResult:
        """Compose the UI layout."""
        with Horizontal():
            with Vertical(id="value-column"):
                yield self.value_display
            with Vertical(id="history-column"):
                yield self.history_pane
        yield Footer()
        yield Input(placeholder=": command  or  + 5, - 2, * 3, / 4", id=UI_IDS['COMMAND_INPUT'])

    def on_mount(self):
        """Handle mount event."""
        self.history_service.add_state_change_callback(self._on_state_change)
        self.refresh_state()
        self.query_one(f"#{UI_IDS['COMMAND_INPUT']}", Input).focus()

    def on_unmount(self):
        self.history_service.remove_state_change_callback(self._on_state_change)

    def _on_state_change(self, result: CalcResult) -> None:
        logger.debug(f"State change: {result.message}")
        self.refresh_state()

    def refresh_state(self) -> None:
        """Redraw the value display and the history pane."""
        self.value_display.show_state(
            self.history_service.current_value(),
            self.history_service.history_depths()
        )
        self.history_pane.populate(
            self.history_service.undo_history(),
            self.history_service.redo_history()
        )

    # ==================== Actions ====================

    def action_undo(self):
        self.command_handler.execute("undo")

    def action_redo(self):
        self.command_handler.execute("redo")

    def action_command_mode(self):
        """Focus the command input."""
        cmd_input = self.query_one(f"#{UI_IDS['COMMAND_INPUT']}", Input)
        cmd_input.focus()

    def action_cancel_command(self):
        """Clear the command input."""
        cmd_input = self.query_one(f"#{UI_IDS['COMMAND_INPUT']}", Input)
        cmd_input.value = ""

    def on_input_submitted(self, event: Input.Submitted):
        """Run the submitted command."""
        command = event.value
        event.input.value = ""
        self.command_handler.execute(command)


def configure_logging(settings: CalculatorConfig, interactive: bool) -> None:
    """Configure logging from the [logging] settings.

    While the TUI owns the terminal, records only go to the log file if one
    is configured.
    """
    level = getattr(logging, settings.log_level, logging.WARNING)
    if settings.log_file:
        logging.basicConfig(level=level, filename=settings.log_file, format=LOG_FORMAT)
    elif interactive:
        root = logging.getLogger()
        root.setLevel(level)
        root.addHandler(logging.NullHandler())
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for application."""
    parser = argparse.ArgumentParser(prog="undocalc",
                                     description="Calculator with undo/redo history")
    parser.add_argument("--config", help="Path to config.ini")
    parser.add_argument("--demo", action="store_true",
                        help="Replay the reference session and exit")
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config_service = ConfigService(args.config)
    except Exception as e:
        print(f"Failed to load configuration: {e}")
        return 1

    # Validate configuration
    is_valid, issues = config_service.validate_config()
    if not is_valid:
        print("Configuration errors:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    settings = config_service.get_config()
    configure_logging(settings, interactive=not args.demo)
    logger.info(f"Starting with {settings}")

    history_service = config_service.create_history_service()

    if args.demo:
        run_demo(history_service)
        return 0

    CalculatorTUI(history_service).run()
    return 0
