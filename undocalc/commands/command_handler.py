"""Command handler for parsing and executing calculator commands."""

import logging
import re
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ..constants import COMMAND_ALIASES, MESSAGES, ResultStatus, Severity
from ..services.history_service import CalcResult

if TYPE_CHECKING:
    from textual.app import App

logger = logging.getLogger(__name__)

# "+ 5", "+5", "*-2", "/ 0.5"
ARITHMETIC_PATTERN = re.compile(r'^(?P<operator>[+\-*/])\s*(?P<operand>\S*)$')

SEVERITY_BY_STATUS = {
    ResultStatus.OK: Severity.INFORMATION,
    ResultStatus.NOTICE: Severity.WARNING,
    ResultStatus.ERROR: Severity.ERROR,
}


class CommandHandler:
    """Handles command parsing and execution."""

    def __init__(self, app: 'App'):
        """Initialize command handler.

        Args:
            app: The main application instance
        """
        self.app = app
        self.commands = self._build_command_registry()

    @property
    def history_service(self):
        return self.app.history_service

    def _build_command_registry(self) -> Dict[str, Callable]:
        """Build the command registry mapping command names to handlers."""
        return {
            'undo': self._handle_undo,
            'redo': self._handle_redo,
            'clear': self._handle_clear,
            'reset': self._handle_reset,
            'history': self._handle_history,
            'help': self._handle_help,
            'quit': self._handle_quit,
        }

    def execute(self, command_str: str) -> Optional[CalcResult]:
        """Parse and execute a command.

        Args:
            command_str: The command string from user input

        Returns:
            Result of the engine call, or None for commands that do not call it
        """
        command_str = command_str.strip()
        if command_str.startswith(':'):
            command_str = command_str[1:].strip()
        if not command_str:
            return None

        match = ARITHMETIC_PATTERN.match(command_str)
        if match:
            return self._handle_compute(match.group('operator'), match.group('operand'))

        parts = command_str.split(maxsplit=1)
        command = parts[0].lower()
        command = COMMAND_ALIASES.get(command, command)

        handler = self.commands.get(command)
        if handler:
            return handler()

        self.app.notify(MESSAGES['UNKNOWN_COMMAND'].format(command=parts[0]),
                        severity=Severity.WARNING.value)
        return None

    def _report(self, result: CalcResult) -> CalcResult:
        """Show an engine result to the user."""
        severity = SEVERITY_BY_STATUS[result.status]
        self.app.notify(result.message, severity=severity.value)
        return result

    def _handle_compute(self, operator: str, operand: str) -> CalcResult:
        """Handle an arithmetic command."""
        logger.debug(f"Compute {operator} {operand!r}")
        return self._report(self.history_service.compute(operator, operand))

    def _handle_undo(self) -> CalcResult:
        """Handle undo command."""
        return self._report(self.history_service.undo())

    def _handle_redo(self) -> CalcResult:
        """Handle redo command."""
        return self._report(self.history_service.redo())

    def _handle_clear(self) -> None:
        """Handle clear command, asking for confirmation first."""
        from ..ui.dialogs import ConfirmClearDialog
        undo_size, redo_size = self.history_service.history_depths()
        self.app.push_screen(
            ConfirmClearDialog(undo_size, redo_size),
            self.handle_clear_confirmation
        )

    def handle_clear_confirmation(self, confirmed: bool) -> None:
        if confirmed:
            self.history_service.clear()
            self.app.notify(MESSAGES['HISTORY_CLEARED'], severity=Severity.INFORMATION.value)
        else:
            self.app.notify(MESSAGES['CLEAR_CANCELLED'], severity=Severity.INFORMATION.value)

    def _handle_reset(self) -> CalcResult:
        """Handle reset command."""
        result = self.history_service.reset()
        self.app.notify(MESSAGES['CALCULATOR_RESET'].format(value=result.value),
                        severity=Severity.INFORMATION.value)
        return result

    def _handle_history(self) -> None:
        """Handle history command."""
        undo_ops = self.history_service.undo_history()
        redo_ops = self.history_service.redo_history()
        if not undo_ops and not redo_ops:
            self.app.notify(MESSAGES['HISTORY_EMPTY'], severity=Severity.INFORMATION.value)
            return

        lines = ["[bold]Undo:[/bold] " + (", ".join(op.label for op in undo_ops) or "-"),
                 "[bold]Redo:[/bold] " + (", ".join(op.label for op in redo_ops) or "-")]
        self.app.notify("\n".join(lines), severity=Severity.INFORMATION.value)

    def _handle_help(self) -> None:
        """Handle help command."""
        help_text = """[bold cyan]Available Commands:[/bold cyan]

[bold]Arithmetic:[/bold]
+ <n>            - Add n
- <n>            - Subtract n
* <n>            - Multiply by n
/ <n>            - Divide by n

[bold]History:[/bold]
:undo, :u        - Undo last operation
:redo, :r        - Redo last undone operation
:history, :h     - Show undo/redo history
:clear           - Forget history, keep the value
:reset           - Forget history and restore the start value

[bold]Other:[/bold]
:help, :?        - Show this help message
:q, :quit, :exit - Quit application

[bold]Keyboard Shortcuts:[/bold]
ctrl+z           - Undo
ctrl+y           - Redo
:                - Focus command input
Esc              - Clear command input
"""
        self.app.notify(help_text, timeout=15)

    def _handle_quit(self) -> None:
        """Handle quit command."""
        self.app.exit()
