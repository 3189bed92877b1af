"""Constants and enumerations for UndoCalc."""

from enum import Enum


class OperationKind(str, Enum):
    """Arithmetic operation kinds. The value is the operator symbol."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class CalcError(str, Enum):
    """Reasons a calculator call did not change state."""
    INVALID_OPERATOR = "invalid_operator"
    INVALID_OPERAND = "invalid_operand"
    DIVISION_BY_ZERO = "division_by_zero"
    NOTHING_TO_UNDO = "nothing_to_undo"
    NOTHING_TO_REDO = "nothing_to_redo"


class ResultStatus(str, Enum):
    """Outcome of a history engine call."""
    OK = "ok"
    ERROR = "error"
    NOTICE = "notice"


class Severity(str, Enum):
    """Notification severity levels."""
    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


class RedoFailurePolicy(str, Enum):
    """What happens to an operation whose redo fails."""
    DROP = "drop"
    REQUEUE = "requeue"


class HistorySettings:
    """Operation history settings."""
    UNBOUNDED = 0
    DEFAULT_INITIAL_VALUE = 0.0


# Command aliases mapping
COMMAND_ALIASES = {
    'u': 'undo',
    'r': 'redo',
    'h': 'history',
    '?': 'help',
    'q': 'quit',
    'exit': 'quit',
}


# Default messages
MESSAGES = {
    'INVALID_OPERATOR': "Invalid operator '{operator}'.",
    'INVALID_OPERAND': "Invalid operand '{operand}'.",
    'DIVISION_BY_ZERO': "Cannot divide by zero. Operation skipped.",
    'NOTHING_TO_UNDO': "Nothing to undo.",
    'NOTHING_TO_REDO': "Nothing to redo.",
    'REDO_FAILED': "Redo failed: {error}",
    'STATE_LINE': "{action} => Current Value: {value} (Undo stack size: {undo}, Redo stack size: {redo})",
    'HISTORY_CLEARED': "History cleared",
    'CALCULATOR_RESET': "Calculator reset to {value}",
    'CLEAR_CANCELLED': "Clear cancelled",
    'UNKNOWN_COMMAND': "Unknown command: {command}",
    'HISTORY_EMPTY': "History is empty",
}


# UI element IDs
UI_IDS = {
    'COMMAND_INPUT': 'command-input',
    'VALUE_DISPLAY': 'value-display',
    'HISTORY_PANE': 'history-pane',
    'DIALOG': 'dialog',
    'DIALOG_BUTTONS': 'dialog-buttons',
    'QUESTION': 'question',
}


# File paths
PATHS = {
    'CONFIG_FILE': 'config.ini',
    'STYLES_FILE': 'styles.tcss',
}
