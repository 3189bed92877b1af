"""History Service - Owns the accumulator and its undo/redo history."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from ..constants import (
    CalcError, HistorySettings, MESSAGES, OperationKind, RedoFailurePolicy, ResultStatus,
)
from . import operation_factory
from .operations import Operation

logger = logging.getLogger(__name__)


@dataclass
class CalcResult:
    """Outcome of a single history engine call."""
    status: ResultStatus
    value: float
    depths: Tuple[int, int]
    action: str = ""
    error: Optional[CalcError] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    def __str__(self) -> str:
        return self.message


class HistoryService:
    """Accumulator with linear undo/redo history.

    The accumulator, the undo stack and the redo stack are one unit of state:
    every public call takes the same lock for its whole duration, and a call
    that fails leaves all three exactly as they were.
    """

    def __init__(self, initial_value: float = HistorySettings.DEFAULT_INITIAL_VALUE,
                 max_size: Optional[int] = None,
                 redo_failure: RedoFailurePolicy = RedoFailurePolicy.DROP):
        """Initialize history service.

        Args:
            initial_value: Starting accumulator value, also used by reset()
            max_size: Maximum undo depth; None or 0 keeps history unbounded
            redo_failure: Whether a failed redo drops the operation or requeues it
        """
        if max_size is not None and max_size < 0:
            raise ValueError("max_size must be zero or positive")

        self.initial_value = float(initial_value)
        self.max_size = max_size or HistorySettings.UNBOUNDED
        self.redo_failure = RedoFailurePolicy(redo_failure)

        self._value = self.initial_value
        self._undo_stack: List[Operation] = []
        self._redo_stack: List[Operation] = []
        self._lock = threading.RLock()

        self._state_change_callbacks: List[Callable[[CalcResult], None]] = []

    # ==================== Accessors ====================

    def current_value(self) -> float:
        """Get the accumulator value."""
        with self._lock:
            return self._value

    def history_depths(self) -> Tuple[int, int]:
        """Get (undo stack size, redo stack size)."""
        with self._lock:
            return len(self._undo_stack), len(self._redo_stack)

    def can_undo(self) -> bool:
        with self._lock:
            return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        with self._lock:
            return len(self._redo_stack) > 0

    def undo_history(self) -> List[Operation]:
        """Get operations available to undo, most recent first."""
        with self._lock:
            return list(reversed(self._undo_stack))

    def redo_history(self) -> List[Operation]:
        """Get operations available to redo, next redo first."""
        with self._lock:
            return list(reversed(self._redo_stack))

    @property
    def bounded(self) -> bool:
        return self.max_size != HistorySettings.UNBOUNDED

    # ==================== Callbacks ====================

    def add_state_change_callback(self, callback: Callable[[CalcResult], None]) -> None:
        """Add a callback fired after every state change.

        Args:
            callback: Function that receives the CalcResult of the change
        """
        self._state_change_callbacks.append(callback)

    def remove_state_change_callback(self, callback: Callable[[CalcResult], None]) -> None:
        if callback in self._state_change_callbacks:
            self._state_change_callbacks.remove(callback)

    def _notify(self, result: CalcResult) -> None:
        for callback in list(self._state_change_callbacks):
            try:
                callback(result)
            except Exception as e:
                logger.error(f"Error in state change callback: {e}")

    # ==================== Internal hooks ====================

    def _apply_internal(self, value: float) -> None:
        """Write the result of an operation. Only Operation.execute calls this."""
        self._value = value

    def _revert_internal(self, value: float) -> None:
        """Restore a captured value. Only Operation.undo calls this."""
        self._value = value

    def _push_undo(self, operation: Operation) -> None:
        self._undo_stack.append(operation)
        if self.bounded and len(self._undo_stack) > self.max_size:
            evicted = self._undo_stack.pop(0)
            logger.info(f"History full ({self.max_size}), evicted oldest operation '{evicted.label}'")

    def _result(self, status: ResultStatus, action: str = "",
                error: Optional[CalcError] = None, message: str = "") -> CalcResult:
        depths = (len(self._undo_stack), len(self._redo_stack))
        if status is ResultStatus.OK and not message:
            message = MESSAGES['STATE_LINE'].format(
                action=action, value=self._value, undo=depths[0], redo=depths[1]
            )
        return CalcResult(status=status, value=self._value, depths=depths,
                          action=action, error=error, message=message)

    def _error_message(self, error: CalcError, operator=None, operand=None) -> str:
        return MESSAGES[error.name].format(operator=operator, operand=operand)

    # ==================== Public operations ====================

    def compute(self, operator: Union[str, OperationKind], operand) -> CalcResult:
        """Build and execute an operation, recording it in history.

        On success the operation goes onto the undo stack and the redo stack is
        cleared. On failure nothing changes.

        Args:
            operator: Operator symbol ('+', '-', '*', '/') or OperationKind
            operand: Right-hand value

        Returns:
            CalcResult with status OK or ERROR
        """
        with self._lock:
            operation, error = operation_factory.build(operator, operand)
            if error is None:
                error = operation.execute(self)

            if error is not None:
                logger.warning(f"Rejected {operator!r} {operand!r}: {error.value}")
                return self._result(ResultStatus.ERROR, action="Executed", error=error,
                                    message=self._error_message(error, operator, operand))

            self._push_undo(operation)
            self._redo_stack.clear()
            logger.debug(f"Executed '{operation.label}' -> {self._value}")
            result = self._result(ResultStatus.OK, action="Executed")

        self._notify(result)
        return result

    def undo(self) -> CalcResult:
        """Revert the most recent operation and move it to the redo stack.

        Returns:
            CalcResult with status OK, or NOTICE if there is nothing to undo
        """
        with self._lock:
            if not self._undo_stack:
                return self._result(ResultStatus.NOTICE, action="Undo",
                                    error=CalcError.NOTHING_TO_UNDO,
                                    message=MESSAGES['NOTHING_TO_UNDO'])

            operation = self._undo_stack.pop()
            operation.undo(self)
            self._redo_stack.append(operation)
            logger.debug(f"Undid '{operation.label}' -> {self._value}")
            result = self._result(ResultStatus.OK, action="Undo")

        self._notify(result)
        return result

    def redo(self) -> CalcResult:
        """Re-apply the most recently undone operation.

        A redo that fails is not returned to the undo stack. Depending on the
        redo failure policy it is either dropped or put back on the redo stack.

        Returns:
            CalcResult with status OK, ERROR, or NOTICE if there is nothing to redo
        """
        with self._lock:
            if not self._redo_stack:
                return self._result(ResultStatus.NOTICE, action="Redo",
                                    error=CalcError.NOTHING_TO_REDO,
                                    message=MESSAGES['NOTHING_TO_REDO'])

            operation = self._redo_stack.pop()
            error = operation.execute(self)
            if error is not None:
                if self.redo_failure is RedoFailurePolicy.REQUEUE:
                    self._redo_stack.append(operation)
                    logger.warning(f"Redo of '{operation.label}' failed ({error.value}), requeued")
                else:
                    logger.warning(f"Redo of '{operation.label}' failed ({error.value}), dropped")
                message = MESSAGES['REDO_FAILED'].format(error=self._error_message(error))
                return self._result(ResultStatus.ERROR, action="Redo", error=error, message=message)

            self._push_undo(operation)
            logger.debug(f"Redid '{operation.label}' -> {self._value}")
            result = self._result(ResultStatus.OK, action="Redo")

        self._notify(result)
        return result

    def clear(self) -> CalcResult:
        """Clear both history stacks, keeping the current value."""
        with self._lock:
            self._undo_stack.clear()
            self._redo_stack.clear()
            logger.info("History cleared")
            result = self._result(ResultStatus.OK, action="Clear")

        self._notify(result)
        return result

    def reset(self) -> CalcResult:
        """Clear history and restore the initial value."""
        with self._lock:
            self._undo_stack.clear()
            self._redo_stack.clear()
            self._value = self.initial_value
            logger.info(f"Calculator reset to {self.initial_value}")
            result = self._result(ResultStatus.OK, action="Reset")

        self._notify(result)
        return result
