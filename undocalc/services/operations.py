"""Operations - Reversible arithmetic steps applied to the accumulator."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ..constants import CalcError, OperationKind

if TYPE_CHECKING:
    from .history_service import HistoryService


class DivisionByZeroError(ValueError):
    """Raised when a divide operation is constructed with a zero operand."""


# Single dispatch table for the closed set of kinds
TRANSFORMS: Dict[OperationKind, Callable[[float, float], float]] = {
    OperationKind.ADD: lambda value, operand: value + operand,
    OperationKind.SUBTRACT: lambda value, operand: value - operand,
    OperationKind.MULTIPLY: lambda value, operand: value * operand,
    OperationKind.DIVIDE: lambda value, operand: value / operand,
}


@dataclass(eq=False, frozen=True)
class Operation:
    """One reversible arithmetic step.

    Frozen once built. The value the accumulator held before the first
    successful execute is captured once and used by undo to restore state
    directly, instead of applying a mathematical inverse.
    """
    kind: OperationKind
    operand: float
    _value_before: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "kind", OperationKind(self.kind))
        object.__setattr__(self, "operand", float(self.operand))
        if self.kind is OperationKind.DIVIDE and self.operand == 0:
            raise DivisionByZeroError("Operand cannot be zero for a divide operation")

    @property
    def value_before(self) -> Optional[float]:
        """Accumulator value captured on first execute, None before that."""
        return self._value_before

    @property
    def executed(self) -> bool:
        return self._value_before is not None

    @property
    def label(self) -> str:
        return f"{self.kind.value} {self.operand:g}"

    def execute(self, engine: 'HistoryService') -> Optional[CalcError]:
        """Apply this operation to the engine's accumulator.

        Args:
            engine: History engine owning the accumulator

        Returns:
            None on success, or the error that left the accumulator untouched
        """
        if self.kind is OperationKind.DIVIDE and self.operand == 0:
            return CalcError.DIVISION_BY_ZERO

        current = engine.current_value()
        new_value = TRANSFORMS[self.kind](current, self.operand)
        if self._value_before is None:
            object.__setattr__(self, "_value_before", current)
        engine._apply_internal(new_value)
        return None

    def undo(self, engine: 'HistoryService') -> None:
        """Restore the accumulator to the value captured on first execute."""
        if self._value_before is None:
            raise RuntimeError(f"Cannot undo '{self.label}' before it has been executed")
        engine._revert_internal(self._value_before)

    def __str__(self) -> str:
        return self.label
