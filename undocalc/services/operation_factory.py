"""Operation Factory - Maps operator symbols to operations."""

import logging
import math
from typing import Optional, Tuple, Union

from ..constants import CalcError, OperationKind
from .operations import Operation

logger = logging.getLogger(__name__)

_KINDS_BY_SYMBOL = {kind.value: kind for kind in OperationKind}


def parse_operator(operator: Union[str, OperationKind]) -> Optional[OperationKind]:
    """Resolve an operator symbol to its kind.

    Args:
        operator: One of '+', '-', '*', '/' or an OperationKind

    Returns:
        Matching OperationKind, or None if the symbol is not supported
    """
    if isinstance(operator, OperationKind):
        return operator
    if not isinstance(operator, str):
        return None
    return _KINDS_BY_SYMBOL.get(operator.strip())


def parse_operand(operand) -> Optional[float]:
    """Coerce an operand to a finite float, or None if that is not possible."""
    if isinstance(operand, bool):
        return None
    try:
        value = float(operand)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def build(operator: Union[str, OperationKind], operand) -> Tuple[Optional[Operation], Optional[CalcError]]:
    """Build an operation from an operator symbol and operand.

    No state is touched here. Division by zero is rejected before an
    operation object is constructed.

    Args:
        operator: Operator symbol or kind
        operand: Right-hand value

    Returns:
        Tuple of (operation, None) on success or (None, error) on failure
    """
    kind = parse_operator(operator)
    if kind is None:
        logger.debug(f"Rejected operator {operator!r}")
        return None, CalcError.INVALID_OPERATOR

    value = parse_operand(operand)
    if value is None:
        logger.debug(f"Rejected operand {operand!r}")
        return None, CalcError.INVALID_OPERAND

    if kind is OperationKind.DIVIDE and value == 0:
        return None, CalcError.DIVISION_BY_ZERO

    return Operation(kind, value), None
