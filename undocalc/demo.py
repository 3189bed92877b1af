"""Scripted replay of a reference calculator session."""

from typing import Callable, List, Optional, Tuple

from .constants import ResultStatus
from .services.history_service import CalcResult, HistoryService

# (section header, steps); a step is ("compute", op, operand), ("undo",) or ("redo",)
DEMO_SESSION: List[Tuple[Optional[str], List[tuple]]] = [
    (None, [
        ("compute", "+", 100),
        ("compute", "-", 30),
        ("compute", "*", 3),
        ("compute", "/", 10),
    ]),
    ("Undoing", [("undo",), ("undo",)]),
    ("Redoing", [("redo",)]),
    ("Performing new operation", [("compute", "+", 5)]),
    ("Undoing again", [("undo",)] * 5),
    ("Redoing all", [("redo",)] * 5),
    ("Testing Division by Zero", [("compute", "/", 0)]),
]


def _report(result: CalcResult, out: Callable[[str], None]) -> None:
    if result.status is ResultStatus.ERROR:
        out(f"Error: {result.message}")
    else:
        out(result.message)


def run_demo(engine: Optional[HistoryService] = None,
             out: Callable[[str], None] = print) -> HistoryService:
    """Replay the reference session, writing one line per step.

    Args:
        engine: Engine to drive; a fresh one starting at 0 is created if omitted
        out: Line sink, print by default

    Returns:
        The engine, left at the session's final state
    """
    engine = engine if engine is not None else HistoryService()

    for header, steps in DEMO_SESSION:
        if header:
            out(f"\n--- {header} ---")
        for step in steps:
            if step[0] == "compute":
                result = engine.compute(step[1], step[2])
            elif step[0] == "undo":
                result = engine.undo()
            else:
                result = engine.redo()
            _report(result, out)

    out(f"Current Value after attempting division by zero: {engine.current_value()}")

    _report(engine.compute("/", 2), out)
    _report(engine.undo(), out)

    out(f"\nFinal Value: {engine.current_value()}")
    return engine
