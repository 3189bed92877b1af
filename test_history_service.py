"""Tests for the undo/redo history engine."""

import logging
import threading

import pytest

from undocalc.constants import CalcError, RedoFailurePolicy, ResultStatus
from undocalc.services import HistoryService
from undocalc.services.operations import TRANSFORMS


@pytest.fixture
def calc():
    return HistoryService()


def run_scenario_a(calc):
    values = [calc.compute(op, n).value for op, n in [("+", 100), ("-", 30), ("*", 3), ("/", 10)]]
    assert values == [100.0, 70.0, 210.0, 21.0]


def assert_stacks_disjoint(calc):
    undo_ids = [id(op) for op in calc.undo_history()]
    redo_ids = [id(op) for op in calc.redo_history()]
    assert len(set(undo_ids)) == len(undo_ids)
    assert len(set(redo_ids)) == len(redo_ids)
    assert not set(undo_ids) & set(redo_ids)


# ==================== Reference session ====================

def test_scenario_a_compute_sequence(calc):
    run_scenario_a(calc)
    assert calc.history_depths() == (4, 0)


def test_scenario_b_undo_then_redo(calc):
    run_scenario_a(calc)
    assert calc.undo().value == 210.0
    assert calc.undo().value == 70.0
    assert calc.history_depths() == (2, 2)
    assert calc.redo().value == 210.0
    assert calc.history_depths() == (3, 1)


def test_scenario_c_compute_clears_redo(calc):
    run_scenario_a(calc)
    calc.undo()
    calc.undo()
    calc.redo()
    assert calc.history_depths() == (3, 1)

    result = calc.compute("+", 5)
    assert result.value == 215.0
    assert result.depths == (4, 0)
    assert not calc.can_redo()


def test_scenario_d_divide_by_zero_changes_nothing(calc):
    run_scenario_a(calc)
    calc.undo()
    before = (calc.current_value(), calc.history_depths())

    result = calc.compute("/", 0)

    assert result.status is ResultStatus.ERROR
    assert result.error is CalcError.DIVISION_BY_ZERO
    assert (calc.current_value(), calc.history_depths()) == before
    assert calc.can_redo()


def test_scenario_e_undo_is_exact_state_restore():
    calc = HistoryService(initial_value=215.0)
    assert calc.compute("/", 2).value == 107.5
    assert calc.undo().value == 215.0


def test_undo_restores_non_invertible_multiply():
    calc = HistoryService(initial_value=0.1)
    calc.compute("*", 0)
    calc.compute("/", 3)
    calc.undo()
    calc.undo()
    assert calc.current_value() == 0.1


def test_full_session_undo_all_redo_all(calc):
    run_scenario_a(calc)
    calc.undo()
    calc.undo()
    calc.redo()
    calc.compute("+", 5)

    assert [calc.undo().value for _ in range(4)] == [210.0, 70.0, 100.0, 0.0]
    assert calc.undo().error is CalcError.NOTHING_TO_UNDO
    assert [calc.redo().value for _ in range(4)] == [100.0, 70.0, 210.0, 215.0]
    assert calc.redo().error is CalcError.NOTHING_TO_REDO
    assert calc.history_depths() == (4, 0)


# ==================== Invariants ====================

def test_invalid_operator_changes_nothing(calc):
    calc.compute("+", 1)
    calc.undo()
    result = calc.compute("%", 5)
    assert result.error is CalcError.INVALID_OPERATOR
    assert result.message == "Invalid operator '%'."
    assert calc.current_value() == 0.0
    assert calc.history_depths() == (0, 1)


def test_invalid_operand_changes_nothing(calc):
    result = calc.compute("+", "ten")
    assert result.error is CalcError.INVALID_OPERAND
    assert calc.history_depths() == (0, 0)


@pytest.mark.parametrize("steps", [
    [("+", 1)],
    [("+", 100), ("-", 30), ("*", 3), ("/", 10)],
    [("*", 0), ("+", 0.1), ("/", 3), ("-", -7.25)],
])
def test_round_trip_returns_to_start(steps):
    calc = HistoryService(initial_value=42.0)
    for op, n in steps:
        assert calc.compute(op, n).ok
    for _ in steps:
        calc.undo()
    assert calc.current_value() == 42.0
    assert calc.history_depths() == (0, len(steps))


def test_undo_then_redo_restores_value(calc):
    calc.compute("+", 3)
    calc.compute("*", 7)
    before_undo = calc.current_value()
    calc.undo()
    assert calc.redo().value == before_undo


def test_stacks_stay_disjoint(calc):
    run_scenario_a(calc)
    assert_stacks_disjoint(calc)
    calc.undo()
    calc.undo()
    assert_stacks_disjoint(calc)
    calc.redo()
    assert_stacks_disjoint(calc)
    calc.compute("-", 1)
    assert_stacks_disjoint(calc)
    undo_size, redo_size = calc.history_depths()
    assert undo_size + redo_size == 4


def test_empty_undo_and_redo_are_notices(calc):
    undo_result = calc.undo()
    redo_result = calc.redo()
    for result in (undo_result, redo_result):
        assert result.status is ResultStatus.NOTICE
        assert not result.ok
        assert result.value == 0.0
        assert result.depths == (0, 0)
    assert undo_result.message == "Nothing to undo."
    assert redo_result.message == "Nothing to redo."


def test_history_lists_most_recent_first(calc):
    calc.compute("+", 1)
    calc.compute("+", 2)
    calc.compute("+", 3)
    calc.undo()
    assert [op.label for op in calc.undo_history()] == ["+ 2", "+ 1"]
    assert [op.label for op in calc.redo_history()] == ["+ 3"]


def test_state_line_message(calc):
    result = calc.compute("+", 100)
    assert str(result) == "Executed => Current Value: 100.0 (Undo stack size: 1, Redo stack size: 0)"
    assert calc.undo().message == "Undo => Current Value: 0.0 (Undo stack size: 0, Redo stack size: 1)"


# ==================== Failed redo ====================

def _break_next_redo(calc):
    calc.compute("/", 4)
    calc.undo()
    object.__setattr__(calc.redo_history()[0], "operand", 0.0)


def test_failed_redo_drops_operation(calc):
    calc.compute("+", 8)
    _break_next_redo(calc)

    result = calc.redo()

    assert result.status is ResultStatus.ERROR
    assert result.error is CalcError.DIVISION_BY_ZERO
    assert result.message.startswith("Redo failed")
    assert calc.current_value() == 8.0
    assert calc.history_depths() == (1, 0)


def test_failed_redo_requeue_policy():
    calc = HistoryService(redo_failure=RedoFailurePolicy.REQUEUE)
    calc.compute("+", 8)
    _break_next_redo(calc)

    assert calc.redo().error is CalcError.DIVISION_BY_ZERO
    assert calc.current_value() == 8.0
    assert calc.history_depths() == (1, 1)


# ==================== Bounded history, clear, reset ====================

def test_unbounded_by_default(calc):
    for _ in range(500):
        calc.compute("+", 1)
    assert calc.history_depths() == (500, 0)
    assert not calc.bounded


def test_bounded_history_evicts_oldest(caplog):
    calc = HistoryService(max_size=2)
    with caplog.at_level(logging.INFO, logger="undocalc.services.history_service"):
        calc.compute("+", 1)
        calc.compute("+", 2)
        calc.compute("+", 3)
    assert calc.history_depths() == (2, 0)
    assert [op.label for op in calc.undo_history()] == ["+ 3", "+ 2"]
    assert "evicted oldest operation '+ 1'" in caplog.text

    calc.undo()
    calc.undo()
    assert calc.current_value() == 1.0
    assert calc.undo().error is CalcError.NOTHING_TO_UNDO


def test_zero_max_size_is_unbounded():
    calc = HistoryService(max_size=0)
    assert not calc.bounded


def test_negative_max_size_rejected():
    with pytest.raises(ValueError):
        HistoryService(max_size=-1)


def test_clear_keeps_value(calc):
    calc.compute("+", 5)
    calc.compute("+", 5)
    calc.undo()
    result = calc.clear()
    assert result.ok
    assert calc.current_value() == 5.0
    assert calc.history_depths() == (0, 0)


def test_reset_restores_initial_value():
    calc = HistoryService(initial_value=3.0)
    calc.compute("*", 4)
    result = calc.reset()
    assert result.value == 3.0
    assert calc.history_depths() == (0, 0)


# ==================== Callbacks ====================

def test_callbacks_fire_on_state_changes_only(calc):
    seen = []
    calc.add_state_change_callback(lambda result: seen.append(result.action))
    calc.compute("+", 1)
    calc.compute("/", 0)
    calc.undo()
    calc.undo()
    calc.redo()
    calc.clear()
    assert seen == ["Executed", "Undo", "Redo", "Clear"]


def test_callback_errors_are_logged_not_raised(calc, caplog):
    def broken(result):
        raise RuntimeError("boom")

    calc.add_state_change_callback(broken)
    with caplog.at_level(logging.ERROR):
        result = calc.compute("+", 1)
    assert result.ok
    assert calc.current_value() == 1.0
    assert "Error in state change callback: boom" in caplog.text


def test_remove_callback(calc):
    seen = []
    callback = seen.append
    calc.add_state_change_callback(callback)
    calc.remove_state_change_callback(callback)
    calc.compute("+", 1)
    assert seen == []


# ==================== Threads ====================

def test_concurrent_calls_keep_state_consistent():
    calc = HistoryService(initial_value=1.0)
    start = threading.Barrier(6)
    computes = []

    def worker(seed):
        start.wait()
        ok = 0
        for step in range(200):
            choice = (seed + step) % 5
            if choice in (0, 1, 2):
                symbol = "+-*"[choice]
                operand = 1.0 if symbol == "*" else float(seed + 1)
                if calc.compute(symbol, operand).ok:
                    ok += 1
            elif choice == 3:
                calc.undo()
            else:
                calc.redo()
        computes.append(ok)

    threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(computes) == 6
    assert_stacks_disjoint(calc)

    undo_ops = calc.undo_history()
    redo_ops = calc.redo_history()
    undo_size, redo_size = calc.history_depths()
    assert (undo_size, redo_size) == (len(undo_ops), len(redo_ops))
    assert undo_size + redo_size <= sum(computes)

    value = calc.initial_value
    for operation in reversed(undo_ops):
        assert operation.value_before == value
        value = TRANSFORMS[operation.kind](value, operation.operand)
    assert calc.current_value() == value

    for operation in redo_ops:
        assert operation.value_before == value
        value = TRANSFORMS[operation.kind](value, operation.operand)
