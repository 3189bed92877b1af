"""Widgets module for UndoCalc."""

from .history_pane import HistoryPane
from .value_display import ValueDisplay

__all__ = ['HistoryPane', 'ValueDisplay']
