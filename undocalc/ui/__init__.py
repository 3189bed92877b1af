"""UI module for UndoCalc."""

from .dialogs import ConfirmClearDialog

__all__ = ['ConfirmClearDialog']
