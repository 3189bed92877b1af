"""Commands module for UndoCalc."""

from .command_handler import CommandHandler

__all__ = ['CommandHandler']
