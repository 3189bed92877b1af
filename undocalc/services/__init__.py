"""Services module for UndoCalc."""

from .operations import Operation, DivisionByZeroError
from .history_service import HistoryService, CalcResult
from .config_service import ConfigService, CalculatorConfig
from .platform_service import PlatformService

__all__ = ['Operation', 'DivisionByZeroError', 'HistoryService', 'CalcResult',
           'ConfigService', 'CalculatorConfig', 'PlatformService']
