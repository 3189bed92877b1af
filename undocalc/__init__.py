"""UndoCalc - Calculator with undo/redo history."""

# Version is read from package metadata (set in setup.py)
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("undocalc")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0-dev"

from .app import CalculatorTUI, main
from .services import HistoryService, CalcResult, Operation

__all__ = ["CalculatorTUI", "HistoryService", "CalcResult", "Operation", "main", "__version__"]
