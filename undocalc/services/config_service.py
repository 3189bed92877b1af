"""Configuration Service - Handles calculator configuration loading."""

import configparser
import logging
import math
import os
from typing import List, Optional, Tuple

from ..constants import HistorySettings, PATHS, RedoFailurePolicy
from .history_service import HistoryService
from .platform_service import PlatformService

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class CalculatorConfig:
    """Represents the calculator settings."""

    def __init__(self, initial_value: float = HistorySettings.DEFAULT_INITIAL_VALUE,
                 max_history: int = HistorySettings.UNBOUNDED,
                 redo_failure: RedoFailurePolicy = RedoFailurePolicy.DROP,
                 log_level: str = 'WARNING', log_file: Optional[str] = None):
        self.initial_value = initial_value
        self.max_history = max_history
        self.redo_failure = redo_failure
        self.log_level = log_level
        self.log_file = log_file

    def __str__(self) -> str:
        history = "unbounded" if not self.max_history else str(self.max_history)
        return f"start={self.initial_value} history={history} redo_failure={self.redo_failure.value}"


class ConfigService:
    """Service for loading and validating calculator configuration."""

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration service.

        Args:
            config_file: Explicit path to an INI file. When omitted the
                working directory and the user config directory are searched,
                and defaults apply if neither holds a file.
        """
        self.config = configparser.ConfigParser()
        self.issues: List[str] = []
        self.config_file = self._resolve_config_file(config_file)
        self.calculator_config = CalculatorConfig()
        self._load_config()

    def _resolve_config_file(self, config_file: Optional[str]) -> Optional[str]:
        """Find the configuration file to read."""
        if config_file is not None:
            if not os.path.exists(config_file):
                raise FileNotFoundError(f"Configuration file '{config_file}' not found")
            return config_file

        for path in PlatformService.get_config_search_paths(PATHS['CONFIG_FILE']):
            if path.exists():
                return str(path)
        return None

    def _load_config(self) -> None:
        """Load configuration from file, keeping defaults for missing keys."""
        if self.config_file is None:
            logger.debug("No configuration file found, using defaults")
            return

        self.config.read(self.config_file)
        logger.debug(f"Loaded configuration from {self.config_file}")

        if 'calculator' in self.config:
            self._load_calculator_section(self.config['calculator'])
        if 'logging' in self.config:
            self._load_logging_section(self.config['logging'])

    def _load_calculator_section(self, section: configparser.SectionProxy) -> None:
        """Load the [calculator] section."""
        settings = self.calculator_config

        try:
            initial_value = section.getfloat('initial_value', fallback=settings.initial_value)
            if not math.isfinite(initial_value):
                self.issues.append(f"initial_value must be finite, got {initial_value}")
            else:
                settings.initial_value = initial_value
        except ValueError:
            self.issues.append(f"initial_value is not a number: {section.get('initial_value')}")

        try:
            max_history = section.getint('max_history', fallback=settings.max_history)
            if max_history < 0:
                self.issues.append(f"max_history must be zero or positive, got {max_history}")
            else:
                settings.max_history = max_history
        except ValueError:
            self.issues.append(f"max_history is not an integer: {section.get('max_history')}")

        redo_failure = section.get('redo_failure', fallback=settings.redo_failure.value).strip().lower()
        try:
            settings.redo_failure = RedoFailurePolicy(redo_failure)
        except ValueError:
            choices = ", ".join(policy.value for policy in RedoFailurePolicy)
            self.issues.append(f"redo_failure must be one of {choices}, got {redo_failure}")

    def _load_logging_section(self, section: configparser.SectionProxy) -> None:
        """Load the [logging] section."""
        settings = self.calculator_config

        level = section.get('level', fallback=settings.log_level).strip().upper()
        if level in LOG_LEVELS:
            settings.log_level = level
        else:
            self.issues.append(f"Unknown log level: {level}")

        log_file = section.get('file', fallback='').strip()
        settings.log_file = log_file or None

    def get_config(self) -> CalculatorConfig:
        """Get the loaded calculator settings."""
        return self.calculator_config

    def validate_config(self) -> Tuple[bool, List[str]]:
        """Validate configuration and return any issues."""
        return len(self.issues) == 0, list(self.issues)

    def create_history_service(self) -> HistoryService:
        """Create a history engine from the loaded settings."""
        settings = self.calculator_config
        return HistoryService(
            initial_value=settings.initial_value,
            max_size=settings.max_history,
            redo_failure=settings.redo_failure,
        )
