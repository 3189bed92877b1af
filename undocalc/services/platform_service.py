"""Platform Service - Cross-platform path utilities."""

import os
import sys
from pathlib import Path
from typing import List

APP_NAME = "undocalc"


class PlatformService:
    """Service for platform-specific paths."""

    @staticmethod
    def is_windows() -> bool:
        """Check if running on Windows."""
        return sys.platform == "win32"

    @classmethod
    def get_config_dir(cls) -> Path:
        """Get the configuration directory path.

        Returns:
            - Windows: %APPDATA%\\undocalc
            - macOS/Linux: ~/.config/undocalc
        """
        if cls.is_windows():
            base = os.environ.get("APPDATA")
            if base:
                return Path(base) / APP_NAME
            return Path.home() / "AppData" / "Roaming" / APP_NAME
        else:
            xdg_config = os.environ.get("XDG_CONFIG_HOME")
            if xdg_config:
                return Path(xdg_config) / APP_NAME
            return Path.home() / ".config" / APP_NAME

    @classmethod
    def get_config_search_paths(cls, filename: str = "config.ini") -> List[Path]:
        """Get candidate config file locations, in lookup order."""
        return [Path.cwd() / filename, cls.get_config_dir() / filename]
