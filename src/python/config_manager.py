import json
import pathlib
import sys
import logging
from typing import Any

from custom_types import TimeControlConfig

logger = logging.getLogger(__name__)

class ConfigManager:
    """Manages application configuration, including colors, fonts, and strings"""

    colors: dict[str, str]
    fonts: dict[str, str]
    strings: dict[str, Any]
    ui: dict[str, Any]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """Initialize the ConfigManager with an optional custom path.

        Args:
            cfg_path: Path to the config.json file (defaults to standard location if None)
            exit_on_error: Whether to exit the program on configuration errors
        """
        self.colors = {}
        self.fonts = {}
        self.strings = {}
        self.ui = {}
        self.exit_on_error = exit_on_error
        self._cfg = {}

        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()

        self.load_config()

    def _default_config_path(self) -> pathlib.Path:
        """Get the default path to the config.json file."""
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def load_config(self) -> None:
        """Load master configuration from the configured path."""
        try:
            with open(self.cfg_path, 'r') as f:
                self._cfg = json.load(f)
        except Exception as e:
            error_msg = "Critical error loading configuration '%s': %s"
            logger.error(error_msg, self.cfg_path, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise RuntimeError(f"Critical error loading configuration '{self.cfg_path}': {e}")

        # Validate and assign sections
        try:
            c = self._cfg["colors"]
            self.colors = c["palette"]
            self.fonts = c["fonts"]
            self.strings = self._cfg["strings"]
            self.ui = self._cfg["ui"]
        except KeyError as e:
            error_msg = "Configuration missing key: %s"
            logger.error(error_msg, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise KeyError(f"Configuration missing key: {e}")

    def get_color(self, key: str, default: str | None = None) -> str:
        """Get a color hex string from the palette by key"""
        return self.colors.get(key, default or "#000000")

    def get_font(self, key: str = "primary") -> str:
        """Get a font family name by key"""
        return self.fonts.get(key, "Arial")

    def get_string(self, category: str, key: str, default: str | None = None) -> str:
        """Get a string resource by category and key"""
        if category in self.strings and key in self.strings[category]:
            return self.strings[category][key]
        return default or key

    def get_ui_setting(self, category: str, key: str, default: Any = None) -> Any:
        """Get a UI setting value by category and key"""
        if category in self.ui and key in self.ui[category]:
            return self.ui[category][key]
        return default

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get a generic setting from the master config"""
        section_data = self._cfg.get(section, {})
        if not isinstance(section_data, dict):
            return default
        return section_data.get(key, default)

    def set_setting(self, section: str, key: str, value: Any) -> None:
        """Set a setting in memory (does not persist to file).

        Args:
            section: Configuration section (e.g., 'ui', 'logging')
            key: Setting key within the section
            value: Value to set
        """
        if section not in self._cfg:
            self._cfg[section] = {}
        self._cfg[section][key] = value

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        """Get a logging configuration setting"""
        return self.get_setting("logging", key, default)

    def get_time_control_config(self) -> TimeControlConfig:
        """Get the time control section of the UI settings.

        Returns:
            dict: Time control configuration with keys:
                - startTime: Initial start time as "HH:MM"
                - stopTime: Initial stop time as "HH:MM"
                - tickLabelOrientation: 'horizontal', 'orthogonal' or 'tangent'
                - borderWidth: Border width at the preferred size
                - minPointerRadius: Smallest pointer distance from the dial
                  center that still produces an angle
        """
        return self.ui.get("timeControl", {})


# Create a singleton instance
config = ConfigManager()
