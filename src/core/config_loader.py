import json
import logging
from dataclasses import fields
from pathlib import Path

from core.models.config_data import configData

logger = logging.getLogger(__name__)


def _coerce(default, value):
    """Convert a JSON value to the type of its default, refusing lossy conversions."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"expected true or false, got {value!r}")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    if isinstance(default, int) and not float(value).is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return type(default)(value)


class ConfigLoader:
    """Loads and manages converter configuration from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = configData()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._get_default_config()
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the converter_config.json file."""
        # Config file should be in the project root/config directory
        config_path = Path(__file__).parent.parent.parent / "config" / "converter_config.json"
        return config_path

    def load_config(self, config_path: Path | None = None):
        """Load configuration from JSON file."""
        if config_path is None:
            config_path = self.get_config_path()

        # Start from defaults so a partial file still yields a full config
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
            return

        try:
            with open(config_path, 'r') as f:
                json_data = json.load(f)

            known = {f.name for f in fields(configData)}
            for key, value in json_data.items():
                if key not in known:
                    logger.warning(f"Unknown configuration key ignored: {key}")
                    continue
                default = getattr(self._config, key)
                setattr(self._config, key, _coerce(default, value))
            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (TypeError, ValueError) as e:
            logger.error(f"Invalid value in configuration file: {e}")
            self._config = self._get_default_config()

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData()

    @property
    def config(self) -> configData:
        return self._config

    def get_emulation_mode(self) -> bool:
        """Get the emulation mode setting."""
        return self._config.emulation

    def get_jolt_threshold(self) -> float:
        """Acceleration change (m/s²) above which a jolt invalidates calibration."""
        return self._config.jolt_threshold

    def get_debounce_ms(self) -> int:
        return self._config.debounce_ms

    def get_grade_limit(self) -> float:
        return self._config.grade_limit

    def get_incline_factor(self) -> float:
        return self._config.incline_factor

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()
