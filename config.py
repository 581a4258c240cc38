import logging
import os
import json
import time
from enum import IntEnum
from pathlib import Path
from typing import Dict, Any, Optional
from json.decoder import JSONDecodeError
import threading

# Custom exceptions
class ConfigError(Exception):
    """Base exception for configuration errors."""
    pass

class ConfigLoadError(ConfigError):
    """Error loading configuration file."""
    pass

class ConfigValidationError(ConfigError):
    """Error validating configuration."""
    pass

# Application settings
APP_NAME: str = "Store Inventory Analytics"
APP_VERSION: str = "1.0"
STORE_NAME: str = "24/7 Convenience Store"
CONFIG_VERSION: str = "1.0"

# Debug Level configuration
class DebugLevel(IntEnum):
    """Enum representing different debug levels for the application."""
    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5

DEBUG_LEVEL_MAP: Dict[DebugLevel, int] = {
    DebugLevel.CRITICAL: logging.CRITICAL,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
}


def resolve_debug_level(raw: Optional[str]) -> int:
    """
    Map the INVENTORY_DEBUG_LEVEL environment value (1-5) to a logging level.

    Unknown or missing values fall back to INFO.
    """
    try:
        return DEBUG_LEVEL_MAP[DebugLevel(int(raw))]
    except (TypeError, ValueError):
        return logging.INFO


DEBUG_LEVEL = resolve_debug_level(os.environ.get("INVENTORY_DEBUG_LEVEL"))

DEFAULT_CONFIG_FILE = Path(__file__).parent / 'app_config.json'


class Config:
    """Thread-safe singleton class for managing report policy configuration."""

    _instance: Optional['Config'] = None
    _config: Optional[Dict[str, Any]] = None
    _lock = threading.RLock()
    _cache_ttl: int = 300  # 5 minutes
    _last_load_time: float = 0
    _config_file: Optional[Path] = None

    def __new__(cls) -> 'Config':
        """Ensure singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    @classmethod
    def _get_config_file(cls) -> Path:
        return cls._config_file or DEFAULT_CONFIG_FILE

    @classmethod
    def _is_cache_valid(cls) -> bool:
        """Check if cached configuration is still valid."""
        return cls._config is not None and time.time() - cls._last_load_time < cls._cache_ttl

    @classmethod
    def _load_config(cls) -> None:
        """Load configuration from file or create default if not exists."""
        if not cls._is_cache_valid():
            with cls._lock:
                if not cls._is_cache_valid():
                    config_file = cls._get_config_file()
                    if config_file.exists():
                        try:
                            with open(config_file, 'r', encoding='utf-8') as f:
                                loaded_config = json.load(f)
                        except (IOError, JSONDecodeError) as e:
                            logging.error(f"Error loading configuration: {e}")
                            raise ConfigLoadError(f"Failed to load config: {e}")
                        merged = {**cls._get_default_config(), **loaded_config}
                        cls._validate_config(merged)
                        cls._config = merged
                        cls._last_load_time = time.time()
                    else:
                        cls._config = cls._get_default_config()
                        cls._save_config()
                        cls._last_load_time = time.time()

    @classmethod
    def _get_default_config(cls) -> Dict[str, Any]:
        """Return the default configuration."""
        return {
            "version": CONFIG_VERSION,
            "stock_low_threshold": 0.3,
            "expiry_warning_days": 3,
            "discount_policy": {"3": 0.0, "2": 0.3, "1": 0.5, "0": 0.7},
            "bestseller_limit": 5,
            "currency_symbol": "₩",
            "log_format": "text",
        }

    @classmethod
    def _save_config(cls) -> None:
        """Save current configuration to file."""
        if cls._config is None:
            cls._config = cls._get_default_config()

        config_file = cls._get_config_file()
        try:
            with open(config_file, 'w', encoding='utf-8') as f:
                json.dump(cls._config, f, indent=4, ensure_ascii=False)
        except IOError as e:
            logging.error(f"Error saving configuration: {e}")
            raise ConfigLoadError(f"Failed to save config: {e}")

    @classmethod
    def _validate_config(cls, config: Dict[str, Any]) -> None:
        """
        Validate the configuration structure and types.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ConfigValidationError: If validation fails
        """
        required_keys = {
            "version": (str, [CONFIG_VERSION]),
            "stock_low_threshold": ((int, float), None),
            "expiry_warning_days": (int, (0, 365)),
            "discount_policy": (dict, None),
            "bestseller_limit": (int, (1, 100)),
            "currency_symbol": (str, None),
            "log_format": (str, ["text", "json"]),
        }

        for key, (expected_type, valid_values) in required_keys.items():
            if key not in config:
                raise ConfigValidationError(f"Missing required key: {key}")

            value = config[key]
            if isinstance(value, bool) or not isinstance(value, expected_type):
                raise ConfigValidationError(
                    f"Invalid type for {key}. Expected {expected_type}, got {type(value)}"
                )

            if isinstance(valid_values, list) and value not in valid_values:
                raise ConfigValidationError(
                    f"Invalid value for {key}. Must be one of {valid_values}"
                )
            if isinstance(valid_values, tuple) and not valid_values[0] <= value <= valid_values[1]:
                raise ConfigValidationError(
                    f"Invalid value for {key}. Must be between {valid_values[0]} and {valid_values[1]}"
                )

        if not 0 < config["stock_low_threshold"] < 1:
            raise ConfigValidationError("stock_low_threshold must be between 0 and 1 (exclusive)")

        for days, rate in config["discount_policy"].items():
            try:
                int(days)
            except (TypeError, ValueError):
                raise ConfigValidationError(f"Invalid discount tier key: {days!r}")
            if isinstance(rate, bool) or not isinstance(rate, (int, float)) or not 0 <= rate < 1:
                raise ConfigValidationError(f"Invalid discount rate for tier {days}: {rate!r}")

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key
            default: Default value if key is not found

        Returns:
            The configuration value or default
        """
        cls._load_config()
        with cls._lock:
            return cls._config.get(key, default) if cls._config is not None else default

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """
        Set a configuration value, validate the result and persist it.

        Args:
            key: The configuration key
            value: The value to set
        """
        cls._load_config()
        with cls._lock:
            candidate = {**(cls._config or cls._get_default_config()), key: value}
            cls._validate_config(candidate)
            cls._config = candidate
            cls._save_config()

    @classmethod
    def save(cls) -> None:
        with cls._lock:
            cls._save_config()

    @classmethod
    def reload(cls) -> None:
        """Force reload of the configuration from file."""
        with cls._lock:
            cls._config = None
            cls._last_load_time = 0
        cls._load_config()

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Replace the stored configuration with the defaults."""
        with cls._lock:
            cls._config = cls._get_default_config()
            cls._last_load_time = time.time()
            cls._save_config()

    @classmethod
    def _reset_for_testing(cls, config_file=None):
        """Reset singleton state for testing."""
        cls._instance = None
        cls._config = None
        cls._last_load_time = 0
        cls._config_file = Path(config_file) if config_file is not None else None

# Global instance of Config
config = Config()
