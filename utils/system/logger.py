import json
import logging
import logging.config
import logging.handlers
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config import APP_NAME, DEBUG_LEVEL
from utils.exceptions import ConfigurationException

LOGGING_CONFIG_FILE = Path(__file__).resolve().parent / "logging_config.yaml"


class LogLevel:
    """Enum-like class for log levels with clear hierarchy."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class StructuredLogger:
    """Logger that serialises each message together with its bound context."""

    def __init__(self, name: str, log_file: Optional[Path] = None):
        self.name = name
        self._context: Dict[str, Any] = {}
        self._log_file = log_file
        self._logger = logging.getLogger(name)
        if self._logger.level == logging.NOTSET:
            self._logger.setLevel(DEBUG_LEVEL)

    def with_context(self, **kwargs) -> "StructuredLogger":
        """Create a new logger instance with added context."""
        new_logger = StructuredLogger(self.name, self._log_file)
        new_logger._context = {**self._context, **kwargs}
        return new_logger

    def _format_message(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> str:
        if extra is not None and not isinstance(extra, dict):
            extra = {"data": extra}

        log_data = {
            "message": message,
            "timestamp": datetime.now().isoformat(),
            **self._context,
            **(extra or {}),
        }
        return json.dumps(log_data, default=str, ensure_ascii=False)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.info(self._format_message(message, extra))

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.debug(self._format_message(message, extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.warning(self._format_message(message, extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.error(self._format_message(message, extra))

    def critical(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._logger.critical(self._format_message(message, extra))

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log an exception with traceback."""
        self._logger.error(self._format_message(message, extra), exc_info=True)

    def _log(self, level: int, message: str, **kwargs) -> None:
        self._logger.log(level, self._format_message(message, kwargs))


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
        }

        # StructuredLogger messages are already JSON
        try:
            message_data = json.loads(record.getMessage())
            if isinstance(message_data, dict):
                data.update(message_data)
            else:
                data["message"] = record.getMessage()
        except (json.JSONDecodeError, TypeError):
            data["message"] = record.getMessage()

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            data["exc_info"] = record.exc_text

        return json.dumps(data, ensure_ascii=False)


class LoggerConfig:
    """Configuration class for file logger settings."""

    def __init__(
        self, log_file: Path, level: int, max_size: int, backup_count: int, format: str
    ):
        self.log_file = log_file
        self.level = level
        self.max_size = max_size
        self.backup_count = backup_count
        self.format = format


def setup_logger(config: LoggerConfig) -> StructuredLogger:
    """Attach a rotating file handler to the application logger."""
    if config.format not in ("json", "text"):
        raise ConfigurationException(f"Invalid log format: {config.format}")

    structured = StructuredLogger(APP_NAME, config.log_file)

    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except (OSError, IOError) as e:
        raise ConfigurationException(f"Failed to configure logger: {e}")

    handler.setFormatter(
        JsonFormatter()
        if config.format == "json"
        else logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    structured._logger.addHandler(handler)
    structured._logger.setLevel(config.level)
    return structured


def setup_structured_logger(config_path: Path = LOGGING_CONFIG_FILE) -> StructuredLogger:
    """Configure logging from YAML when available, otherwise log warnings to stderr."""
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            logging.config.dictConfig(yaml.safe_load(f))
    else:
        logging.basicConfig(
            level=logging.WARNING,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    structured = StructuredLogger(APP_NAME)
    structured._logger.setLevel(DEBUG_LEVEL)
    return structured


def log_method(level: int = LogLevel.DEBUG):
    """Decorator for logging method calls with their arguments and results."""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            func_logger = logger.with_context(
                function=func.__name__, module=func.__module__
            )
            func_logger._log(
                level,
                f"Entering {func.__name__}",
                args=str(args[1:]),
                kwargs=str(kwargs),
            )

            try:
                result = func(*args, **kwargs)
                func_logger._log(level, f"Completed {func.__name__}")
                return result
            except Exception as e:
                func_logger.error(
                    f"Exception in {func.__name__}",
                    extra={
                        "exception_type": type(e).__name__,
                        "exception_message": str(e),
                    },
                )
                raise

        return wrapper

    return decorator


# Initialize global logger instance
logger = setup_structured_logger()
