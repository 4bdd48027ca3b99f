import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict
from .config import Config
from .exceptions import LoggerError

LOGGER_NAME = "mailerlite"

_CONTEXT_FIELDS = ('method', 'url')

class _ContextFilter(logging.Filter):
    """Fill request context fields for records logged without them"""
    def filter(self, record: logging.LogRecord) -> bool:
        for field in _CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, '-')
        return True

class Logger:
    _loggers: Dict[str, logging.Logger] = {}

    def __init__(self, config: Config):
        """Initialize logger with configuration"""
        self.config = config

        if LOGGER_NAME in self._loggers:
            self.logger = self._loggers[LOGGER_NAME]
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)
                handler.close()
        else:
            self.logger = logging.getLogger(LOGGER_NAME)
            self._loggers[LOGGER_NAME] = self.logger

        level = self._get_log_level()
        self.logger.setLevel(level)

        self.formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s - method:%(method)s - url:%(url)s'
        )
        self._context_filter = _ContextFilter()

        log_file = self.config.get("logging.file")
        if log_file:
            try:
                path = Path(log_file)
                if not path.parent.exists() and str(path.parent) != ".":
                    try:
                        path.parent.mkdir(parents=True, exist_ok=True)
                    except (OSError, PermissionError):
                        raise LoggerError(f"Cannot create log directory: {path.parent}")

                max_size = self.config.get("logging.max_size", 1024 * 1024)
                backup_count = self.config.get("logging.backup_count", 3)

                handler = RotatingFileHandler(
                    str(path),
                    maxBytes=max_size,
                    backupCount=backup_count
                )
                self._attach(handler)
            except LoggerError:
                raise
            except Exception as e:
                raise LoggerError(f"Failed to setup log file: {str(e)}")

        if self.config.get("logging.console_output", False):
            self._attach(logging.StreamHandler())

    def _attach(self, handler: logging.Handler) -> None:
        handler.setFormatter(self.formatter)
        handler.addFilter(self._context_filter)
        self.logger.addHandler(handler)

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level
