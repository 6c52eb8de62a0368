import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
from .config import Config
from .exceptions import LoggerError

PACKAGE_LOGGER = "myqnapcloud"

class Logger:
    """
    Configures the package-wide ``myqnapcloud`` logger from a Config.

    Every module logs through ``logging.getLogger(__name__)``, so records
    from the dispatcher and the transport propagate to the handlers set up
    here.
    """

    def __init__(self, config: Config):
        """Initialize logger with configuration"""
        self.config = config
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()

        self.logger.setLevel(self._get_log_level())

        self.formatter = logging.Formatter(
            self.config.get(
                "logging.format",
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
        )

        log_file = self.config.get("logging.file")
        if log_file:
            try:
                path = Path(log_file)
                if not path.parent.exists() and str(path.parent) != ".":
                    try:
                        path.parent.mkdir(parents=True, exist_ok=True)
                    except (OSError, PermissionError):
                        raise LoggerError(f"Cannot create log directory: {path.parent}")

                max_size = self.config.get("logging.max_size", 1024 * 1024)  # 1MB default
                backup_count = self.config.get("logging.backup_count", 3)

                handler = RotatingFileHandler(
                    str(path),
                    maxBytes=max_size,
                    backupCount=backup_count
                )
                handler.setFormatter(self.formatter)
                self.logger.addHandler(handler)
            except LoggerError:
                raise
            except Exception as e:
                raise LoggerError(f"Failed to setup log file: {str(e)}")

        if self.config.get("logging.console_output", False):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(self.formatter)
            self.logger.addHandler(console_handler)

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level

    def _prepare_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        extra_context: Dict[str, Any] = {}
        if extra:
            extra_context.update(extra)
        return extra_context

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, extra=self._prepare_extra(kwargs.get('extra')))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, extra=self._prepare_extra(kwargs.get('extra')))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, extra=self._prepare_extra(kwargs.get('extra')))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, extra=self._prepare_extra(kwargs.get('extra')))

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message"""
        self.logger.critical(message, extra=self._prepare_extra(kwargs.get('extra')))
