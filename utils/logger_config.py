"""
Unified logging configuration for the region matching toolkit.

All modules log through child loggers of a single project logger, so level and
handlers are configured in one place.
"""

import logging
import sys
from typing import Optional, Dict, Any, Union
from pathlib import Path


class LoggerConfig:
    """Centralized logger configuration manager."""

    _configured = False
    _root_logger_name = 'region_match_toolkit'
    _default_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @classmethod
    def setup_root_logger(
        cls,
        level: Union[int, str] = logging.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[Path] = None,
        force: bool = False
    ) -> logging.Logger:
        """
        Setup the project logger.

        Args:
            level: Logging level, as a number or a name such as 'DEBUG'
            format_string: Custom format string (optional)
            log_file: Optional file path for logging to file
            force: Replace an existing configuration

        Returns:
            logging.Logger: Configured project logger
        """
        root_logger = logging.getLogger(cls._root_logger_name)
        if cls._configured and not force:
            return root_logger

        level = cls._resolve_level(level)
        root_logger.setLevel(level)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(format_string or cls._default_format)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file is not None:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        # Keep messages out of the interpreter-wide root logger
        root_logger.propagate = False

        cls._configured = True

        root_logger.debug(f"Logger configured: level={logging.getLevelName(level)}")
        if log_file:
            root_logger.info(f"Logging to file: {log_file}")

        return root_logger

    @staticmethod
    def _resolve_level(level: Union[int, str]) -> int:
        if isinstance(level, int):
            return level
        resolved = logging.getLevelName(str(level).upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        return resolved

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a child logger of the project logger.

        Args:
            name: Logger name (typically __name__ from calling module)

        Returns:
            logging.Logger: Configured logger
        """
        if not cls._configured:
            cls.setup_root_logger()

        return logging.getLogger(f"{cls._root_logger_name}.{name}")

    @classmethod
    def set_level(cls, level: Union[int, str]) -> None:
        """Change the logging level of the project logger and its handlers."""
        level = cls._resolve_level(level)
        root_logger = logging.getLogger(cls._root_logger_name)
        root_logger.setLevel(level)

        for handler in root_logger.handlers:
            handler.setLevel(level)

        root_logger.info(f"Logging level changed to: {logging.getLevelName(level)}")

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def get_configuration_info(cls) -> Dict[str, Any]:
        """Describe the current logger configuration."""
        if not cls._configured:
            return {'configured': False}

        root_logger = logging.getLogger(cls._root_logger_name)

        return {
            'configured': True,
            'root_logger_name': cls._root_logger_name,
            'level': logging.getLevelName(root_logger.level),
            'handlers': [
                {
                    'type': type(handler).__name__,
                    'level': logging.getLevelName(handler.level)
                }
                for handler in root_logger.handlers
            ]
        }


def get_logger(name: str) -> logging.Logger:
    """Convenience wrapper around LoggerConfig.get_logger."""
    return LoggerConfig.get_logger(name)
