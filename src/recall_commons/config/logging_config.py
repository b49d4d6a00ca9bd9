"""Centralized logging configuration for recall-commons.

Provides consistent, configurable logging with environment-based control
over verbosity, format and the noise level of cache and SQL drivers.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (warnings and above)
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


def get_format_string(log_format: str) -> str:
    """Map a format name to a logging format string."""
    if log_format == LogFormat.JSON.value:
        return '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}'
    if log_format == LogFormat.DETAILED.value:
        return "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    return "%(asctime)s - %(levelname)s - %(message)s"


class LoggingConfig:
    """Centralized logging configuration manager."""
    
    # Modules that only report warnings unless running at DEBUG
    DEFAULT_QUIET_MODULES = [
        "recall_commons.features.cache.adapters",
        "recall_commons.features.cache.services",
    ]
    
    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "asyncio",
    ]
    
    @classmethod
    def build_config(cls) -> Dict[str, Any]:
        """Build a dictConfig mapping from environment variables."""
        log_verbosity = os.getenv("LOG_VERBOSITY", "NORMAL").upper()
        log_format = os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower()
        enable_cache_logging = os.getenv("ENABLE_CACHE_LOGGING", "false").lower() == "true"
        enable_sql_logging = os.getenv("ENABLE_SQL_LOGGING", "false").lower() == "true"
        
        # LOG_LEVEL wins over verbosity when set explicitly
        explicit_level = os.getenv("LOG_LEVEL")
        if explicit_level and explicit_level.upper() in LogLevel.__members__:
            effective_log_level = explicit_level.upper()
        else:
            effective_log_level = get_log_level_from_verbosity(log_verbosity)
        
        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": get_format_string(log_format),
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": effective_log_level,
                "handlers": ["console"],
            },
            "loggers": {},
        }
        
        quiet_level = "WARNING" if effective_log_level != "DEBUG" else "DEBUG"
        
        if not enable_cache_logging:
            for module in cls.DEFAULT_QUIET_MODULES + ["redis"]:
                logging_config["loggers"][module] = {"level": quiet_level}
        
        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {"level": "ERROR"}
        
        if not enable_sql_logging:
            for module in ["asyncpg", "recall_commons.features.database"]:
                logging_config["loggers"][module] = {"level": quiet_level}
        
        return logging_config
    
    @classmethod
    def configure(cls) -> None:
        """Configure logging based on environment variables."""
        logging_config = cls.build_config()
        logging.config.dictConfig(logging_config)
        
        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={logging_config['root']['level']}")
    
    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a configured logger for the given module name.
        
        Args:
            name: Module name (usually __name__)
            
        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)
    
    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module.
        
        Args:
            module_name: Name of the module
            level: Log level to set
        """
        logger = logging.getLogger(module_name)
        logger.setLevel(getattr(logging, level.upper()))


def setup_logging() -> None:
    """Setup logging configuration from environment variables.
    
    This is the main entry point for configuring logging. It runs once when
    the package is imported.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger.
    
    Args:
        name: Module name (usually __name__)
        
    Returns:
        Configured logger instance
    """
    return LoggingConfig.get_logger(name)
