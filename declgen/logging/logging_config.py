"""Centralized logging configuration for declgen.

@public

Logging integrates with Prefect's logging system. Configuration comes from
a YAML file in ``logging.config.dictConfig`` format or from built-in
defaults.

Usage:
    >>> from declgen.logging import get_declgen_logger
    >>> logger = get_declgen_logger(__name__)
    >>> logger.info("Generation started")

Loggers come from prefect.logging.get_logger, so they are named
``prefect.declgen.*``; a custom logging.yml configures them under those names.

Environment variables:
    DECLGEN_LOGGING_CONFIG: Path to custom logging.yml
    DECLGEN_LOG_LEVEL: Default log level (INFO, DEBUG, etc.)
    PREFECT_LOGGING_LEVEL: Prefect's logging level
    PREFECT_LOGGING_SETTINGS_PATH: Alternative config path
"""

import logging.config
import os
from pathlib import Path
from typing import Any

import yaml
from prefect.logging import get_logger

# Default log levels for different components
DEFAULT_LOG_LEVELS = {
    "declgen": "INFO",
    "declgen.generators": "INFO",
    "declgen.merge": "INFO",
    "declgen.products": "INFO",
}

# prefect.logging.get_logger nests every logger below "prefect"
PREFECT_LOGGER_PREFIX = "prefect."


def prefect_logger_name(name: str) -> str:
    """Name of the logger get_logger(name) returns."""
    if name == "prefect" or name.startswith(PREFECT_LOGGER_PREFIX):
        return name
    return f"{PREFECT_LOGGER_PREFIX}{name}"


class LoggingConfig:
    """Manages logging configuration for declgen.

    @public

    Configuration precedence:
        1. Explicit config_path parameter
        2. DECLGEN_LOGGING_CONFIG environment variable
        3. PREFECT_LOGGING_SETTINGS_PATH environment variable
        4. Default configuration

    Example:
        >>> config = LoggingConfig()
        >>> config.apply()
        >>>
        >>> config = LoggingConfig(Path("custom_logging.yml"))
        >>> config.apply()

    Note:
        Configuration is lazy-loaded and cached after first access.
    """

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: dict[str, Any] | None = None

    @staticmethod
    def _get_default_config_path() -> Path | None:
        """Get default config path from environment variables."""
        if env_path := os.environ.get("DECLGEN_LOGGING_CONFIG"):
            return Path(env_path)

        if prefect_path := os.environ.get("PREFECT_LOGGING_SETTINGS_PATH"):
            return Path(prefect_path)

        return None

    def load_config(self) -> dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary in Python logging.config.dictConfig format.

        Note:
            Configuration is cached after first load. Create a new
            LoggingConfig instance to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> dict[str, Any]:
        """Get default logging configuration.

        Default format:
            "HH:MM:SS.mmm | LEVEL | logger.name - message"

        Environment variables:
            DECLGEN_LOG_LEVEL: Override default log level
        """
        level = os.environ.get("DECLGEN_LOG_LEVEL", DEFAULT_LOG_LEVELS["declgen"])
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
                "detailed": {
                    "format": (
                        "%(asctime)s | %(levelname)-7s | %(name)s | "
                        "%(funcName)s:%(lineno)d - %(message)s"
                    ),
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                prefect_logger_name("declgen"): {
                    "level": level,
                    "handlers": ["console"],
                    "propagate": False,
                },
                **{
                    prefect_logger_name(name): {"level": os.environ.get("DECLGEN_LOG_LEVEL", default)}
                    for name, default in DEFAULT_LOG_LEVELS.items()
                    if name != "declgen"
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the logging configuration to Python's logging system.

        Side effects:
            - Configures Python's logging system
            - May set PREFECT_LOGGING_LEVEL environment variable
        """
        config = self.load_config()
        logging.config.dictConfig(config)

        if "prefect" in config.get("loggers", {}):
            prefect_level = config["loggers"]["prefect"].get("level", "INFO")
            os.environ.setdefault("PREFECT_LOGGING_LEVEL", prefect_level)


# Global configuration instance
_logging_config: LoggingConfig | None = None


def setup_logging(config_path: Path | None = None, level: str | None = None):
    """Setup logging for declgen.

    @public

    Args:
        config_path: Optional path to YAML logging configuration file.
                    If None, uses environment variables or defaults.
        level: Optional log level override (INFO, DEBUG, WARNING, etc.).

    Example:
        >>> setup_logging()
        >>> setup_logging(level="DEBUG")
        >>> setup_logging(Path("custom.yml"), level="WARNING")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            logger = get_logger(logger_name)
            logger.setLevel(level)

        os.environ["PREFECT_LOGGING_LEVEL"] = level


def get_declgen_logger(name: str):
    """Get a logger for declgen components.

    @public

    Returns a Prefect logger, initializing logging on first use.

    Args:
        name: Logger name, typically __name__.

    Example:
        >>> logger = get_declgen_logger(__name__)
        >>> logger.warning("Unknown kind: %s", "mixin")
    """
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
