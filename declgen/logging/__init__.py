"""Logging infrastructure for declgen.

@public

Prefect-integrated logging configured from YAML or built-in defaults.

Key components:
    get_declgen_logger: Factory function for module loggers
    setup_logging: Initialize logging configuration
    LoggingConfig: Configuration class for logging settings

Example:
    >>> from declgen.logging import get_declgen_logger
    >>>
    >>> logger = get_declgen_logger(__name__)
    >>> logger.info("Generation started")

Note:
    Never import Python's logging module directly. Always use
    get_declgen_logger() for consistent Prefect integration.
"""

from .logging_config import LoggingConfig, get_declgen_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_declgen_logger",
]
