"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the localization library using structlog.

Public API:
    - configure_logging(): Initialize logging
    - get_module_logger(): Get a logger for the calling module
    - bind_resolution_context(): Context manager for resolution-scoped logging
    - clear_resolution_context(): Clear all resolution context

Formatters:
    - add_environment_info(): Processor to add environment name
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_resolution_context,
    clear_resolution_context,
)

from infrastructure.logging.formatters import (
    add_environment_info,
    truncate_large_values,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_module_logger",
    # Context
    "bind_resolution_context",
    "clear_resolution_context",
    # Formatters
    "add_environment_info",
    "truncate_large_values",
]
