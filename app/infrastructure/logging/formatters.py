"""Custom log formatters for structured logging.

This module provides formatters that can be used as structlog processors
to customize log output format.

Usage:
    from infrastructure.logging.formatters import add_environment_info

Dependencies:
    - structlog processors
"""

from typing import Any


def add_environment_info(environment: str):
    """Create a processor that adds environment info to log entries.

    Args:
        environment: Environment name (e.g., "production", "development").

    Returns:
        A structlog processor function.

    Example:
        configure_logging(
            extra_processors=[add_environment_info(settings.ENVIRONMENT)]
        )
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["environment"] = environment
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates long string values.

    Resolved bundles can carry thousands of messages; this keeps a stray
    bundle dump from flooding the log.

    Args:
        max_length: Maximum length for string values.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = value[:max_length] + "...[truncated]"
        return event_dict

    return processor
