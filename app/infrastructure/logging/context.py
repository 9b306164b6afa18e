"""Resolution context binding for structured logging.

This module provides utilities for binding resolution-scoped context
to logs, so every entry emitted while a message bundle is being resolved
carries the bundle root, module and locale it belongs to.

Usage:
    from infrastructure.logging import bind_resolution_context

    with bind_resolution_context(bundle_root="/ext/out", module="main"):
        logger.info("resolving_bundle")

Dependencies:
    - structlog.contextvars
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_resolution_context(
    bundle_root: Optional[str] = None,
    module: Optional[str] = None,
    locale: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind resolution-scoped context to all logs within the context manager.

    Args:
        bundle_root: Directory holding the bundle metadata (if known).
        module: Module key being resolved (if known).
        locale: Active locale of the resolver.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is automatically bound to structlog's context vars.
    """
    context: dict[str, Any] = {}

    if bundle_root is not None:
        context["bundle_root"] = bundle_root

    if module is not None:
        context["module"] = module

    if locale is not None:
        context["locale"] = locale

    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        # Restores values bound by an enclosing block
        structlog.contextvars.reset_contextvars(**tokens)


def clear_resolution_context() -> None:
    """Clear all resolution-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
