"""Correlation ID management for extraction runs.

Every orchestrator run gets an id so that all log lines of one document,
including those emitted from batch worker threads, can be grouped.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

# Context variable for correlation_id (thread and async safe)
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new unique correlation ID (UUID v4)."""
    return str(uuid.uuid4())


def get_correlation_id() -> str:
    """Get current correlation ID from context.

    Returns:
        str: Current correlation ID or "no-correlation-id" if not set
    """
    return correlation_id_var.get() or "no-correlation-id"


def set_correlation_id(correlation_id: Optional[str]):
    """Set correlation ID in current context.

    Returns:
        Token that can be passed to ``reset_correlation_id``
    """
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token) -> None:
    """Restore the correlation ID that was active before ``set_correlation_id``."""
    correlation_id_var.reset(token)
