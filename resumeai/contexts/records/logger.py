"""
Records context logger.

Provides logging interface for the records context with automatic [records] prefix.
All records modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[records]"


def _log_info(message: str) -> None:
    """Log info message with [records] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [records] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [records] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [records] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [records] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_store_failure(collection: str, operation: str, error: Exception) -> None:
    """Log a failed store operation."""
    _log_error(f"{operation} on {collection} failed: {error}")


def log_mutation(collection: str, operation: str, record_id: str, user_id: str) -> None:
    """Log a successful store mutation."""
    _log_debug(f"{operation} {collection}/{record_id} (user {user_id})")


def log_audit_failure(event_type: str, collection: str, record_id: str, error: Exception) -> None:
    """Log an event-log write that failed after the mutation was committed."""
    _log_warning(f"{event_type} {collection}/{record_id} committed but not written to the event log: {error}")
