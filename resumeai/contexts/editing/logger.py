"""
Editing context logger.

Provides logging interface for the editing context with automatic [editor] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from resumeai.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[editor]"


def setup_editing_logger(log_dir: Optional[Path] = None, user_id: str = None) -> Path:
    """
    Setup logger for editing context.

    Console output is limited to warnings so CLI output stays readable; the session
    file gets everything.

    Args:
        log_dir: Directory for this editing session (defaults to a fresh session dir)
        user_id: Acting user, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="editor",
        log_dir=log_dir,
        extra_provenance={"User": user_id} if user_id else None,
        console_level="WARNING",
    )


def _log_info(message: str) -> None:
    """Log info message with [editor] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [editor] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [editor] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [editor] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [editor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_load_failure(collection: str, error: Exception) -> None:
    """Log a collection reload that failed; the editor keeps its last records."""
    _log_warning(f"Could not load {collection}, keeping previous records: {error}")


def log_save_result(collection: str, is_new: bool, record_id: str = None, error: Exception = None) -> None:
    """Log the outcome of an insert or update."""
    action = "insert" if is_new else "update"
    if error is None:
        _log_success(f"{collection}: {action} succeeded ({record_id})")
    else:
        _log_error(f"{collection}: {action} failed: {error}")


def log_delete_result(collection: str, record_id: str, error: Exception = None) -> None:
    """Log the outcome of a delete."""
    if error is None:
        _log_success(f"{collection}: deleted {record_id}")
    else:
        _log_error(f"{collection}: delete of {record_id} failed: {error}")
