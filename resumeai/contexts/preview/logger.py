"""
Preview context logger.

Provides logging interface for the preview context with automatic [preview] prefix.
All preview modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from resumeai.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[preview]"


def setup_preview_logger(log_dir: Optional[Path] = None, output_format: str = "markdown") -> Path:
    """
    Setup logger for preview context.

    Args:
        log_dir: Directory for this preview session (defaults to a fresh session dir)
        output_format: Format being rendered, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="preview",
        log_dir=log_dir,
        extra_provenance={"Output format": output_format},
    )


def _log_info(message: str) -> None:
    """Log info message with [preview] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [preview] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [preview] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [preview] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [preview] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_fetch_failure(collection: str, user_id: str, error: Exception) -> None:
    """Log a collection fetch that failed and was left at its previous value."""
    _log_warning(f"Could not fetch {collection} for user {user_id}, keeping previous value: {error}")


def log_aggregate_ready(aggregate) -> None:
    """Log the size of each collection in a freshly loaded aggregate."""
    _log_info(
        f"Aggregate ready for user {aggregate.user_id}: "
        f"{len(aggregate.experiences)} experience, {len(aggregate.educations)} education, "
        f"{len(aggregate.skills)} skills, {len(aggregate.projects)} projects"
    )
    if aggregate.profile is None:
        _log_debug("No profile loaded, preview will show the placeholder")


def log_render_result(output_format: str, length: int, score: int = None) -> None:
    """Log a completed render."""
    if score is None:
        _log_success(f"Rendered {output_format} preview ({length} characters)")
    else:
        _log_success(f"Rendered {output_format} preview ({length} characters, score {score}/100)")
