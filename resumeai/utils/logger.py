"""
Session logger setup.

Each CLI run gets its own log directory (outs/logs/{context}_{timestamp}/) holding
one loguru file sink at DEBUG, plus a colorized console sink. The first lines of
every log file record where the session came from.

Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from resumeai import __version__
from resumeai.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"


def session_dir(context_name: str) -> Path:
    """Fresh directory name for a logging session, e.g. outs/logs/preview_20251114_123456."""
    return LOGS_PATH / f"{context_name}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[Dict[str, object]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Args:
        context_name: Context identifier ("records", "editor", "preview"), used for
                      the log file name and the default session directory
        log_dir: Session directory (defaults to session_dir(context_name))
        extra_provenance: Key-value pairs appended to the provenance header
        console_level: Minimum level echoed to stdout; the file always gets DEBUG

    Returns:
        Path to log file

    Example:
        log_file = setup_logger("preview", extra_provenance={"User": "3f2c..."})
    """
    log_dir = Path(log_dir) if log_dir is not None else session_dir(context_name)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, object]] = None) -> None:
    """Write the session header: command line, working directory, versions, extras."""
    header = {
        "Context": context_name,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        "resumeai": __version__,
        **(extra_context or {}),
    }

    logger.debug("=" * 80)
    for key, value in header.items():
        logger.debug(f"{key}: {value}")
    logger.debug("=" * 80)
