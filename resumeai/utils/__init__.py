"""
Shared utilities for RESUMEAI.

Common functionality used across contexts:
- Logging setup
- Record event log
- Timestamps
- Configuration loading
"""

from resumeai.utils.config import load_config
from resumeai.utils.timestamp import now, now_exact, today

__all__ = ["load_config", "now", "now_exact", "today"]
