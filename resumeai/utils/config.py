"""
Configuration loading.

Packaged defaults live in resumeai/config/defaults.yaml. A user override file can
be pointed to with RESUMEAI_CONFIG_PATH; its keys are merged over the defaults.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"


def load_config(override_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the application configuration.

    Args:
        override_path: Optional YAML file merged over the packaged defaults.
                       Falls back to RESUMEAI_CONFIG_PATH when not given.

    Returns:
        Plain dict with resolved configuration values

    Raises:
        FileNotFoundError: If an override path is given but doesn't exist
    """
    config = OmegaConf.load(DEFAULT_CONFIG_PATH)

    if override_path is None and os.getenv("RESUMEAI_CONFIG_PATH"):
        override_path = Path(os.getenv("RESUMEAI_CONFIG_PATH"))

    if override_path is not None:
        override_path = Path(override_path)
        if not override_path.exists():
            raise FileNotFoundError(f"Config override not found: {override_path}")
        config = OmegaConf.merge(config, OmegaConf.load(override_path))

    return OmegaConf.to_container(config, resolve=True)
