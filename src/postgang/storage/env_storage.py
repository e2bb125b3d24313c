"""Environment file storage for API credentials."""

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from postgang.config.constants import APP_CONFIG_DIR_NAME, ENV_API_KEY, ENV_API_UID

logger = logging.getLogger(__name__)


def get_user_config_dir() -> Path:
    """Return a per-user config directory that works across platforms.

    Returns:
        Path to the user's config directory for this application.
    """
    if sys.platform.startswith("win"):
        base_str = os.environ.get("APPDATA") or os.environ.get("LOCALAPPDATA")
        base = Path(base_str) if base_str else (Path.home() / "AppData" / "Roaming")
        return base / APP_CONFIG_DIR_NAME

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_CONFIG_DIR_NAME

    # Linux and other Unix-like systems
    base_str = os.environ.get("XDG_CONFIG_HOME")
    base = Path(base_str) if base_str else (Path.home() / ".config")
    return base / APP_CONFIG_DIR_NAME


def get_env_file_path() -> Path:
    """Get the managed .env path under the user config directory."""
    return get_user_config_dir() / ".env"


def _clean(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = str(value).strip().strip("'\"").strip()
    return value or None


def load_from_env_file(path: Path) -> Dict[str, Optional[str]]:
    """Load API credentials from an environment file.

    Args:
        path: Path to the .env file.

    Returns:
        Mapping with ``uid`` and ``key`` entries; missing values are None.
    """
    if not path.exists():
        return {"uid": None, "key": None}

    # Parse without mutating os.environ (avoids leaking secrets to child processes).
    values = dotenv_values(path)
    logger.debug("Read credentials file %s", path)
    return {
        "uid": _clean(values.get(ENV_API_UID)),
        "key": _clean(values.get(ENV_API_KEY)),
    }
