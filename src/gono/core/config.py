"""Configuration management for gono."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def default_storage_root() -> Path:
    """Return the directory new vaults are created in.

    Falls back to the current directory when no home directory is known.
    """
    try:
        home = Path.home()
    except RuntimeError:
        return Path(".")
    if not str(home).strip():
        return Path(".")
    return home


# Storage root for new vaults (defaults to the user's home directory)
STORAGE_ROOT = Path(get_env("GONO_STORAGE_ROOT") or default_storage_root()).expanduser()

# Vault registry file
REGISTRY_FILENAME = ".gono_vaults.json"
REGISTRY_PATH = Path(
    get_env("GONO_REGISTRY_FILE") or STORAGE_ROOT / REGISTRY_FILENAME
).expanduser()

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "WARNING")
DEBUG = get_env_bool("GONO_DEBUG", False)
LOG_FILE = get_env("GONO_LOG_FILE")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure and return logger.

    Args:
        debug: Force DEBUG level regardless of LOG_LEVEL (GONO_DEBUG does
            the same from the environment)

    Returns:
        The package logger
    """
    level = (
        logging.DEBUG
        if debug or DEBUG
        else getattr(logging, (LOG_LEVEL or "WARNING").upper(), logging.WARNING)
    )
    kwargs: dict = {"format": LOG_FORMAT, "level": level}
    if LOG_FILE:
        kwargs["filename"] = str(Path(LOG_FILE).expanduser())
    logging.basicConfig(**kwargs)
    return logging.getLogger("gono")
