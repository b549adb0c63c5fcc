"""gono core - path guard, vault registry, filesystem gateway and session."""

from gono.core.errors import (
    ContainmentError,
    FolderPickerError,
    GonoError,
    RegistryError,
    ValidationError,
    VaultIOError,
)
from gono.core.gateway import FilesystemGateway
from gono.core.paths import is_inside, same_path
from gono.core.registry import VaultRegistry
from gono.core.session import Session

__all__ = [
    # Core classes
    "FilesystemGateway",
    "Session",
    "VaultRegistry",
    # Path guard
    "is_inside",
    "same_path",
    # Errors
    "ContainmentError",
    "FolderPickerError",
    "GonoError",
    "RegistryError",
    "ValidationError",
    "VaultIOError",
]
