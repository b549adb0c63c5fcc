"""Error taxonomy for gono.

Every failure the session can recover from derives from GonoError so the
state machine can catch them at a single boundary and surface the message.
"""


class GonoError(Exception):
    """Base error for recoverable gono failures."""


class ValidationError(GonoError):
    """Raised for bad user input (blank names, disallowed characters)."""


class ContainmentError(GonoError):
    """Raised when a candidate path resolves outside the active vault."""


class VaultIOError(GonoError):
    """Raised when a filesystem call inside a vault fails."""


class RegistryError(GonoError):
    """Raised when the vault registry cannot be read, parsed or written."""


class FolderPickerError(GonoError):
    """Raised when the native folder picker cannot be used."""
