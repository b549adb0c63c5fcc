"""Native folder picker capability.

The session only sees the FolderPicker protocol: ``pick()`` returns a path,
None when the user cancelled, or raises FolderPickerError.
"""

import logging
import subprocess
import sys
from typing import Protocol

from gono.core.errors import FolderPickerError

logger = logging.getLogger(__name__)

_POWERSHELL_SCRIPT = (
    "[void][Reflection.Assembly]::LoadWithPartialName('System.Windows.Forms');"
    "$dialog=New-Object System.Windows.Forms.FolderBrowserDialog;"
    "$dialog.Description='Select vault folder';"
    "$dialog.ShowNewFolderButton=$true;"
    "if($dialog.ShowDialog() -eq [System.Windows.Forms.DialogResult]::OK)"
    "{[Console]::Out.Write($dialog.SelectedPath)}"
)


class FolderPicker(Protocol):
    """Asks the host OS for a directory."""

    def pick(self) -> str | None:
        pass


class PowerShellFolderPicker:
    """Folder picker backed by the Windows FolderBrowserDialog."""

    def __init__(self, executable: str = "powershell"):
        self.executable = executable

    def pick(self) -> str | None:
        try:
            result = subprocess.run(
                [
                    self.executable,
                    "-NoProfile",
                    "-NonInteractive",
                    "-Command",
                    _POWERSHELL_SCRIPT,
                ],
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning(f"Folder picker failed: {e}")
            raise FolderPickerError(f"cannot open folder picker: {e}") from e

        path = result.stdout.strip()
        if not path:
            return None
        return path


class UnavailableFolderPicker:
    """Placeholder for platforms without a supported folder dialog."""

    def __init__(self, platform: str = sys.platform):
        self.platform = platform

    def pick(self) -> str | None:
        raise FolderPickerError(
            f"folder picker is not implemented for {self.platform}"
        )


def get_folder_picker(platform: str = sys.platform) -> FolderPicker:
    """Return the folder picker available on this platform."""
    if platform.startswith("win"):
        return PowerShellFolderPicker()
    return UnavailableFolderPicker(platform)
