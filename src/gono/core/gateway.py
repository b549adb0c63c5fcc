"""Filesystem gateway for vault contents.

A raw, trusted-input layer: callers run every path through the path guard
before handing it here. All OSErrors are wrapped into VaultIOError.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from gono.core.errors import VaultIOError
from gono.core.types import Entry

logger = logging.getLogger(__name__)


def _io_error(e: OSError) -> VaultIOError:
    message = e.strerror or str(e)
    if e.filename:
        message = f"{message}: {e.filename}"
    return VaultIOError(message)


class FilesystemGateway:
    """Synchronous file operations used by the session state machine."""

    def list_directory(self, path: Path) -> list[Entry]:
        """
        List the children of a directory.

        Args:
            path: Directory to list

        Returns:
            Directories first, then files, each group sorted by name
            case-insensitively.
        """
        entries = []
        try:
            children = list(Path(path).iterdir())
        except OSError as e:
            raise _io_error(e) from e

        for child in children:
            try:
                is_dir = child.is_dir()
            except OSError as e:
                raise _io_error(e) from e
            modified = None
            if not is_dir:
                try:
                    modified = datetime.fromtimestamp(child.stat().st_mtime)
                except OSError:
                    # Broken symlinks and races with external deletes
                    modified = None
            entries.append(
                Entry(name=child.name, path=child, is_dir=is_dir, modified=modified)
            )

        entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))
        return entries

    def read_file(self, path: Path) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise _io_error(e) from e

    def write_file(self, path: Path, data: bytes) -> None:
        """Overwrite a file with data. No partial-write recovery."""
        try:
            Path(path).write_bytes(data)
        except OSError as e:
            raise _io_error(e) from e
        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def read_text(self, path: Path) -> str:
        return self.read_file(path).decode("utf-8", errors="replace")

    def write_text(self, path: Path, text: str) -> None:
        self.write_file(path, text.encode("utf-8"))

    def create_file_exclusive(self, path: Path) -> None:
        """Create an empty file, failing if anything already exists there."""
        try:
            with open(path, "x", encoding="utf-8"):
                pass
        except OSError as e:
            raise _io_error(e) from e
        logger.debug(f"Created file {path}")

    def create_directory(self, path: Path) -> None:
        """Create a single directory, failing if it already exists."""
        try:
            Path(path).mkdir()
        except OSError as e:
            raise _io_error(e) from e
        logger.debug(f"Created directory {path}")

    def create_directory_recursive(self, path: Path) -> None:
        """Create a directory and its parents; existing directories are fine."""
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise _io_error(e) from e
        logger.debug(f"Created directory tree {path}")

    def delete_entry(self, path: Path, is_dir: bool) -> None:
        """Permanently delete a file, or a directory with all descendants.

        A symlink is removed itself; its target is never touched.
        """
        try:
            if Path(path).is_symlink():
                Path(path).unlink()
            elif is_dir:
                shutil.rmtree(path)
            else:
                Path(path).unlink()
        except OSError as e:
            raise _io_error(e) from e
        logger.info(f"Deleted {'directory' if is_dir else 'file'} {path}")
