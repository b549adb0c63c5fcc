"""Path containment guard.

Pure helpers that decide whether a path lies inside a vault root. The
check decomposes the relative path from root to candidate instead of
comparing string prefixes, so ``/v/Notes`` never contains
``/v/NotesArchive``.
"""

import os
from pathlib import Path

from gono.core.errors import ContainmentError

PARENT_TOKEN = os.pardir


def canonical(path: Path | str) -> Path:
    """Resolve a path to its canonical absolute form."""
    return Path(path).expanduser().resolve(strict=False)


def is_inside(root: Path | str, candidate: Path | str) -> bool:
    """
    Check whether candidate lies inside root (or equals it).

    Args:
        root: Vault root directory
        candidate: Path to check

    Returns:
        True if candidate is root or a descendant of root. Never raises;
        any resolution failure is reported as False.
    """
    try:
        abs_root = canonical(root)
        abs_candidate = canonical(candidate)
        rel = os.path.relpath(abs_candidate, abs_root)
    except (OSError, ValueError, RuntimeError):
        return False

    if rel == os.curdir:
        return True
    if rel == PARENT_TOKEN:
        return False
    return not rel.startswith(PARENT_TOKEN + os.sep)


def entry_inside(root: Path | str, path: Path | str) -> bool:
    """
    Check whether the directory entry at path lies strictly inside root.

    Only the parent directory is resolved. The final component is taken as
    is, so a symlink stored in the vault counts as inside even when its
    target does not.
    """
    name = Path(path).name
    if name in ("", os.curdir, PARENT_TOKEN):
        return False
    return is_inside(root, Path(path).parent)


def same_path(a: Path | str, b: Path | str) -> bool:
    """Check whether two paths canonicalize to the same location."""
    try:
        return canonical(a) == canonical(b)
    except (OSError, ValueError, RuntimeError):
        return False


def safe_join(root: Path | str, current: Path | str, name: str) -> Path:
    """
    Join name under the current directory, refusing to leave the vault.

    Args:
        root: Vault root directory
        current: Directory the name is relative to
        name: User supplied file or directory name

    Returns:
        Absolute path of the joined target

    Raises:
        ContainmentError: If the target resolves outside root
    """
    target = Path(current) / name
    if not is_inside(root, target):
        raise ContainmentError("path escapes vault")
    return Path(os.path.abspath(target))


def rel_or_dot(base: Path | str, path: Path | str) -> str:
    """Relative path from base, or "." for the base itself."""
    try:
        rel = os.path.relpath(path, base)
    except ValueError:
        return os.curdir
    return rel


def rel_or_base(base: Path | str, path: Path | str) -> str:
    """Relative path from base, falling back to the basename."""
    try:
        return os.path.relpath(path, base)
    except ValueError:
        return Path(path).name
