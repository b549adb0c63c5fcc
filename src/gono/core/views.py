"""Immutable render payloads for each session view.

Renderers consume ViewPayload only and never touch the session.
"""

from dataclasses import dataclass

from gono.core.paths import rel_or_base, rel_or_dot
from gono.core.session import Session
from gono.core.types import (
    ConfirmDelete,
    DirectoryCreate,
    Editor,
    Entry,
    FileCreate,
    FileList,
    ParentEntry,
    StatusLevel,
    VaultCreate,
    VaultListRow,
    VaultOpenByPath,
    VaultSelect,
)

MIN_WIDTH = 24

VAULT_SELECT_HINTS = (
    "<#>: open | n: create vault | o: open by path | "
    "p: open in explorer | x <#>: delete vault | q: quit"
)
FILE_LIST_HINTS = (
    "<#>: open | u: up | n: new file | d: new dir | x <#>: delete | q: quit"
)
EDITOR_HINTS = "e: edit in $EDITOR | t: type lines | s: save | b: back"
PROMPT_HINTS = "Enter: submit | Ctrl+C: cancel"
DELETE_HINTS = "y: delete permanently | n: cancel"

# (title, subtitle) for each prompt view
PROMPTS = {
    VaultCreate: ("Create Vault", "Enter name and press Enter"),
    VaultOpenByPath: ("Open Vault By Path", "Enter full or relative folder path"),
    FileCreate: (
        "Create File",
        "Use only letters and digits, .md is added automatically",
    ),
    DirectoryCreate: ("Create Directory", "Enter a directory name"),
}

PLACEHOLDERS = {
    VaultCreate: "New vault name",
    VaultOpenByPath: "Vault path (absolute or relative)",
    FileCreate: "File name: letters and digits only",
    DirectoryCreate: "New directory name (in current directory)",
}


@dataclass(frozen=True)
class ViewPayload:
    """Everything a renderer needs to draw one screen."""

    title: str
    subtitle: str
    hints: str
    status: str = ""
    status_level: StatusLevel = StatusLevel.INFO
    rows: tuple[VaultListRow | ParentEntry | Entry, ...] = ()
    placeholder: str = ""
    text: str = ""


def shrink_text(text: str, max_len: int) -> str:
    """Truncate text to max_len characters, marking the cut with '...'."""
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def status_level(status: str) -> StatusLevel:
    """Classify a status message for styling."""
    s = status.strip()
    lower = s.lower()
    if s.startswith("Error:"):
        return StatusLevel.ERROR
    if "deleted" in lower:
        return StatusLevel.WARNING
    if any(word in lower for word in ("created", "saved", "selected")):
        return StatusLevel.SUCCESS
    return StatusLevel.INFO


def build_view(session: Session, width: int = 80) -> ViewPayload:
    """Build the payload for the session's current view."""
    status = session.status
    common = {"status": status, "status_level": status_level(status)}
    room = max(MIN_WIDTH, width - 10)
    view = session.view

    match view:
        case VaultSelect(rows=rows):
            return ViewPayload(
                title="Vaults",
                subtitle="Storage: " + shrink_text(str(session.storage_root), room),
                hints=VAULT_SELECT_HINTS,
                rows=rows,
                **common,
            )
        case FileList(entries=entries):
            path = rel_or_dot(session.vault_root, session.current_directory)
            return ViewPayload(
                title="Vault: " + session.vault_root.name,
                subtitle="Path: " + shrink_text(path, room),
                hints=FILE_LIST_HINTS,
                rows=entries,
                **common,
            )
        case Editor(path=path, buffer=buffer):
            return ViewPayload(
                title="Editing: " + rel_or_base(session.vault_root, path),
                subtitle="Markdown editor",
                hints=EDITOR_HINTS,
                text=buffer,
                **common,
            )
        case ConfirmDelete(target=target):
            return ViewPayload(
                title=f"Delete {target.kind}?",
                subtitle="",
                hints=DELETE_HINTS,
                text=target.label,
                **common,
            )
        case _:
            title, subtitle = PROMPTS[type(view)]
            return ViewPayload(
                title=title,
                subtitle=subtitle,
                hints=PROMPT_HINTS,
                placeholder=PLACEHOLDERS[type(view)],
                **common,
            )
