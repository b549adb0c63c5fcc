"""Shared types and data structures for gono."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel

__all__ = [
    "CreateNewAction",
    "DeleteTarget",
    "DirectoryCreate",
    "Editor",
    "Entry",
    "ExistingVault",
    "FileCreate",
    "FileList",
    "ListState",
    "ConfirmDelete",
    "OpenByPathAction",
    "OpenViaPickerAction",
    "ParentEntry",
    "PromptState",
    "StatusLevel",
    "VaultCreate",
    "VaultListRow",
    "VaultOpenByPath",
    "VaultSelect",
    "ViewState",
]


class Entry(BaseModel, frozen=True):
    """One child of the current directory."""

    name: str
    path: Path
    is_dir: bool
    modified: datetime | None = None

    @property
    def title(self) -> str:
        if self.is_dir:
            return self.name + os.sep
        return self.name

    @property
    def description(self) -> str:
        if self.is_dir:
            return "Directory"
        if self.modified is not None:
            return "Modified: " + self.modified.strftime("%d %b %H:%M")
        return ""


@dataclass(frozen=True)
class ParentEntry:
    """Synthetic ".." row pointing at the parent of the current directory."""

    path: Path
    title: str = ".."
    description: str = "Go to parent directory"


@dataclass(frozen=True)
class DeleteTarget:
    """What a pending delete confirmation will remove."""

    path: Path
    label: str
    is_dir: bool
    is_vault_root: bool = False

    @property
    def kind(self) -> str:
        if self.is_vault_root:
            return "vault"
        if self.is_dir:
            return "directory"
        return "file"


# --- Vault select rows ---


@dataclass(frozen=True)
class ExistingVault:
    """A registered vault that still exists on disk."""

    path: Path

    @property
    def title(self) -> str:
        return self.path.name or str(self.path)

    description = "Created vault"


@dataclass(frozen=True)
class CreateNewAction:
    title = "+ Create new vault"
    description = "Create a new directory and open it as vault"


@dataclass(frozen=True)
class OpenByPathAction:
    title = "+ Open vault by path"
    description = "Open any existing directory as vault"


@dataclass(frozen=True)
class OpenViaPickerAction:
    title = "+ Open vault in explorer"
    description = "Pick an existing directory in a folder dialog"


VaultListRow = Union[ExistingVault, CreateNewAction, OpenByPathAction, OpenViaPickerAction]


# --- View states ---


@dataclass(frozen=True)
class VaultSelect:
    """Vault chooser. Rows are existing vaults followed by the actions."""

    rows: tuple[VaultListRow, ...] = ()


@dataclass(frozen=True)
class FileList:
    """Listing of the current directory inside the active vault."""

    entries: tuple[ParentEntry | Entry, ...] = ()


ListState = Union[VaultSelect, FileList]


@dataclass(frozen=True)
class VaultCreate:
    previous: ListState


@dataclass(frozen=True)
class VaultOpenByPath:
    previous: ListState


@dataclass(frozen=True)
class FileCreate:
    previous: ListState


@dataclass(frozen=True)
class DirectoryCreate:
    previous: ListState


PromptState = Union[VaultCreate, VaultOpenByPath, FileCreate, DirectoryCreate]


@dataclass(frozen=True)
class Editor:
    """A note opened for editing."""

    path: Path
    buffer: str


@dataclass(frozen=True)
class ConfirmDelete:
    target: DeleteTarget
    previous: ListState


ViewState = Union[
    VaultSelect,
    VaultCreate,
    VaultOpenByPath,
    FileList,
    FileCreate,
    DirectoryCreate,
    Editor,
    ConfirmDelete,
]


class StatusLevel(Enum):
    """Severity of the status line, used by renderers for styling."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
