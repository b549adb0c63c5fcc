"""Session state machine.

Session holds the single mutable aggregate of a running gono session: the
current view, the active vault root, the current directory and the status
line. Every user intent is a method; each one validates the intent against
the current view, runs candidate paths through the path guard and only then
calls the filesystem gateway or the vault registry.

Failures never escape an intent. They are written to ``status`` and the
view stays where it was.
"""

import logging
from pathlib import Path

from gono.core import config
from gono.core.errors import (
    ContainmentError,
    FolderPickerError,
    GonoError,
    RegistryError,
    ValidationError,
    VaultIOError,
)
from gono.core.gateway import FilesystemGateway
from gono.core.paths import (
    canonical,
    entry_inside,
    is_inside,
    rel_or_base,
    safe_join,
    same_path,
)
from gono.core.picker import FolderPicker, get_folder_picker
from gono.core.registry import VaultRegistry
from gono.core.types import (
    ConfirmDelete,
    CreateNewAction,
    DeleteTarget,
    DirectoryCreate,
    Editor,
    Entry,
    ExistingVault,
    FileCreate,
    FileList,
    ListState,
    OpenByPathAction,
    OpenViaPickerAction,
    ParentEntry,
    VaultCreate,
    VaultListRow,
    VaultOpenByPath,
    VaultSelect,
    ViewState,
)

NOTE_SUFFIX = ".md"

ACTION_ROWS: tuple[VaultListRow, ...] = (
    CreateNewAction(),
    OpenByPathAction(),
    OpenViaPickerAction(),
)

logger = logging.getLogger(__name__)


def validate_note_name(name: str) -> str:
    """
    Validate a new note name and return its file name.

    Args:
        name: Name typed by the user, without extension

    Returns:
        The file name with the .md suffix appended

    Raises:
        ValidationError: If the name is blank or has anything but letters
            and digits
    """
    base = name.strip()
    if not base:
        raise ValidationError("File name cannot be empty")
    if not all(ch.isalpha() or ch.isdigit() for ch in base):
        raise ValidationError("Invalid file name: use only letters and digits")
    return base + NOTE_SUFFIX


def clean_vault_path(raw: str) -> str:
    """Trim whitespace and surrounding quotes from a typed or pasted path."""
    return raw.strip().strip("\"'")


class Session:
    """Interactive session over the vault registry and one active vault."""

    def __init__(
        self,
        registry: VaultRegistry | None = None,
        gateway: FilesystemGateway | None = None,
        picker: FolderPicker | None = None,
        storage_root: Path | str | None = None,
    ):
        """
        Initialize the session in the vault select view.

        Args:
            registry: Vault registry (defaults to the configured registry file)
            gateway: Filesystem gateway
            picker: Folder picker (defaults to the platform picker)
            storage_root: Directory new vaults are created in
        """
        self.registry = registry or VaultRegistry()
        self.gateway = gateway or FilesystemGateway()
        self.picker = picker or get_folder_picker()
        self.storage_root = Path(storage_root or config.STORAGE_ROOT)

        self.vault_root: Path | None = None
        self.current_directory: Path | None = None
        self.status = ""
        self.running = True
        self.view: ViewState = self._vault_select()

    # --- helpers ---

    def _fail(self, error: GonoError) -> None:
        """Surface a recovered error in the status line."""
        logger.warning(f"{type(error).__name__}: {error}")
        if isinstance(error, ValidationError):
            self.status = str(error)
        else:
            self.status = f"Error: {error}"

    def _vault_select(self) -> VaultSelect:
        """Build the vault chooser, healing the registry as a side effect."""
        try:
            vaults = self.registry.list_vaults()
        except RegistryError as e:
            self._fail(e)
            vaults = ()
        rows = tuple(ExistingVault(Path(p)) for p in vaults)
        return VaultSelect(rows=rows + ACTION_ROWS)

    def _list_entries(self, directory: Path) -> tuple[ParentEntry | Entry, ...]:
        entries: list[ParentEntry | Entry] = list(
            self.gateway.list_directory(directory)
        )
        if not same_path(directory, self.vault_root):
            entries.insert(0, ParentEntry(path=directory.parent))
        return tuple(entries)

    def _refresh(self) -> None:
        """Re-derive the listing of the current directory."""
        try:
            entries = self._list_entries(self.current_directory)
        except GonoError as e:
            self._fail(e)
            if not isinstance(self.view, FileList):
                self.view = FileList()
            return
        self.view = FileList(entries=entries)

    def _navigate(self, directory: Path) -> None:
        """Move to a directory inside the vault, keeping state on failure."""
        if not is_inside(self.vault_root, directory):
            self._fail(ContainmentError("path escapes vault"))
            return
        try:
            entries = self._list_entries(directory)
        except GonoError as e:
            self._fail(e)
            return
        self.current_directory = directory
        self.view = FileList(entries=entries)

    def _open_vault(self, path: Path, status: str) -> None:
        root = canonical(path)
        previous = (self.vault_root, self.current_directory)
        self.vault_root = root
        try:
            entries = self._list_entries(root)
        except GonoError as e:
            self.vault_root, self.current_directory = previous
            self._fail(e)
            return
        self.current_directory = root
        self.view = FileList(entries=entries)
        self.status = status
        logger.info(f"Opened vault {root}")

    def _rel(self, path: Path) -> str:
        return rel_or_base(self.vault_root, path)

    def _enter_prompt(self, prompt_type) -> None:
        if isinstance(self.view, (VaultSelect, FileList)):
            self.view = prompt_type(previous=self.view)

    # --- vault select ---

    def select_vault_row(self, row: VaultListRow) -> None:
        """Activate a row of the vault chooser."""
        if not isinstance(self.view, VaultSelect):
            return
        match row:
            case ExistingVault(path=path):
                self._open_vault(path, f"Vault selected: {path.name}")
            case CreateNewAction():
                self.begin_create_vault()
            case OpenByPathAction():
                self.begin_open_by_path()
            case OpenViaPickerAction():
                self.open_via_picker()

    def begin_create_vault(self) -> None:
        if isinstance(self.view, VaultSelect):
            self._enter_prompt(VaultCreate)

    def begin_open_by_path(self) -> None:
        if isinstance(self.view, VaultSelect):
            self._enter_prompt(VaultOpenByPath)

    def open_via_picker(self) -> None:
        """Ask the host for a folder and open it as a vault."""
        if not isinstance(self.view, VaultSelect):
            return
        try:
            path = self.picker.pick()
        except FolderPickerError as e:
            self._fail(e)
            return
        if path is None:
            self.status = "Vault selection canceled"
            return
        try:
            self._open_path(path)
        except GonoError as e:
            self._fail(e)

    def request_delete_vault(self, row: VaultListRow) -> None:
        """Stage deletion of a registered vault."""
        if not isinstance(self.view, VaultSelect):
            return
        if not isinstance(row, ExistingVault):
            return
        target = DeleteTarget(
            path=row.path,
            label=row.path.name,
            is_dir=True,
            is_vault_root=True,
        )
        self.view = ConfirmDelete(target=target, previous=self.view)

    # --- file list ---

    def select_entry(self, entry: ParentEntry | Entry) -> None:
        """Open a file in the editor, enter a directory or go up."""
        if not isinstance(self.view, FileList):
            return
        if isinstance(entry, ParentEntry):
            self.go_parent()
            return
        if entry.is_dir:
            self._navigate(entry.path)
            return
        if not is_inside(self.vault_root, entry.path):
            self._fail(ContainmentError("path escapes vault"))
            return
        try:
            content = self.gateway.read_text(entry.path)
        except GonoError as e:
            self._fail(e)
            return
        self.view = Editor(path=entry.path, buffer=content)

    def go_parent(self) -> None:
        """Move to the parent directory; a no-op at the vault root."""
        if not isinstance(self.view, FileList):
            return
        if same_path(self.current_directory, self.vault_root):
            return
        parent = self.current_directory.parent
        if is_inside(self.vault_root, parent):
            self._navigate(parent)

    def begin_create_file(self) -> None:
        if isinstance(self.view, FileList):
            self._enter_prompt(FileCreate)

    def begin_create_directory(self) -> None:
        if isinstance(self.view, FileList):
            self._enter_prompt(DirectoryCreate)

    def request_delete_entry(self, entry: ParentEntry | Entry) -> None:
        """Stage deletion of a file or directory in the listing."""
        if not isinstance(self.view, FileList):
            return
        if isinstance(entry, ParentEntry):
            return
        if not entry_inside(self.vault_root, entry.path):
            self._fail(ContainmentError("path escapes vault"))
            return
        target = DeleteTarget(
            path=entry.path,
            label=self._rel(entry.path),
            is_dir=entry.is_dir,
        )
        self.view = ConfirmDelete(target=target, previous=self.view)

    # --- prompts ---

    def submit(self, text: str) -> None:
        """Submit the input of the current prompt."""
        try:
            match self.view:
                case VaultCreate():
                    self._create_vault(text)
                case VaultOpenByPath():
                    self._open_path(text)
                case FileCreate():
                    self._create_file(text)
                case DirectoryCreate():
                    self._create_directory(text)
        except GonoError as e:
            self._fail(e)

    def _create_vault(self, text: str) -> None:
        name = text.strip()
        if not name:
            raise ValidationError("Vault name cannot be empty")
        path = self.storage_root / name
        if not is_inside(self.storage_root, path) or same_path(
            path, self.storage_root
        ):
            raise ContainmentError("vault must be created inside the storage root")
        path = canonical(path)
        self.gateway.create_directory(path)
        try:
            self.registry.register(path)
        except RegistryError as e:
            logger.warning(f"Vault {path} created but not registered: {e}")
            self.status = f"Vault created, but registry update failed: {e}"
            return
        self._open_vault(path, f"Vault created: {path.name}")

    def _open_path(self, raw: str) -> None:
        clean = clean_vault_path(raw)
        if not clean:
            raise ValidationError("Vault path cannot be empty")
        try:
            path = canonical(clean)
        except (OSError, RuntimeError) as e:
            raise VaultIOError(f"cannot resolve {clean}: {e}") from e
        if not path.exists():
            self.status = "Error: cannot access this path"
            return
        if not path.is_dir():
            self.status = "Error: path must point to a directory"
            return
        status = f"Vault selected: {path.name or path}"
        try:
            self.registry.register(path)
        except RegistryError as e:
            logger.warning(f"Vault {path} opened but not registered: {e}")
            status = f"Vault selected, but registry update failed: {e}"
        self._open_vault(path, status)

    def _create_file(self, text: str) -> None:
        name = validate_note_name(text)
        path = safe_join(self.vault_root, self.current_directory, name)
        self.gateway.create_file_exclusive(path)
        self.view = self.view.previous
        self.status = f"File created: {self._rel(path)}"
        self._refresh()

    def _create_directory(self, text: str) -> None:
        name = text.strip()
        if not name:
            raise ValidationError("Directory name cannot be empty")
        path = safe_join(self.vault_root, self.current_directory, name)
        self.gateway.create_directory_recursive(path)
        self.view = self.view.previous
        self.status = f"Directory created: {self._rel(path)}"
        self._refresh()

    # --- editor ---

    def update_buffer(self, text: str) -> None:
        if isinstance(self.view, Editor):
            self.view = Editor(path=self.view.path, buffer=text)

    def save(self) -> None:
        """Overwrite the edited file with the buffer contents."""
        if not isinstance(self.view, Editor):
            return
        path = self.view.path
        try:
            if not is_inside(self.vault_root, path):
                raise ContainmentError("path escapes vault")
            self.gateway.write_text(path, self.view.buffer)
        except GonoError as e:
            self._fail(e)
            return
        self.status = f"Saved: {self._rel(path)}"

    # --- confirm delete ---

    def confirm(self) -> None:
        """Execute the staged delete and return to the previous list."""
        if not isinstance(self.view, ConfirmDelete):
            return
        target = self.view.target
        previous = self.view.previous

        try:
            if not target.is_vault_root and not entry_inside(
                self.vault_root, target.path
            ):
                raise ContainmentError("path escapes vault")
            self.gateway.delete_entry(target.path, target.is_dir)
        except GonoError as e:
            self._fail(e)
            self.view = previous
            return

        if target.is_vault_root:
            self._forget_vault(target)
            return

        self.view = previous
        self.status = f"Deleted: {target.label}"
        self._refresh()

    def _forget_vault(self, target: DeleteTarget) -> None:
        try:
            self.registry.unregister(target.path)
        except RegistryError as e:
            self.status = f"Vault deleted, but registry update failed: {e}"
        else:
            self.status = f"Vault deleted: {target.label}"
        if self.vault_root is not None and same_path(self.vault_root, target.path):
            self.vault_root = None
            self.current_directory = None
        self.view = self._vault_select()

    def decline(self) -> None:
        if isinstance(self.view, ConfirmDelete):
            self.view = self.view.previous

    # --- global ---

    def cancel(self) -> None:
        """Leave the editor, a prompt or a delete confirmation."""
        match self.view:
            case Editor():
                self._refresh()
            case VaultCreate() | VaultOpenByPath() | FileCreate() | DirectoryCreate():
                self.view = self.view.previous
            case ConfirmDelete():
                self.view = self.view.previous

    def quit(self) -> None:
        self.running = False
