"""Vault registry - the persisted list of known vault roots.

The registry is a single JSON document, ``{"vaults": [...]}``, rewritten in
full on every save. It is never cached: every operation loads it from disk
and writes the whole snapshot back.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from gono.core import config
from gono.core.errors import RegistryError
from gono.core.paths import canonical, same_path

logger = logging.getLogger(__name__)


class RegistryDocument(BaseModel):
    """On-disk shape of the registry file."""

    vaults: list[str] = Field(default_factory=list)


def _normalize(paths) -> list[str]:
    """Canonicalize, drop blanks and collapse duplicates keeping the first."""
    seen: set[str] = set()
    out: list[str] = []
    for raw in paths:
        clean = str(raw).strip()
        if not clean:
            continue
        try:
            abs_path = str(canonical(clean))
        except (OSError, RuntimeError):
            logger.warning(f"Skipping unresolvable registry entry: {clean}")
            continue
        if abs_path in seen:
            continue
        seen.add(abs_path)
        out.append(abs_path)
    return out


class VaultRegistry:
    """Reads and writes the vault registry file."""

    def __init__(self, path: Path | str | None = None):
        """
        Initialize the registry.

        Args:
            path: Registry file (defaults to ~/.gono_vaults.json)
        """
        self.path = Path(path).expanduser() if path else config.REGISTRY_PATH

    def load(self) -> tuple[str, ...]:
        """
        Load the registry snapshot.

        Returns:
            Canonical, deduplicated vault paths in file order. Empty if the
            file does not exist.

        Raises:
            RegistryError: If the file cannot be read or is malformed.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No registry file at {self.path}")
            return ()
        except OSError as e:
            raise RegistryError(f"cannot read vault registry: {e}") from e

        try:
            document = RegistryDocument.model_validate(json.loads(raw))
        except json.JSONDecodeError as e:
            raise RegistryError(f"invalid JSON in {self.path}: {e}") from e
        except SchemaError as e:
            raise RegistryError(f"malformed vault registry {self.path}: {e}") from e

        return tuple(_normalize(document.vaults))

    @staticmethod
    def validate(paths) -> tuple[str, ...]:
        """Keep only paths that still resolve to an existing directory."""
        return tuple(p for p in paths if Path(p).is_dir())

    def save(self, paths) -> tuple[str, ...]:
        """
        Overwrite the registry with the given paths.

        Paths are canonicalized, deduplicated and sorted case-insensitively.

        Returns:
            The snapshot that was written.

        Raises:
            RegistryError: If the file cannot be written.
        """
        clean = sorted(_normalize(paths), key=str.lower)
        document = RegistryDocument(vaults=clean)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(document.model_dump(), indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise RegistryError(f"cannot write vault registry: {e}") from e
        logger.debug(f"Saved {len(clean)} vaults to {self.path}")
        return tuple(clean)

    def register(self, path: Path | str) -> None:
        """Add a vault root unless an equivalent path is already registered."""
        vaults = list(self.load())
        if any(same_path(v, path) for v in vaults):
            logger.debug(f"Vault already registered: {path}")
            return
        vaults.append(str(canonical(path)))
        self.save(vaults)
        logger.info(f"Registered vault {path}")

    def unregister(self, path: Path | str) -> None:
        """Remove every entry that points at the given vault root."""
        vaults = [v for v in self.load() if not same_path(v, path)]
        self.save(vaults)
        logger.info(f"Unregistered vault {path}")

    def list_vaults(self) -> tuple[str, ...]:
        """
        Load, drop stale entries and persist the healed snapshot.

        Returns:
            Existing vault roots sorted case-insensitively by name.

        Raises:
            RegistryError: If the registry cannot be read or rewritten.
        """
        loaded = self.load()
        valid = self.validate(loaded)
        if len(valid) != len(loaded):
            logger.info(f"Dropping {len(loaded) - len(valid)} stale vault(s)")
        self.save(valid)
        return tuple(sorted(valid, key=lambda p: Path(p).name.lower()))
