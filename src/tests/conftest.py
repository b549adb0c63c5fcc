"""Shared test fixtures and configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from gono.core.gateway import FilesystemGateway
from gono.core.registry import VaultRegistry
from gono.core.session import Session


class FakePicker:
    """Folder picker returning a canned result."""

    def __init__(self, result: str | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = 0

    def pick(self) -> str | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def storage_root(tmp_path) -> Path:
    """Directory new vaults are created in."""
    path = (tmp_path / "storage").resolve()
    path.mkdir()
    return path


@pytest.fixture
def registry_file(tmp_path) -> Path:
    """Location of a temporary registry file."""
    return tmp_path / "registry" / ".gono_vaults.json"


@pytest.fixture
def registry(registry_file) -> VaultRegistry:
    """A VaultRegistry backed by a temp file."""
    return VaultRegistry(registry_file)


@pytest.fixture
def vault(tmp_path) -> Path:
    """An empty vault directory."""
    path = (tmp_path / "V").resolve()
    path.mkdir()
    return path


@pytest.fixture
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture
def make_session(registry, storage_root, picker):
    """Factory for sessions wired to temp storage."""

    def _make_session(**overrides) -> Session:
        kwargs = {
            "registry": registry,
            "gateway": FilesystemGateway(),
            "picker": picker,
            "storage_root": storage_root,
        }
        kwargs.update(overrides)
        return Session(**kwargs)

    return _make_session


@pytest.fixture
def session(make_session) -> Session:
    """A fresh session in the vault select view."""
    return make_session()


@pytest.fixture
def open_session(session, vault) -> Session:
    """A session with the vault fixture opened by path."""
    session.begin_open_by_path()
    session.submit(str(vault))
    return session


@pytest.fixture
def make_picker():
    """Factory for canned folder pickers."""
    return FakePicker
