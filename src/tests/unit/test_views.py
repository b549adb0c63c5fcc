"""Tests for view payloads."""

import pytest

from gono.core.types import StatusLevel
from gono.core.views import (
    DELETE_HINTS,
    EDITOR_HINTS,
    FILE_LIST_HINTS,
    PROMPT_HINTS,
    VAULT_SELECT_HINTS,
    build_view,
    shrink_text,
    status_level,
)


class TestShrinkText:
    """Tests for shrink_text()."""

    @pytest.mark.parametrize(
        "text,max_len,expected",
        [
            ("short", 10, "short"),
            ("exactly10!", 10, "exactly10!"),
            ("a long storage path", 10, "a long ..."),
            ("abcdef", 3, "abc"),
            ("abcdef", 0, ""),
        ],
    )
    def test_shrink(self, text, max_len, expected):
        """Long text is cut with an ellipsis."""
        assert shrink_text(text, max_len) == expected


class TestStatusLevel:
    """Tests for status_level()."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("Error: permission denied", StatusLevel.ERROR),
            ("Deleted: Todo.md", StatusLevel.WARNING),
            ("Vault deleted: V", StatusLevel.WARNING),
            ("File created: Todo.md", StatusLevel.SUCCESS),
            ("Saved: Todo.md", StatusLevel.SUCCESS),
            ("Vault selected: V", StatusLevel.SUCCESS),
            ("Vault selection canceled", StatusLevel.INFO),
            ("Vault name cannot be empty", StatusLevel.INFO),
            ("", StatusLevel.INFO),
        ],
    )
    def test_levels(self, status, expected):
        """Status text maps to a display level."""
        assert status_level(status) is expected


class TestBuildView:
    """Tests for build_view()."""

    def test_vault_select(self, session, storage_root):
        """The vault list shows the storage root and action rows."""
        payload = build_view(session)

        assert payload.title == "Vaults"
        assert payload.subtitle == "Storage: " + str(storage_root)
        assert payload.hints == VAULT_SELECT_HINTS
        assert [row.title for row in payload.rows] == [
            "+ Create new vault",
            "+ Open vault by path",
            "+ Open vault in explorer",
        ]

    def test_file_list(self, open_session):
        """A file list shows the vault name and relative path."""
        payload = build_view(open_session)

        assert payload.title == "Vault: V"
        assert payload.subtitle == "Path: ."
        assert payload.hints == FILE_LIST_HINTS
        assert payload.status == "Vault selected: V"
        assert payload.status_level is StatusLevel.SUCCESS

    def test_prompt(self, open_session):
        """Prompts show their title and placeholder."""
        open_session.begin_create_file()

        payload = build_view(open_session)

        assert payload.title == "Create File"
        assert payload.placeholder == "File name: letters and digits only"
        assert payload.hints == PROMPT_HINTS

    def test_editor(self, open_session):
        """The editor shows the note path and buffer."""
        open_session.begin_create_file()
        open_session.submit("Todo")
        open_session.select_entry(open_session.view.entries[0])
        open_session.update_buffer("# Title")

        payload = build_view(open_session)

        assert payload.title == "Editing: Todo.md"
        assert payload.subtitle == "Markdown editor"
        assert payload.text == "# Title"
        assert payload.hints == EDITOR_HINTS

    def test_confirm_delete(self, open_session):
        """The delete confirmation names the target."""
        open_session.begin_create_directory()
        open_session.submit("Projects")
        open_session.request_delete_entry(open_session.view.entries[0])

        payload = build_view(open_session)

        assert payload.title == "Delete directory?"
        assert payload.text == "Projects"
        assert payload.hints == DELETE_HINTS

    def test_long_storage_root_is_shrunk(self, make_session, tmp_path):
        """A long storage root is shortened to fit."""
        deep = tmp_path / ("x" * 200)
        deep.mkdir()
        session = make_session(storage_root=deep)

        payload = build_view(session, width=40)

        assert payload.subtitle.endswith("...")
        assert len(payload.subtitle) == len("Storage: ") + 30
