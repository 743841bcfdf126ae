"""
NoteKeeper Backend — Validation Unit Tests
============================================

Pure-function tests for notekeeper.validation. No database, no event loop.

What we test:
    ✅ Missing ids are rejected
    ✅ Create: title trimmed and required, content defaulted
    ✅ Update: blank title ignored, empty content accepted, nothing → error
"""

import pytest

from notekeeper.exceptions import ValidationError
from notekeeper.validation import (
    NoteDraft,
    require_note_id,
    validate_new_note,
    validate_note_changes,
)


class TestRequireNoteId:

    def test_returns_id_unchanged(self):
        assert require_note_id("abc-123") == "abc-123"

    @pytest.mark.parametrize("note_id", [None, ""])
    def test_missing_id_rejected(self, note_id):
        with pytest.raises(ValidationError, match="Note ID is required") as exc_info:
            require_note_id(note_id)
        assert exc_info.value.field == "id"
        assert exc_info.value.status_code == 400


class TestValidateNewNote:

    def test_title_is_trimmed(self):
        draft = validate_new_note("  Shopping list \n", "<p>eggs</p>")
        assert draft == NoteDraft(title="Shopping list", content="<p>eggs</p>")

    def test_content_defaults_to_empty_string(self):
        draft = validate_new_note("x", None)
        assert draft.content == ""

    def test_empty_content_kept(self):
        assert validate_new_note("x", "").content == ""

    def test_content_is_not_trimmed(self):
        assert validate_new_note("x", "  <p> </p>  ").content == "  <p> </p>  "

    @pytest.mark.parametrize("title", [None, "", "   ", "\t\n"])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValidationError, match="Title is required") as exc_info:
            validate_new_note(title, "body")
        assert exc_info.value.context == {"field": "title"}


class TestValidateNoteChanges:

    def test_title_only(self):
        assert validate_note_changes(" New ", None) == {"title": "New"}

    def test_content_only(self):
        assert validate_note_changes(None, "<p>x</p>") == {"content": "<p>x</p>"}

    def test_both_fields(self):
        assert validate_note_changes("T", "C") == {"title": "T", "content": "C"}

    def test_empty_content_counts_as_supplied(self):
        assert validate_note_changes(None, "") == {"content": ""}

    def test_blank_title_is_ignored_when_content_given(self):
        assert validate_note_changes("   ", "body") == {"content": "body"}

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_nothing_to_update_rejected(self, title):
        with pytest.raises(ValidationError, match="title or content"):
            validate_note_changes(title, None)
