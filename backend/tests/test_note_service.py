"""
NoteKeeper Backend — Note Service Unit Tests
==============================================

Tests for the five operation handlers against a mocked StorageClient.

What we test:
    ✅ Each operation returns Success with the stored note
    ✅ Create signals "created"; the others do not
    ✅ Validation failures come back as Failure(400) without touching storage
    ✅ Missing rows come back as Failure(404)
    ✅ Storage failures come back as Failure(500) with a generic message
"""

import pytest
from sqlalchemy.exc import OperationalError

from notekeeper.exceptions import InternalError, NotFoundError, ValidationError
from notekeeper.outcomes import Failure, Success
from notekeeper.services.note_service import NoteService
from notekeeper.storage import RecordNotFoundError


class TestNoteServiceList:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_returns_notes_in_storage_order(self, mock_storage, make_note):
        newest, oldest = make_note("B"), make_note("A", age_seconds=60)
        mock_storage.list_notes.return_value = [newest, oldest]

        outcome = await self.service.list_notes(mock_storage)

        assert isinstance(outcome, Success)
        assert outcome.status_code == 200
        assert [n.id for n in outcome.value] == [newest.id, oldest.id]

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_storage):
        mock_storage.list_notes.return_value = []
        outcome = await self.service.list_notes(mock_storage)
        assert outcome == Success([])

    @pytest.mark.asyncio
    async def test_list_storage_failure_is_internal_error(self, mock_storage):
        mock_storage.list_notes.side_effect = OperationalError("SELECT", {}, Exception("down"))

        outcome = await self.service.list_notes(mock_storage)

        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, InternalError)
        assert outcome.status_code == 500
        assert "down" not in outcome.error.message


class TestNoteServiceGet:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_found(self, mock_storage, make_note):
        note = make_note()
        mock_storage.get_note.return_value = note

        outcome = await self.service.get_note(mock_storage, note.id)

        assert isinstance(outcome, Success)
        assert outcome.value.id == note.id
        assert outcome.value.title == note.title
        mock_storage.get_note.assert_awaited_once_with(note.id)

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_storage):
        mock_storage.get_note.return_value = None

        outcome = await self.service.get_note(mock_storage, "missing-id")

        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, NotFoundError)
        assert outcome.status_code == 404
        assert "missing-id" in outcome.error.message

    @pytest.mark.asyncio
    async def test_get_empty_id_never_reaches_storage(self, mock_storage):
        outcome = await self.service.get_note(mock_storage, "")

        assert isinstance(outcome.error, ValidationError)
        mock_storage.get_note.assert_not_awaited()


class TestNoteServiceCreate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_trims_title_and_signals_created(self, mock_storage, make_note):
        mock_storage.create_note.return_value = make_note("Title", "<p>x</p>")

        outcome = await self.service.create_note(mock_storage, "  Title  ", "<p>x</p>")

        mock_storage.create_note.assert_awaited_once_with(title="Title", content="<p>x</p>")
        assert isinstance(outcome, Success)
        assert outcome.created is True
        assert outcome.status_code == 201

    @pytest.mark.asyncio
    async def test_create_without_content_stores_empty_string(self, mock_storage, make_note):
        mock_storage.create_note.return_value = make_note("x", "")

        await self.service.create_note(mock_storage, "x")

        mock_storage.create_note.assert_awaited_once_with(title="x", content="")

    @pytest.mark.asyncio
    async def test_create_blank_title_rejected(self, mock_storage):
        outcome = await self.service.create_note(mock_storage, "   ", "body")

        assert isinstance(outcome, Failure)
        assert outcome.status_code == 400
        mock_storage.create_note.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_storage_failure(self, mock_storage):
        mock_storage.create_note.side_effect = ConnectionRefusedError("refused")

        outcome = await self.service.create_note(mock_storage, "x")

        assert isinstance(outcome.error, InternalError)
        assert outcome.error.context["operation"] == "create"


class TestNoteServiceUpdate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_passes_only_supplied_fields(self, mock_storage, make_note):
        note = make_note()
        mock_storage.update_note.return_value = note

        outcome = await self.service.update_note(mock_storage, note.id, content="")

        mock_storage.update_note.assert_awaited_once_with(note.id, {"content": ""})
        assert isinstance(outcome, Success)
        assert outcome.created is False

    @pytest.mark.asyncio
    async def test_update_blank_title_with_content(self, mock_storage, make_note):
        note = make_note()
        mock_storage.update_note.return_value = note

        await self.service.update_note(mock_storage, note.id, title="  ", content="new")

        mock_storage.update_note.assert_awaited_once_with(note.id, {"content": "new"})

    @pytest.mark.asyncio
    async def test_update_with_no_fields_rejected(self, mock_storage):
        outcome = await self.service.update_note(mock_storage, "some-id")

        assert isinstance(outcome.error, ValidationError)
        assert outcome.status_code == 400
        mock_storage.update_note.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_checks_id_before_fields(self, mock_storage):
        outcome = await self.service.update_note(mock_storage, "")

        assert outcome.error.message == "Note ID is required"

    @pytest.mark.asyncio
    async def test_update_missing_row_is_not_found(self, mock_storage):
        mock_storage.update_note.side_effect = RecordNotFoundError("notes", "gone")

        outcome = await self.service.update_note(mock_storage, "gone", title="New")

        assert isinstance(outcome.error, NotFoundError)
        assert outcome.status_code == 404


class TestNoteServiceDelete:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_returns_prior_state(self, mock_storage, make_note):
        note = make_note("Old", "<p>bye</p>")
        mock_storage.delete_note.return_value = note

        outcome = await self.service.delete_note(mock_storage, note.id)

        assert outcome.value.title == "Old"
        assert outcome.value.content == "<p>bye</p>"
        mock_storage.delete_note.assert_awaited_once_with(note.id)

    @pytest.mark.asyncio
    async def test_delete_missing_row_is_not_found(self, mock_storage):
        mock_storage.delete_note.side_effect = RecordNotFoundError("notes", "gone")

        outcome = await self.service.delete_note(mock_storage, "gone")

        assert isinstance(outcome.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_delete_empty_id_rejected(self, mock_storage):
        outcome = await self.service.delete_note(mock_storage, None)

        assert outcome.status_code == 400
        mock_storage.delete_note.assert_not_awaited()
