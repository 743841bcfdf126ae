"""
NoteKeeper Backend — Note Service (Operation Handlers)
========================================================

What:  The five note operations: list, get, create, update, delete.
Why:   Keeps every business rule in one place, independent of HTTP.
How:   Each method runs validate → storage call → error mapping and returns
       an Outcome (Success or Failure). Nothing is raised to the caller.
Who:   Called by the route handlers in notekeeper.routes.notes.

Flow of one operation:
    ┌────────────┐    ┌────────────────┐    ┌───────────────┐
    │  Validate  │───▶│ StorageClient  │───▶│ Success(note) │
    └─────┬──────┘    └───────┬────────┘    └───────────────┘
          │ ValidationError   │ RecordNotFoundError / driver error
          ▼                   ▼
    Failure(400)        map_storage_error → Failure(404 | 500)

Design Decision:
    NoteService is stateless. The storage client is passed into every call,
    so a test can hand it any double and each request works against the
    process-wide client chosen at startup.
"""

import logging
from typing import List, Optional

from notekeeper.exceptions import NotFoundError, ValidationError
from notekeeper.outcomes import Failure, Outcome, Success
from notekeeper.schemas.note import NoteResponse
from notekeeper.services.error_mapper import map_storage_error
from notekeeper.storage import StorageClient
from notekeeper.validation import (
    require_note_id,
    validate_new_note,
    validate_note_changes,
)

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic for the notes resource.

    Error Handling Strategy:
        Validation errors are caught right where the validator raises them,
        before the database is touched. Storage errors go through
        map_storage_error. Both come back as Failure values.
    """

    async def list_notes(self, storage: StorageClient) -> Outcome[List[NoteResponse]]:
        """All notes, newest first. Only a storage failure can go wrong here."""
        try:
            notes = await storage.list_notes()
        except Exception as exc:
            return Failure(map_storage_error(exc, operation="list"))
        return Success([NoteResponse.model_validate(note) for note in notes])

    async def get_note(
        self, storage: StorageClient, note_id: Optional[str]
    ) -> Outcome[NoteResponse]:
        """
        Fetch one note.

        Failures:
            ValidationError: empty id
            NotFoundError:   no such note
        """
        try:
            note_id = require_note_id(note_id)
        except ValidationError as exc:
            return Failure(exc)

        try:
            note = await storage.get_note(note_id)
        except Exception as exc:
            return Failure(map_storage_error(exc, operation="get", note_id=note_id))

        if note is None:
            return Failure(NotFoundError(resource="Note", resource_id=note_id))
        return Success(NoteResponse.model_validate(note))

    async def create_note(
        self,
        storage: StorageClient,
        title: Optional[str],
        content: Optional[str] = None,
    ) -> Outcome[NoteResponse]:
        """
        Create a note from a title (required) and content (defaults to "").

        Returns Success with created=True, which the route renders as 201.
        """
        try:
            draft = validate_new_note(title, content)
        except ValidationError as exc:
            return Failure(exc)

        try:
            note = await storage.create_note(title=draft.title, content=draft.content)
        except Exception as exc:
            return Failure(map_storage_error(exc, operation="create"))

        logger.info("Note %s created", note.id)
        return Success(NoteResponse.model_validate(note), created=True)

    async def update_note(
        self,
        storage: StorageClient,
        note_id: Optional[str],
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Outcome[NoteResponse]:
        """
        Apply a partial update; unspecified fields keep their values.

        Validation order: id first, then "at least one field supplied".
        A missing row surfaces from storage as RecordNotFoundError and is
        mapped to NotFoundError.
        """
        try:
            note_id = require_note_id(note_id)
            changes = validate_note_changes(title, content)
        except ValidationError as exc:
            return Failure(exc)

        try:
            note = await storage.update_note(note_id, changes)
        except Exception as exc:
            return Failure(map_storage_error(exc, operation="update", note_id=note_id))

        logger.info("Note %s updated (%s)", note.id, ", ".join(sorted(changes)))
        return Success(NoteResponse.model_validate(note))

    async def delete_note(
        self, storage: StorageClient, note_id: Optional[str]
    ) -> Outcome[NoteResponse]:
        """
        Delete a note and return its last state.

        Not idempotent: a second delete of the same id is a NotFoundError.
        """
        try:
            note_id = require_note_id(note_id)
        except ValidationError as exc:
            return Failure(exc)

        try:
            note = await storage.delete_note(note_id)
        except Exception as exc:
            return Failure(map_storage_error(exc, operation="delete", note_id=note_id))

        logger.info("Note %s deleted", note.id)
        return Success(NoteResponse.model_validate(note))


# Stateless, so one shared instance serves every request
note_service = NoteService()
