"""
NoteKeeper Backend — Notes Route Handlers
===========================================

What:  HTTP surface of the notes resource.
How:   Each route pulls the path id / JSON body, hands them with the shared
       StorageClient to one NoteService operation, and renders the returned
       outcome. Routes contain no business rules.

    GET    /notes        → 200 list, newest first
    GET    /notes/{id}   → 200 note
    POST   /notes        → 201 created note
    PUT    /notes/{id}   → 200 updated note
    DELETE /notes/{id}   → 200 deleted note (its last state)

Request bodies are optional at the HTTP level: a missing body is treated as
{} and rejected by the validator with a 400, the same as an empty object.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notekeeper.dependencies import get_storage
from notekeeper.responses import outcome_response
from notekeeper.schemas.note import ErrorResponse, NoteCreate, NoteResponse, NoteUpdate
from notekeeper.services.note_service import note_service
from notekeeper.storage import StorageClient

router = APIRouter(prefix="/notes", tags=["Notes"])

NOT_FOUND = {"description": "Note not found", "model": ErrorResponse}
BAD_REQUEST = {"description": "Invalid input", "model": ErrorResponse}
SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: SERVER_ERROR},
    summary="List all notes",
    description="Returns every note ordered by creation time, most recent first.",
)
async def list_notes(storage: StorageClient = Depends(get_storage)) -> JSONResponse:
    return outcome_response(await note_service.list_notes(storage))


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND, 500: SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    storage: StorageClient = Depends(get_storage),
) -> JSONResponse:
    return outcome_response(await note_service.get_note(storage, note_id))


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={400: BAD_REQUEST, 500: SERVER_ERROR},
    summary="Create a note",
    description="Title is required and trimmed; content defaults to an empty string.",
)
async def create_note(
    payload: Optional[NoteCreate] = None,
    storage: StorageClient = Depends(get_storage),
) -> JSONResponse:
    payload = payload or NoteCreate()
    outcome = await note_service.create_note(
        storage, title=payload.title, content=payload.content
    )
    return outcome_response(outcome)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND, 500: SERVER_ERROR},
    summary="Update a note",
    description=(
        "Partial update: only supplied fields change. A blank title is ignored; "
        "an empty content string clears the body. At least one must be given."
    ),
)
async def update_note(
    note_id: str,
    payload: Optional[NoteUpdate] = None,
    storage: StorageClient = Depends(get_storage),
) -> JSONResponse:
    payload = payload or NoteUpdate()
    outcome = await note_service.update_note(
        storage, note_id, title=payload.title, content=payload.content
    )
    return outcome_response(outcome)


@router.delete(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND, 500: SERVER_ERROR},
    summary="Delete a note",
    description="Deletes the note and returns it as it was just before deletion.",
)
async def delete_note(
    note_id: str,
    storage: StorageClient = Depends(get_storage),
) -> JSONResponse:
    return outcome_response(await note_service.delete_note(storage, note_id))
