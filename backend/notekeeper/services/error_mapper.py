"""
NoteKeeper Backend — Storage Error Mapper
===========================================

What:  Translates whatever the storage client raised into the API error
       taxonomy.
Why:   Raw driver errors must never reach the caller; "no row matched" on a
       write is a 404, everything else is a generic 500.

Mapping:
    NoteKeeperError      → returned unchanged
    RecordNotFoundError  → NotFoundError("Note", id)
    anything else        → InternalError (original logged with traceback)
"""

import logging
from typing import Optional

from notekeeper.exceptions import InternalError, NoteKeeperError, NotFoundError
from notekeeper.storage import RecordNotFoundError

logger = logging.getLogger(__name__)


def map_storage_error(
    exc: BaseException,
    operation: str,
    note_id: Optional[str] = None,
) -> NoteKeeperError:
    if isinstance(exc, NoteKeeperError):
        return exc

    if isinstance(exc, RecordNotFoundError):
        return NotFoundError(resource="Note", resource_id=exc.record_id)

    logger.error(
        "Storage failure during %s (note_id=%s): %s",
        operation,
        note_id,
        str(exc),
        exc_info=exc,
    )
    context = {"operation": operation, "error_type": type(exc).__name__}
    if note_id:
        context["note_id"] = note_id
    return InternalError(context=context)
