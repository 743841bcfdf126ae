"""
NoteKeeper Backend — Outcome → HTTP Response Adapter
======================================================

What:  Renders handler outcomes and errors as JSON responses.
Why:   The only place that knows how a Success or a Failure looks on the
       wire, shared by the routes and the global exception handlers.

Error body:
    {"error": <code>, "message": <text>, "details": {...}, "request_id": <id>}

    "details" is included for 4xx errors only; 5xx responses carry a generic
    message and nothing about the underlying failure.
"""

import logging

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from notekeeper.exceptions import NoteKeeperError
from notekeeper.middleware.request_id import request_id_var
from notekeeper.outcomes import Failure, Outcome

logger = logging.getLogger(__name__)


def error_response(error: NoteKeeperError) -> JSONResponse:
    rid = request_id_var.get("")
    content = {
        "error": error.error_code,
        "message": error.message,
        "request_id": rid,
    }
    if error.status_code < 500:
        if error.context:
            content["details"] = error.context
        if error.status_code == 400:
            logger.warning("[%s] Validation error: %s", rid, error.message)
    return JSONResponse(status_code=error.status_code, content=content)


def outcome_response(outcome: Outcome) -> JSONResponse:
    if isinstance(outcome, Failure):
        return error_response(outcome.error)
    # jsonable_encoder serializes by alias: createdAt / updatedAt
    return JSONResponse(
        status_code=outcome.status_code,
        content=jsonable_encoder(outcome.value),
    )
