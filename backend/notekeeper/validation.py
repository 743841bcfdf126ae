"""
NoteKeeper Backend — Input Validation
=======================================

Pure functions that check caller input before any storage call. Each one
either returns the cleaned value or raises ValidationError.

Field presence on update is deliberately asymmetric:
    - title counts as supplied only when it is non-blank after trimming,
      so a blank title is ignored rather than stored
    - content counts as supplied whenever it is a string, including ""
      (clearing a note's body is a legitimate edit)
"""

from dataclasses import dataclass
from typing import Dict, Optional

from notekeeper.exceptions import ValidationError


@dataclass(frozen=True)
class NoteDraft:
    """A validated create request."""

    title: str
    content: str


def require_note_id(note_id: Optional[str]) -> str:
    if not note_id:
        raise ValidationError(message="Note ID is required", field="id")
    return note_id


def validate_new_note(title: Optional[str], content: Optional[str]) -> NoteDraft:
    """
    Check a create request.

    Returns:
        NoteDraft with the trimmed title and content defaulted to ""

    Raises:
        ValidationError: title missing or whitespace only
    """
    trimmed = (title or "").strip()
    if not trimmed:
        raise ValidationError(message="Title is required", field="title")
    return NoteDraft(title=trimmed, content=content if content is not None else "")


def validate_note_changes(title: Optional[str], content: Optional[str]) -> Dict[str, str]:
    """
    Collect the fields an update request actually supplies.

    Returns:
        Mapping of column name to new value; never empty

    Raises:
        ValidationError: neither a non-blank title nor a content string given
    """
    changes: Dict[str, str] = {}
    trimmed = (title or "").strip()
    if trimmed:
        changes["title"] = trimmed
    if content is not None:
        changes["content"] = content
    if not changes:
        raise ValidationError(
            message="Provide a title or content to update",
            context={"fields": ["title", "content"]},
        )
    return changes
