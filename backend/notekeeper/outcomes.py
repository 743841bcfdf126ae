"""
NoteKeeper Backend — Operation Outcomes
=========================================

What:  The values every operation handler returns.
Why:   Handlers report success or failure as data instead of unwinding to a
       framework error handler, so they can be called and tested without
       any HTTP machinery.
How:   Success carries the payload (and whether a resource was created);
       Failure carries one error from notekeeper.exceptions. The route
       layer turns either into a response.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from notekeeper.exceptions import NoteKeeperError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    # True only for operations that brought a new resource into existence
    created: bool = False

    @property
    def status_code(self) -> int:
        return 201 if self.created else 200


@dataclass(frozen=True)
class Failure:
    error: NoteKeeperError

    @property
    def status_code(self) -> int:
        return self.error.status_code


Outcome = Union[Success[T], Failure]
