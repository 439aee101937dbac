"""
Error taxonomy for ordinal term construction.

Normalization, comparison and arithmetic are total on well-formed terms, so
every user-facing error is raised while a term is being *built*:

- MalformedIndex: a child position holds something that is not an ordinal
- UnsupportedCollapse: a Veblen/Buchholz node reaches past the representable
  range (the Bachmann-Howard ordinal)
- NotationError: the notation parser could not read its input

Callers that prefer values over exceptions wrap a constructor with
``checked`` and inspect the returned ``Checked`` result.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .terms import Term


class ErrorKind(IntEnum):
    """Tag carried by every construction error."""
    MALFORMED_INDEX = 1
    UNSUPPORTED_COLLAPSE = 2
    NOTATION = 3


class OrdinalError(ValueError):
    """Base class for errors raised while constructing ordinal terms."""
    kind: ErrorKind = ErrorKind.MALFORMED_INDEX


class MalformedIndex(OrdinalError):
    """An index, exponent or argument is not a valid ordinal term."""
    kind = ErrorKind.MALFORMED_INDEX


class UnsupportedCollapse(OrdinalError):
    """A hierarchy node lies beyond the representable range."""
    kind = ErrorKind.UNSUPPORTED_COLLAPSE


class NotationError(OrdinalError):
    """Ordinal notation text could not be parsed."""
    kind = ErrorKind.NOTATION

    def __init__(self, message: str, position: int = -1):
        if position >= 0:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class InvariantViolation(AssertionError):
    """A canonical-form invariant failed. Always a defect, never user error."""


@dataclass(frozen=True)
class Checked:
    """Tagged construction result: either a term or the error that rejected it."""
    term: Optional[Term] = None
    error: Optional[OrdinalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind

    def unwrap(self) -> Term:
        """Return the term, re-raising the construction error if there is one."""
        if self.error is not None:
            raise self.error
        return self.term


def checked(build: Callable[..., Term], *args: Any, **kwargs: Any) -> Checked:
    """
    Run a term constructor and report the outcome as a value.

    Works with raw node classes (``checked(Buchholz, 3, 0)``) as well as the
    normalizing builders (``checked(veblen, 2, omega)``).
    """
    try:
        return Checked(term=build(*args, **kwargs))
    except OrdinalError as exc:
        return Checked(error=exc)
