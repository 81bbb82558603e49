"""Exceptions raised by the board engine."""
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import Issue


class BoardError(Exception):
    """Base class for board engine errors."""
    pass


class ValidationError(BoardError, ValueError):
    """
    Raised when input fails basic shape rules (empty title, bad position
    type, malformed board dict). The operation has no effect.
    """

    def __init__(self, message: str, issues: Optional[List["Issue"]] = None):
        super().__init__(message)
        self.issues = list(issues or [])


class NotFoundError(BoardError, LookupError):
    """Raised when a lane or card id that must exist does not."""

    def __init__(self, kind: str, ref: str):
        super().__init__(f"{kind.capitalize()} {ref} does not exist")
        self.kind = kind
        self.ref = ref
