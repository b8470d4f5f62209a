"""
Error taxonomy shared by the domain, repository and service layers.

``ValidationError`` marks input the caller can correct,
``LifecycleError`` marks an operation attempted outside its time
window and ``StorageError`` marks any failure raised by the storage
engine.  Absence of a memo is never an error: services return
``None`` or ``False`` instead.
"""

from typing import Iterable, List, Optional


class MemoError(Exception):
    """Base class for memo errors.

    ``errors`` holds the individual messages behind the exception so
    that the API layer can return them as a list.
    """

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: List[str] = list(errors) if errors else [message]


class ValidationError(MemoError):
    """Construction or pre‑flight rule violation."""


class LifecycleError(MemoError):
    """Operation attempted outside its permitted time window."""


class StorageError(MemoError):
    """Failure surfaced by the storage engine."""


def wrap_error(context: str, exc: Exception) -> MemoError:
    """Return ``exc`` re‑expressed with an operation context prefix.

    Memo errors keep their class so callers can still tell a
    validation problem from a lifecycle one; any other exception is
    reported as a ``StorageError``.  Use as
    ``raise wrap_error("memo creation failed", exc) from exc``.
    """
    message = f"{context}: {exc}"
    if isinstance(exc, MemoError):
        return exc.__class__(message, errors=exc.errors)
    return StorageError(message, errors=[str(exc)])
