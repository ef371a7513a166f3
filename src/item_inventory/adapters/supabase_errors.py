"""Translation of Supabase client failures into application errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from supabase import AuthError as SupabaseAuthError
from supabase import PostgrestAPIError, StorageException

from item_inventory.errors import CollaboratorError

_SUPABASE_ERRORS = (
    PostgrestAPIError,
    StorageException,
    SupabaseAuthError,
    httpx.HTTPError,
)


@contextmanager
def collaborator_errors(operation: str) -> Iterator[None]:
    """Re-raise Supabase and transport failures as CollaboratorError."""
    try:
        yield
    except _SUPABASE_ERRORS as exc:
        raise CollaboratorError(operation, error_message(exc)) from exc


def error_message(exc: Exception) -> str:
    """Return the human-readable message carried by a Supabase error."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
