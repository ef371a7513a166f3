"""Application error types."""


class ItemInventoryError(Exception):
    """Base class for application errors."""


class AuthError(ItemInventoryError):
    """Raised when an operation needs a signed-in user and none is available."""


class ValidationError(ItemInventoryError):
    """Raised when required input is missing or blank."""


class NotFoundError(ItemInventoryError):
    """Raised when a targeted row does not exist for the caller."""


class CollaboratorError(ItemInventoryError):
    """Raised when Supabase auth, database or storage reports a failure."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Failed to {operation}: {reason}")
        self.operation = operation
        self.reason = reason
