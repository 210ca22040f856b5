from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError


# store failures are never wrapped
StorageError = PyMongoError


class InboxError(Exception):
    """Base exception for the inbox service."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(InboxError):
    """Raised when a message payload is rejected."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundError(InboxError):
    """Raised when a referenced document does not exist."""

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} with identifier '{identifier}' not found"
        super().__init__(message, "NOT_FOUND", {"resource": resource, "identifier": str(identifier)})
