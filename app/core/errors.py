"""Domain errors shared by the core services and mapped to HTTP responses by the API."""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for application errors."""


class ConfigurationError(AppError):
    """A required credential or setting is missing."""


class UpstreamError(AppError):
    """An external API answered with a non-success status."""

    def __init__(self, message: str, status_code: int, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ValidationError(AppError):
    """Caller input failed validation."""

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.details = details or []


class AlreadySubscribedError(AppError):
    """The email already has an active newsletter subscription."""

    def __init__(self, email: str):
        super().__init__("Email is already subscribed")
        self.email = email


class NotFoundError(AppError):
    """A persisted artifact does not exist."""


class StorageError(AppError):
    """Persisted data could not be read back (corrupt file or schema mismatch)."""


def error_details(errors) -> List[Dict[str, str]]:
    """Flatten pydantic errors into {path, message} entries."""
    return [
        {"path": ".".join(str(part) for part in err["loc"] if part != "body"), "message": err["msg"]}
        for err in errors
    ]
