from __future__ import annotations


class AppError(Exception):
    """Base app error."""


class InvalidInput(AppError, ValueError):
    """Raised when a record carries a negative quantity or an unknown fuel type."""


class RecordNotFoundError(AppError, KeyError):
    """Raised when the record store has no record with the requested id."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else "Record not found"


class APIKeyMissingError(AppError):
    """Exception raised when an API key is missing or invalid."""


class AIServiceError(AppError):
    """Raised when the text-generation provider fails or answers unusably."""


class InvalidResponseError(AIServiceError):
    """Exception raised when an API response is invalid or malformed."""
