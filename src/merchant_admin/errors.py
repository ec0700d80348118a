"""Exception hierarchy for save and data-service failures."""

from __future__ import annotations


class SaveError(Exception):
    """Base class for anything that stops a value from being persisted."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SaveValidationError(SaveError):
    """A precondition on the value failed before any network call."""


class DataServiceError(SaveError):
    """The data service rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
