"""Exception hierarchy shared by the API and the admin CLI."""

from __future__ import annotations


class AkwaabaError(Exception):
    """Base exception for the Akwaaba Homes backend."""

    status_code: int = 500

    def __init__(self, message: str, *, details: object | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(AkwaabaError):
    """Required setting is missing."""


class InvalidTransitionError(AkwaabaError):
    """A status change outside the allowed workflow was requested."""

    status_code = 400


class StorageError(AkwaabaError):
    """Object storage upload or removal failed."""
