"""Error taxonomy for the review tool.

Every error carries the HTTP status the web layer answers with, so request
handlers can raise freely and let a single error handler build the response.
"""
from __future__ import annotations


class ReviewError(Exception):
    """Base class for all review tool failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ReviewError):
    """Config document missing or invalid, or a configured directory unreadable."""

    status_code = 500


class ValidationError(ReviewError):
    """Malformed identifier, status value or request payload."""

    status_code = 400


class NotFoundError(ReviewError):
    """A valid identifier has no backing file."""

    status_code = 404


class StorageError(ReviewError):
    """Unexpected read/write failure."""

    status_code = 500
