"""
Error taxonomy for Jobly.

Every failure the core raises on purpose is a ``JoblyError``. The
``status_code`` lets an outer HTTP layer map errors to responses without
knowing the concrete class; the CLI only uses the message.
"""

from __future__ import annotations


class JoblyError(Exception):
    """Base error for expected, caller-facing failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(JoblyError):
    """Input rejected before any query was issued."""

    status_code = 400


class NotFoundError(JoblyError):
    """The addressed record does not exist."""

    status_code = 404


class ConflictError(JoblyError):
    """A record with the same natural key already exists."""

    status_code = 409


__all__ = ["JoblyError", "ValidationError", "NotFoundError", "ConflictError"]
