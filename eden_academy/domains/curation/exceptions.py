# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the curation domain.

This module defines the exception hierarchy for curation operations:
- CurationError: Base exception for all curation errors
- InvalidInputError: A request argument is missing or malformed
- InvalidDecisionError: Unknown decision value
- WorkNotInQueueError: Decision recorded for a work outside the session
- SessionNotFoundError: Curation session does not exist
- StoreUnavailableError: The underlying store could not be read or written

Absence of historical data is never an error; stores return empty
collections for it.
"""


class CurationError(Exception):
    """Base exception for all curation errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize curation error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidInputError(CurationError):
    """Raised when a required argument is missing or has an invalid value."""

    pass


class InvalidDecisionError(InvalidInputError):
    """Raised when a decision is not one of the accepted values."""

    pass


class WorkNotInQueueError(InvalidInputError):
    """Raised when a decision targets a work that is not part of the session."""

    pass


class SessionNotFoundError(CurationError):
    """Raised when a curation session is not found."""

    pass


class StoreUnavailableError(CurationError):
    """Raised when the curation store fails unexpectedly.

    Attributes:
        original_error: The underlying I/O, parsing or database error.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict | None = None,
    ):
        """Initialize store error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message, details)
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation including the underlying error."""
        base = super().__str__()
        if self.original_error:
            return f"{base}: {self.original_error}"
        return base
