"""Domain error taxonomy.

Every business failure raised by a service is one of three kinds.  Each
kind carries the HTTP status the API boundary uses when translating it
(see ``modules.core.error_handler``).  Module-specific errors subclass
these so callers can catch either the precise error or the whole family.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all business rule violations."""

    status_code: int = 400

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or ""


class ValidationError(DomainError):
    """Malformed input rejected before any persistence attempt."""

    status_code = 400


class NotFoundError(DomainError):
    """A referenced order, product or catalog id does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """The request conflicts with the current state of the resource."""

    status_code = 409
