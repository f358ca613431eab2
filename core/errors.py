# core/errors.py
from __future__ import annotations


class DomainError(Exception):
    """Base for errors raised by the record-keeping core."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def as_dict(self) -> dict:
        if self.field:
            return {self.field: [self.message]}
        return {"detail": self.message}


class ValidationError(DomainError):
    """A field value is missing, out of range, or not a known variant."""


class ReferentialError(DomainError):
    """An organisation id does not resolve to an existing organisation."""


class NotFoundError(DomainError):
    """The requested row does not exist (or was physically removed)."""
