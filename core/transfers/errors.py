"""Typed failures for transfer intent resolution.

Every failure raised by the transfer core derives from ``TransferError`` so
tool and CLI boundaries can catch one type and report it.
"""

from __future__ import annotations


class TransferError(Exception):
    """Base class for transfer resolution failures."""


class ValidationError(TransferError):
    """The request failed a shape or grammar check. Never retried."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ResolutionError(TransferError):
    """A lookup collaborator failed or had no answer. Callers may retry."""


class ConversionError(TransferError):
    """The minor-unit amount could not be computed or is out of range."""


class TransferCancelled(TransferError):
    """The caller cancelled resolution while a lookup was outstanding."""


class SubmissionError(TransferError):
    """The wallet collaborator rejected or failed to submit the transfer call."""
