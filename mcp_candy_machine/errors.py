"""
Custom Exception Classes for Candy Machine Configuration

This module defines the exception classes raised while turning a Candy Machine
configuration document into program-ready values. Every validation failure is
terminal for the construction attempt: the first error encountered is raised
with the offending field path and value attached, and nothing partially built
is ever returned.

Exception Categories:
- Codec Errors: address, timestamp and fixed-length decoding
- Document Errors: missing fields, wrong JSON shapes, unknown enum tokens
- Configuration Errors: environment/settings problems outside the document

Usage:
    Catch CandyConfigError to handle any document problem; the subclasses
    identify the kind. CandyConfigError derives from ValueError so pydantic
    validators can raise it directly and have it wrapped into the validation
    error for the field being processed.
"""
from typing import Any, Optional


class CandyConfigError(ValueError):
    """Base class for configuration document errors."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def with_field(self, field: str) -> "CandyConfigError":
        """Returns a copy of this error bound to a document field path."""
        return type(self)(self.message, field=field, value=self.value)

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class InvalidAddressError(CandyConfigError):
    """Raised when an address is not valid base58 or does not decode to 32 bytes."""


class InvalidTimestampError(CandyConfigError):
    """Raised when a go-live date is not a strict RFC 3339 timestamp."""


class UnknownEnumValueError(CandyConfigError):
    """Raised when an enum token (upload method, whitelist mode, end setting type) is not recognised."""


class MissingRequiredFieldError(CandyConfigError):
    """Raised when a required document field is absent."""


class TypeMismatchError(CandyConfigError):
    """Raised when a field has the wrong JSON shape (or an out-of-range number)."""


class InvalidFixedLengthError(CandyConfigError):
    """Raised when a fixed-width byte field (the hidden settings hash) has the wrong length."""


class ConfigurationError(Exception):
    """Raised when there are configuration-related errors."""
