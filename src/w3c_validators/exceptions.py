"""Error types raised by the validator clients."""

from __future__ import annotations


class ValidatorError(RuntimeError):
    """Base error for failures while talking to a W3C validator."""


class InvalidArgument(ValidatorError, ValueError):
    """Raised before any network I/O when a request is malformed."""


class ValidatorUnavailable(ValidatorError):
    """Raised when the validator cannot be reached or answers with an error status."""


class ParsingError(ValidatorError):
    """Raised when the validator response is not well-formed XML."""
