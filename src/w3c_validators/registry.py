"""Registry mapping configured validator kinds to client classes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .feed import FeedValidator
from .markup import MarkupValidator
from .validator import Validator

if TYPE_CHECKING:
    from .config import ValidatorConfig


# Add new validator kinds here by registering their client class.
VALIDATOR_CLASSES: dict[str, type[Validator]] = {
    "markup": MarkupValidator,
    "feed": FeedValidator,
}


class UnknownValidatorError(ValueError):
    """Raised when a validator kind is not found in the registry."""


def get_validator_class(kind: str) -> type[Validator]:
    """Return the client class for ``kind``, or raise UnknownValidatorError."""
    cls = VALIDATOR_CLASSES.get(kind)
    if cls is None:
        known = ", ".join(sorted(VALIDATOR_CLASSES.keys()))
        raise UnknownValidatorError(f"Unknown validator kind '{kind}'. Known kinds: {known}")
    return cls


def create_validator(
    config: ValidatorConfig, options: Mapping[str, Any] | None = None
) -> Validator:
    """Build the client for a configured endpoint, bound to its URL."""
    cls = get_validator_class(config.kind)
    return cls(options, validator_uri=config.url)


def get_known_kinds() -> list[str]:
    """Return a sorted list of all registered validator kinds."""
    return sorted(VALIDATOR_CLASSES.keys())
