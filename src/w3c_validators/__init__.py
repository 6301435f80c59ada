"""Python client for the W3C Markup and Feed Validation Services."""

from .config import (
    ConfigError,
    Settings,
    ValidatorConfig,
    load_settings,
    validate_validator_kinds,
)
from .exceptions import (
    InvalidArgument,
    ParsingError,
    ValidatorError,
    ValidatorUnavailable,
)
from .feed import FEED_VALIDATOR_URI, FeedValidator
from .markup import MARKUP_VALIDATOR_URI, MarkupValidator
from .registry import (
    VALIDATOR_CLASSES,
    UnknownValidatorError,
    create_validator,
    get_known_kinds,
    get_validator_class,
)
from .validator import (
    MULTIPART_BOUNDARY,
    USER_AGENT,
    VERSION,
    Validator,
    ValidatorStatus,
    create_multipart_data,
    create_query_string_data,
    parse_response,
    read_local_file,
    validator_status,
)

__version__ = VERSION

__all__ = [
    # Request engine
    "MULTIPART_BOUNDARY",
    "USER_AGENT",
    "VERSION",
    "Validator",
    "ValidatorStatus",
    "create_multipart_data",
    "create_query_string_data",
    "parse_response",
    "read_local_file",
    "validator_status",
    # Clients
    "FEED_VALIDATOR_URI",
    "FeedValidator",
    "MARKUP_VALIDATOR_URI",
    "MarkupValidator",
    # Errors
    "InvalidArgument",
    "ParsingError",
    "ValidatorError",
    "ValidatorUnavailable",
    # Configuration
    "ConfigError",
    "Settings",
    "ValidatorConfig",
    "load_settings",
    "validate_validator_kinds",
    # Registry
    "VALIDATOR_CLASSES",
    "UnknownValidatorError",
    "create_validator",
    "get_known_kinds",
    "get_validator_class",
]
