"""Client for the W3C Markup Validation Service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any
from xml.etree.ElementTree import Element

from .validator import (
    SOAP_OUTPUT_PARAM,
    Validator,
    ValidatorStatus,
    parse_response,
    validator_status,
)

MARKUP_VALIDATOR_URI = "https://validator.w3.org/check"

# Options forwarded verbatim as request parameters.
MARKUP_OPTIONS = ("charset", "doctype", "group", "debug", "ss", "outline", "verbose")


class MarkupValidator(Validator):
    """Validate HTML/XHTML documents by URI, inline text or local file."""

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        validator_uri: str = MARKUP_VALIDATOR_URI,
    ):
        super().__init__(options, validator_uri=validator_uri)

    def _parameters(self, **extra: Any) -> dict[str, Any]:
        params: dict[str, Any] = {name: self.options.get(name) for name in MARKUP_OPTIONS}
        params.update(extra)
        params["output"] = SOAP_OUTPUT_PARAM
        return params

    def validate_uri(self, uri: str) -> Element:
        """Validate the document published at ``uri``."""
        return parse_response(self.send_request(self._parameters(uri=uri), "get"))

    def validate_text(self, text: str) -> Element:
        """Validate an inline markup fragment."""
        return parse_response(self.send_request(self._parameters(fragment=text), "post"))

    def validate_file(self, file_path: str) -> Element:
        """Upload and validate a local file."""
        content = self.read_local_file(file_path)
        params = self._parameters(uploaded_file=content, file_path=os.path.basename(file_path))
        return parse_response(self.send_request(params, "post"))

    def validate_uri_quickly(self, uri: str) -> ValidatorStatus:
        """Check ``uri`` with a HEAD request, reading only the status headers."""
        response = self.send_request(self._parameters(uri=uri), "head")
        return validator_status(response)
