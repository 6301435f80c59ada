"""Client for the W3C Feed Validation Service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from xml.etree.ElementTree import Element

from .validator import SOAP_OUTPUT_PARAM, Validator, parse_response

FEED_VALIDATOR_URI = "https://validator.w3.org/feed/check.cgi"


class FeedValidator(Validator):
    """Validate RSS and Atom feeds by URI, inline text or local file."""

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        validator_uri: str = FEED_VALIDATOR_URI,
    ):
        super().__init__(options, validator_uri=validator_uri)

    def validate_uri(self, uri: str) -> Element:
        params = {"url": uri, "output": SOAP_OUTPUT_PARAM}
        return parse_response(self.send_request(params, "get"))

    def validate_text(self, text: str) -> Element:
        params = {"rawdata": text, "manual": "1", "output": SOAP_OUTPUT_PARAM}
        return parse_response(self.send_request(params, "post"))

    def validate_file(self, file_path: str) -> Element:
        return self.validate_text(self.read_local_file(file_path))
