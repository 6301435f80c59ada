"""Request engine shared by the markup and feed validator clients.

The engine builds a query for a W3C validator endpoint (GET, HEAD or multipart
POST), performs a single HTTP round trip, and hands the raw response back to
the caller. Transport failures are translated into ``ValidatorUnavailable`` here
and nowhere else.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote_plus
from xml.etree.ElementTree import Element, ParseError

import requests
from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET
from requests import Response

from .exceptions import InvalidArgument, ParsingError, ValidatorUnavailable

VERSION = "0.9"
USER_AGENT = f"Python W3C Validators/{VERSION} (http://code.dunae.ca/w3c_validators/)"
HEAD_STATUS_HEADER = "X-W3C-Validator-Status"
HEAD_ERROR_COUNT_HEADER = "X-W3C-Validator-Errors"
SOAP_OUTPUT_PARAM = "soap12"
MULTIPART_BOUNDARY = "349832898984244898448024464570528145"
DEFAULT_UPLOAD_FILENAME = "temp.html"
REQUEST_TIMEOUT = 30

REQUEST_MODES = ("get", "head", "post")

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ValidatorStatus:
    """Validity summary read from the W3C status headers of a response."""

    status: str | None
    errors: int | None

    @property
    def is_valid(self) -> bool:
        return self.status == "Valid"


def _http_request(method: str, url: str, **kwargs: Any) -> Response:
    return requests.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)


def _format_value(value: Any) -> str:
    # the validators expect lowercase flags
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def create_query_string_data(parameters: Mapping[str, Any]) -> str:
    """Serialize truthy parameters as ``key=value&`` pairs, in mapping order.

    The trailing ``&`` is kept; the validators accept it.
    """
    qs = ""
    for key, value in parameters.items():
        if value:
            qs += f"{key}=" + quote_plus(_format_value(value)) + "&"
    return qs


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    return _format_value(value).encode("utf-8")


def create_multipart_data(parameters: Mapping[str, Any]) -> tuple[bytes, str]:
    """Encode parameters as a multipart/form-data body.

    An ``uploaded_file`` entry is emitted first as a file part named after
    ``file_path`` (``temp.html`` when absent, URL-escaped so quotes and line
    breaks cannot end the header); both keys are then left out of the
    remaining fields. The input mapping is not modified.

    Returns:
        ``(body, boundary)``; the boundary is always ``MULTIPART_BOUNDARY``.
    """
    boundary = MULTIPART_BOUNDARY
    crlf = "\r\n"
    parts: list[bytes] = []

    remaining = dict(parameters)
    if remaining.get("uploaded_file"):
        content = remaining.pop("uploaded_file")
        filename = quote_plus(str(remaining.pop("file_path", None) or DEFAULT_UPLOAD_FILENAME))
        header = (
            f'Content-Disposition: form-data; name="uploaded_file"; filename="{filename}"{crlf}'
            f"Content-Type: text/html{crlf}{crlf}"
        )
        parts.append(header.encode("utf-8") + _to_bytes(content) + crlf.encode("utf-8"))

    for key, value in remaining.items():
        if not value:
            continue
        header = f'Content-Disposition: form-data; name="{quote_plus(str(key))}"{crlf}{crlf}'
        parts.append(header.encode("utf-8") + _to_bytes(value) + crlf.encode("utf-8"))

    delimiter = f"--{boundary}{crlf}".encode("utf-8")
    body = b"".join(delimiter + part for part in parts)
    body += f"--{boundary}--{crlf}".encode("utf-8")
    return body, boundary


def read_local_file(file_path: str) -> str:
    """Return the full contents of a local document as text."""
    with open(file_path, encoding="utf-8") as fh:
        return fh.read()


def parse_response(response: Response) -> Element:
    """Parse a validator response body and return the XML root element.

    Raises:
        ParsingError: If the body is not well-formed XML.
    """
    try:
        return DefusedET.fromstring(response.content)
    except (ParseError, DefusedXmlException) as exc:
        raise ParsingError("unable to parse the response from the validator.") from exc


def validator_status(response: Response) -> ValidatorStatus:
    """Read the validity headers the validators attach to every response."""
    status = response.headers.get(HEAD_STATUS_HEADER)
    raw_errors = response.headers.get(HEAD_ERROR_COUNT_HEADER)
    try:
        errors = int(raw_errors) if raw_errors is not None else None
    except ValueError:
        errors = None
    return ValidatorStatus(status=status, errors=errors)


class Validator:
    """Base class for the markup and feed validator clients.

    Security notes:
    - Request bodies may contain the caller's documents; they are never logged.
    """

    def __init__(self, options: Mapping[str, Any] | None = None, *, validator_uri: str):
        if not validator_uri:
            raise InvalidArgument("a validator URI must be provided.")
        self.options: dict[str, Any] = dict(options or {})
        self.validator_uri = validator_uri

    def __repr__(self) -> str:
        return f"{type(self).__name__}(validator_uri={self.validator_uri!r})"

    def send_request(self, parameters: Mapping[str, Any], mode: str = "get") -> Response:
        """Perform one validation request and return the raw response.

        Args:
            parameters: request parameters; falsy values are not sent.
            mode: ``get``, ``head`` or ``post`` (multipart).

        Raises:
            InvalidArgument: If ``mode`` is unknown, or a HEAD request has no ``uri``.
            ValidatorUnavailable: If the validator cannot be reached or answers
                with a non-2xx status.
        """
        mode = str(mode).lower()
        if mode not in REQUEST_MODES:
            raise InvalidArgument("request mode must be either 'get', 'head' or 'post'")
        if mode == "head" and not parameters.get("uri"):
            raise InvalidArgument("a URI must be provided for HEAD requests.")

        method = mode.upper()
        headers = {"User-Agent": USER_AGENT}

        logger.debug("%s %s", method, self.validator_uri)
        try:
            if mode == "post":
                body, boundary = create_multipart_data(parameters)
                headers["Content-Type"] = "multipart/form-data; boundary=" + boundary
                response = _http_request(method, self.validator_uri, data=body, headers=headers)
            else:
                query = create_query_string_data(parameters)
                url = f"{self.validator_uri}?{query}"
                response = _http_request(method, url, headers=headers)
        except requests.RequestException as exc:
            logger.warning("validator at %s unreachable: %s", self.validator_uri, exc)
            raise ValidatorUnavailable(
                f"unable to connect to the validator at {self.validator_uri} (response was {exc})."
            ) from exc

        logger.debug("%s %s -> %s", method, self.validator_uri, response.status_code)
        if not 200 <= response.status_code < 300:
            logger.warning(
                "validator at %s answered %s", self.validator_uri, response.status_code
            )
            raise ValidatorUnavailable(
                f"unable to connect to the validator at {self.validator_uri} "
                f"(response was {response.status_code} {response.reason})."
            )

        return response

    def read_local_file(self, file_path: str) -> str:
        return read_local_file(file_path)
