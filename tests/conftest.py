from __future__ import annotations

from typing import Any

import pytest
import requests

from w3c_validators import validator as validator_mod

SOAP_BODY = b"""<?xml version="1.0" encoding="UTF-8"?>
<env:Envelope xmlns:env="http://www.w3.org/2003/05/soap-envelope">
  <env:Body>
    <m:markupvalidationresponse xmlns:m="http://www.w3.org/2005/10/markup-validator">
      <m:validity>true</m:validity>
    </m:markupvalidationresponse>
  </env:Body>
</env:Envelope>
"""


def make_response(
    status: int = 200,
    body: bytes = SOAP_BODY,
    headers: dict[str, str] | None = None,
    reason: str = "OK",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response._content = body
    response.headers.update(headers or {})
    return response


class RecordingTransport:
    """Stands in for the HTTP layer and remembers every request it was given."""

    def __init__(self, response: requests.Response | None = None):
        self.response = response or make_response()
        self.calls: list[dict[str, Any]] = []

    def __call__(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.response

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def transport(monkeypatch) -> RecordingTransport:
    recorder = RecordingTransport()
    monkeypatch.setattr(validator_mod, "_http_request", recorder)
    return recorder


@pytest.fixture(name="make_response")
def make_response_fixture():
    return make_response
