import json

import pytest

from ai_services_lib.core.transport import TransportRequest, TransportResponse
from ai_services_lib.services.text_to_speech import TextToSpeechV1
from ai_services_lib.utils.http import Transport

SERVICE_URL = "https://ai.example.com"


class FakeTransport(Transport):
    """Records every request and replies with queued responses (default 200 + empty JSON object)."""

    def __init__(self):
        self.requests = []
        self._responses = []

    def enqueue(self, status_code=200, body=b"", headers=None):
        headers = dict(headers or {})
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
            headers.setdefault("Content-Type", "application/json")
        self._responses.append(TransportResponse.of(status_code, body, headers))

    def send(self, request: TransportRequest) -> TransportResponse:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return TransportResponse.of(200, b"{}", {"Content-Type": "application/json"})

    @property
    def last_request(self) -> TransportRequest:
        return self.requests[-1]


def _path_of(request: TransportRequest) -> str:
    return request.url[len(SERVICE_URL):]


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def tts(transport):
    return TextToSpeechV1(service_url=SERVICE_URL, transport=transport)


@pytest.fixture
def path_of():
    return _path_of
