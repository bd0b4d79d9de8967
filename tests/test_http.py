from unittest import mock

import pytest
import requests

from ai_services_lib.core.transport import TransportRequest
from ai_services_lib.exceptions import TransportError
from ai_services_lib.utils.http import RequestsTransport


def _response(status_code=200, content=b"{}", headers=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = content
    resp.headers.update(headers or {"Content-Type": "application/json"})
    return resp


@pytest.fixture
def session():
    return mock.create_autospec(requests.Session, instance=True)


class TestRequestsTransport:
    def test_send_passes_request_through(self, session):
        session.request.return_value = _response(201, b'{"ok":true}')
        transport = RequestsTransport(timeout=5, session=session)
        request = TransportRequest(
            method="POST",
            url="https://ai.example.com/v1/customizations",
            headers={"Content-Type": "application/json"},
            body=b'{"name":"x"}',
        )

        response = transport.send(request)

        session.request.assert_called_once_with(
            method="POST",
            url="https://ai.example.com/v1/customizations",
            headers={"Content-Type": "application/json"},
            data=b'{"name":"x"}',
            timeout=5,
            verify=True,
        )
        assert response.status_code == 201
        assert response.body == b'{"ok":true}'
        assert response.headers["content-type"] == "application/json"

    def test_error_status_is_not_raised(self, session):
        session.request.return_value = _response(500, b"boom")
        response = RequestsTransport(session=session).send(
            TransportRequest(method="GET", url="https://ai.example.com/v1/voices")
        )
        assert response.status_code == 500
        assert response.body == b"boom"

    def test_connection_failure(self, session):
        session.request.side_effect = requests.ConnectionError("refused")
        transport = RequestsTransport(session=session)
        with pytest.raises(TransportError) as exc:
            transport.send(
                TransportRequest(method="GET", url="https://ai.example.com/v1/voices")
            )
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

    def test_timeout(self, session):
        session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(TransportError):
            RequestsTransport(session=session).send(
                TransportRequest(method="GET", url="https://ai.example.com/v1/voices")
            )

    def test_disable_ssl_verification(self, session):
        session.request.return_value = _response()
        RequestsTransport(disable_ssl_verification=True, session=session).send(
            TransportRequest(method="GET", url="https://ai.example.com/v1/voices")
        )
        assert session.request.call_args.kwargs["verify"] is False

    def test_retry_policy_is_mounted(self):
        transport = RequestsTransport(retries=4)
        adapter = transport.session.get_adapter("https://ai.example.com")
        retry = adapter.max_retries
        assert retry.total == 4
        assert 503 in retry.status_forcelist
        assert "POST" not in retry.allowed_methods
        assert retry.raise_on_status is False
        transport.close()

    def test_close(self, session):
        RequestsTransport(session=session).close()
        session.close.assert_called_once_with()
