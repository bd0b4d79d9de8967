"""
Credential injection for outgoing requests.

An authenticator receives a fully materialized :class:`TransportRequest`
right before it is sent and returns a copy carrying the ``Authorization``
header.  Obtaining the credential itself (token exchange, refresh…) is the
caller's business – authenticators only hold what they were given.
"""

import abc
import base64

from ai_services_lib.core.transport import TransportRequest


class Authenticator(abc.ABC):
    AUTH_TYPE = ""

    @abc.abstractmethod
    def authenticate(self, request: TransportRequest) -> TransportRequest:
        pass


class NoAuthAuthenticator(Authenticator):
    """Sends requests unchanged (local deployments, tests)."""

    AUTH_TYPE = "noauth"

    def authenticate(self, request: TransportRequest) -> TransportRequest:
        return request


class BearerTokenAuthenticator(Authenticator):
    AUTH_TYPE = "bearertoken"

    def __init__(self, bearer_token: str):
        if not bearer_token:
            raise ValueError("bearer_token must be a non-empty string")
        self._bearer_token = bearer_token

    def set_bearer_token(self, bearer_token: str) -> None:
        if not bearer_token:
            raise ValueError("bearer_token must be a non-empty string")
        self._bearer_token = bearer_token

    def authenticate(self, request: TransportRequest) -> TransportRequest:
        return request.with_headers(
            {"Authorization": f"Bearer {self._bearer_token}"}
        )


class BasicAuthenticator(Authenticator):
    AUTH_TYPE = "basic"

    def __init__(self, username: str, password: str):
        if not username or not password:
            raise ValueError("username and password must be non-empty strings")
        token = base64.b64encode(f"{username}:{password}".encode("utf-8"))
        self._header_value = f"Basic {token.decode('ascii')}"

    def authenticate(self, request: TransportRequest) -> TransportRequest:
        return request.with_headers({"Authorization": self._header_value})
