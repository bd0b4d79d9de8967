"""
Per‑service configuration read from the environment.

For a service named ``text_to_speech`` the following variables are read
(prefix is the upper‑cased service name):

* ``TEXT_TO_SPEECH_URL`` – service URL,
* ``TEXT_TO_SPEECH_AUTH_TYPE`` – ``noauth``, ``bearertoken`` or ``basic``,
* ``TEXT_TO_SPEECH_BEARER_TOKEN``,
* ``TEXT_TO_SPEECH_USERNAME`` / ``TEXT_TO_SPEECH_PASSWORD``,
* ``TEXT_TO_SPEECH_DISABLE_SSL`` – ``true`` to skip TLS verification.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from ai_services_lib.authenticators import (
    Authenticator,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    NoAuthAuthenticator,
)


class ServiceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_name: str
    url: Optional[str] = None
    auth_type: Optional[str] = None
    bearer_token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    disable_ssl: bool = False

    def build_authenticator(self) -> Authenticator:
        """
        Create the authenticator described by the configuration.

        Without an explicit ``AUTH_TYPE`` a bearer token wins over basic
        credentials; with neither, requests are sent unauthenticated.

        Raises
        ------
        ValueError
            For an unknown auth type or missing credentials.
        """
        auth_type = (self.auth_type or "").lower()
        if not auth_type:
            if self.bearer_token:
                auth_type = BearerTokenAuthenticator.AUTH_TYPE
            elif self.username or self.password:
                auth_type = BasicAuthenticator.AUTH_TYPE
            else:
                auth_type = NoAuthAuthenticator.AUTH_TYPE

        if auth_type == NoAuthAuthenticator.AUTH_TYPE:
            return NoAuthAuthenticator()
        if auth_type == BearerTokenAuthenticator.AUTH_TYPE:
            return BearerTokenAuthenticator(self.bearer_token)
        if auth_type == BasicAuthenticator.AUTH_TYPE:
            return BasicAuthenticator(self.username, self.password)
        raise ValueError(
            f"Unknown auth type {self.auth_type!r} for service {self.service_name}"
        )


def read_service_config(
    service_name: str, environ: Optional[Mapping[str, str]] = None
) -> ServiceConfig:
    env = os.environ if environ is None else environ
    prefix = service_name.upper().replace("-", "_")

    def _get(key: str) -> Optional[str]:
        value = env.get(f"{prefix}_{key}", "").strip()
        return value or None

    disable_ssl = (_get("DISABLE_SSL") or "").lower() in ("1", "true", "yes", "on")
    return ServiceConfig(
        service_name=service_name,
        url=_get("URL"),
        auth_type=_get("AUTH_TYPE"),
        bearer_token=_get("BEARER_TOKEN"),
        username=_get("USERNAME"),
        password=_get("PASSWORD"),
        disable_ssl=disable_ssl,
    )
