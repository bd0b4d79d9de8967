"""
Service layer executing declared operations.

:class:`BaseService` knows how to run any :class:`RequestDescriptor`:

    Options -> materialize -> authenticate -> transport.send -> decode

Concrete services only declare their schemas and descriptors as module
constants and expose one thin wrapper method per operation; each wrapper
accepts either ready :class:`Options` or keyword arguments.
"""

import abc
import logging
from typing import Any, Dict, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from ai_services_lib.authenticators import Authenticator, NoAuthAuthenticator
from ai_services_lib.config import read_service_config
from ai_services_lib.constants import DISABLE_SSL_VERIFICATION, USER_AGENT
from ai_services_lib.core.decoder import DetailedResponse, decode
from ai_services_lib.core.descriptor import RequestDescriptor
from ai_services_lib.core.materializer import materialize
from ai_services_lib.core.options import Options, OptionsBuilder
from ai_services_lib.core.transport import TransportRequest
from ai_services_lib.utils.http import RequestsTransport, Transport
from ai_services_lib.utils.logger import prepare_logger


class BaseService(abc.ABC):
    """
    Abstract base class for service clients.

    Sub‑classes set ``service_name`` (used to read environment configuration)
    and ``default_service_url``.

    Parameters
    ----------
    authenticator : Optional[Authenticator]
        Injects credentials into every request; no authentication when
        omitted.
    service_url : Optional[str]
        Base URL of the service; defaults to ``default_service_url``.
    transport : Optional[Transport]
        Delivers requests; a :class:`RequestsTransport` when omitted.
    headers : Optional[Mapping[str, str]]
        Default headers sent with every request.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, the service module logger is prepared
        with :func:`~ai_services_lib.utils.logger.prepare_logger`.
    """

    # Name used for environment configuration (``<NAME>_URL`` …)
    service_name: str = ""

    # URL used when none is configured
    default_service_url: str = ""

    def __init__(
        self,
        authenticator: Optional[Authenticator] = None,
        service_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        headers: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or prepare_logger(type(self).__module__)
        self.authenticator = authenticator or NoAuthAuthenticator()
        self.transport = transport or RequestsTransport(logger=self.logger)
        self.service_url = (service_url or self.default_service_url).rstrip("/")
        self._default_headers = CaseInsensitiveDict({"User-Agent": USER_AGENT})
        if headers:
            self._default_headers.update(headers)

    @classmethod
    def from_environment(
        cls,
        service_name: Optional[str] = None,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
        environ: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> "BaseService":
        """
        Create the service from ``<SERVICE_NAME>_*`` environment variables.

        Extra keyword arguments are passed to the constructor (e.g. ``version``).
        """
        config = read_service_config(service_name or cls.service_name, environ)
        if transport is None:
            transport = RequestsTransport(
                disable_ssl_verification=config.disable_ssl
                or DISABLE_SSL_VERIFICATION,
                logger=logger,
            )
        return cls(
            authenticator=config.build_authenticator(),
            service_url=config.url,
            transport=transport,
            logger=logger,
            **kwargs,
        )

    # ------------------------------------------------------------------ #
    def set_service_url(self, service_url: str) -> None:
        if not service_url:
            raise ValueError("service_url must be a non-empty string")
        self.service_url = service_url.rstrip("/")

    def set_default_headers(self, headers: Mapping[str, str]) -> None:
        """Add (or replace) headers sent with every request."""
        self._default_headers.update(headers)

    @property
    def default_headers(self) -> Dict[str, str]:
        return dict(self._default_headers)

    # ------------------------------------------------------------------ #
    def prepare_request(
        self, descriptor: RequestDescriptor, options: Optional[Options] = None
    ) -> TransportRequest:
        """
        Materialize and authenticate the request without sending it.

        Raises
        ------
        ValueError
            When no service URL is configured.
        """
        if not self.service_url:
            raise ValueError(f"No service URL configured for {type(self).__name__}")
        if options is None:
            options = OptionsBuilder(descriptor).build()
        request = materialize(
            options, descriptor, self.service_url, self._default_headers
        )
        return self.authenticator.authenticate(request)

    def call(
        self, descriptor: RequestDescriptor, options: Optional[Options] = None
    ) -> DetailedResponse:
        """
        Execute ``descriptor`` and return the decoded response.

        Raises
        ------
        ServiceError
            When the service answers with a non‑success status.
        DecodingError
            When a successful answer cannot be decoded.
        TransportError
            When the request could not be delivered.
        """
        request = self.prepare_request(descriptor, options)
        self.logger.debug(
            "%s: %s %s", descriptor.operation_id, request.method, request.url
        )
        response = self.transport.send(request)
        return decode(response, descriptor)

    def _run(
        self,
        descriptor: RequestDescriptor,
        options: Optional[Options],
        values: Dict[str, Any],
    ) -> DetailedResponse:
        if options is None:
            builder = OptionsBuilder(descriptor)
        else:
            builder = options.new_builder()
        return self.call(descriptor, builder.set(**values).build())


class VersionedService(BaseService):
    """
    Service whose operations carry a required ``version`` query parameter.

    The version date given at construction is added to every call unless
    the caller supplies one explicitly.
    """

    def __init__(self, version: str, **kwargs: Any) -> None:
        if not version:
            raise ValueError("version must be a non-empty string")
        super().__init__(**kwargs)
        self.version = version

    def _run(
        self,
        descriptor: RequestDescriptor,
        options: Optional[Options],
        values: Dict[str, Any],
    ) -> DetailedResponse:
        location, _ = descriptor.parameter("version")
        if location == "query" and values.get("version") is None:
            if options is None or options.get("version") is None:
                values = {**values, "version": self.version}
        return super()._run(descriptor, options, values)
