"""
Transport layer built on ``requests``, with retries and logging.

The core library only needs a ``send(TransportRequest) -> TransportResponse``
capability, described by :class:`Transport`.  :class:`RequestsTransport` is
the default implementation.  It centralises:

* a shared ``requests.Session``,
* a configurable retry policy via ``urllib3.Retry``,
* per‑request timeout and optional disabled TLS verification,
* conversion of connection level failures into :class:`TransportError`.

Non‑successful HTTP statuses are *not* errors at this level; the response is
returned untouched and interpreted by the response decoder.
"""

import abc
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from urllib3.util.retry import Retry

from ai_services_lib.constants import (
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    DISABLE_SSL_VERIFICATION,
)
from ai_services_lib.core.transport import TransportRequest, TransportResponse
from ai_services_lib.exceptions import TransportError


class Transport(abc.ABC):
    """Capability of delivering a request and returning the raw response."""

    @abc.abstractmethod
    def send(self, request: TransportRequest) -> TransportResponse:
        pass


class RequestsTransport(Transport):
    """
    ``requests`` based transport with built‑in retries.

    Parameters
    ----------
    timeout : int, default ``DEFAULT_TIMEOUT``
        Per‑request timeout in seconds.
    retries : int, default ``DEFAULT_RETRIES``
        Number of retry attempts for transient failures (status codes in
        ``status_forcelist`` and connection errors).  The back‑off factor is
        ``0.5`` seconds.
    disable_ssl_verification : bool
        Skip TLS certificate verification.
    logger : Optional[logging.Logger]
        Logger instance; if omitted, a module‑level logger is used.
    session : Optional[requests.Session]
        Pre‑configured session; a new one is created when omitted.
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        disable_ssl_verification: bool = DISABLE_SSL_VERIFICATION,
        logger: Optional[logging.Logger] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.verify = not disable_ssl_verification
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()

        # retry‑policy; the last response is returned instead of raising
        retry_strategy = Retry(
            total=retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD", "PUT", "DELETE"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def send(self, request: TransportRequest) -> TransportResponse:
        """
        Send ``request`` and return the raw response.

        Raises
        ------
        TransportError
            When ``requests`` fails to deliver the request (DNS, TLS,
            connection reset, timeout, exhausted retries).
        """
        self.logger.debug("%s %s", request.method, request.url)
        try:
            resp = self.session.request(
                method=request.method,
                url=request.url,
                headers=dict(request.headers),
                data=request.body,
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as exc:
            self.logger.error("%s %s failed: %s", request.method, request.url, exc)
            raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        self.logger.debug(
            "%s %s -> HTTP %s", request.method, request.url, resp.status_code
        )
        return TransportResponse(
            status_code=resp.status_code,
            headers=CaseInsensitiveDict(resp.headers),
            body=resp.content,
        )

    def close(self) -> None:
        self.session.close()
