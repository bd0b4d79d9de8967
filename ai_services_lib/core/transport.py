"""
Plain request/response structures exchanged with the transport.

Both are frozen dataclasses; headers use ``requests``' case‑insensitive
dictionary so ``content-type`` and ``Content-Type`` address the same entry.
Producing a modified request (e.g. when an authenticator adds a header)
always yields a new object.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from requests.structures import CaseInsensitiveDict


@dataclass(frozen=True)
class TransportRequest:
    method: str
    url: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Optional[Any] = None

    def with_headers(self, headers: Mapping[str, str]) -> "TransportRequest":
        merged = CaseInsensitiveDict(self.headers)
        merged.update(headers)
        return dataclasses.replace(self, headers=merged)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""

    @classmethod
    def of(
        cls,
        status_code: int,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
    ) -> "TransportResponse":
        return cls(
            status_code=status_code,
            headers=CaseInsensitiveDict(headers or {}),
            body=body,
        )
