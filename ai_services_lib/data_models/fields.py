"""
Building blocks shared by every model schema.

* :data:`ABSENT` – marker for a field that was never supplied.  It is kept
  distinct from ``None`` (an explicit JSON ``null``) all the way through the
  codec: absent fields are omitted from encoded JSON, ``None`` is written.
* :class:`FieldKind` – structural kind of a field.
* :class:`FileWithMetadata` – binary payload with optional filename and
  content type, routed to multipart encoding instead of JSON.
"""

import os
from enum import Enum
from typing import Any, BinaryIO, Optional, Union

from pydantic import BaseModel, ConfigDict


class _Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


class FieldKind(str, Enum):
    SCALAR = "scalar"
    LIST = "list"
    NESTED = "nested"
    FILE = "file"


class FileWithMetadata(BaseModel):
    """
    Binary content plus the metadata used for its multipart part.

    Attributes
    ----------
    data : bytes | BinaryIO
        Raw bytes or a readable binary stream.
    filename : Optional[str]
        Filename sent in ``Content-Disposition``; when omitted the wire name
        of the owning field is used.
    content_type : Optional[str]
        Content type of the part; ``application/octet-stream`` when omitted.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: Any
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @classmethod
    def from_path(
        cls, path: Union[str, os.PathLike], content_type: Optional[str] = None
    ) -> "FileWithMetadata":
        with open(path, "rb") as fh:
            data = fh.read()
        return cls(
            data=data, filename=os.path.basename(path), content_type=content_type
        )

    def read_bytes(self) -> bytes:
        if isinstance(self.data, (bytes, bytearray)):
            return bytes(self.data)
        stream: BinaryIO = self.data
        return stream.read()
