"""
Request descriptors – one immutable, validated description per API operation.

A descriptor states *what* an operation looks like on the wire: HTTP verb,
path template with ``{name}`` placeholders, path/query/header parameters,
body schema and encoding, result schema and accepted success codes.  It is
defined once at import time (services keep them as module constants) and is
never mutated; definition mistakes surface immediately as a pydantic
``ValidationError``.

Path values are percent‑encoded one segment at a time, so ``"café/x"``
becomes ``caf%C3%A9%2Fx`` and can never introduce an extra path segment.
"""

import re
from enum import Enum
from typing import Any, Mapping, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, model_validator

from ai_services_lib.data_models.fields import ABSENT
from ai_services_lib.data_models.schema import ModelSchema, matches_scalar
from ai_services_lib.exceptions import InvalidFieldType, MissingRequiredParameter

_PLACEHOLDER = re.compile(r"{([A-Za-z_][A-Za-z0-9_]*)}")

DEFAULT_SUCCESS_CODES = tuple(range(200, 300))


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"


class BodyEncoding(str, Enum):
    NONE = "none"
    JSON = "json"
    MULTIPART = "multipart"
    RAW = "raw"


class ListStyle(str, Enum):
    # k=a&k=b
    REPEAT = "repeat"
    # k=a,b
    COMMA = "comma"


class ResponseKind(str, Enum):
    JSON = "json"
    BINARY = "binary"


class _Param(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    value_type: Optional[Any] = str

    def check_value(self, value: Any) -> Any:
        if not matches_scalar(value, self.value_type):
            raise InvalidFieldType(self.name, _type_label(self.value_type), value)
        return value


class PathParam(_Param):
    """Path placeholder; always required and never empty."""


class QueryParam(_Param):
    """
    Query string parameter.

    ``list_style`` is ``None`` for scalar parameters; list parameters fix
    their serialization (repeated key or comma join) here, per parameter.
    """

    wire_name: str = ""
    required: bool = False
    list_style: Optional[ListStyle] = None

    @model_validator(mode="before")
    @classmethod
    def _default_wire_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("wire_name"):
            data = {**data, "wire_name": data.get("name")}
        return data

    def check_value(self, value: Any) -> Any:
        if self.list_style is None:
            return super().check_value(value)
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise InvalidFieldType(
                self.name, f"list of {_type_label(self.value_type)}", value
            )
        for item in value:
            super().check_value(item)
        return tuple(value)


class HeaderParam(_Param):
    """Operation header (e.g. ``Accept`` or ``Content-Language``)."""

    header: str
    required: bool = False


class RequestDescriptor(BaseModel):
    """
    Static description of a single REST operation.

    Attributes
    ----------
    operation_id : str
        Identifier used in logs (e.g. ``"create_custom_model"``).
    method : HttpMethod
        HTTP verb.
    path_template : str
        Path with ``{name}`` placeholders, e.g. ``/v1/customizations/{customization_id}``.
    path_params, query_params, header_params : tuple
        Declared parameters, in declaration order.
    body_schema : Optional[ModelSchema]
        Schema of the JSON or multipart body.
    body_encoding : BodyEncoding
        How the body is sent; ``RAW`` sends caller supplied bytes/stream.
    body_required : bool
        For ``RAW`` bodies – whether the body must be supplied.
    result_schema : Optional[ModelSchema]
        Schema of a successful JSON response; ``None`` for operations
        without a result.
    response_kind : ResponseKind
        ``BINARY`` returns the raw response bytes (e.g. synthesized audio).
    accept : Optional[str]
        Default ``Accept`` header.
    success_codes : tuple of int
        Status codes decoded as success.
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str
    method: HttpMethod
    path_template: str
    path_params: Tuple[PathParam, ...] = ()
    query_params: Tuple[QueryParam, ...] = ()
    header_params: Tuple[HeaderParam, ...] = ()
    body_schema: Optional[ModelSchema] = None
    body_encoding: BodyEncoding = BodyEncoding.NONE
    body_required: bool = False
    result_schema: Optional[ModelSchema] = None
    response_kind: ResponseKind = ResponseKind.JSON
    accept: Optional[str] = None
    success_codes: Tuple[int, ...] = DEFAULT_SUCCESS_CODES

    @model_validator(mode="after")
    def _validate_definition(self) -> "RequestDescriptor":
        placeholders = _PLACEHOLDER.findall(self.path_template)
        if len(placeholders) != len(set(placeholders)):
            raise ValueError(
                f"{self.operation_id}: repeated placeholder in {self.path_template!r}"
            )
        declared = [p.name for p in self.path_params]
        if set(placeholders) != set(declared) or len(declared) != len(set(declared)):
            raise ValueError(
                f"{self.operation_id}: path params {declared} do not match "
                f"placeholders {placeholders} of {self.path_template!r}"
            )

        encoding = self.body_encoding
        if encoding in (BodyEncoding.JSON, BodyEncoding.MULTIPART):
            if self.body_schema is None:
                raise ValueError(
                    f"{self.operation_id}: {encoding.value} body needs body_schema"
                )
        elif self.body_schema is not None:
            raise ValueError(
                f"{self.operation_id}: {encoding.value} body cannot use body_schema"
            )
        if (
            encoding is BodyEncoding.JSON
            and self.body_schema.has_files()
        ):
            raise ValueError(
                f"{self.operation_id}: file fields require multipart encoding"
            )
        if self.body_required and encoding is not BodyEncoding.RAW:
            raise ValueError(f"{self.operation_id}: body_required is for raw bodies")

        names = declared + [p.name for p in self.query_params]
        names += [p.name for p in self.header_params]
        if self.body_schema is not None:
            names += list(self.body_schema.field_names)
        duplicated = sorted({n for n in names if names.count(n) > 1})
        if duplicated:
            raise ValueError(
                f"{self.operation_id}: parameter names are not unique: {duplicated}"
            )
        return self

    # ------------------------------------------------------------------ #
    def parameter(self, name: str) -> Tuple[Optional[str], Any]:
        """
        Locate a declared parameter by name.

        Returns
        -------
        tuple
            ``(location, spec)`` where location is one of ``"path"``,
            ``"query"``, ``"header"``, ``"body"`` – or ``(None, None)``.
        """
        for location, params in (
            ("path", self.path_params),
            ("query", self.query_params),
            ("header", self.header_params),
        ):
            for param in params:
                if param.name == name:
                    return location, param
        if self.body_schema is not None:
            spec = self.body_schema.field(name)
            if spec is not None:
                return "body", spec
        return None, None

    def resolve_path(self, values: Mapping[str, Any]) -> str:
        """
        Substitute every placeholder with its percent‑encoded value.

        Raises
        ------
        MissingRequiredParameter
            When a path value is absent, ``None`` or empty.
        """

        def _substitute(match: "re.Match") -> str:
            name = match.group(1)
            value = values.get(name, ABSENT)
            if value is ABSENT or value is None or render_value(value) == "":
                raise MissingRequiredParameter(name)
            return quote(render_value(value), safe="")

        return _PLACEHOLDER.sub(_substitute, self.path_template)

    def build_query_string(self, values: Mapping[str, Any]) -> str:
        """
        Build ``name=value`` pairs in declaration order, skipping absent ones.

        Empty lists count as absent.  No leading ``?`` is added.
        """
        pairs = []
        for param in self.query_params:
            value = values.get(param.name, ABSENT)
            if value is ABSENT or value is None:
                continue
            key = quote(param.wire_name, safe="")
            if param.list_style is None:
                pairs.append(f"{key}={quote(render_value(value), safe='')}")
                continue
            if not value:
                continue
            encoded = [quote(render_value(item), safe="") for item in value]
            if param.list_style is ListStyle.REPEAT:
                pairs.extend(f"{key}={item}" for item in encoded)
            else:
                pairs.append(f"{key}={','.join(encoded)}")
        return "&".join(pairs)


def render_value(value: Any) -> str:
    """String form of a scalar parameter (booleans as ``true``/``false``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _type_label(value_type: Any) -> str:
    if value_type is None:
        return "scalar"
    return getattr(value_type, "__name__", str(value_type))
