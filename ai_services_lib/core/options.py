"""
Options builder – fluent, order independent assembly of call arguments.

Every setter type‑checks its value immediately (``InvalidFieldType``) and
returns the builder so calls can be chained.  :meth:`OptionsBuilder.build`
verifies required values in declaration order (path, query, header, body)
and produces an immutable :class:`Options`; nothing is encoded and nothing
is sent before this succeeds.

>>> options = (
...     OptionsBuilder(CREATE_CUSTOM_MODEL)
...     .set(name="test model", language="en-US")
...     .build()
... )
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ai_services_lib.core.descriptor import BodyEncoding, RequestDescriptor
from ai_services_lib.data_models.fields import ABSENT
from ai_services_lib.data_models.schema import TypedValue
from ai_services_lib.exceptions import InvalidFieldType, MissingRequiredParameter


@dataclass(frozen=True)
class Options:
    """Validated argument bundle for a single call of ``descriptor``."""

    descriptor: RequestDescriptor
    path_values: Mapping[str, Any] = field(default_factory=dict)
    query_values: Mapping[str, Any] = field(default_factory=dict)
    header_values: Mapping[str, Any] = field(default_factory=dict)
    body: Optional[Any] = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Read any option by its parameter (or body field) name."""
        for values in (self.path_values, self.query_values, self.header_values):
            if name in values:
                return values[name]
        if isinstance(self.body, TypedValue):
            return self.body.get(name, default)
        return default

    def new_builder(self) -> "OptionsBuilder":
        """Return a builder pre‑populated with these options."""
        builder = OptionsBuilder(self.descriptor)
        builder._path.update(self.path_values)
        builder._query.update(self.query_values)
        builder._headers.update(self.header_values)
        builder._extra_headers.update(self.extra_headers)
        if isinstance(self.body, TypedValue):
            builder._body_fields.update(self.body.items())
        elif self.body is not None:
            builder._raw_body = self.body
        return builder


class OptionsBuilder:
    """
    Generic builder for the options of one :class:`RequestDescriptor`.

    Setters
    -------
    * :meth:`path_param`, :meth:`query_param`, :meth:`header_param` – declared
      parameters by name,
    * :meth:`body_field` – one field of the body schema,
    * :meth:`body` – the whole body (a ``TypedValue`` of the body schema or,
      for raw bodies, bytes / a readable stream),
    * :meth:`header` – an extra, undeclared header,
    * :meth:`set` – keyword shortcut routing each name to its location.
    """

    def __init__(self, descriptor: RequestDescriptor):
        self._descriptor = descriptor
        self._path: Dict[str, Any] = {}
        self._query: Dict[str, Any] = {}
        self._headers: Dict[str, Any] = {}
        self._body_fields: Dict[str, Any] = {}
        self._raw_body: Any = ABSENT
        self._extra_headers: Dict[str, str] = {}

    @property
    def descriptor(self) -> RequestDescriptor:
        return self._descriptor

    # ------------------------------------------------------------------ #
    def path_param(self, name: str, value: Any) -> "OptionsBuilder":
        return self._set_param("path", self._path, name, value)

    def query_param(self, name: str, value: Any) -> "OptionsBuilder":
        return self._set_param("query", self._query, name, value)

    def header_param(self, name: str, value: Any) -> "OptionsBuilder":
        return self._set_param("header", self._headers, name, value)

    def body_field(self, name: str, value: Any) -> "OptionsBuilder":
        location, spec = self._descriptor.parameter(name)
        if location != "body":
            raise InvalidFieldType(
                name, f"a body field of {self._descriptor.operation_id}", value
            )
        if value is ABSENT:
            self._body_fields.pop(name, None)
        else:
            self._body_fields[name] = spec.check_value(value)
        return self

    def body(self, value: Any) -> "OptionsBuilder":
        encoding = self._descriptor.body_encoding
        if encoding is BodyEncoding.RAW:
            if not (isinstance(value, (bytes, bytearray)) or hasattr(value, "read")):
                raise InvalidFieldType("body", "bytes or binary stream", value)
            self._raw_body = value
            return self

        schema = self._descriptor.body_schema
        if schema is None:
            raise InvalidFieldType(
                "body", f"no body for {self._descriptor.operation_id}", value
            )
        if not isinstance(value, TypedValue) or value.schema != schema:
            raise InvalidFieldType("body", schema.name, value)
        self._body_fields = dict(value.items())
        return self

    def header(self, name: str, value: str) -> "OptionsBuilder":
        if not isinstance(value, str):
            raise InvalidFieldType(name, "str", value)
        self._extra_headers[name] = value
        return self

    def set(self, **values: Any) -> "OptionsBuilder":
        for name, value in values.items():
            location, _ = self._descriptor.parameter(name)
            if location == "path":
                self.path_param(name, value)
            elif location == "query":
                self.query_param(name, value)
            elif location == "header":
                self.header_param(name, value)
            elif location == "body":
                self.body_field(name, value)
            elif name == "body":
                self.body(value)
            else:
                raise InvalidFieldType(
                    name, f"a parameter of {self._descriptor.operation_id}", value
                )
        return self

    # ------------------------------------------------------------------ #
    def build(self) -> Options:
        """
        Validate required values and freeze the options.

        Raises
        ------
        MissingRequiredParameter
            Naming the first missing value in declaration order.
        """
        d = self._descriptor
        for param in d.path_params:
            value = self._path.get(param.name)
            if value is None or value == "":
                raise MissingRequiredParameter(param.name)
        for param in d.query_params:
            value = self._query.get(param.name)
            # an empty list is omitted from the query string
            if param.required and (
                value is None or (param.list_style is not None and not value)
            ):
                raise MissingRequiredParameter(param.name)
        for param in d.header_params:
            if param.required and self._headers.get(param.name) is None:
                raise MissingRequiredParameter(param.name)

        body = None
        if d.body_schema is not None:
            for spec in d.body_schema.fields:
                if spec.required and self._body_fields.get(spec.name) is None:
                    raise MissingRequiredParameter(spec.name)
            body = TypedValue(d.body_schema, self._body_fields)
        elif d.body_encoding is BodyEncoding.RAW:
            if self._raw_body is ABSENT:
                if d.body_required:
                    raise MissingRequiredParameter("body")
            else:
                body = self._raw_body

        return Options(
            descriptor=d,
            path_values=MappingProxyType(dict(self._path)),
            query_values=MappingProxyType(dict(self._query)),
            header_values=MappingProxyType(dict(self._headers)),
            body=body,
            extra_headers=MappingProxyType(dict(self._extra_headers)),
        )

    # ------------------------------------------------------------------ #
    def _set_param(
        self, location: str, target: Dict[str, Any], name: str, value: Any
    ) -> "OptionsBuilder":
        found, param = self._descriptor.parameter(name)
        if found != location:
            raise InvalidFieldType(
                name,
                f"a {location} parameter of {self._descriptor.operation_id}",
                value,
            )
        if value is ABSENT or value is None:
            target.pop(name, None)
        else:
            target[name] = param.check_value(value)
        return self
