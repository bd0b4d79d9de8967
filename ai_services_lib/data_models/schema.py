"""
Declarative model schemas and the immutable values that conform to them.

A :class:`ModelSchema` is an ordered, immutable set of :class:`FieldSpec`
describing one request or response shape.  Services declare their schemas as
module level constants; a single generic :class:`TypedValue` then holds the
data for any schema, so there is no per‑endpoint model class to write.

Example
-------
>>> WORD = ModelSchema(
...     name="Word",
...     fields=(
...         scalar_field("word", required=True),
...         scalar_field("translation", required=True),
...     ),
... )
>>> w = WORD.new(word="hodor", translation="hold the door")
>>> w.translation
'hold the door'
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from ai_services_lib.data_models.fields import ABSENT, FieldKind, FileWithMetadata
from ai_services_lib.exceptions import InvalidFieldType, MissingRequiredParameter

# Attributes of TypedValue; a field with one of these names would be hidden
_RESERVED_NAMES = frozenset(
    ("schema", "get", "is_set", "items", "evolve", "to_dict")
)


class FieldSpec(BaseModel):
    """
    Description of a single field of a model schema.

    Attributes
    ----------
    wire_name : str
        JSON member name used on the network.
    name : str
        In‑memory name used by callers; defaults to ``wire_name``.
    required : bool
        Whether a value must be present when building a value of the schema.
    kind : FieldKind
        Structural kind of the field.
    value_type : Optional[type]
        Python type of scalar values (or of list items).  ``None`` accepts
        any JSON value.
    nested_schema : Optional[ModelSchema]
        Schema of a ``NESTED`` field or of the items of a ``LIST`` field.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    wire_name: str
    name: str
    required: bool = False
    kind: FieldKind = FieldKind.SCALAR
    value_type: Optional[Any] = None
    nested_schema: Optional["ModelSchema"] = None

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("wire_name")}
        return data

    @model_validator(mode="after")
    def _check_kind(self) -> "FieldSpec":
        if self.kind is FieldKind.NESTED and self.nested_schema is None:
            raise ValueError(f"Nested field {self.wire_name!r} needs nested_schema")
        if self.kind in (FieldKind.SCALAR, FieldKind.FILE) and self.nested_schema:
            raise ValueError(
                f"Field {self.wire_name!r} of kind {self.kind.value} "
                f"cannot declare nested_schema"
            )
        return self

    @property
    def expected_kind(self) -> str:
        if self.kind is FieldKind.FILE:
            return "file"
        if self.kind is FieldKind.NESTED:
            return self.nested_schema.name
        item = (
            self.nested_schema.name
            if self.nested_schema is not None
            else _type_name(self.value_type)
        )
        if self.kind is FieldKind.LIST:
            return f"list of {item}"
        return item

    def check_value(self, value: Any) -> Any:
        """
        Validate ``value`` against this field and return the stored form.

        Lists are stored as tuples so a value never shares mutable state with
        the caller.  ``None`` (explicit null) is always structurally valid.

        Raises
        ------
        InvalidFieldType
            When the value does not match the declared kind.
        """
        if value is None:
            return None

        if self.kind is FieldKind.SCALAR:
            if not matches_scalar(value, self.value_type):
                raise InvalidFieldType(self.name, self.expected_kind, value)
            return value

        if self.kind is FieldKind.NESTED:
            if not self._is_nested_value(value):
                raise InvalidFieldType(self.name, self.expected_kind, value)
            return value

        if self.kind is FieldKind.LIST:
            if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
                raise InvalidFieldType(self.name, self.expected_kind, value)
            for item in value:
                if self.nested_schema is not None:
                    ok = self._is_nested_value(item)
                else:
                    ok = matches_scalar(item, self.value_type)
                if not ok:
                    raise InvalidFieldType(self.name, self.expected_kind, item)
            return tuple(value)

        if isinstance(value, (FileWithMetadata, bytes, bytearray)) or hasattr(
            value, "read"
        ):
            return value
        raise InvalidFieldType(self.name, self.expected_kind, value)

    def _is_nested_value(self, value: Any) -> bool:
        return isinstance(value, TypedValue) and value.schema == self.nested_schema


class ModelSchema(BaseModel):
    """
    Ordered, immutable set of field specifications for one JSON shape.

    Wire names and in‑memory names must both be unique within a schema, and
    in‑memory names may not shadow a :class:`TypedValue` attribute (map such
    wire names with ``name=``, as done for ``class`` -> ``class_name``).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    fields: Tuple[FieldSpec, ...] = ()

    @model_validator(mode="after")
    def _check_unique_names(self) -> "ModelSchema":
        wire_seen, name_seen = set(), set()
        for spec in self.fields:
            if spec.wire_name in wire_seen:
                raise ValueError(
                    f"Duplicated wire name {spec.wire_name!r} in schema {self.name}"
                )
            if spec.name in _RESERVED_NAMES:
                raise ValueError(
                    f"Field name {spec.name!r} of schema {self.name} clashes with a "
                    f"TypedValue attribute; map wire name {spec.wire_name!r} to "
                    f"another name="
                )
            if spec.name in name_seen:
                raise ValueError(
                    f"Duplicated field name {spec.name!r} in schema {self.name}"
                )
            wire_seen.add(spec.wire_name)
            name_seen.add(spec.name)
        return self

    # ------------------------------------------------------------------ #
    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def has_files(self) -> bool:
        return any(spec.kind is FieldKind.FILE for spec in self.fields)

    def new(self, **values: Any) -> "TypedValue":
        """
        Build a validated :class:`TypedValue` of this schema.

        Keyword names are in‑memory field names.  Values are type‑checked
        first, then required fields are verified in declaration order.

        Raises
        ------
        InvalidFieldType
            For an unknown field name or a value of the wrong kind.
        MissingRequiredParameter
            For the first required field that is absent or ``None``.
        """
        checked = {}
        for key, value in values.items():
            if value is ABSENT:
                continue
            spec = self.field(key)
            if spec is None:
                raise InvalidFieldType(key, f"a field of {self.name}", value)
            checked[key] = spec.check_value(value)

        for spec in self.fields:
            if spec.required and checked.get(spec.name) is None:
                raise MissingRequiredParameter(spec.name)

        return TypedValue(self, checked)

    def empty(self) -> "TypedValue":
        """Value with every field absent (used for bodiless success responses)."""
        return TypedValue(self, {})


class TypedValue:
    """
    Immutable value conforming to exactly one :class:`ModelSchema`.

    Fields are read as attributes (``value.name``); an absent field reads as
    ``None``.  Use :meth:`is_set` or :meth:`get` with the default
    :data:`ABSENT` to tell an absent field from an explicit ``null``.
    JSON objects and arrays are held as read‑only copies (``MappingProxyType``
    and tuples).
    """

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: ModelSchema, values: Optional[Mapping] = None):
        values = dict(values or {})
        for key in values:
            if schema.field(key) is None:
                raise InvalidFieldType(key, f"a field of {schema.name}", values[key])
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(
            self,
            "_values",
            {
                spec.name: _freeze(values[spec.name])
                for spec in schema.fields
                if spec.name in values and values[spec.name] is not ABSENT
            },
        )

    @property
    def schema(self) -> ModelSchema:
        return self._schema

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if self._schema.field(name) is None:
            raise AttributeError(
                f"{self._schema.name!r} value has no field {name!r}"
            )
        return self._values.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self._schema.name} values are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self._schema.name} values are immutable")

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def is_set(self, name: str) -> bool:
        return name in self._values

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._values.items())

    def evolve(self, **changes: Any) -> "TypedValue":
        """Return a validated copy with ``changes`` applied (``ABSENT`` unsets)."""
        merged = {**self._values, **changes}
        return self._schema.new(
            **{k: v for k, v in merged.items() if v is not ABSENT}
        )

    def to_dict(self) -> Dict[str, Any]:
        """Present fields as plain python data, keyed by in‑memory names."""
        return {key: _plain(value) for key, value in self._values.items()}

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TypedValue):
            return NotImplemented
        return self._schema == other._schema and self._values == other._values

    __hash__ = None

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"{self._schema.name}({body})"

    def __reduce__(self):
        return (
            TypedValue,
            (self._schema, {k: _thaw(v) for k, v in self._values.items()}),
        )


def scalar_field(
    wire_name: str,
    value_type: Any = str,
    required: bool = False,
    name: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(
        wire_name=wire_name, name=name, required=required, value_type=value_type
    )


def list_field(
    wire_name: str,
    item: Any = str,
    required: bool = False,
    name: Optional[str] = None,
) -> FieldSpec:
    """List field; ``item`` is either a :class:`ModelSchema` or a scalar type."""
    if isinstance(item, ModelSchema):
        return FieldSpec(
            wire_name=wire_name,
            name=name,
            required=required,
            kind=FieldKind.LIST,
            nested_schema=item,
        )
    return FieldSpec(
        wire_name=wire_name,
        name=name,
        required=required,
        kind=FieldKind.LIST,
        value_type=item,
    )


def nested_field(
    wire_name: str,
    schema: ModelSchema,
    required: bool = False,
    name: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(
        wire_name=wire_name,
        name=name,
        required=required,
        kind=FieldKind.NESTED,
        nested_schema=schema,
    )


def file_field(
    wire_name: str, required: bool = False, name: Optional[str] = None
) -> FieldSpec:
    return FieldSpec(
        wire_name=wire_name, name=name, required=required, kind=FieldKind.FILE
    )


def matches_scalar(value: Any, value_type: Any) -> bool:
    # bool is a subclass of int in python, but never a number on the wire
    if value_type is None:
        return isinstance(value, (str, int, float, bool, list, tuple, Mapping))
    if value_type is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if value_type is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if value_type is dict:
        return isinstance(value, Mapping)
    return isinstance(value, value_type)


def _type_name(value_type: Any) -> str:
    if value_type is None:
        return "JSON value"
    return getattr(value_type, "__name__", str(value_type))


def _plain(value: Any) -> Any:
    if isinstance(value, TypedValue):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


def _freeze(value: Any) -> Any:
    # JSON objects and arrays held by a value are read-only copies
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


FieldSpec.model_rebuild()
