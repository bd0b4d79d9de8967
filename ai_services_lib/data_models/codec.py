"""
Field codec – conversion between :class:`TypedValue` and JSON trees.

``encode`` and ``decode`` are pure functions driven only by the schema:

* absent fields are omitted, explicit ``None`` becomes JSON ``null``;
* output members follow schema declaration order;
* unknown JSON members are ignored when decoding, missing ones stay absent;
* ``FILE`` fields never take part in JSON – the request materializer sends
  them as multipart parts instead.
"""

import math
from collections.abc import Mapping
from typing import Any, Dict

from ai_services_lib.data_models.fields import ABSENT, FieldKind
from ai_services_lib.data_models.schema import (
    FieldSpec,
    ModelSchema,
    TypedValue,
    matches_scalar,
)
from ai_services_lib.exceptions import DecodingError, EncodingError


def encode(value: TypedValue, schema: ModelSchema) -> Dict[str, Any]:
    """
    Encode ``value`` into a JSON‑compatible ``dict``.

    Raises
    ------
    EncodingError
        When the value belongs to another schema or holds something JSON
        cannot represent (non‑finite floats, arbitrary objects).
    """
    if not isinstance(value, TypedValue) or value.schema != schema:
        raise EncodingError(f"Value is not a {schema.name}: {value!r}")

    tree = {}
    for spec in schema.fields:
        if spec.kind is FieldKind.FILE:
            continue
        raw = value.get(spec.name, ABSENT)
        if raw is ABSENT:
            continue
        tree[spec.wire_name] = _encode_field(spec, raw, f"{schema.name}.{spec.name}")
    return tree


def decode(tree: Any, schema: ModelSchema) -> TypedValue:
    """
    Decode a parsed JSON object into a :class:`TypedValue` of ``schema``.

    Raises
    ------
    DecodingError
        When the tree (or any nested element) does not fit the schema.
    """
    return _decode_object(tree, schema, schema.name)


# ---------------------------------------------------------------------- #
def _encode_field(spec: FieldSpec, raw: Any, where: str) -> Any:
    if raw is None:
        return None
    if spec.kind is FieldKind.NESTED:
        return encode(raw, spec.nested_schema)
    if spec.kind is FieldKind.LIST:
        if spec.nested_schema is not None:
            return [encode(item, spec.nested_schema) for item in raw]
        return [_json_value(item, f"{where}[{i}]") for i, item in enumerate(raw)]
    return _json_value(raw, where)


def _json_value(value: Any, where: str) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodingError(f"{where}: {value!r} is not a valid JSON number")
        return value
    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodingError(f"{where}: object keys must be strings")
            out[key] = _json_value(item, f"{where}.{key}")
        return out
    if isinstance(value, (list, tuple)):
        return [_json_value(item, f"{where}[{i}]") for i, item in enumerate(value)]
    if isinstance(value, TypedValue):
        return encode(value, value.schema)
    raise EncodingError(f"{where}: {type(value).__name__} is not JSON serializable")


def _decode_object(tree: Any, schema: ModelSchema, where: str) -> TypedValue:
    if not isinstance(tree, dict):
        raise DecodingError(
            f"{where}: expected a JSON object, got {type(tree).__name__}"
        )

    values = {}
    for spec in schema.fields:
        if spec.kind is FieldKind.FILE or spec.wire_name not in tree:
            continue
        values[spec.name] = _decode_field(
            spec, tree[spec.wire_name], f"{where}.{spec.wire_name}"
        )
    return TypedValue(schema, values)


def _decode_field(spec: FieldSpec, raw: Any, where: str) -> Any:
    if raw is None:
        return None

    if spec.kind is FieldKind.NESTED:
        return _decode_object(raw, spec.nested_schema, where)

    if spec.kind is FieldKind.LIST:
        if not isinstance(raw, list):
            raise DecodingError(f"{where}: expected a JSON array")
        items = []
        for i, item in enumerate(raw):
            if spec.nested_schema is not None:
                items.append(_decode_object(item, spec.nested_schema, f"{where}[{i}]"))
            elif matches_scalar(item, spec.value_type):
                items.append(item)
            else:
                raise DecodingError(
                    f"{where}[{i}]: expected {spec.expected_kind}, "
                    f"got {type(item).__name__}"
                )
        return tuple(items)

    if not matches_scalar(raw, spec.value_type):
        raise DecodingError(
            f"{where}: expected {spec.expected_kind}, got {type(raw).__name__}"
        )
    return raw
