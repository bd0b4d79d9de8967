"""
Request materializer – binds :class:`Options` to a descriptor and base URL.

The result is a :class:`TransportRequest` ready to be handed to a transport.
The function performs no I/O; it only resolves the path, renders the query
string, encodes the body and merges headers.

Header precedence (later wins):

1. service default headers,
2. ``Accept`` from the descriptor,
3. ``Content-Type`` of the encoded body,
4. declared header parameters,
5. caller supplied extra headers.
"""

import json
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from requests.structures import CaseInsensitiveDict
from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from ai_services_lib.constants import CONTENT_TYPE_JSON, CONTENT_TYPE_OCTET_STREAM
from ai_services_lib.core.descriptor import (
    BodyEncoding,
    RequestDescriptor,
    ResponseKind,
    render_value,
)
from ai_services_lib.core.options import Options
from ai_services_lib.core.transport import TransportRequest
from ai_services_lib.data_models.codec import encode
from ai_services_lib.data_models.fields import FieldKind, FileWithMetadata
from ai_services_lib.data_models.schema import TypedValue
from ai_services_lib.exceptions import EncodingError, InvalidFieldType


def materialize(
    options: Options,
    descriptor: RequestDescriptor,
    base_url: str,
    default_headers: Optional[Mapping[str, str]] = None,
) -> TransportRequest:
    """
    Produce the transport request for one call.

    Parameters
    ----------
    options : Options
        Built options; must have been built for ``descriptor``.
    descriptor : RequestDescriptor
        Operation description.
    base_url : str
        Service URL, a trailing ``/`` is ignored.
    default_headers : Optional[Mapping[str, str]]
        Headers sent with every request of the service.

    Returns
    -------
    TransportRequest

    Raises
    ------
    InvalidFieldType
        When ``options`` were built for another operation.
    EncodingError
        When the body cannot be encoded.
    """
    if options.descriptor != descriptor:
        raise InvalidFieldType(
            "options", f"options of {descriptor.operation_id}", options
        )

    url = base_url.rstrip("/") + descriptor.resolve_path(options.path_values)
    query = descriptor.build_query_string(options.query_values)
    if query:
        url = f"{url}?{query}"

    headers = CaseInsensitiveDict(default_headers or {})
    accept = descriptor.accept
    if (
        accept is None
        and descriptor.result_schema is not None
        and descriptor.response_kind is ResponseKind.JSON
    ):
        accept = CONTENT_TYPE_JSON
    if accept is not None:
        headers["Accept"] = accept

    body, content_type = _encode_body(options, descriptor)
    if content_type is not None:
        headers["Content-Type"] = content_type

    for param in descriptor.header_params:
        value = options.header_values.get(param.name)
        if value is not None:
            headers[param.header] = render_value(value)

    headers.update(options.extra_headers)

    return TransportRequest(
        method=descriptor.method.value, url=url, headers=headers, body=body
    )


# ---------------------------------------------------------------------- #
def _encode_body(
    options: Options, descriptor: RequestDescriptor
) -> Tuple[Optional[Any], Optional[str]]:
    encoding = descriptor.body_encoding
    if encoding is BodyEncoding.NONE:
        return None, None

    if encoding is BodyEncoding.RAW:
        if options.body is None:
            return None, None
        return options.body, CONTENT_TYPE_OCTET_STREAM

    if encoding is BodyEncoding.JSON:
        tree = encode(options.body, descriptor.body_schema)
        payload = _dumps(tree, descriptor.operation_id)
        return payload.encode("utf-8"), CONTENT_TYPE_JSON

    return encode_multipart_formdata(_multipart_fields(options.body))


def _multipart_fields(body: TypedValue) -> List[RequestField]:
    """One part per present body field, in schema declaration order."""
    fields = []
    for spec in body.schema.fields:
        if not body.is_set(spec.name):
            continue
        value = body.get(spec.name)
        if value is None:
            continue

        if spec.kind is FieldKind.FILE:
            fields.append(_file_part(spec.wire_name, value))
            continue

        if spec.kind is FieldKind.SCALAR and not isinstance(
            value, (Mapping, list, tuple)
        ):
            part = RequestField(name=spec.wire_name, data=render_value(value))
            part.make_multipart()
        elif spec.kind is FieldKind.LIST and spec.nested_schema is None:
            part = RequestField(
                name=spec.wire_name,
                data=",".join(render_value(item) for item in value),
            )
            part.make_multipart()
        else:
            part = RequestField(
                name=spec.wire_name,
                data=_dumps(_json_tree(value), spec.wire_name),
            )
            part.make_multipart(content_type=CONTENT_TYPE_JSON)
        fields.append(part)
    return fields


def _file_part(wire_name: str, value: Any) -> RequestField:
    if isinstance(value, FileWithMetadata):
        data = value.read_bytes()
        filename = value.filename or wire_name
        content_type = value.content_type or CONTENT_TYPE_OCTET_STREAM
    else:
        data = bytes(value) if isinstance(value, (bytes, bytearray)) else value.read()
        filename = wire_name
        content_type = CONTENT_TYPE_OCTET_STREAM

    part = RequestField(name=wire_name, data=data, filename=filename)
    part.make_multipart(content_type=content_type)
    return part


def _json_tree(value: Any) -> Any:
    if isinstance(value, TypedValue):
        return encode(value, value.schema)
    if isinstance(value, Mapping):
        return {key: _json_tree(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_tree(item) for item in value]
    return value


def _dumps(tree: Any, where: str) -> str:
    try:
        return json.dumps(
            tree, ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"{where}: {exc}") from exc
