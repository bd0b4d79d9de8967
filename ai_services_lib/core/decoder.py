"""
Response decoder – turns a :class:`TransportResponse` into a typed result.

A success status yields a :class:`DetailedResponse`; any other status raises
a :class:`~ai_services_lib.exceptions.ServiceError` (or one of its
status‑specific subclasses).  A success whose body cannot be parsed raises
:class:`~ai_services_lib.exceptions.DecodingError` instead, so callers can
always tell a rejected request from an unreadable answer.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from requests.structures import CaseInsensitiveDict

from ai_services_lib.core.descriptor import (
    DEFAULT_SUCCESS_CODES,
    RequestDescriptor,
    ResponseKind,
)
from ai_services_lib.core.transport import TransportResponse
from ai_services_lib.data_models.codec import decode as decode_tree
from ai_services_lib.data_models.schema import (
    ModelSchema,
    list_field,
    scalar_field,
)
from ai_services_lib.exceptions import DecodingError, error_class_for_status

# Generic error body shared by every service: {code, message, errors?}.
# Some services put the text under ``error`` instead of ``message``.
GENERIC_ERROR_SCHEMA = ModelSchema(
    name="ErrorResponse",
    fields=(
        scalar_field("code", int),
        scalar_field("message"),
        scalar_field("error"),
        list_field("errors", dict),
    ),
)


@dataclass(frozen=True)
class DetailedResponse:
    """
    Successful call outcome.

    Attributes
    ----------
    result : Any
        ``TypedValue`` of the result schema, raw ``bytes`` for binary
        responses, or ``None`` for operations without a result schema.
    status_code : int
        HTTP status returned by the service.
    headers : CaseInsensitiveDict
        Response headers.
    """

    result: Any
    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)

    def get_result(self) -> Any:
        return self.result


def decode_response(
    response: TransportResponse,
    success_schema: Optional[ModelSchema],
    error_schema: ModelSchema = GENERIC_ERROR_SCHEMA,
    success_codes: Iterable[int] = DEFAULT_SUCCESS_CODES,
    response_kind: ResponseKind = ResponseKind.JSON,
) -> DetailedResponse:
    """
    Decode ``response`` with explicit schemas.

    Raises
    ------
    ServiceError
        For any status outside ``success_codes``.
    DecodingError
        When a success body is not valid JSON or does not fit the schema.
    """
    status = response.status_code
    if status not in tuple(success_codes):
        raise _service_error(response, error_schema)

    if response_kind is ResponseKind.BINARY:
        result = response.body
    elif success_schema is None:
        result = None
    elif status == 204:
        result = success_schema.empty()
    elif not response.body:
        raise DecodingError("Response body is empty", response.body)
    else:
        tree = _parse_json(response.body)
        try:
            result = decode_tree(tree, success_schema)
        except DecodingError as exc:
            raise DecodingError(exc.reason, response.body) from exc

    return DetailedResponse(
        result=result,
        status_code=status,
        headers=CaseInsensitiveDict(response.headers),
    )


def decode(
    response: TransportResponse,
    descriptor: RequestDescriptor,
    error_schema: ModelSchema = GENERIC_ERROR_SCHEMA,
) -> DetailedResponse:
    """Decode ``response`` according to the result settings of ``descriptor``."""
    return decode_response(
        response,
        success_schema=descriptor.result_schema,
        error_schema=error_schema,
        success_codes=descriptor.success_codes,
        response_kind=descriptor.response_kind,
    )


# ---------------------------------------------------------------------- #
def _parse_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodingError(f"Response body is not valid JSON: {exc}", body) from exc


def _service_error(response: TransportResponse, error_schema: ModelSchema):
    error_cls = error_class_for_status(response.status_code)
    try:
        value = decode_tree(json.loads(response.body), error_schema)
    except (UnicodeDecodeError, ValueError, DecodingError):
        return error_cls(response.status_code, raw_body=response.body)

    message = value.get("message")
    if message is None:
        message = value.get("error")
    errors = value.get("errors")
    return error_cls(
        response.status_code,
        code=value.get("code"),
        message=message,
        raw_body=response.body,
        errors=list(errors) if errors is not None else None,
    )
