from ai_services_lib.core.descriptor import (
    HttpMethod,
    BodyEncoding,
    ListStyle,
    ResponseKind,
    PathParam,
    QueryParam,
    HeaderParam,
    RequestDescriptor,
)
from ai_services_lib.core.options import Options, OptionsBuilder
from ai_services_lib.core.transport import TransportRequest, TransportResponse
from ai_services_lib.core.materializer import materialize
from ai_services_lib.core.decoder import (
    GENERIC_ERROR_SCHEMA,
    DetailedResponse,
    decode,
    decode_response,
)

__all__ = [
    "HttpMethod",
    "BodyEncoding",
    "ListStyle",
    "ResponseKind",
    "PathParam",
    "QueryParam",
    "HeaderParam",
    "RequestDescriptor",
    "Options",
    "OptionsBuilder",
    "TransportRequest",
    "TransportResponse",
    "materialize",
    "GENERIC_ERROR_SCHEMA",
    "DetailedResponse",
    "decode",
    "decode_response",
]
