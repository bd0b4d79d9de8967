from ai_services_lib.authenticators import (
    NoAuthAuthenticator,
    BearerTokenAuthenticator,
    BasicAuthenticator,
)
from ai_services_lib.core import OptionsBuilder, RequestDescriptor, DetailedResponse
from ai_services_lib.data_models import ABSENT, ModelSchema, TypedValue
from ai_services_lib.exceptions import (
    AIServicesError,
    MissingRequiredParameter,
    InvalidFieldType,
    EncodingError,
    DecodingError,
    ServiceError,
    TransportError,
)
from ai_services_lib.services import (
    TextToSpeechV1,
    VisualRecognitionV3,
    DiscoveryV2,
    NaturalLanguageUnderstandingV1,
)

__all__ = [
    "NoAuthAuthenticator",
    "BearerTokenAuthenticator",
    "BasicAuthenticator",
    "OptionsBuilder",
    "RequestDescriptor",
    "DetailedResponse",
    "ABSENT",
    "ModelSchema",
    "TypedValue",
    "AIServicesError",
    "MissingRequiredParameter",
    "InvalidFieldType",
    "EncodingError",
    "DecodingError",
    "ServiceError",
    "TransportError",
    "TextToSpeechV1",
    "VisualRecognitionV3",
    "DiscoveryV2",
    "NaturalLanguageUnderstandingV1",
]
