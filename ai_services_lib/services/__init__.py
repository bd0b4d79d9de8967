from ai_services_lib.services.service_interface import BaseService, VersionedService
from ai_services_lib.services.text_to_speech import TextToSpeechV1
from ai_services_lib.services.visual_recognition import VisualRecognitionV3
from ai_services_lib.services.discovery import DiscoveryV2
from ai_services_lib.services.natural_language_understanding import (
    NaturalLanguageUnderstandingV1,
)

__all__ = [
    "BaseService",
    "VersionedService",
    "TextToSpeechV1",
    "VisualRecognitionV3",
    "DiscoveryV2",
    "NaturalLanguageUnderstandingV1",
]
