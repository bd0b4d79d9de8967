"""
Text to Speech v1 – voices, synthesis and custom voice models.

Schemas and descriptors are declared as data; :class:`TextToSpeechV1` only
binds each descriptor to a wrapper method.
"""

from typing import Optional

from ai_services_lib.core.decoder import DetailedResponse
from ai_services_lib.core.descriptor import (
    BodyEncoding,
    HeaderParam,
    HttpMethod,
    PathParam,
    QueryParam,
    RequestDescriptor,
    ResponseKind,
)
from ai_services_lib.core.options import Options
from ai_services_lib.data_models.schema import (
    ModelSchema,
    list_field,
    nested_field,
    scalar_field,
)
from ai_services_lib.services.service_interface import BaseService

# -------------------------------------------------------------------
# Response / body schemas
# -------------------------------------------------------------------
SUPPORTED_FEATURES = ModelSchema(
    name="SupportedFeatures",
    fields=(
        scalar_field("custom_pronunciation", bool),
        scalar_field("voice_transformation", bool),
    ),
)

TRANSLATION = ModelSchema(
    name="Translation",
    fields=(
        scalar_field("translation"),
        scalar_field("part_of_speech"),
    ),
)

WORD = ModelSchema(
    name="Word",
    fields=(
        scalar_field("word", required=True),
        scalar_field("translation", required=True),
        scalar_field("part_of_speech"),
    ),
)

WORDS = ModelSchema(
    name="Words",
    fields=(list_field("words", WORD, required=True),),
)

CUSTOM_MODEL = ModelSchema(
    name="CustomModel",
    fields=(
        scalar_field("customization_id"),
        scalar_field("name"),
        scalar_field("language"),
        scalar_field("owner"),
        scalar_field("created"),
        scalar_field("last_modified"),
        scalar_field("description"),
        list_field("words", WORD),
    ),
)

CUSTOM_MODELS = ModelSchema(
    name="CustomModels",
    fields=(list_field("customizations", CUSTOM_MODEL),),
)

VOICE = ModelSchema(
    name="Voice",
    fields=(
        scalar_field("url"),
        scalar_field("gender"),
        scalar_field("name"),
        scalar_field("language"),
        scalar_field("description"),
        scalar_field("customizable", bool),
        nested_field("supported_features", SUPPORTED_FEATURES),
        nested_field("customization", CUSTOM_MODEL),
    ),
)

VOICES = ModelSchema(
    name="Voices",
    fields=(list_field("voices", VOICE),),
)

SYNTHESIZE_BODY = ModelSchema(
    name="Text",
    fields=(scalar_field("text", required=True),),
)

CREATE_CUSTOM_MODEL_BODY = ModelSchema(
    name="CreateCustomModel",
    fields=(
        scalar_field("name", required=True),
        scalar_field("language", required=True),
        scalar_field("description"),
    ),
)

UPDATE_CUSTOM_MODEL_BODY = ModelSchema(
    name="UpdateCustomModel",
    fields=(
        scalar_field("name"),
        scalar_field("description"),
        list_field("words", WORD),
    ),
)

ADD_WORD_BODY = ModelSchema(
    name="Translation",
    fields=(
        scalar_field("translation", required=True),
        scalar_field("part_of_speech"),
    ),
)

# -------------------------------------------------------------------
# Operations
# -------------------------------------------------------------------
_CUSTOMIZATION_ID = PathParam(name="customization_id")
_WORD = PathParam(name="word")

LIST_VOICES = RequestDescriptor(
    operation_id="list_voices",
    method=HttpMethod.GET,
    path_template="/v1/voices",
    result_schema=VOICES,
)

GET_VOICE = RequestDescriptor(
    operation_id="get_voice",
    method=HttpMethod.GET,
    path_template="/v1/voices/{voice}",
    path_params=(PathParam(name="voice"),),
    query_params=(QueryParam(name="customization_id"),),
    result_schema=VOICE,
)

SYNTHESIZE = RequestDescriptor(
    operation_id="synthesize",
    method=HttpMethod.POST,
    path_template="/v1/synthesize",
    query_params=(
        QueryParam(name="voice"),
        QueryParam(name="customization_id"),
    ),
    header_params=(HeaderParam(name="accept", header="Accept"),),
    body_schema=SYNTHESIZE_BODY,
    body_encoding=BodyEncoding.JSON,
    response_kind=ResponseKind.BINARY,
    accept="audio/ogg;codecs=opus",
)

LIST_CUSTOM_MODELS = RequestDescriptor(
    operation_id="list_custom_models",
    method=HttpMethod.GET,
    path_template="/v1/customizations",
    query_params=(QueryParam(name="language"),),
    result_schema=CUSTOM_MODELS,
)

CREATE_CUSTOM_MODEL = RequestDescriptor(
    operation_id="create_custom_model",
    method=HttpMethod.POST,
    path_template="/v1/customizations",
    body_schema=CREATE_CUSTOM_MODEL_BODY,
    body_encoding=BodyEncoding.JSON,
    result_schema=CUSTOM_MODEL,
)

GET_CUSTOM_MODEL = RequestDescriptor(
    operation_id="get_custom_model",
    method=HttpMethod.GET,
    path_template="/v1/customizations/{customization_id}",
    path_params=(_CUSTOMIZATION_ID,),
    result_schema=CUSTOM_MODEL,
)

UPDATE_CUSTOM_MODEL = RequestDescriptor(
    operation_id="update_custom_model",
    method=HttpMethod.POST,
    path_template="/v1/customizations/{customization_id}",
    path_params=(_CUSTOMIZATION_ID,),
    body_schema=UPDATE_CUSTOM_MODEL_BODY,
    body_encoding=BodyEncoding.JSON,
)

DELETE_CUSTOM_MODEL = RequestDescriptor(
    operation_id="delete_custom_model",
    method=HttpMethod.DELETE,
    path_template="/v1/customizations/{customization_id}",
    path_params=(_CUSTOMIZATION_ID,),
)

LIST_WORDS = RequestDescriptor(
    operation_id="list_words",
    method=HttpMethod.GET,
    path_template="/v1/customizations/{customization_id}/words",
    path_params=(_CUSTOMIZATION_ID,),
    result_schema=WORDS,
)

ADD_WORDS = RequestDescriptor(
    operation_id="add_words",
    method=HttpMethod.POST,
    path_template="/v1/customizations/{customization_id}/words",
    path_params=(_CUSTOMIZATION_ID,),
    body_schema=WORDS,
    body_encoding=BodyEncoding.JSON,
)

GET_WORD = RequestDescriptor(
    operation_id="get_word",
    method=HttpMethod.GET,
    path_template="/v1/customizations/{customization_id}/words/{word}",
    path_params=(_CUSTOMIZATION_ID, _WORD),
    result_schema=TRANSLATION,
)

ADD_WORD = RequestDescriptor(
    operation_id="add_word",
    method=HttpMethod.PUT,
    path_template="/v1/customizations/{customization_id}/words/{word}",
    path_params=(_CUSTOMIZATION_ID, _WORD),
    body_schema=ADD_WORD_BODY,
    body_encoding=BodyEncoding.JSON,
)

DELETE_WORD = RequestDescriptor(
    operation_id="delete_word",
    method=HttpMethod.DELETE,
    path_template="/v1/customizations/{customization_id}/words/{word}",
    path_params=(_CUSTOMIZATION_ID, _WORD),
)


class TextToSpeechV1(BaseService):
    """
    Client for the Text to Speech v1 API.

    Every method accepts either built :class:`Options` for its descriptor or
    the same values as keyword arguments; keywords are applied on top of
    ``options`` when both are given.

    >>> tts = TextToSpeechV1(service_url="https://tts.example.com")
    >>> model = tts.create_custom_model(name="test model", language="en-US")
    >>> model.result.customization_id
    """

    service_name = "text_to_speech"

    # ------------------------------------------------------------------ #
    def list_voices(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(LIST_VOICES, options, kwargs)

    def get_voice(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(GET_VOICE, options, kwargs)

    def synthesize(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        """Result is the raw audio (``bytes``) in the format asked by ``accept``."""
        return self._run(SYNTHESIZE, options, kwargs)

    # ------------------------------------------------------------------ #
    def list_custom_models(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(LIST_CUSTOM_MODELS, options, kwargs)

    def create_custom_model(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(CREATE_CUSTOM_MODEL, options, kwargs)

    def get_custom_model(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(GET_CUSTOM_MODEL, options, kwargs)

    def update_custom_model(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(UPDATE_CUSTOM_MODEL, options, kwargs)

    def delete_custom_model(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(DELETE_CUSTOM_MODEL, options, kwargs)

    # ------------------------------------------------------------------ #
    def list_words(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(LIST_WORDS, options, kwargs)

    def add_words(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(ADD_WORDS, options, kwargs)

    def get_word(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(GET_WORD, options, kwargs)

    def add_word(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(ADD_WORD, options, kwargs)

    def delete_word(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(DELETE_WORD, options, kwargs)
