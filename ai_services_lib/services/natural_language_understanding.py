"""
Natural Language Understanding v1 – text analysis and custom models.

``analyze`` takes a nested ``features`` object; build it from the feature
option schemas, e.g.::

    features = FEATURES.new(categories=CATEGORIES_OPTIONS.new(limit=3))
    nlu.analyze(text="...", features=features)
"""

from typing import Optional

from ai_services_lib.core.decoder import DetailedResponse
from ai_services_lib.core.descriptor import (
    BodyEncoding,
    HttpMethod,
    PathParam,
    QueryParam,
    RequestDescriptor,
)
from ai_services_lib.core.options import Options
from ai_services_lib.data_models.schema import (
    ModelSchema,
    file_field,
    list_field,
    nested_field,
    scalar_field,
)
from ai_services_lib.services.service_interface import VersionedService

# -------------------------------------------------------------------
# Request schemas
# -------------------------------------------------------------------
CATEGORIES_OPTIONS = ModelSchema(
    name="CategoriesOptions",
    fields=(
        scalar_field("explanation", bool),
        scalar_field("limit", int),
        scalar_field("model"),
    ),
)

KEYWORDS_OPTIONS = ModelSchema(
    name="KeywordsOptions",
    fields=(
        scalar_field("limit", int),
        scalar_field("sentiment", bool),
        scalar_field("emotion", bool),
    ),
)

FEATURES = ModelSchema(
    name="Features",
    fields=(
        nested_field("categories", CATEGORIES_OPTIONS),
        nested_field("keywords", KEYWORDS_OPTIONS),
    ),
)

ANALYZE_BODY = ModelSchema(
    name="Parameters",
    fields=(
        nested_field("features", FEATURES, required=True),
        scalar_field("text"),
        scalar_field("html"),
        scalar_field("url"),
        scalar_field("clean", bool),
        scalar_field("language"),
        scalar_field("return_analyzed_text", bool),
        scalar_field("limit_text_characters", int),
    ),
)

CREATE_CATEGORIES_MODEL_BODY = ModelSchema(
    name="CreateCategoriesModel",
    fields=(
        scalar_field("language", required=True),
        file_field("training_data", required=True),
        scalar_field("name"),
        scalar_field("description"),
        scalar_field("model_version"),
        scalar_field("workspace_id"),
        scalar_field("version_description"),
    ),
)

# -------------------------------------------------------------------
# Response schemas
# -------------------------------------------------------------------
CATEGORIES_RELEVANT_TEXT = ModelSchema(
    name="CategoriesRelevantText",
    fields=(scalar_field("text"),),
)

CATEGORIES_RESULT_EXPLANATION = ModelSchema(
    name="CategoriesResultExplanation",
    fields=(list_field("relevant_text", CATEGORIES_RELEVANT_TEXT),),
)

CATEGORIES_RESULT = ModelSchema(
    name="CategoriesResult",
    fields=(
        scalar_field("label"),
        scalar_field("score", float),
        nested_field("explanation", CATEGORIES_RESULT_EXPLANATION),
    ),
)

KEYWORDS_RESULT = ModelSchema(
    name="KeywordsResult",
    fields=(
        scalar_field("text"),
        scalar_field("relevance", float),
        scalar_field("count", int),
    ),
)

ANALYSIS_RESULTS = ModelSchema(
    name="AnalysisResults",
    fields=(
        scalar_field("language"),
        scalar_field("analyzed_text"),
        scalar_field("retrieved_url"),
        scalar_field("usage", dict),
        list_field("categories", CATEGORIES_RESULT),
        list_field("keywords", KEYWORDS_RESULT),
    ),
)

CATEGORIES_MODEL = ModelSchema(
    name="CategoriesModel",
    fields=(
        scalar_field("name"),
        scalar_field("user_metadata", dict),
        scalar_field("language"),
        scalar_field("description"),
        scalar_field("model_version"),
        scalar_field("workspace_id"),
        scalar_field("version_description"),
        list_field("features", str),
        scalar_field("status"),
        scalar_field("model_id"),
        scalar_field("created"),
        scalar_field("last_trained"),
        scalar_field("last_deployed"),
    ),
)

LIST_MODELS_RESULTS = ModelSchema(
    name="ListModelsResults",
    fields=(list_field("models", CATEGORIES_MODEL),),
)

DELETE_MODEL_RESULTS = ModelSchema(
    name="DeleteModelResults",
    fields=(scalar_field("deleted"),),
)

# -------------------------------------------------------------------
# Operations
# -------------------------------------------------------------------
_VERSION = QueryParam(name="version", required=True)

ANALYZE = RequestDescriptor(
    operation_id="analyze",
    method=HttpMethod.POST,
    path_template="/v1/analyze",
    query_params=(_VERSION,),
    body_schema=ANALYZE_BODY,
    body_encoding=BodyEncoding.JSON,
    result_schema=ANALYSIS_RESULTS,
)

CREATE_CATEGORIES_MODEL = RequestDescriptor(
    operation_id="create_categories_model",
    method=HttpMethod.POST,
    path_template="/v1/models/categories",
    query_params=(_VERSION,),
    body_schema=CREATE_CATEGORIES_MODEL_BODY,
    body_encoding=BodyEncoding.MULTIPART,
    result_schema=CATEGORIES_MODEL,
    success_codes=(201,),
)

LIST_MODELS = RequestDescriptor(
    operation_id="list_models",
    method=HttpMethod.GET,
    path_template="/v1/models",
    query_params=(_VERSION,),
    result_schema=LIST_MODELS_RESULTS,
)

DELETE_MODEL = RequestDescriptor(
    operation_id="delete_model",
    method=HttpMethod.DELETE,
    path_template="/v1/models/{model_id}",
    path_params=(PathParam(name="model_id"),),
    query_params=(_VERSION,),
    result_schema=DELETE_MODEL_RESULTS,
)


class NaturalLanguageUnderstandingV1(VersionedService):
    """Client for the Natural Language Understanding v1 API."""

    service_name = "natural_language_understanding"

    def analyze(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(ANALYZE, options, kwargs)

    def create_categories_model(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(CREATE_CATEGORIES_MODEL, options, kwargs)

    def list_models(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(LIST_MODELS, options, kwargs)

    def delete_model(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(DELETE_MODEL, options, kwargs)
