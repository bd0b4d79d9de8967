"""
Visual Recognition v3 – image classification and classifier management.

``classify`` is sent as ``multipart/form-data``: the image archive travels as
a binary part, list options (``owners``, ``classifier_ids``) as comma joined
text parts.  The wire member ``class`` is exposed as ``class_name``.
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

CLASS_RESULT = ModelSchema(
    name="ClassResult",
    fields=(
        scalar_field("class", name="class_name"),
        scalar_field("score", float),
        scalar_field("type_hierarchy"),
    ),
)

CLASSIFIER_RESULT = ModelSchema(
    name="ClassifierResult",
    fields=(
        scalar_field("name"),
        scalar_field("classifier_id"),
        list_field("classes", CLASS_RESULT),
    ),
)

ERROR_INFO = ModelSchema(
    name="ErrorInfo",
    fields=(
        scalar_field("code", int),
        scalar_field("description"),
        scalar_field("error_id"),
    ),
)

WARNING_INFO = ModelSchema(
    name="WarningInfo",
    fields=(
        scalar_field("warning_id"),
        scalar_field("description"),
    ),
)

CLASSIFIED_IMAGE = ModelSchema(
    name="ClassifiedImage",
    fields=(
        scalar_field("source_url"),
        scalar_field("resolved_url"),
        scalar_field("image"),
        nested_field("error", ERROR_INFO),
        list_field("classifiers", CLASSIFIER_RESULT),
    ),
)

CLASSIFIED_IMAGES = ModelSchema(
    name="ClassifiedImages",
    fields=(
        scalar_field("custom_classes", int),
        scalar_field("images_processed", int),
        list_field("images", CLASSIFIED_IMAGE),
        list_field("warnings", WARNING_INFO),
    ),
)

CLASS_NAME = ModelSchema(
    name="Class",
    fields=(scalar_field("class", name="class_name"),),
)

CLASSIFIER = ModelSchema(
    name="Classifier",
    fields=(
        scalar_field("classifier_id"),
        scalar_field("name"),
        scalar_field("owner"),
        scalar_field("status"),
        scalar_field("core_ml_enabled", bool),
        scalar_field("explanation"),
        scalar_field("created"),
        list_field("classes", CLASS_NAME),
        scalar_field("retrained"),
        scalar_field("updated"),
    ),
)

CLASSIFIERS = ModelSchema(
    name="Classifiers",
    fields=(list_field("classifiers", CLASSIFIER),),
)

CLASSIFY_BODY = ModelSchema(
    name="Classify",
    fields=(
        file_field("images_file"),
        scalar_field("url"),
        scalar_field("threshold", float),
        list_field("owners", str),
        list_field("classifier_ids", str),
    ),
)

# -------------------------------------------------------------------
# Operations
# -------------------------------------------------------------------
_VERSION = QueryParam(name="version", required=True)
_CLASSIFIER_ID = PathParam(name="classifier_id")

CLASSIFY = RequestDescriptor(
    operation_id="classify",
    method=HttpMethod.POST,
    path_template="/v3/classify",
    query_params=(_VERSION,),
    header_params=(HeaderParam(name="accept_language", header="Accept-Language"),),
    body_schema=CLASSIFY_BODY,
    body_encoding=BodyEncoding.MULTIPART,
    result_schema=CLASSIFIED_IMAGES,
)

LIST_CLASSIFIERS = RequestDescriptor(
    operation_id="list_classifiers",
    method=HttpMethod.GET,
    path_template="/v3/classifiers",
    query_params=(_VERSION, QueryParam(name="verbose", value_type=bool)),
    result_schema=CLASSIFIERS,
)

GET_CLASSIFIER = RequestDescriptor(
    operation_id="get_classifier",
    method=HttpMethod.GET,
    path_template="/v3/classifiers/{classifier_id}",
    path_params=(_CLASSIFIER_ID,),
    query_params=(_VERSION,),
    result_schema=CLASSIFIER,
)

DELETE_CLASSIFIER = RequestDescriptor(
    operation_id="delete_classifier",
    method=HttpMethod.DELETE,
    path_template="/v3/classifiers/{classifier_id}",
    path_params=(_CLASSIFIER_ID,),
    query_params=(_VERSION,),
)


class VisualRecognitionV3(VersionedService):
    """Client for the Visual Recognition v3 API (``version`` is a date, e.g. ``2018-03-19``)."""

    service_name = "visual_recognition"

    def classify(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(CLASSIFY, options, kwargs)

    def list_classifiers(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(LIST_CLASSIFIERS, options, kwargs)

    def get_classifier(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(GET_CLASSIFIER, options, kwargs)

    def delete_classifier(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(DELETE_CLASSIFIER, options, kwargs)
