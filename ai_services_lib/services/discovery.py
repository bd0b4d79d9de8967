"""
Discovery v2 – collections, fields and document queries within a project.
"""

from typing import Optional

from ai_services_lib.core.decoder import DetailedResponse
from ai_services_lib.core.descriptor import (
    BodyEncoding,
    HttpMethod,
    ListStyle,
    PathParam,
    QueryParam,
    RequestDescriptor,
)
from ai_services_lib.core.options import Options
from ai_services_lib.data_models.schema import (
    ModelSchema,
    list_field,
    nested_field,
    scalar_field,
)
from ai_services_lib.services.service_interface import VersionedService

COLLECTION = ModelSchema(
    name="Collection",
    fields=(
        scalar_field("collection_id"),
        scalar_field("name"),
    ),
)

LIST_COLLECTIONS_RESPONSE = ModelSchema(
    name="ListCollectionsResponse",
    fields=(list_field("collections", COLLECTION),),
)

FIELD = ModelSchema(
    name="Field",
    fields=(
        scalar_field("field"),
        scalar_field("type"),
        scalar_field("collection_id"),
    ),
)

LIST_FIELDS = ModelSchema(
    name="ListFields",
    fields=(list_field("fields", FIELD),),
)

QUERY_RESULT_METADATA = ModelSchema(
    name="QueryResultMetadata",
    fields=(
        scalar_field("document_retrieval_source"),
        scalar_field("collection_id"),
        scalar_field("confidence", float),
    ),
)

QUERY_RESULT = ModelSchema(
    name="QueryResult",
    fields=(
        scalar_field("document_id"),
        scalar_field("metadata", dict),
        nested_field("result_metadata", QUERY_RESULT_METADATA),
        list_field("document_passages", dict),
    ),
)

QUERY_RESPONSE = ModelSchema(
    name="QueryResponse",
    fields=(
        scalar_field("matching_results", int),
        list_field("results", QUERY_RESULT),
        list_field("aggregations", dict),
        scalar_field("retrieval_details", dict),
        scalar_field("suggested_query"),
    ),
)

QUERY_BODY = ModelSchema(
    name="QueryLarge",
    fields=(
        list_field("collection_ids", str),
        scalar_field("filter"),
        scalar_field("query"),
        scalar_field("natural_language_query"),
        scalar_field("aggregation"),
        scalar_field("count", int),
        # ``return`` is a python keyword
        list_field("return", str, name="return_fields"),
        scalar_field("offset", int),
        scalar_field("sort"),
        scalar_field("highlight", bool),
        scalar_field("spelling_suggestions", bool),
    ),
)

# -------------------------------------------------------------------
# Operations
# -------------------------------------------------------------------
_VERSION = QueryParam(name="version", required=True)
_PROJECT_ID = PathParam(name="project_id")

LIST_COLLECTIONS = RequestDescriptor(
    operation_id="list_collections",
    method=HttpMethod.GET,
    path_template="/v2/projects/{project_id}/collections",
    path_params=(_PROJECT_ID,),
    query_params=(_VERSION,),
    result_schema=LIST_COLLECTIONS_RESPONSE,
)

QUERY = RequestDescriptor(
    operation_id="query",
    method=HttpMethod.POST,
    path_template="/v2/projects/{project_id}/query",
    path_params=(_PROJECT_ID,),
    query_params=(_VERSION,),
    body_schema=QUERY_BODY,
    body_encoding=BodyEncoding.JSON,
    result_schema=QUERY_RESPONSE,
)

LIST_FIELDS_OPERATION = RequestDescriptor(
    operation_id="list_fields",
    method=HttpMethod.GET,
    path_template="/v2/projects/{project_id}/fields",
    path_params=(_PROJECT_ID,),
    query_params=(
        _VERSION,
        QueryParam(name="collection_ids", list_style=ListStyle.COMMA),
    ),
    result_schema=LIST_FIELDS,
)


class DiscoveryV2(VersionedService):
    """Client for the Discovery v2 API."""

    service_name = "discovery"

    def list_collections(
        self, options: Optional[Options] = None, **kwargs
    ) -> DetailedResponse:
        return self._run(LIST_COLLECTIONS, options, kwargs)

    def query(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(QUERY, options, kwargs)

    def list_fields(self, options: Optional[Options] = None, **kwargs) -> DetailedResponse:
        return self._run(LIST_FIELDS_OPERATION, options, kwargs)
