import pytest
from pydantic import ValidationError

from ai_services_lib.core.descriptor import (
    BodyEncoding,
    HeaderParam,
    HttpMethod,
    ListStyle,
    PathParam,
    QueryParam,
    RequestDescriptor,
    render_value,
)
from ai_services_lib.data_models import ABSENT, ModelSchema, file_field, scalar_field
from ai_services_lib.exceptions import InvalidFieldType, MissingRequiredParameter

BODY = ModelSchema(name="Body", fields=(scalar_field("name"),))
UPLOAD = ModelSchema(name="Upload", fields=(file_field("file"),))

WORD_DESCRIPTOR = RequestDescriptor(
    operation_id="get_word",
    method=HttpMethod.GET,
    path_template="/v1/customizations/{customization_id}/words/{word}",
    path_params=(PathParam(name="customization_id"), PathParam(name="word")),
)

SEARCH = RequestDescriptor(
    operation_id="search",
    method=HttpMethod.GET,
    path_template="/v1/search",
    query_params=(
        QueryParam(name="q"),
        QueryParam(name="tags", list_style=ListStyle.REPEAT),
        QueryParam(name="ids", list_style=ListStyle.COMMA),
        QueryParam(name="verbose", value_type=bool),
        QueryParam(name="page_size", wire_name="page-size", value_type=int),
    ),
)


class TestDefinition:
    def test_placeholders_must_match_path_params(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.GET,
                path_template="/v1/{a}/{b}",
                path_params=(PathParam(name="a"),),
            )
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.GET,
                path_template="/v1/items",
                path_params=(PathParam(name="a"),),
            )

    def test_json_body_needs_schema(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.POST,
                path_template="/v1/items",
                body_encoding=BodyEncoding.JSON,
            )

    def test_schema_without_encoding(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.POST,
                path_template="/v1/items",
                body_schema=BODY,
            )

    def test_files_need_multipart(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.POST,
                path_template="/v1/items",
                body_schema=UPLOAD,
                body_encoding=BodyEncoding.JSON,
            )
        RequestDescriptor(
            operation_id="x",
            method=HttpMethod.POST,
            path_template="/v1/items",
            body_schema=UPLOAD,
            body_encoding=BodyEncoding.MULTIPART,
        )

    def test_names_unique_across_locations(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.POST,
                path_template="/v1/items",
                query_params=(QueryParam(name="name"),),
                body_schema=BODY,
                body_encoding=BodyEncoding.JSON,
            )

    def test_body_required_only_for_raw(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(
                operation_id="x",
                method=HttpMethod.POST,
                path_template="/v1/items",
                body_schema=BODY,
                body_encoding=BodyEncoding.JSON,
                body_required=True,
            )

    def test_descriptor_is_frozen(self):
        with pytest.raises(ValidationError):
            WORD_DESCRIPTOR.path_template = "/other"

    def test_parameter_lookup(self):
        assert SEARCH.parameter("q")[0] == "query"
        assert WORD_DESCRIPTOR.parameter("word")[0] == "path"
        assert SEARCH.parameter("missing") == (None, None)

    def test_query_wire_name_defaults_to_name(self):
        assert QueryParam(name="q").wire_name == "q"
        assert HeaderParam(name="accept", header="Accept").header == "Accept"


class TestResolvePath:
    def test_values_are_percent_encoded_per_segment(self):
        path = WORD_DESCRIPTOR.resolve_path(
            {"customization_id": "abc", "word": "café/x"}
        )
        assert path == "/v1/customizations/abc/words/caf%C3%A9%2Fx"

    @pytest.mark.parametrize("value", ["", None, ABSENT])
    def test_missing_or_empty_value(self, value):
        values = {"customization_id": "abc"}
        if value is not ABSENT:
            values["word"] = value
        with pytest.raises(MissingRequiredParameter) as exc:
            WORD_DESCRIPTOR.resolve_path(values)
        assert exc.value.field_name == "word"


class TestQueryString:
    def test_declared_order_and_omission(self):
        query = SEARCH.build_query_string({"verbose": True, "q": "a b&c"})
        assert query == "q=a%20b%26c&verbose=true"

    def test_empty(self):
        assert SEARCH.build_query_string({}) == ""

    def test_repeat_style(self):
        assert SEARCH.build_query_string({"tags": ("a", "b")}) == "tags=a&tags=b"

    def test_comma_style_encodes_each_element(self):
        assert SEARCH.build_query_string({"ids": ("a,1", "b")}) == "ids=a%2C1,b"

    def test_empty_list_is_omitted(self):
        assert SEARCH.build_query_string({"ids": (), "q": "x"}) == "q=x"

    def test_wire_name(self):
        assert SEARCH.build_query_string({"page_size": 10}) == "page-size=10"

    def test_bool_rendering(self):
        assert render_value(False) == "false"
        assert render_value(3) == "3"


class TestParamValues:
    def test_scalar_type_checked(self):
        with pytest.raises(InvalidFieldType):
            SEARCH.query_params[3].check_value("yes")

    def test_list_param_requires_list(self):
        param = SEARCH.query_params[1]
        with pytest.raises(InvalidFieldType):
            param.check_value("a")
        assert param.check_value(["a", "b"]) == ("a", "b")
