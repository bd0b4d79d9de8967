import io

import pytest

from ai_services_lib.core.descriptor import (
    BodyEncoding,
    HeaderParam,
    HttpMethod,
    ListStyle,
    PathParam,
    QueryParam,
    RequestDescriptor,
)
from ai_services_lib.core.options import OptionsBuilder
from ai_services_lib.data_models import ABSENT, ModelSchema, scalar_field
from ai_services_lib.exceptions import InvalidFieldType, MissingRequiredParameter
from ai_services_lib.services.text_to_speech import (
    ADD_WORD,
    CREATE_CUSTOM_MODEL,
    CREATE_CUSTOM_MODEL_BODY,
)

UPLOAD_AUDIO = RequestDescriptor(
    operation_id="upload_audio",
    method=HttpMethod.POST,
    path_template="/v1/audio/{name}",
    path_params=(PathParam(name="name"),),
    query_params=(QueryParam(name="version", required=True),),
    header_params=(
        HeaderParam(name="content_language", header="Content-Language", required=True),
    ),
    body_encoding=BodyEncoding.RAW,
    body_required=True,
)

NOTE = ModelSchema(
    name="Note",
    fields=(scalar_field("text"), scalar_field("priority", int)),
)

POST_NOTE = RequestDescriptor(
    operation_id="post_note",
    method=HttpMethod.POST,
    path_template="/v1/notes",
    body_schema=NOTE,
    body_encoding=BodyEncoding.JSON,
)


class TestRequiredValues:
    def test_path_checked_first(self):
        builder = OptionsBuilder(ADD_WORD).set(translation="x")
        with pytest.raises(MissingRequiredParameter) as exc:
            builder.build()
        assert exc.value.field_name == "customization_id"

    def test_declaration_order(self):
        builder = OptionsBuilder(UPLOAD_AUDIO).path_param("name", "a")
        with pytest.raises(MissingRequiredParameter) as exc:
            builder.build()
        assert exc.value.field_name == "version"

        builder.query_param("version", "2024-01-01")
        with pytest.raises(MissingRequiredParameter) as exc:
            builder.build()
        assert exc.value.field_name == "content_language"

        builder.header_param("content_language", "en")
        with pytest.raises(MissingRequiredParameter) as exc:
            builder.build()
        assert exc.value.field_name == "body"

        options = builder.body(b"RIFF").build()
        assert options.body == b"RIFF"

    def test_empty_path_value(self):
        builder = OptionsBuilder(ADD_WORD).set(
            customization_id="", word="w", translation="t"
        )
        with pytest.raises(MissingRequiredParameter):
            builder.build()

    def test_required_body_field(self):
        builder = OptionsBuilder(CREATE_CUSTOM_MODEL).set(name="test model")
        with pytest.raises(MissingRequiredParameter) as exc:
            builder.build()
        assert exc.value.field_name == "language"

    def test_required_body_field_explicit_null(self):
        builder = OptionsBuilder(CREATE_CUSTOM_MODEL).set(
            name="test model", language=None
        )
        with pytest.raises(MissingRequiredParameter):
            builder.build()

    def test_required_list_query_value_empty(self):
        descriptor = RequestDescriptor(
            operation_id="list_items",
            method=HttpMethod.GET,
            path_template="/v1/items",
            query_params=(
                QueryParam(name="ids", required=True, list_style=ListStyle.COMMA),
            ),
        )
        with pytest.raises(MissingRequiredParameter) as exc:
            OptionsBuilder(descriptor).query_param("ids", []).build()
        assert exc.value.field_name == "ids"

        options = OptionsBuilder(descriptor).query_param("ids", ["a"]).build()
        assert options.get("ids") == ("a",)


class TestSetters:
    def test_type_is_checked_on_set(self):
        with pytest.raises(InvalidFieldType) as exc:
            OptionsBuilder(POST_NOTE).body_field("priority", "high")
        assert exc.value.field_name == "priority"

    def test_unknown_name(self):
        with pytest.raises(InvalidFieldType):
            OptionsBuilder(POST_NOTE).set(unknown=1)

    def test_wrong_location(self):
        with pytest.raises(InvalidFieldType):
            OptionsBuilder(UPLOAD_AUDIO).query_param("name", "a")

    def test_set_routes_by_location(self):
        options = (
            OptionsBuilder(ADD_WORD)
            .set(customization_id="c1", word="w", translation="t")
            .build()
        )
        assert options.path_values == {"customization_id": "c1", "word": "w"}
        assert options.body.translation == "t"
        assert options.get("word") == "w"
        assert options.get("translation") == "t"

    def test_whole_body(self):
        body = CREATE_CUSTOM_MODEL_BODY.new(name="m", language="en-US")
        options = OptionsBuilder(CREATE_CUSTOM_MODEL).body(body).build()
        assert options.body == body

    def test_whole_body_of_other_schema(self):
        with pytest.raises(InvalidFieldType):
            OptionsBuilder(CREATE_CUSTOM_MODEL).body(NOTE.new(text="x"))

    def test_explicit_null_and_absent(self):
        options = (
            OptionsBuilder(POST_NOTE)
            .body_field("text", None)
            .body_field("priority", 1)
            .body_field("priority", ABSENT)
            .build()
        )
        assert options.body.is_set("text")
        assert options.body.text is None
        assert not options.body.is_set("priority")

    def test_none_param_removes_value(self):
        options = (
            OptionsBuilder(UPLOAD_AUDIO)
            .set(name="a", version="v", content_language="en", body=b"x")
            .header("X-Trace", "1")
            .build()
        )
        rebuilt = options.new_builder().set(name=None).set(name="b").build()
        assert rebuilt.path_values == {"name": "b"}
        assert rebuilt.extra_headers == {"X-Trace": "1"}
        assert rebuilt.body == b"x"

    def test_raw_body_accepts_streams(self):
        stream = io.BytesIO(b"abc")
        options = (
            OptionsBuilder(UPLOAD_AUDIO)
            .set(name="a", version="v", content_language="en")
            .body(stream)
            .build()
        )
        assert options.body is stream

    def test_raw_body_rejects_text(self):
        with pytest.raises(InvalidFieldType):
            OptionsBuilder(UPLOAD_AUDIO).body("text")

    def test_extra_header_must_be_str(self):
        with pytest.raises(InvalidFieldType):
            OptionsBuilder(POST_NOTE).header("X-Count", 1)


class TestOptions:
    def test_options_are_immutable(self):
        options = OptionsBuilder(POST_NOTE).set(text="x").build()
        with pytest.raises(AttributeError):
            options.body = None
        with pytest.raises(TypeError):
            options.path_values["x"] = 1

    def test_new_builder_leaves_source_untouched(self):
        options = OptionsBuilder(POST_NOTE).set(text="x").build()
        changed = options.new_builder().set(text="y", priority=2).build()
        assert options.body.text == "x"
        assert changed.body.text == "y"
        assert changed.body.priority == 2

    def test_body_without_fields_is_empty_value(self):
        options = OptionsBuilder(POST_NOTE).build()
        assert options.body == NOTE.empty()
