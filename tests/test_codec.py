import math

import pytest
from pydantic import ValidationError

from ai_services_lib.data_models import (
    ABSENT,
    FileWithMetadata,
    ModelSchema,
    TypedValue,
    decode,
    encode,
    file_field,
    list_field,
    nested_field,
    scalar_field,
)
from ai_services_lib.exceptions import (
    DecodingError,
    EncodingError,
    InvalidFieldType,
    MissingRequiredParameter,
)

WORD = ModelSchema(
    name="Word",
    fields=(
        scalar_field("word", required=True),
        scalar_field("translation"),
    ),
)

MODEL = ModelSchema(
    name="Model",
    fields=(
        scalar_field("name"),
        scalar_field("score", float),
        scalar_field("count", int),
        scalar_field("class", name="class_name"),
        list_field("words", WORD),
        list_field("tags", str),
        nested_field("main_word", WORD),
        scalar_field("metadata", dict),
    ),
)


class TestTypedValue:
    def test_absent_reads_as_none_but_is_not_set(self):
        v = MODEL.new(name="x")
        assert v.score is None
        assert v.is_set("name")
        assert not v.is_set("score")
        assert v.get("score", ABSENT) is ABSENT

    def test_explicit_null_is_set(self):
        v = MODEL.new(name=None)
        assert v.is_set("name")
        assert v.name is None

    def test_is_immutable(self):
        v = MODEL.new(name="x")
        with pytest.raises(AttributeError):
            v.name = "y"

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            MODEL.new().unknown

    def test_lists_are_copied_to_tuples(self):
        tags = ["a", "b"]
        v = MODEL.new(tags=tags)
        tags.append("c")
        assert v.tags == ("a", "b")

    def test_evolve_returns_modified_copy(self):
        v = MODEL.new(name="x", count=1)
        v2 = v.evolve(count=2, name=ABSENT)
        assert v.count == 1
        assert v2.count == 2
        assert not v2.is_set("name")

    def test_equality(self):
        assert MODEL.new(name="x") == MODEL.new(name="x")
        assert MODEL.new(name="x") != MODEL.new(name=None)
        assert MODEL.new() != MODEL.new(name=None)

    def test_to_dict_uses_in_memory_names(self):
        v = MODEL.new(class_name="apple", words=[WORD.new(word="a")])
        assert v.to_dict() == {"class_name": "apple", "words": [{"word": "a"}]}

    def test_mappings_are_copied_and_read_only(self):
        meta = {"a": 1, "nested": {"b": [1, 2]}}
        v = MODEL.new(metadata=meta)
        meta["a"] = 2
        meta["nested"]["b"].append(3)
        assert v.metadata == {"a": 1, "nested": {"b": (1, 2)}}
        with pytest.raises(TypeError):
            v.metadata["a"] = 3
        with pytest.raises(TypeError):
            v.metadata["nested"]["c"] = 1

    def test_to_dict_returns_plain_containers(self):
        v = MODEL.new(metadata={"k": [1, {"x": None}]}, tags=["a"])
        plain = v.to_dict()
        assert plain == {"metadata": {"k": [1, {"x": None}]}, "tags": ["a"]}
        assert type(plain["metadata"]) is dict
        plain["metadata"]["k"].append(2)
        assert v.metadata["k"] == (1, {"x": None})


class TestSchemaValidation:
    def test_new_rejects_wrong_kind(self):
        with pytest.raises(InvalidFieldType) as exc:
            MODEL.new(count="3")
        assert exc.value.field_name == "count"
        assert exc.value.expected_kind == "int"

    def test_bool_is_not_an_int(self):
        with pytest.raises(InvalidFieldType):
            MODEL.new(count=True)

    def test_int_is_accepted_for_float(self):
        assert MODEL.new(score=1).score == 1

    def test_nested_must_use_its_schema(self):
        with pytest.raises(InvalidFieldType):
            MODEL.new(main_word={"word": "a"})

    def test_list_items_are_checked(self):
        with pytest.raises(InvalidFieldType):
            MODEL.new(tags=["a", 1])

    def test_unknown_field(self):
        with pytest.raises(InvalidFieldType):
            MODEL.new(other=1)

    def test_required_field(self):
        with pytest.raises(MissingRequiredParameter) as exc:
            WORD.new(translation="x")
        assert exc.value.field_name == "word"

    def test_duplicated_wire_name_rejected(self):
        with pytest.raises(ValidationError):
            ModelSchema(
                name="Broken",
                fields=(scalar_field("a"), scalar_field("a", name="b")),
            )

    @pytest.mark.parametrize(
        "name", ["items", "get", "schema", "evolve", "is_set", "to_dict"]
    )
    def test_attribute_names_rejected(self, name):
        with pytest.raises(ValidationError):
            ModelSchema(name="Broken", fields=(scalar_field(name),))

    def test_attribute_wire_name_mapped_to_other_name(self):
        schema = ModelSchema(
            name="Listing", fields=(list_field("items", str, name="item_list"),)
        )
        v = decode({"items": ["a"]}, schema)
        assert v.item_list == ("a",)
        assert encode(v, schema) == {"items": ["a"]}

    def test_nested_field_requires_schema(self):
        from ai_services_lib.data_models import FieldKind, FieldSpec

        with pytest.raises(ValidationError):
            FieldSpec(wire_name="x", kind=FieldKind.NESTED)


class TestEncode:
    def test_absent_omitted_and_null_emitted(self):
        assert encode(MODEL.new(name=None), MODEL) == {"name": None}
        assert encode(MODEL.new(), MODEL) == {}

    def test_declaration_order_and_wire_names(self):
        v = MODEL.new(class_name="apple", name="x", score=0.5)
        tree = encode(v, MODEL)
        assert list(tree) == ["name", "score", "class"]
        assert tree["class"] == "apple"

    def test_nested_and_lists(self):
        v = MODEL.new(
            words=[WORD.new(word="hodor", translation="hold the door")],
            main_word=WORD.new(word="a"),
            tags=("x",),
        )
        assert encode(v, MODEL) == {
            "words": [{"word": "hodor", "translation": "hold the door"}],
            "tags": ["x"],
            "main_word": {"word": "a"},
        }

    def test_non_finite_float(self):
        with pytest.raises(EncodingError):
            encode(MODEL.new(score=math.inf), MODEL)
        with pytest.raises(EncodingError):
            encode(MODEL.new(metadata={"x": math.nan}), MODEL)

    def test_wrong_schema(self):
        with pytest.raises(EncodingError):
            encode(WORD.new(word="a"), MODEL)

    def test_file_fields_are_not_json(self):
        schema = ModelSchema(
            name="Upload", fields=(file_field("file"), scalar_field("name"))
        )
        v = schema.new(file=FileWithMetadata(data=b"123"), name="n")
        assert encode(v, schema) == {"name": "n"}


class TestDecode:
    def test_unknown_members_are_ignored(self):
        v = decode({"extra_field": 1, "name": "x"}, MODEL)
        assert v.name == "x"

    def test_missing_members_stay_absent(self):
        v = decode({"name": None}, MODEL)
        assert v.is_set("name") and v.name is None
        assert not v.is_set("score")

    def test_numbers_keep_their_type(self):
        v = decode({"score": 1, "count": 2}, MODEL)
        assert isinstance(v.score, int)
        with pytest.raises(DecodingError):
            decode({"count": 2.5}, MODEL)

    def test_strings_untouched(self):
        assert decode({"name": "  MiXed "}, MODEL).name == "  MiXed "

    def test_list_fails_on_any_bad_element(self):
        with pytest.raises(DecodingError) as exc:
            decode({"words": [{"word": "a"}, "oops"]}, MODEL)
        assert "words[1]" in exc.value.reason

    def test_not_an_object(self):
        with pytest.raises(DecodingError):
            decode(["name"], MODEL)

    def test_wire_rename(self):
        assert decode({"class": "apple"}, MODEL).class_name == "apple"

    def test_nested_value(self):
        v = decode({"main_word": {"word": "a", "other": 1}}, MODEL)
        assert isinstance(v.main_word, TypedValue)
        assert v.main_word == WORD.new(word="a")

    def test_decoded_objects_are_read_only(self):
        v = decode({"metadata": {"k": [1, 2]}}, MODEL)
        assert v.metadata == {"k": (1, 2)}
        with pytest.raises(TypeError):
            v.metadata["k"] = 3


@pytest.mark.parametrize(
    "value",
    [
        MODEL.new(),
        MODEL.new(name=None, score=None),
        MODEL.new(
            name="n",
            score=0.25,
            count=3,
            class_name="c",
            words=[WORD.new(word="w", translation=None)],
            tags=[],
            main_word=WORD.new(word="m"),
            metadata={"k": [1, 2, {"x": None}]},
        ),
    ],
)
def test_round_trip(value):
    assert decode(encode(value, MODEL), MODEL) == value
