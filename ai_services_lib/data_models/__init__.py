from ai_services_lib.data_models.fields import ABSENT, FieldKind, FileWithMetadata
from ai_services_lib.data_models.schema import (
    FieldSpec,
    ModelSchema,
    TypedValue,
    scalar_field,
    list_field,
    nested_field,
    file_field,
)
from ai_services_lib.data_models.codec import encode, decode

__all__ = [
    "ABSENT",
    "FieldKind",
    "FileWithMetadata",
    "FieldSpec",
    "ModelSchema",
    "TypedValue",
    "scalar_field",
    "list_field",
    "nested_field",
    "file_field",
    "encode",
    "decode",
]
