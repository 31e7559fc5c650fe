"""json-simple-model - typed, immutable views over JSON-decoded data."""

from __future__ import annotations

from json_simple_model.api import (
    convert_list,
    copy_with,
    merge_overrides,
    to_json_list,
)
from json_simple_model.config import ViewConfig
from json_simple_model.document import deep_equals, deep_hash, freeze, thaw
from json_simple_model.enums import EnumMap, enum_map, from_value_with_enum_map
from json_simple_model.lists import from_list
from json_simple_model.schema import (
    BooleanField,
    EnumField,
    FloatField,
    IntegerField,
    ListField,
    Model,
    ObjectField,
    StringField,
)
from json_simple_model.view import TypedView

__version__: str = "0.1.0"
__all__: list[str] = [
    "BooleanField",
    "EnumField",
    "EnumMap",
    "FloatField",
    "IntegerField",
    "ListField",
    "Model",
    "ObjectField",
    "StringField",
    "TypedView",
    "ViewConfig",
    "convert_list",
    "copy_with",
    "deep_equals",
    "deep_hash",
    "enum_map",
    "freeze",
    "from_list",
    "from_value_with_enum_map",
    "merge_overrides",
    "thaw",
    "to_json_list",
]
