"""Schema subpackage: explicit field rules and eagerly decoded models.

Re-exports the public API for the schema module:
- Model: TypedView subclass that decodes declared fields at construction
- IntegerField / FloatField / BooleanField / StringField: scalar rules
- ObjectField / ListField / EnumField: nested, array and enum rules
"""

from json_simple_model.schema.fields import (
    BooleanField,
    EnumField,
    Field,
    FloatField,
    IntegerField,
    ListField,
    ObjectField,
    StringField,
)
from json_simple_model.schema.model import Model

__all__ = [
    "BooleanField",
    "EnumField",
    "Field",
    "FloatField",
    "IntegerField",
    "ListField",
    "Model",
    "ObjectField",
    "StringField",
]
