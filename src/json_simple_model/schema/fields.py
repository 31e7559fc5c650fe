"""Field rules: the closed set of per-field decode strategies for a Model.

Each rule is a descriptor declared on a ``Model`` subclass.  The variant
is decided when the class is defined, not on every access:

- IntegerField / FloatField / BooleanField / StringField
      scalar; pass-through or textual coercion
- ObjectField(model)
      nested JSON object -> ``model`` instance
- ListField(element)
      JSON array; objects and enums are converted per element, scalars
      must already conform or the whole list is None
- EnumField(enum_map)
      wire value -> variant through an ``EnumMap``

Every rule decodes through ``TypedView.get`` and encodes a typed value
back to its wire form for ``Model.copy_with``.  The wire key defaults to
the attribute name::

    class Person(Model):
        name = StringField()
        is_employed = BooleanField(key="isEmployed")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar, overload

from json_simple_model.enums import EnumMap
from json_simple_model.lists import from_list

if TYPE_CHECKING:
    from json_simple_model.view import TypedView

__all__ = [
    "BooleanField",
    "EnumField",
    "Field",
    "FloatField",
    "IntegerField",
    "ListField",
    "ObjectField",
    "StringField",
]

T = TypeVar("T")


@dataclass(eq=False)
class Field(Generic[T]):
    """Base decode rule.  Subclasses set ``value_type`` and callbacks.

    Attributes:
        key:  Wire key in the JSON object.  Defaults to the attribute name.
        name: Attribute name on the model (set by ``__set_name__``).
    """

    key: str | None = field(default=None, kw_only=True)
    name: str | None = field(default=None, init=False)

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name

    @overload
    def __get__(self, instance: None, owner: type[Any] | None = None) -> Self: ...

    @overload
    def __get__(self, instance: object, owner: type[Any] | None = None) -> T | None: ...

    def __get__(self, instance: Any, owner: type[Any] | None = None) -> Any:
        if instance is None:
            return self
        return instance._values[self.name]

    @property
    def value_type(self) -> Any:
        raise NotImplementedError

    def callbacks(self) -> dict[str, Any]:
        """Keyword callbacks forwarded to ``TypedView.get``."""
        return {}

    def decode(self, view: TypedView) -> T | None:
        return view.get(self.wire_key(), self.value_type, **self.callbacks())

    def encode(self, value: T | None) -> Any:
        return value

    def wire_key(self) -> str:
        """The JSON key this rule reads; only valid once bound to a model."""
        if self.key is None:
            msg = f"{type(self).__name__} is not bound to a model attribute"
            raise TypeError(msg)
        return self.key


@dataclass(eq=False)
class IntegerField(Field[int]):
    @property
    def value_type(self) -> Any:
        return int


@dataclass(eq=False)
class FloatField(Field[float]):
    @property
    def value_type(self) -> Any:
        return float


@dataclass(eq=False)
class BooleanField(Field[bool]):
    @property
    def value_type(self) -> Any:
        return bool


@dataclass(eq=False)
class StringField(Field[str]):
    @property
    def value_type(self) -> Any:
        return str


@dataclass(eq=False)
class ObjectField(Field[T]):
    """Nested JSON object decoded by ``model`` (a TypedView subclass)."""

    model: type[Any]

    def __post_init__(self) -> None:
        if not isinstance(self.model, type):
            msg = f"ObjectField needs a model class, got {self.model!r}"
            raise TypeError(msg)

    @property
    def value_type(self) -> Any:
        return self.model

    def convert(self, data: dict[str, Any] | None) -> T | None:
        factory = getattr(self.model, "from_json", self.model)
        return factory(data)

    def callbacks(self) -> dict[str, Any]:
        return {"from_json": self.convert}

    def encode(self, value: T | None) -> Any:
        if value is None:
            return None
        return value.to_json()  # type: ignore[attr-defined]


@dataclass(eq=False)
class EnumField(Field[T]):
    """Enum variant stored on the wire as the value held in ``enum_map``."""

    enum_map: EnumMap[Any]

    def __post_init__(self) -> None:
        if not isinstance(self.enum_map, EnumMap):
            msg = f"EnumField needs an EnumMap, got {self.enum_map!r}"
            raise TypeError(msg)
        if not self.enum_map:
            msg = "EnumField needs a non-empty EnumMap"
            raise ValueError(msg)

    @property
    def value_type(self) -> Any:
        return type(next(iter(self.enum_map)))

    def callbacks(self) -> dict[str, Any]:
        return {"from_value": self.enum_map.decode}

    def encode(self, value: T | None) -> Any:
        return self.enum_map.encode(value)


@dataclass(eq=False)
class ListField(Field[list[Any]]):
    """JSON array whose elements follow the ``element`` rule.

    Object elements go through ``from_list`` (null elements become null
    views); enum elements are decoded one by one; scalar elements must
    already conform, otherwise the whole list decodes to None.
    """

    element: Field[Any]

    def __post_init__(self) -> None:
        if not isinstance(self.element, Field):
            msg = f"ListField element must be a Field rule, got {self.element!r}"
            raise TypeError(msg)

    @property
    def value_type(self) -> Any:
        if isinstance(self.element, ObjectField):
            # Null elements decode to null views; a raw null never passes through.
            return list[self.element.model]  # type: ignore[name-defined]
        return list[self.element.value_type | None]  # type: ignore[name-defined]

    def callbacks(self) -> dict[str, Any]:
        element = self.element
        if isinstance(element, ObjectField):
            return {
                "from_list": from_list(element.convert, element_type=element.model)
            }
        if isinstance(element, EnumField):
            return {"from_value": self._decode_enum_items}
        return {}

    def _decode_enum_items(self, raw: Any) -> list[Any] | None:
        if not isinstance(raw, list):
            return None
        decode = self.element.enum_map.decode  # type: ignore[attr-defined]
        return [decode(item) for item in raw]

    def encode(self, value: list[Any] | None) -> Any:
        if value is None:
            return None
        return [self.element.encode(item) for item in value]
