"""Model: a TypedView with an explicit, eagerly decoded field schema.

Fields are declared as class attributes using the rules from
``json_simple_model.schema.fields``.  Every field is decoded once, when
the instance is built, so reads are plain dictionary lookups and safe to
share across threads without the lazy conversion cache.

Example::

    class Company(Model):
        name = StringField()
        location = StringField()

    class Person(Model):
        name = StringField()
        age = IntegerField()
        company = ObjectField(Company)
        status = EnumField(STATUS_CODES)

    person = Person({"name": "John Doe", "age": 30, "status": 1})
    person.age                                  # 30
    person.copy_with(status=Status.STOPPED)     # wire value 2 written back
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from json_simple_model.config import ViewConfig
from json_simple_model.schema.fields import Field
from json_simple_model.view import TypedView

__all__ = ["Model"]


class Model(TypedView):
    """Base class for schema-declared views."""

    config: ClassVar[ViewConfig] = ViewConfig(cache_conversions=False)

    __slots__ = ("_values",)

    _fields: ClassVar[Mapping[str, Field[Any]]] = MappingProxyType({})
    _values: dict[str, Any]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        collected: dict[str, Field[Any]] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Field):
                    if hasattr(Model, name):
                        msg = f"Field {cls.__name__}.{name} shadows a Model attribute"
                        raise TypeError(msg)
                    collected[name] = attr
                elif name in collected:
                    # Shadowed by a plain attribute in a subclass.
                    del collected[name]
        cls._fields = MappingProxyType(collected)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        super().__init__(data)
        object.__setattr__(
            self,
            "_values",
            {name: rule.decode(self) for name, rule in self._fields.items()},
        )

    @classmethod
    def fields(cls) -> Mapping[str, Field[Any]]:
        """Declared field rules by attribute name."""
        return cls._fields

    def copy_with(
        self,
        overrides: Mapping[str, Any] | None = None,
        *,
        from_json: Callable[[dict[str, Any]], Any] | None = None,
        **changes: Any,
    ) -> Any:
        """Return a new instance with typed ``changes`` applied.

        Args:
            overrides: Raw key -> JSON value overrides, as for
                ``TypedView.copy_with``.
            from_json: Constructor for the result.  Defaults to this class.
            **changes: Typed values by field attribute name; each is encoded
                to its wire form.  None means "no change".

        Raises:
            TypeError: If a change names no declared field.
        """
        encoded: dict[str, Any] = {}
        for name, value in changes.items():
            rule = self._fields.get(name)
            if rule is None:
                msg = f"{type(self).__name__}.copy_with() got an unknown field {name!r}"
                raise TypeError(msg)
            wire = rule.encode(value)
            if wire is not None:
                encoded[rule.wire_key()] = wire
        merged = {**(overrides or {}), **encoded}
        return super().copy_with(merged, from_json=from_json)
