"""TypedView: the keyed accessor, deep equality and copy-with core.

Every model instance delegates to this single layer.  A view wraps an
immutable Document (or nothing at all -- the "null model") and exposes:

- ``get()``: keyed access with pass-through, conversion callbacks and
  best-effort scalar coercion, memoized per (key, requested type).
- ``to_json()``: a plain deep copy of the Document.
- ``==`` / ``hash()``: deep structural equality over the Documents.
- ``copy_with()``: shallow merge of overrides where null means "no change".

Resolution order in ``get()`` (first match wins):

1. memoized result for (key, type_)
2. raw value is null                     -> None (callbacks never see null)
3. raw value already conforms to type_   -> returned as-is (thawed)
4. ``from_value`` supplied               -> from_value(raw)
5. ``from_list`` supplied and raw is an array of objects/nulls
                                         -> from_list(raw)
6. ``from_json`` supplied and raw is an object
                                         -> from_json(raw)
7. scalar coercion driven by type_ (int, float, number, bool, str)
8. None

Data-shape problems never raise; exceptions raised inside callbacks
propagate untouched.

Example::

    class Person(TypedView):
        @property
        def age(self) -> int | None:
            return self.get("age", int)

    Person({"age": "30"}).age   # 30
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Self

from json_simple_model.api import copy_with
from json_simple_model.cache import ConversionCache
from json_simple_model.coercion import coerce, conforms, restore_tuples
from json_simple_model.config import ViewConfig
from json_simple_model.document.equality import deep_equals, deep_hash
from json_simple_model.document.frozen import (
    Document,
    freeze_document,
    is_document,
    is_document_list,
    thaw,
)
from json_simple_model.protocols import JsonConverter, ListConverter, ValueConverter

__all__ = ["TypedView"]

logger = logging.getLogger(__name__)


class TypedView:
    """Immutable typed view over a JSON object.

    Subclass it and expose accessors built on ``get()``; or use
    ``json_simple_model.schema.Model`` to declare fields explicitly.

    Args:
        data: A JSON object as produced by a JSON decoder, or None for the
            null model.  It is deep-copied and frozen; later mutation of
            ``data`` does not affect the view.
    """

    config: ClassVar[ViewConfig] = ViewConfig()

    __slots__ = ("_cache", "_data")

    _data: Document | None
    _cache: ConversionCache | None

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_data", freeze_document(data))
        cache = (
            ConversionCache(self.config.max_cache_size)
            if self.config.cache_conversions
            else None
        )
        object.__setattr__(self, "_cache", cache)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> Self:
        """Build a view of this class; usable directly as a ``from_json`` callback."""
        return cls(data)

    # ------------------------------------------------------------------
    # Keyed accessor
    # ------------------------------------------------------------------

    def get(
        self,
        key: str,
        type_: Any,
        *,
        from_json: JsonConverter[Any] | None = None,
        from_list: ListConverter[Any] | None = None,
        from_value: ValueConverter[Any] | None = None,
    ) -> Any:
        """Return the value at ``key`` typed as ``type_``, or None.

        Args:
            key:        Key to look up.  A missing key yields None, never an error.
            type_:      The requested type, e.g. ``int``, ``list[int | None]``.
            from_json:  Converts a JSON object into the requested type.
            from_list:  Converts a JSON array of objects/nulls.
            from_value: Converts any other wire value (enum codes etc.);
                        applied without shape checks.

        Returns:
            The typed value or None.  With caching enabled, repeated calls
            for the same (key, type_) return the first result without
            re-running any conversion.
        """
        if self._cache is None:
            return self._resolve(key, type_, from_json, from_list, from_value)
        return self._cache.get_or_compute(
            (key, type_),
            lambda: self._resolve(key, type_, from_json, from_list, from_value),
        )

    def _resolve(
        self,
        key: str,
        type_: Any,
        from_json: JsonConverter[Any] | None,
        from_list: ListConverter[Any] | None,
        from_value: ValueConverter[Any] | None,
    ) -> Any:
        raw = self._data.get(key) if self._data is not None else None

        # The result is always nullable, so null short-circuits every callback.
        if raw is None:
            return None

        if conforms(raw, type_):
            return restore_tuples(thaw(raw), type_)

        if from_value is not None:
            return from_value(thaw(raw))

        if from_list is not None and is_document_list(raw):
            return from_list(thaw(raw))

        if from_json is not None and is_document(raw):
            return from_json(thaw(raw))

        result = coerce(raw, type_)
        if result is None:
            logger.debug(
                "Key %r of %s did not resolve to %r", key, type(self).__name__, type_
            )
        return result

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @property
    def is_null(self) -> bool:
        """True when the view wraps no Document at all."""
        return self._data is None

    def to_json(self) -> dict[str, Any] | None:
        """Return a plain deep copy of the Document, or None for the null model.

        Every original key is kept, including ones with no declared accessor.
        """
        if self._data is None:
            return None
        return thaw(self._data)

    # ------------------------------------------------------------------
    # Copy-with
    # ------------------------------------------------------------------

    def copy_with(
        self,
        overrides: Mapping[str, Any] | None = None,
        *,
        from_json: Callable[[dict[str, Any]], Any] | None = None,
    ) -> Any:
        """Return a new view built from this Document merged with ``overrides``.

        The merge is shallow: nested objects and lists must already be in
        their serialized (JSON) form.  An override of None means "no
        change" -- a field cannot be cleared through this operation.

        Args:
            overrides: Mapping of key to new JSON value.
            from_json: Constructor applied to the merged object.  Defaults to
                this view's own class.

        Returns:
            The new instance produced by ``from_json``.
        """
        constructor = from_json if from_json is not None else type(self).from_json
        return copy_with(self.to_json(), overrides or {}, from_json=constructor)

    # ------------------------------------------------------------------
    # Equality / hashing
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TypedView):
            return NotImplemented
        # Views disagreeing on null-vs-missing are never equal, so == stays symmetric.
        if self.config.null_equals_missing != other.config.null_equals_missing:
            return False
        return deep_equals(
            self._data,
            other._data,
            null_equals_missing=self.config.null_equals_missing,
        )

    def __hash__(self) -> int:
        return deep_hash(self._data, null_equals_missing=self.config.null_equals_missing)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable; use copy_with() instead"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()!r})"
