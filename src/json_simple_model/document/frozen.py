"""Deep freezing of JSON-decoded values and structural shape predicates.

A Document is the immutable backing store of a view.  ``freeze`` builds a
read-only deep copy of whatever a JSON library produced:

- dict / any Mapping -> ``MappingProxyType`` over a private dict
- list / tuple       -> tuple
- everything else    -> kept as is (scalars and opaque consumer leaves)

``thaw`` is the inverse and always hands back fresh ``dict`` / ``list``
objects, so callers can mutate the result without touching the view.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeGuard

__all__ = [
    "Document",
    "JsonValue",
    "freeze",
    "freeze_document",
    "is_document",
    "is_document_list",
    "is_sequence",
    "thaw",
]

# Type alias for values produced by a JSON decoder
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# A frozen JSON object
Document = Mapping[str, Any]


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of a JSON value.

    Args:
        value: Any JSON value (dict, list, str, int, float, bool, None).

    Returns:
        The frozen value.  Never aliases a mutable container of the input.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def freeze_document(data: Mapping[str, Any] | None) -> Document | None:
    """Freeze a top-level JSON object; ``None`` stays ``None`` (the null model)."""
    if data is None:
        return None
    return freeze(data)


def thaw(value: Any) -> Any:
    """Return a plain, mutable deep copy of a (possibly frozen) JSON value."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


def is_document(value: Any) -> TypeGuard[Document]:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """True for JSON arrays.  Strings are sequences in Python but not here."""
    return isinstance(value, (list, tuple))


def is_document_list(value: Any) -> bool:
    """True when ``value`` is an array whose elements are all objects or null."""
    return is_sequence(value) and all(
        item is None or is_document(item) for item in value
    )
