"""Conversion callback protocols accepted by ``TypedView.get``.

Callbacks are plain callables; any function, bound method or class whose
call signature matches satisfies these protocols structurally -- no
inheritance required.  Callbacks are never retained beyond one accessor
call; only their results may be memoized.

Example::

    from json_simple_model.protocols import JsonConverter

    class Company(TypedView): ...

    assert isinstance(Company, JsonConverter)  # True -- classes are callable
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

__all__ = ["JsonConverter", "ListConverter", "ValueConverter"]

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class JsonConverter(Protocol[T_co]):
    """Converts one JSON object (a plain dict) into a typed value."""

    def __call__(self, data: dict[str, Any], /) -> T_co | None: ...


@runtime_checkable
class ListConverter(Protocol[T_co]):
    """Converts a JSON array of objects (or nulls) into a typed value."""

    def __call__(self, data: list[dict[str, Any] | None], /) -> T_co | None: ...


@runtime_checkable
class ValueConverter(Protocol[T_co]):
    """Converts an arbitrary wire value (scalar, enum code, ...) into a typed value."""

    def __call__(self, value: Any, /) -> T_co | None: ...
