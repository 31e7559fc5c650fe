"""Public free functions for json-simple-model.

These are the entry points that do not need a view instance:
``convert_list`` for top-level JSON arrays of objects, ``to_json_list`` for
the reverse direction, and the merge behind ``TypedView.copy_with``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from json_simple_model.lists import from_list

if TYPE_CHECKING:
    from json_simple_model.view import TypedView

__all__ = ["convert_list", "copy_with", "merge_overrides", "to_json_list"]

T = TypeVar("T")


def convert_list(
    from_json: Callable[[dict[str, Any] | None], T | None],
    *,
    element_type: Any = None,
) -> Callable[[Sequence[Any] | None], list[T | None] | None]:
    """Return a reusable converter for top-level JSON arrays of objects.

    Example::

        people = convert_list(Person)(json.loads(payload))

    Args:
        from_json:    Converts one JSON object (or None) into ``T``.
        element_type: Elements already of this type are returned as-is.
                      Defaults to the view class when ``from_json`` is a
                      ``TypedView`` subclass or its ``from_json`` method.

    Returns:
        A callable mapping a JSON array to a list of ``T`` (None stays None).
    """
    if element_type is None:
        element_type = _view_class_of(from_json)
    return from_list(from_json, element_type=element_type)


def _view_class_of(from_json: Any) -> type[Any] | None:
    from json_simple_model.view import TypedView

    owner = getattr(from_json, "__self__", from_json)
    if isinstance(owner, type) and issubclass(owner, TypedView):
        return owner
    return None


def to_json_list(views: Iterable[TypedView | None]) -> list[dict[str, Any] | None]:
    """Serialize a list of views; a null entry serializes to None."""
    return [view.to_json() if view is not None else None for view in views]


def merge_overrides(
    base: Mapping[str, Any] | None, overrides: Mapping[str, Any]
) -> dict[str, Any]:
    """Shallow-merge ``overrides`` onto ``base``, skipping None overrides.

    A None override means "no change": it can neither clear nor add a key.
    Every base key is preserved, including keys no accessor knows about.
    """
    merged = dict(base) if base is not None else {}
    merged.update((key, value) for key, value in overrides.items() if value is not None)
    return merged


def copy_with(
    base: Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
    *,
    from_json: Callable[[dict[str, Any]], T],
) -> T:
    """Build a new instance from ``base`` merged with ``overrides``.

    Args:
        base:      The serialized base view (``view.to_json()``).
        overrides: Key -> new JSON value.  Nested values must already be
                   serialized; the merge is not recursive.
        from_json: Constructor applied to the merged object.

    Returns:
        ``from_json(merged)``.
    """
    return from_json(merge_overrides(base, overrides))
