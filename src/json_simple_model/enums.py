"""EnumMap: immutable variant -> wire value tables with O(1) reverse lookup.

An EnumMap is built once per enum type and shared by every view: the
decode path (wire value -> variant) used by accessors and the encode path
(variant -> wire value) used by ``copy_with``.

Wire values must be unique within a map.  The reverse index is keyed on
``structural_key`` so ``True`` and ``1`` are distinct wire values while
``1`` and ``1.0`` collide.  A duplicate raises ``ValueError`` when the map
is built rather than silently resolving to whichever variant came first.

Example::

    class Status(Enum):
        RUNNING = "running"
        STOPPED = "stopped"

    STATUS_CODES = enum_map(Status, {Status.RUNNING: 1, Status.STOPPED: 2}.get)
    STATUS_CODES.decode(1)               # Status.RUNNING
    STATUS_CODES.decode(9)               # None
    STATUS_CODES.encode(Status.STOPPED)  # 2
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from json_simple_model.document.equality import deep_equals, structural_key
from json_simple_model.document.frozen import freeze, thaw

__all__ = ["EnumMap", "enum_map", "from_value_with_enum_map"]

E = TypeVar("E", bound=Hashable)


class EnumMap(Mapping[E, Any], Generic[E]):
    """Immutable mapping from enum variant to wire value.

    Args:
        entries: Variant -> wire value pairs, in variant order.

    Raises:
        ValueError: If two variants share a wire value.
    """

    __slots__ = ("_forward", "_reverse")

    def __init__(self, entries: Mapping[E, Any] | Iterable[tuple[E, Any]]) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        forward: dict[E, Any] = {}
        reverse: dict[Any, E] = {}
        for variant, wire in pairs:
            wire = freeze(wire)
            wire_key = structural_key(wire)
            if wire_key in reverse:
                msg = (
                    f"Duplicate wire value {thaw(wire)!r} for {variant!r}; "
                    f"already mapped to {reverse[wire_key]!r}"
                )
                raise ValueError(msg)
            forward[variant] = wire
            reverse[wire_key] = variant
        self._forward = MappingProxyType(forward)
        self._reverse = MappingProxyType(reverse)

    def __getitem__(self, variant: E) -> Any:
        return thaw(self._forward[variant])

    def __iter__(self) -> Iterator[E]:
        return iter(self._forward)

    def __len__(self) -> int:
        return len(self._forward)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"

    def decode(self, value: Any) -> E | None:
        """Return the variant whose wire value equals ``value``, or None."""
        try:
            return self._reverse.get(structural_key(freeze(value)))
        except TypeError:
            # Unhashable opaque wire value; it cannot be in the index.
            return None

    def encode(self, variant: E | None) -> Any:
        """Return the wire value of ``variant``; None and unknown variants give None."""
        if variant is None or variant not in self._forward:
            return None
        return thaw(self._forward[variant])


def enum_map(values: Iterable[E], mapper: Callable[[E], Any]) -> EnumMap[E]:
    """Build an EnumMap by applying ``mapper`` to every variant.

    Args:
        values: An ``Enum`` class or any iterable of variants.
        mapper: Variant -> wire value.

    Returns:
        The frozen map, ready to be shared.
    """
    return EnumMap((variant, mapper(variant)) for variant in values)


def from_value_with_enum_map(mapping: Mapping[E, Any]) -> Callable[[Any], E | None]:
    """Return a ``from_value`` decoder for ``TypedView.get``.

    An ``EnumMap`` decodes through its reverse index.  Any other mapping
    falls back to a linear scan where the first entry with an equal wire
    value wins.
    """
    if isinstance(mapping, EnumMap):
        return mapping.decode

    def decode(value: Any) -> E | None:
        for variant, wire in mapping.items():
            if deep_equals(wire, value, null_equals_missing=False):
                return variant
        return None

    return decode
