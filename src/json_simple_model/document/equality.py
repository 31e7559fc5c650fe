"""Deep structural equality, hashing and diffing over JSON value trees.

The comparator treats values as a tagged union of
{null, bool, number, string, object, array}:

- bool is checked before numbers because ``bool`` subclasses ``int`` in
  Python; ``True`` never equals ``1`` here.
- int and float compare numerically (``1 == 1.0``).
- objects compare by key set and per-key value, arrays by length and
  position.

With ``null_equals_missing=True`` an object entry whose value is null is
treated exactly like an absent key, on both sides.  The flag never affects
array elements: ``[None]`` and ``[]`` stay different.

``structural_key`` produces a hashable canonical form with the same notion
of equality, so ``deep_hash`` agrees with ``deep_equals`` by construction:
mapping keys are order-independent (frozenset), arrays order-dependent
(tuple).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from json_simple_model.document.frozen import is_sequence

__all__ = ["deep_equals", "deep_hash", "diff_paths", "structural_key"]


def _entries(obj: Mapping[str, Any], null_equals_missing: bool) -> dict[str, Any]:
    if not null_equals_missing:
        return dict(obj)
    return {key: value for key, value in obj.items() if value is not None}


def deep_equals(left: Any, right: Any, *, null_equals_missing: bool = True) -> bool:
    """Return True when two JSON values are structurally equal.

    Args:
        left:  First JSON value (frozen or plain).
        right: Second JSON value.
        null_equals_missing: Treat null-valued object entries as absent keys.

    Returns:
        True if both trees hold the same data.
    """
    if left is right:
        return True

    # bool before numbers: isinstance(True, int) is True
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right

    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        left_entries = _entries(left, null_equals_missing)
        right_entries = _entries(right, null_equals_missing)
        if left_entries.keys() != right_entries.keys():
            return False
        return all(
            deep_equals(
                value, right_entries[key], null_equals_missing=null_equals_missing
            )
            for key, value in left_entries.items()
        )

    if is_sequence(left) or is_sequence(right):
        if not (is_sequence(left) and is_sequence(right)):
            return False
        if len(left) != len(right):
            return False
        return all(
            deep_equals(a, b, null_equals_missing=null_equals_missing)
            for a, b in zip(left, right, strict=True)
        )

    return bool(left == right)


def structural_key(value: Any, *, null_equals_missing: bool = True) -> Any:
    """Return a hashable, type-tagged canonical form of a JSON value."""
    if value is None:
        return ("null",)
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (int, float)):
        return ("number", value)
    if isinstance(value, str):
        return ("string", value)
    if isinstance(value, Mapping):
        return (
            "object",
            frozenset(
                (key, structural_key(item, null_equals_missing=null_equals_missing))
                for key, item in _entries(value, null_equals_missing).items()
            ),
        )
    if is_sequence(value):
        return (
            "array",
            tuple(
                structural_key(item, null_equals_missing=null_equals_missing)
                for item in value
            ),
        )
    # Opaque consumer-supplied leaf; must be hashable itself.
    return ("opaque", value)


def deep_hash(value: Any, *, null_equals_missing: bool = True) -> int:
    """Hash consistent with ``deep_equals`` under the same flag."""
    return hash(structural_key(value, null_equals_missing=null_equals_missing))


def diff_paths(
    left: Any, right: Any, *, null_equals_missing: bool = True, path: str = ""
) -> list[str]:
    """Return JSON Pointer paths (RFC 6901) where two values differ.

    Object keys present on one side only are reported at their own path;
    arrays of different length are reported at the array path.  An empty
    list means the values are deep-equal.
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        left_entries = _entries(left, null_equals_missing)
        right_entries = _entries(right, null_equals_missing)
        paths: list[str] = []
        for key in sorted(left_entries.keys() | right_entries.keys()):
            key_path = f"{path}/{_escape(key)}"
            if key not in left_entries or key not in right_entries:
                paths.append(key_path)
                continue
            paths.extend(
                diff_paths(
                    left_entries[key],
                    right_entries[key],
                    null_equals_missing=null_equals_missing,
                    path=key_path,
                )
            )
        return paths

    if is_sequence(left) and is_sequence(right) and len(left) == len(right):
        paths = []
        for idx, (a, b) in enumerate(zip(left, right, strict=True)):
            paths.extend(
                diff_paths(
                    a, b, null_equals_missing=null_equals_missing, path=f"{path}/{idx}"
                )
            )
        return paths

    if deep_equals(left, right, null_equals_missing=null_equals_missing):
        return []
    return [path]


def _escape(key: str) -> str:
    return str(key).replace("~", "~0").replace("/", "~1")
