"""Runtime type conformance and best-effort scalar coercion.

``conforms`` answers "does this raw value already satisfy the requested
type?" so the accessor can return it untouched.  ``coerce`` is the
fallback used when no conversion callback applied: it is driven by the
*requested* type, never by the raw value's type, and parses the value's
textual form.

Parsing is deliberately strict, closer to a JSON reader than to Python's
``int()`` / ``float()``:

- int:    optional sign and ASCII digits, surrounding whitespace allowed
          ("1_000", "1.0" and "0x1f" are rejected)
- float:  decimal or exponent notation, plus ``NaN`` / ``Infinity``
- number: int first, then float
- bool:   exactly "true" or "false"
- str:    always succeeds for non-null values
"""

from __future__ import annotations

import json
import logging
import numbers
import re
import types
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from enum import Enum
from typing import Any, Union, get_args, get_origin

from json_simple_model.document.frozen import is_sequence, thaw

__all__ = [
    "coerce",
    "conforms",
    "parse_bool",
    "parse_float",
    "parse_int",
    "parse_number",
    "restore_tuples",
    "strip_optional",
    "to_text",
]

logger = logging.getLogger(__name__)

_INT = re.compile(r"[+-]?\d+", re.ASCII)

_FLOAT = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|NaN|Infinity)",
    re.ASCII,
)

_NUMERIC_TYPES: frozenset[Any] = frozenset({numbers.Number, numbers.Real})

_SEQUENCE_ORIGINS: frozenset[Any] = frozenset(
    {list, tuple, Sequence, MutableSequence}
)

_MAPPING_ORIGINS: frozenset[Any] = frozenset({dict, Mapping, MutableMapping})


def _is_union(type_: Any) -> bool:
    return get_origin(type_) in (Union, types.UnionType)


def strip_optional(type_: Any) -> Any:
    """Drop ``None`` from a union: ``int | None`` -> ``int``.

    Unions with more than one remaining member are rebuilt without None.
    """
    if not _is_union(type_):
        return type_
    members = tuple(arg for arg in get_args(type_) if arg is not type(None))
    if len(members) == 1:
        return members[0]
    return Union[members]


def _is_numeric_type(type_: Any) -> bool:
    if type_ in _NUMERIC_TYPES:
        return True
    return _is_union(type_) and set(get_args(type_)) == {int, float}


def conforms(value: Any, type_: Any) -> bool:
    """Return True when ``value`` already satisfies ``type_``.

    Args:
        value: A raw (frozen or plain) JSON value.
        type_: The requested type, e.g. ``int``, ``list[int | None]``,
               ``dict[str, Any]``, an ``Enum`` subclass or a model class.

    Returns:
        True if no conversion is needed.  Unknown typing constructs
        conservatively return False.
    """
    if type_ is Any or type_ is object:
        return True
    if type_ is None or type_ is type(None):
        return value is None

    if _is_union(type_):
        return any(conforms(value, member) for member in get_args(type_))

    if type_ is bool:
        return isinstance(value, bool)
    if type_ is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if type_ is float:
        return isinstance(value, float)
    if type_ is str:
        return isinstance(value, str)
    if type_ in _NUMERIC_TYPES:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    origin = get_origin(type_)
    if origin is not None:
        args = get_args(type_)
        if origin in _SEQUENCE_ORIGINS:
            if not is_sequence(value):
                return False
            if not args:
                return True
            if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
                return len(args) == len(value) and all(
                    conforms(item, arg) for item, arg in zip(value, args, strict=True)
                )
            return all(conforms(item, args[0]) for item in value)
        if origin in _MAPPING_ORIGINS:
            if not isinstance(value, Mapping):
                return False
            if not args:
                return True
            key_type, value_type = args
            return all(
                conforms(key, key_type) and conforms(item, value_type)
                for key, item in value.items()
            )
        return False

    if type_ in _SEQUENCE_ORIGINS:
        return is_sequence(value)
    if type_ in _MAPPING_ORIGINS:
        return isinstance(value, Mapping)

    if isinstance(type_, type):
        return isinstance(value, type_)
    return False


def restore_tuples(value: Any, type_: Any) -> Any:
    """Rebuild tuples that ``thaw`` turned into lists, following ``type_``.

    Only the shapes ``conforms`` accepts are rebuilt: ``tuple``,
    ``tuple[X, ...]``, ``tuple[X, Y]`` and sequences of those.  Anything
    else is returned unchanged.
    """
    type_ = strip_optional(type_)
    if not isinstance(value, list):
        return value
    origin = get_origin(type_) or type_
    args = get_args(type_)
    if origin is tuple:
        if not args:
            return tuple(value)
        if len(args) == 2 and args[1] is Ellipsis:
            args = (args[0],) * len(value)
        return tuple(
            restore_tuples(item, arg) for item, arg in zip(value, args, strict=False)
        )
    if origin in _SEQUENCE_ORIGINS and args:
        return [restore_tuples(item, args[0]) for item in value]
    return value


# ---------------------------------------------------------------------------
# Textual parsing
# ---------------------------------------------------------------------------


def to_text(value: Any) -> str:
    """Textual form of a JSON value: ``true``/``false``, compact JSON, or str()."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Mapping) or is_sequence(value):
        return json.dumps(thaw(value), separators=(",", ":"), default=str)
    return str(value)


def parse_int(text: str) -> int | None:
    text = text.strip()
    if not _INT.fullmatch(text):
        return None
    return int(text)


def parse_float(text: str) -> float | None:
    text = text.strip()
    if not _FLOAT.fullmatch(text):
        return None
    return float(text)


def parse_number(text: str) -> int | float | None:
    parsed = parse_int(text)
    if parsed is not None:
        return parsed
    return parse_float(text)


def parse_bool(text: str) -> bool | None:
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def coerce(value: Any, type_: Any) -> Any:
    """Best-effort conversion of a raw scalar to the requested primitive type.

    Args:
        value: The raw JSON value (never null when called by the accessor).
        type_: The requested type; ``Optional`` is stripped first.

    Returns:
        The coerced value, or None when the type has no coercion rule or
        the textual form does not parse.
    """
    if value is None:
        return None
    target = strip_optional(type_)

    if target is int:
        result: Any = parse_int(to_text(value))
    elif target is float:
        result = parse_float(to_text(value))
    elif _is_numeric_type(target):
        result = parse_number(to_text(value))
    elif target is bool:
        result = parse_bool(to_text(value))
    elif target is str:
        return to_text(value)
    else:
        logger.debug("No coercion rule for %r into %r", value, type_)
        return None

    if result is None:
        logger.debug("Could not coerce %r into %r", value, type_)
    return result
