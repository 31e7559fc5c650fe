"""List conversion helper for arrays of JSON objects.

``from_list`` returns a reusable converter:

- null input                              -> None
- ``element_type`` given and every non-null element already conforms
                                          -> the elements, unchanged
                                             (an all-null array still goes
                                             to ``from_json`` when given)
- ``from_json`` given                     -> from_json applied to each
                                             object-or-null element
- otherwise                               -> None for the whole array

Elements that are neither objects nor null are dropped from the converted
result (logged at DEBUG).  Null elements are *kept* and passed to
``from_json``, which must therefore accept None.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from json_simple_model.coercion import conforms
from json_simple_model.document.frozen import is_document, thaw

__all__ = ["from_list"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def from_list(
    from_json: Callable[[dict[str, Any] | None], T | None] | None = None,
    *,
    element_type: Any = None,
) -> Callable[[Sequence[Any] | None], list[Any] | None]:
    """Build a converter from a JSON array to a list of typed elements.

    Args:
        from_json:    Converts one JSON object (or None) into an element.
        element_type: When given, arrays whose elements already satisfy this
                      type are returned as-is without calling ``from_json``.

    Returns:
        A callable ``convert(data) -> list | None``.
    """

    def convert(data: Sequence[Any] | None) -> list[Any] | None:
        if data is None:
            return None
        if (
            element_type is not None
            and (from_json is None or any(item is not None for item in data))
            and all(item is None or conforms(item, element_type) for item in data)
        ):
            return [thaw(item) for item in data]
        if from_json is None:
            logger.debug("Array elements do not conform to %r", element_type)
            return None

        kept = [item for item in data if item is None or is_document(item)]
        if len(kept) != len(data):
            logger.debug(
                "Dropped %d array element(s) that were neither objects nor null",
                len(data) - len(kept),
            )
        return [from_json(thaw(item)) for item in kept]

    return convert
