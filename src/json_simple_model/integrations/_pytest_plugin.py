"""pytest plugin for json-simple-model.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from json_simple_model.document.equality import deep_equals, diff_paths
from json_simple_model.view import TypedView


def _document_of(value: Any) -> Any:
    if isinstance(value, TypedView):
        return value.to_json()
    return value


@pytest.fixture(scope="session")
def assert_views_equal() -> Any:
    """Fixture that returns a callable deep-equality asserter for views.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_copy(assert_views_equal):
            assert_views_equal(person.copy_with(), person)

        def test_changed(assert_views_equal):
            with pytest.raises(AssertionError, match=r"/age"):
                assert_views_equal(Person({"age": 1}), {"age": 2})

    Returns:
        A callable ``_assert(actual, expected, null_equals_missing=True) -> None``
        accepting views or plain mappings.
    """

    def _assert(
        actual: TypedView | Mapping[str, Any] | None,
        expected: TypedView | Mapping[str, Any] | None,
        null_equals_missing: bool = True,
    ) -> None:
        """Assert that two views (or JSON objects) hold deep-equal Documents.

        Raises:
            AssertionError: When the Documents differ, with a message listing
                the differing JSON Pointer paths and both documents.
        """
        left = _document_of(actual)
        right = _document_of(expected)
        if deep_equals(left, right, null_equals_missing=null_equals_missing):
            return
        paths = diff_paths(left, right, null_equals_missing=null_equals_missing)
        raise AssertionError(
            f"Documents differ at {paths}\n"
            f"  actual:   {left}\n"
            f"  expected: {right}"
        )

    return _assert
