"""Document subpackage: frozen JSON value trees and their structural equality.

Re-exports the public API for the document module:
- freeze / thaw: read-only deep copies and their plain inverse
- is_document / is_sequence / is_document_list: shape predicates
- deep_equals / deep_hash / structural_key / diff_paths: structural comparison
"""

from json_simple_model.document.equality import (
    deep_equals,
    deep_hash,
    diff_paths,
    structural_key,
)
from json_simple_model.document.frozen import (
    Document,
    JsonValue,
    freeze,
    freeze_document,
    is_document,
    is_document_list,
    is_sequence,
    thaw,
)

__all__ = [
    "Document",
    "JsonValue",
    "deep_equals",
    "deep_hash",
    "diff_paths",
    "freeze",
    "freeze_document",
    "is_document",
    "is_document_list",
    "is_sequence",
    "structural_key",
    "thaw",
]
