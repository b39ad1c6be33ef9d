"""Record ↔ SQL fragment mapping."""

from __future__ import annotations

from .clause import Clause, Eq, NotEq, to_clause, to_clause_alias
from .introspect import (
    FieldBinding,
    TaggedField,
    bindings,
    columns,
    describe,
    describe_type,
    excluded_on_insert,
)
from .nullable import Nullable, NullableState, new_null, new_nullable
from .nullness import bound_value, is_unset
from .scan import scan_row, scan_rows
from .set_map import contains_updates, to_set_map, to_set_map_alias, to_update_map
from .tags import EXCLUDE_ON_INSERT, column, model_column

__all__ = [
    # Tags
    "EXCLUDE_ON_INSERT",
    "column",
    "model_column",
    # Introspection
    "FieldBinding",
    "TaggedField",
    "bindings",
    "columns",
    "describe",
    "describe_type",
    "excluded_on_insert",
    # Nullness
    "Nullable",
    "NullableState",
    "bound_value",
    "is_unset",
    "new_null",
    "new_nullable",
    # Set maps
    "contains_updates",
    "to_set_map",
    "to_set_map_alias",
    "to_update_map",
    # Clauses
    "Clause",
    "Eq",
    "NotEq",
    "to_clause",
    "to_clause_alias",
    # Scanning
    "scan_row",
    "scan_rows",
]
