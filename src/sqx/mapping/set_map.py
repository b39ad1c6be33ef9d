"""
Set maps: column → value payloads for INSERT and UPDATE.

Only set fields are included (see :mod:`sqx.mapping.nullness`), so a filter
record with every field left at ``None`` yields an empty map and an update
built from it is skipped.

``to_set_map`` honours the ``excludeOnInsert`` flag by default; pass
``exclude_on_insert=False`` (or use ``to_update_map``) when building an
UPDATE payload, where those columns may legitimately change.
"""

from __future__ import annotations

from typing import Any

from .introspect import bindings, excluded_on_insert
from .nullness import bound_value


def to_set_map(
    record: Any, *excluded: str, exclude_on_insert: bool = True
) -> dict[str, Any]:
    """
    Convert a tagged record into a ``{column: value}`` mapping.

    Args:
        record: A dataclass or pydantic model instance, or ``None``.
        *excluded: Column names to leave out.
        exclude_on_insert: Also leave out columns flagged ``excludeOnInsert``.

    Returns:
        Mapping of set columns to their bound values.  ``None`` records give
        an empty mapping.

    Raises:
        NotAPointerError: *record* is a class rather than an instance.
        NotAStructPointerError: *record* is not a dataclass / pydantic model.
        DuplicateColumnTagError: two fields declare the same column.
    """
    if record is None:
        return {}

    skip = list(excluded)
    if exclude_on_insert:
        skip.extend(excluded_on_insert(record))

    return {b.column: bound_value(b.value) for b in bindings(record, *skip) if b.is_set}


def to_update_map(record: Any, *excluded: str) -> dict[str, Any]:
    """Like :func:`to_set_map`, but keeps ``excludeOnInsert`` columns."""
    return to_set_map(record, *excluded, exclude_on_insert=False)


def to_set_map_alias(
    table: str, record: Any, *excluded: str, exclude_on_insert: bool = True
) -> dict[str, Any]:
    """Like :func:`to_set_map`, with every key prefixed by ``"<table>."``."""
    set_map = to_set_map(record, *excluded, exclude_on_insert=exclude_on_insert)
    return {f"{table}.{key}": value for key, value in set_map.items()}


def contains_updates(record: Any, *excluded: str) -> bool:
    """Return True if an update record carries at least one set field.

    Unlike the set-map builders this never swallows a wrong argument: a
    non-record raises ``NotAPointerError`` so the type mismatch shows up
    during development.
    """
    if record is None:
        return False
    return any(b.is_set for b in bindings(record, *excluded))


__all__ = ["contains_updates", "to_set_map", "to_set_map_alias", "to_update_map"]
