"""
Tag introspection: walk a record's fields and read their column tags.

A *record* is a dataclass instance or a pydantic ``BaseModel`` instance.
Field descriptions are computed once per record type and cached; values are
read from the instance on every call.

Rules
-----
- Fields without a ``db`` tag, or tagged ``db="-"``, are ignored.
- Two fields declaring the same column raise ``DuplicateColumnTagError``,
  whether or not either column is later excluded.
- Caller exclusions remove columns from the result; the ``excludeOnInsert``
  flag is only reported here (``excluded_on_insert``) and applied by the
  set-map builder.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
from collections import defaultdict
from typing import Any

from pydantic import BaseModel

from ..exceptions import (
    DuplicateColumnTagError,
    NotAPointerError,
    NotAStructPointerError,
)
from .nullness import is_unset
from .tags import DB_TAG, EXCLUDE_ON_INSERT, SKIP, SQX_TAG, parse_flags

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class TaggedField:
    """Static description of one tagged field of a record type."""

    attr: str
    column: str
    flags: frozenset[str] = frozenset()

    @property
    def exclude_on_insert(self) -> bool:
        return EXCLUDE_ON_INSERT in self.flags


@dataclasses.dataclass(frozen=True, slots=True)
class FieldBinding:
    """A column paired with the value read from one record instance."""

    column: str
    value: Any
    is_set: bool
    exclude_on_insert: bool = False


def record_type(record: Any) -> type[Any]:
    """Validate *record* and return its type."""
    if isinstance(record, type):
        raise NotAPointerError(record.__name__)
    if dataclasses.is_dataclass(record) or isinstance(record, BaseModel):
        return type(record)
    raise NotAStructPointerError(type(record).__name__)


def _raw_tags(cls: type[Any]) -> list[tuple[str, dict[str, Any]]]:
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        result = []
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra
            result.append((name, extra if isinstance(extra, dict) else {}))
        return result
    return [(f.name, dict(f.metadata)) for f in dataclasses.fields(cls)]


@functools.lru_cache(maxsize=None)
def describe_type(cls: type[Any]) -> tuple[TaggedField, ...]:
    """Return the tagged fields of a record type, in declaration order."""
    tagged: list[TaggedField] = []
    seen: defaultdict[str, list[str]] = defaultdict(list)

    for attr, tags in _raw_tags(cls):
        column = tags.get(DB_TAG)
        if not column or column == SKIP:
            continue
        tagged.append(TaggedField(attr, str(column), parse_flags(tags.get(SQX_TAG))))
        seen[str(column)].append(attr)

    for column, attrs in seen.items():
        if len(attrs) > 1:
            raise DuplicateColumnTagError(cls.__name__, column, attrs)

    logger.debug(
        "Described %s: %d tagged field(s)", cls.__name__, len(tagged)
    )
    return tuple(tagged)


def columns(record: Any, *excluded: str) -> list[str]:
    """Ordered column names declared on *record*, minus *excluded*."""
    skip = set(excluded)
    return [f.column for f in describe_type(record_type(record)) if f.column not in skip]


def excluded_on_insert(record: Any) -> list[str]:
    """Columns flagged ``excludeOnInsert`` on *record*."""
    return [f.column for f in describe_type(record_type(record)) if f.exclude_on_insert]


def bindings(record: Any, *excluded: str) -> list[FieldBinding]:
    """Ordered bindings for every tagged, non-excluded field of *record*."""
    skip = set(excluded)
    result = []
    for f in describe_type(record_type(record)):
        if f.column in skip:
            continue
        value = getattr(record, f.attr)
        result.append(
            FieldBinding(
                column=f.column,
                value=value,
                is_set=not is_unset(value),
                exclude_on_insert=f.exclude_on_insert,
            )
        )
    return result


def describe(record: Any) -> list[FieldBinding]:
    """Bindings for every tagged field of *record*, with no exclusions."""
    return bindings(record)


__all__ = [
    "FieldBinding",
    "TaggedField",
    "bindings",
    "columns",
    "describe",
    "describe_type",
    "excluded_on_insert",
    "record_type",
]
