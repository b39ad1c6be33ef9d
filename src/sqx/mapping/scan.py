"""
Convert result rows into typed values.

``into`` decides the shape of each row:

- dataclass: columns are matched to fields through their ``db`` tags;
  columns without a matching tag are ignored.
- pydantic model: same matching, then ``model_validate``.
- ``dict``: the row mapping as a plain dict.
- anything else: a scalar, the first column, passed through ``into`` only
  when it is not already an instance.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, TypeVar, cast

from pydantic import BaseModel

from ..exceptions import DuplicateColumnTagError, RowMappingError
from .introspect import describe_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

T = TypeVar("T")


def _is_record_type(into: type[Any]) -> bool:
    return dataclasses.is_dataclass(into) or (
        isinstance(into, type) and issubclass(into, BaseModel)
    )


def _field_data(row: Mapping[str, Any], into: type[Any]) -> dict[str, Any]:
    return {f.attr: row[f.column] for f in describe_type(into) if f.column in row}


def scan_row(row: Mapping[str, Any], into: type[T]) -> T:
    """Convert a single row mapping into an instance of *into*."""
    try:
        if into is dict:
            return cast("T", dict(row))
        if _is_record_type(into):
            data = _field_data(row, into)
            if issubclass(into, BaseModel):
                return cast("T", into.model_validate(data))
            return into(**data)
        value = next(iter(row.values()))
        return value if isinstance(value, into) else into(value)  # type: ignore[call-arg]
    except DuplicateColumnTagError:
        raise
    except Exception as e:  # noqa: BLE001
        # Construction and validation errors of any kind
        raise RowMappingError(
            f"Failed to map row {dict(row)!r} to {getattr(into, '__name__', into)}: {e}"
        ) from e


def scan_rows(rows: Iterable[Mapping[str, Any]], into: type[T]) -> list[T]:
    """Convert every row mapping into an instance of *into*."""
    return [scan_row(row, into) for row in rows]


__all__ = ["scan_row", "scan_rows"]
