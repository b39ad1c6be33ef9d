"""Execution results for INSERT / UPDATE / DELETE."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from sqlalchemy.engine import Result


class ExecResult(Protocol):
    @property
    def rows_affected(self) -> int: ...

    @property
    def last_insert_id(self) -> Any | None: ...


@dataclass(frozen=True, slots=True)
class EmptyResult:
    """Result of a statement that was never sent (e.g. an update with no changes)."""

    rows_affected: int = 0
    last_insert_id: Any | None = None


@dataclass(frozen=True, slots=True)
class CursorExecResult:
    """Snapshot of a SQLAlchemy cursor result."""

    rows_affected: int
    last_insert_id: Any | None = None

    @classmethod
    def from_result(cls, result: Result[Any]) -> CursorExecResult:
        rowcount = getattr(result, "rowcount", -1)
        return cls(
            rows_affected=rowcount if rowcount is not None else -1,
            last_insert_id=getattr(result, "lastrowid", None),
        )


__all__ = ["CursorExecResult", "EmptyResult", "ExecResult"]
