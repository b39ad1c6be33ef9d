"""Exception hierarchy for sqx.

All exceptions inherit from ``SqxError`` and provide ``to_dict()`` for
structured logging and API-friendly error responses.
"""

from __future__ import annotations

from typing import Any


class SqxError(Exception):
    """Root exception for the sqx toolkit."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


# ── Mapping errors ───────────────────────────────────────────────────


class MappingError(SqxError):
    """Raised when a record cannot be mapped to (or from) SQL columns."""


class NotAPointerError(MappingError):
    """The argument is not a record instance (e.g. the class was passed)."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"{kind!r} must be a record instance")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "NOT_A_POINTER",
            "message": str(self),
            "kind": self.kind,
        }


class NotAStructPointerError(NotAPointerError):
    """The argument is an instance, but not a dataclass or pydantic model."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        MappingError.__init__(
            self, f"{kind!r} must be a dataclass or pydantic model instance"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "NOT_A_STRUCT_POINTER",
            "message": str(self),
            "kind": self.kind,
        }


class DuplicateColumnTagError(MappingError):
    """Two fields of the same record type declare the same column name."""

    def __init__(self, record_type: str, column: str, fields: list[str]) -> None:
        self.record_type = record_type
        self.column = column
        self.fields = fields
        super().__init__(
            f"{record_type}: column {column!r} is declared by more than one "
            f"field ({', '.join(fields)})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DUPLICATE_COLUMN_TAG",
            "message": str(self),
            "record_type": self.record_type,
            "column": self.column,
            "fields": self.fields,
        }


class NoTaggableFieldsError(MappingError):
    """A record used as a filter declares no ``db`` tags at all."""

    def __init__(self, record_type: str) -> None:
        self.record_type = record_type
        super().__init__(f"No db tags detected on {record_type}")


class RowMappingError(MappingError):
    """A result row could not be converted into the requested type."""


# ── Query errors ─────────────────────────────────────────────────────


class QueryError(SqxError):
    """Base class for errors raised while running a query."""


class TooManyRowsError(QueryError):
    """A strict single-row read matched more rows than expected.

    Raised by ``one_strict()`` / ``one_scalar_strict()``. Use ``one()`` to
    downgrade this to a logged warning, or ``first()`` when several rows are
    expected and only the first matters.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"too many rows: expected = {expected} actual = {actual}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "TOO_MANY_ROWS",
            "message": str(self),
            "expected": self.expected,
            "actual": self.actual,
        }


class EmptyStatementError(QueryError):
    """An INSERT or UPDATE has nothing to write and cannot be rendered."""

    def __init__(self, statement: str, reason: str) -> None:
        self.statement = statement
        self.reason = reason
        super().__init__(f"{statement} statements must have {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "EMPTY_STATEMENT",
            "message": str(self),
            "statement": self.statement,
        }


class MissingQueryableError(SqxError):
    """A builder was executed without a queryable."""

    def __init__(self) -> None:
        super().__init__(
            "missing queryable - pass one in SqxConfig or call with_queryable()"
        )


__all__: list[str] = [
    "DuplicateColumnTagError",
    "EmptyStatementError",
    "MappingError",
    "MissingQueryableError",
    "NoTaggableFieldsError",
    "NotAPointerError",
    "NotAStructPointerError",
    "QueryError",
    "RowMappingError",
    "SqxError",
    "TooManyRowsError",
]
