"""
Equality clauses built from tagged filter records.

``Eq`` / ``NotEq`` are column → value mappings compiled into SQLAlchemy
boolean expressions:

- scalar value       → ``col = ?``          (``col <> ?``)
- list/tuple/set     → ``col IN (?, ...)``  (``col NOT IN (...)``)
- ``None``           → ``col IS NULL``      (``col IS NOT NULL``)

Entries are ANDed in insertion order; an empty mapping is always true.

``to_clause`` returns a :class:`Clause`, a result type holding either the
``Eq`` or the error met while building it.  The error surfaces when the
clause is rendered or unwrapped, so filter construction can be chained into a
builder without checking at every step::

    rows = await read(Widget, config).select("*").from_("widgets").where(
        to_clause(widget_filter)
    ).all()
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, literal_column, true

from ..exceptions import MappingError, NoTaggableFieldsError
from ..placeholder import QUESTION, PlaceholderFormat, render
from .introspect import bindings, columns, record_type
from .nullable import Nullable
from .nullness import bound_value

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.engine.interfaces import Dialect

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class Eq(dict[str, Any]):
    """Equality predicate: ``{"status": "ok", "id": [1, 2]}``."""

    def _compare(self, key: str, value: Any) -> ColumnElement[bool]:
        col = literal_column(key)
        value = bound_value(value)
        if value is None:
            return col.is_(None)
        if isinstance(value, _SEQUENCE_TYPES):
            return col.in_(list(value))
        return col == value

    def to_expression(self) -> ColumnElement[bool]:
        # An absent Nullable constrains nothing
        entries = [
            (key, value)
            for key, value in self.items()
            if not (isinstance(value, Nullable) and value.is_absent)
        ]
        if not entries:
            return true()
        return and_(*(self._compare(key, value) for key, value in entries))

    def __clause_element__(self) -> ColumnElement[bool]:
        return self.to_expression()

    def to_sql(
        self, placeholder: PlaceholderFormat = QUESTION, dialect: Dialect | None = None
    ) -> tuple[str, list[Any]]:
        return render(self.to_expression(), placeholder, dialect)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


class NotEq(Eq):
    """Inequality predicate, the negation of :class:`Eq` per column."""

    def _compare(self, key: str, value: Any) -> ColumnElement[bool]:
        col = literal_column(key)
        value = bound_value(value)
        if value is None:
            return col.is_not(None)
        if isinstance(value, _SEQUENCE_TYPES):
            return col.not_in(list(value))
        return col != value


@dataclasses.dataclass(frozen=True, slots=True)
class Clause:
    """Either a usable :class:`Eq` predicate or a deferred error, never both."""

    contents: Eq | None = None
    error: Exception | None = None

    # Eq is a mutable mapping
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if (self.contents is None) == (self.error is None):
            raise ValueError("Clause holds exactly one of contents or error")

    @classmethod
    def ok(cls, contents: Eq) -> Clause:
        return cls(contents=contents)

    @classmethod
    def failed(cls, error: Exception) -> Clause:
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        """True for a valid clause that constrains nothing."""
        return self.contents is not None and not self.contents

    def unwrap(self) -> Eq:
        """Return the predicate, raising the stored error if there is one."""
        if self.error is not None:
            raise self.error
        return cast("Eq", self.contents)

    def to_expression(self) -> ColumnElement[bool]:
        return self.unwrap().to_expression()

    def __clause_element__(self) -> ColumnElement[bool]:
        return self.to_expression()

    def to_sql(
        self, placeholder: PlaceholderFormat = QUESTION, dialect: Dialect | None = None
    ) -> tuple[str, list[Any]]:
        return self.unwrap().to_sql(placeholder, dialect)

    def alias(self, table: str) -> Clause:
        """Prefix every column with ``"<table>."``; errors pass through."""
        if self.error is not None:
            return self
        contents = cast("Eq", self.contents)
        return Clause.ok(Eq({f"{table}.{key}": value for key, value in contents.items()}))


def to_clause(record: Any, *excluded: str) -> Clause:
    """
    Convert a filter record into an equality :class:`Clause`.

    - ``None`` gives an empty, always-true clause.
    - A record type with no ``db`` tags gives a deferred
      ``NoTaggableFieldsError``.
    - Otherwise every set field becomes an ``Eq`` entry; unset fields are
      skipped, so a record with all fields unset is also always true.
    """
    if record is None:
        return Clause.ok(Eq())
    try:
        if not columns(record, *excluded):
            return Clause.failed(NoTaggableFieldsError(record_type(record).__name__))
        contents = Eq(
            (b.column, bound_value(b.value)) for b in bindings(record, *excluded) if b.is_set
        )
    except MappingError as e:
        return Clause.failed(e)
    return Clause.ok(contents)


def to_clause_alias(table: str, record: Any, *excluded: str) -> Clause:
    """Like :func:`to_clause`, with every key prefixed by ``"<table>."``."""
    return to_clause(record, *excluded).alias(table)


__all__ = ["Clause", "Eq", "NotEq", "to_clause", "to_clause_alias"]
