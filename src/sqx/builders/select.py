"""
Typed SELECT builder.

Wraps a SQLAlchemy ``Select`` and adds terminal methods that execute the
query and scan rows into ``T``:

- ``all()``  every row.
- ``first()``  the first row; several rows are fine.
- ``one()``  exactly one row expected; extra rows are logged as a
  warning and the first is returned.
- ``one_strict()``  exactly one row; extra rows raise ``TooManyRowsError``.
- ``*_scalar()``  same cardinality rules, returning the first column of
  the row instead of a scanned ``T``.

Reads that find no row raise SQLAlchemy's ``NoResultFound``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import literal_column, select, text, union_all
from sqlalchemy.exc import NoResultFound

from ..exceptions import MappingError, TooManyRowsError
from ..mapping.scan import scan_row, scan_rows
from .base import BaseBuilder, make_table, text_with_args, to_predicate

if TYPE_CHECKING:
    from sqlalchemy import RowMapping, Select
    from sqlalchemy.sql.elements import ClauseElement

    from ..config import SqxConfig

T = TypeVar("T")


def _column_expr(col: Any) -> Any:
    return literal_column(col) if isinstance(col, str) else col


class SelectBuilder(BaseBuilder, Generic[T]):
    """Immutable SELECT builder producing rows of type ``T``."""

    def __init__(
        self, into: type[T], config: SqxConfig, stmt: Select[Any] | None = None
    ) -> None:
        super().__init__(config)
        self._into = into
        self._stmt: Select[Any] = stmt if stmt is not None else select()
        self._unions: tuple[Select[Any] | ClauseElement, ...] = ()

    def _with_stmt(self, stmt: Select[Any]) -> SelectBuilder[T]:
        return self._evolve(_stmt=stmt)

    # -- statement shape -----------------------------------------------------

    def columns(self, *columns: Any) -> SelectBuilder[T]:
        """Add result columns (strings are rendered verbatim)."""
        return self._with_stmt(self._stmt.add_columns(*map(_column_expr, columns)))

    def column(self, column: Any) -> SelectBuilder[T]:
        """Add one result column, e.g. ``"COUNT(*) AS n"`` or a SQLAlchemy expression."""
        return self.columns(column)

    def remove_columns(self) -> SelectBuilder[T]:
        """Drop every result column, keeping FROM, WHERE and the rest."""
        return self._with_stmt(self._stmt.with_only_columns())

    def distinct(self) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.distinct())

    def prefix_with(self, *prefixes: str) -> SelectBuilder[T]:
        """Add keywords right after ``SELECT`` (e.g. ``SQL_NO_CACHE``)."""
        return self._with_stmt(self._stmt.prefix_with(*prefixes))

    def suffix_with(self, *suffixes: str) -> SelectBuilder[T]:
        """Add an expression to the end of the query (e.g. ``FOR UPDATE``)."""
        return self._with_stmt(self._stmt.suffix_with(*suffixes))

    def from_(self, table: str, alias: str | None = None) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.select_from(make_table(table, alias=alias)))

    def from_select(self, other: SelectBuilder[Any], alias: str) -> SelectBuilder[T]:
        """Use another builder's query as a sub-select in the FROM clause."""
        if other.error is not None:
            return self._with_error(other.error)
        return self._with_stmt(
            self._stmt.select_from(other.statement().subquery(alias))  # type: ignore[attr-defined]
        )

    # -- joins ---------------------------------------------------------------

    def _join(
        self, table: str, on: str, args: tuple[Any, ...], alias: str | None, **kw: Any
    ) -> SelectBuilder[T]:
        try:
            onclause = text_with_args(on, *args)
        except ValueError as e:
            return self._with_error(e)
        return self._with_stmt(
            self._stmt.join(make_table(table, alias=alias), onclause, **kw)
        )

    def join(
        self, table: str, on: str, *args: Any, alias: str | None = None
    ) -> SelectBuilder[T]:
        """``JOIN table ON <on>``; ``?`` in *on* are bound to *args*."""
        return self._join(table, on, args, alias)

    def inner_join(
        self, table: str, on: str, *args: Any, alias: str | None = None
    ) -> SelectBuilder[T]:
        return self._join(table, on, args, alias)

    def left_join(
        self, table: str, on: str, *args: Any, alias: str | None = None
    ) -> SelectBuilder[T]:
        return self._join(table, on, args, alias, isouter=True)

    def full_join(
        self, table: str, on: str, *args: Any, alias: str | None = None
    ) -> SelectBuilder[T]:
        return self._join(table, on, args, alias, full=True)

    def cross_join(self, table: str, alias: str | None = None) -> SelectBuilder[T]:
        """Add *table* to the FROM list, rendered as ``FROM a, b``."""
        return self._with_stmt(self._stmt.select_from(make_table(table, alias=alias)))

    # -- filtering -----------------------------------------------------------

    def where(self, pred: Any, *args: Any) -> SelectBuilder[T]:
        """
        Add a WHERE predicate.  Predicates are ANDed together.

        ``pred`` may be ``None`` / ``""`` (ignored), a ``Clause`` (a stored
        error is deferred to execution), an ``Eq`` / ``NotEq`` or mapping, a
        SQL string with ``?`` placeholders bound to *args*, or a SQLAlchemy
        expression.
        """
        try:
            expr = to_predicate(pred, *args)
        except (MappingError, ValueError) as e:
            return self._with_error(e)
        if expr is None:
            return self
        return self._with_stmt(self._stmt.where(expr))

    def group_by(self, *group_bys: str) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.group_by(*map(_column_expr, group_bys)))

    def having(self, pred: Any, *args: Any) -> SelectBuilder[T]:
        """Add a HAVING predicate (see :meth:`where`)."""
        try:
            expr = to_predicate(pred, *args)
        except (MappingError, ValueError) as e:
            return self._with_error(e)
        if expr is None:
            return self
        return self._with_stmt(self._stmt.having(expr))

    def order_by(self, *order_bys: str) -> SelectBuilder[T]:
        """Add ORDER BY expressions such as ``"widget_id DESC"``."""
        return self._with_stmt(
            self._stmt.order_by(
                *(text(o) if isinstance(o, str) else o for o in order_bys)
            )
        )

    def order_by_clause(self, clause: str, *args: Any) -> SelectBuilder[T]:
        """Add an ORDER BY expression with ``?`` placeholders bound to *args*."""
        try:
            expr = text_with_args(clause, *args)
        except ValueError as e:
            return self._with_error(e)
        return self._with_stmt(self._stmt.order_by(expr))

    def limit(self, limit: int) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.limit(limit))

    def remove_limit(self) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.limit(None))

    def offset(self, offset: int) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.offset(offset))

    def remove_offset(self) -> SelectBuilder[T]:
        return self._with_stmt(self._stmt.offset(None))

    def union_all(self, other: SelectBuilder[T]) -> SelectBuilder[T]:
        """Append ``UNION ALL (<other>)``."""
        if other.error is not None:
            return self._with_error(other.error)
        return self._evolve(_unions=(*self._unions, other.statement()))

    # -- rendering -----------------------------------------------------------

    def statement(self) -> ClauseElement:
        if self._unions:
            return union_all(self._stmt, *self._unions)  # type: ignore[arg-type]
        return self._stmt

    # -- execution -----------------------------------------------------------

    async def _rows(self) -> list[RowMapping]:
        result = await self._execute()
        return list(result.mappings().all())

    async def all(self) -> list[T]:
        """Execute the query and return every row as ``T``."""
        return scan_rows(await self._rows(), self._into)

    async def _first_row(self) -> RowMapping:
        result = await self._execute()
        row = result.mappings().first()
        if row is None:
            raise NoResultFound("No row was found when one was required")
        return row

    async def first(self) -> T:
        """Return the first row.  Without ORDER BY, which row is first is undefined."""
        return scan_row(await self._first_row(), self._into)

    async def first_scalar(self) -> Any:
        row = await self._first_row()
        return next(iter(row.values()))

    async def _one_row(self, *, strict: bool) -> RowMapping:
        rows = await self._rows()
        if not rows:
            raise NoResultFound("No row was found when one was required")
        if len(rows) > 1:
            if strict:
                raise TooManyRowsError(expected=1, actual=len(rows))
            self._config.logger.warning(
                "sqx: in call to one, got %d rows, returning first result", len(rows)
            )
        return rows[0]

    async def one(self) -> T:
        """Return the single row, logging a warning if more than one matched."""
        return scan_row(await self._one_row(strict=False), self._into)

    async def one_strict(self) -> T:
        """Return the single row, raising ``TooManyRowsError`` if more matched."""
        return scan_row(await self._one_row(strict=True), self._into)

    async def one_scalar(self) -> Any:
        row = await self._one_row(strict=False)
        return next(iter(row.values()))

    async def one_scalar_strict(self) -> Any:
        row = await self._one_row(strict=True)
        return next(iter(row.values()))


__all__ = ["SelectBuilder"]
