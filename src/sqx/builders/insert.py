"""INSERT builders: single row from a set map, many rows from records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import insert, literal_column

from ..exceptions import EmptyStatementError, MappingError
from ..mapping.introspect import bindings, columns, excluded_on_insert
from ..mapping.nullness import bound_value
from ..mapping.set_map import to_set_map
from ..results import CursorExecResult
from .base import BaseBuilder, make_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Insert

    from ..config import SqxConfig
    from ..results import ExecResult

T = TypeVar("T")


class InsertBuilder(BaseBuilder):
    """Immutable INSERT builder."""

    def __init__(self, table: str, config: SqxConfig) -> None:
        super().__init__(config)
        self._table = table
        self._columns: tuple[str, ...] = ()
        self._rows: tuple[tuple[Any, ...], ...] = ()
        self._prefixes: tuple[str, ...] = ()
        self._returning: tuple[str, ...] = ()

    # -- statement shape -----------------------------------------------------

    def prefix_with(self, *prefixes: str) -> InsertBuilder:
        """Add keywords before ``INTO`` (e.g. ``OR IGNORE``)."""
        return self._evolve(_prefixes=(*self._prefixes, *prefixes))

    def returning(self, *columns: str) -> InsertBuilder:
        """Add ``RETURNING`` columns (e.g. a generated id); see :meth:`do_returning`."""
        return self._evolve(_returning=(*self._returning, *columns))

    def columns(self, *columns: str) -> InsertBuilder:
        return self._evolve(_columns=(*self._columns, *columns))

    def values(self, *values: Any) -> InsertBuilder:
        """Add a single row's values, in :meth:`columns` order."""
        return self._evolve(_rows=(*self._rows, tuple(map(bound_value, values))))

    def set_map(self, clauses: Mapping[str, Any]) -> InsertBuilder:
        """Set columns and values from a mapping, replacing earlier ones."""
        return self._evolve(
            _columns=tuple(clauses), _rows=(tuple(map(bound_value, clauses.values())),)
        )

    def set_record(self, record: Any, *excluded: str) -> InsertBuilder:
        """Set columns and values from a tagged record (``excludeOnInsert`` honoured)."""
        try:
            return self.set_map(to_set_map(record, *excluded))
        except MappingError as e:
            return self._with_error(e)

    # -- rendering -----------------------------------------------------------

    def statement(self) -> Insert:
        if not self._columns or not self._rows:
            raise EmptyStatementError("insert", "at least one set of values")
        for row in self._rows:
            if len(row) != len(self._columns):
                raise ValueError(
                    f"insert into {self._table}: {len(self._columns)} column(s) "
                    f"but a row of {len(row)} value(s)"
                )
        stmt = insert(make_table(self._table, *self._columns))
        if self._prefixes:
            stmt = stmt.prefix_with(*self._prefixes)
        if self._returning:
            stmt = stmt.returning(*map(literal_column, self._returning))
        rows = [dict(zip(self._columns, row, strict=True)) for row in self._rows]
        if len(rows) == 1:
            return stmt.values(rows[0])
        return stmt.values(rows)

    # -- execution -----------------------------------------------------------

    async def do(self) -> None:
        await self.do_result()

    async def do_result(self) -> ExecResult:
        """Execute and return rows affected / last insert id."""
        return CursorExecResult.from_result(await self._execute())

    async def do_returning(self) -> list[dict[str, Any]]:
        """Execute and return the ``RETURNING`` rows as dicts."""
        result = await self._execute()
        return [dict(row) for row in result.mappings().all()]


class InsertManyBuilder(InsertBuilder, Generic[T]):
    """INSERT builder that writes a batch of records of type ``T``."""

    def from_items(self, items: Sequence[T], *excluded: str) -> InsertManyBuilder[T]:
        """
        Add one row per item.

        Columns come from the first item (minus *excluded* and columns
        flagged ``excludeOnInsert``); every column is bound for every item,
        so unset fields insert NULL.  An empty sequence leaves the builder
        unchanged.
        """
        if not items:
            return self
        try:
            skip = (*excluded, *excluded_on_insert(items[0]))
            cols = columns(items[0], *skip)
            builder = self.columns(*cols)
            for item in items:
                builder = builder.values(
                    *(
                        bound_value(b.value) if b.is_set else None
                        for b in bindings(item, *skip)
                    )
                )
        except MappingError as e:
            return self._with_error(e)
        return builder  # type: ignore[return-value]


__all__ = ["InsertBuilder", "InsertManyBuilder"]
