"""
UPDATE builder.

An update with nothing to set is never sent: ``do_result()`` logs and
returns an :class:`~sqx.results.EmptyResult`.  This keeps "update with an
empty filter" a cheap no-op instead of a round trip (or a SQL error)::

    await write(config).update("widgets").where(Eq(widget_id=wid)).set_record(
        widget_update
    ).do()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import update

from ..exceptions import EmptyStatementError, MappingError
from ..mapping.nullable import Nullable
from ..mapping.nullness import bound_value
from ..mapping.set_map import to_update_map
from ..results import CursorExecResult, EmptyResult
from .base import BaseBuilder, make_table, to_predicate

if TYPE_CHECKING:
    from sqlalchemy import Update

    from ..config import SqxConfig
    from ..results import ExecResult


class UpdateBuilder(BaseBuilder):
    """Immutable UPDATE builder that tracks whether anything will change."""

    def __init__(self, table: str, config: SqxConfig) -> None:
        super().__init__(config)
        self._table = table
        self._sets: dict[str, Any] = {}
        self._wheres: tuple[Any, ...] = ()
        self._prefixes: tuple[str, ...] = ()

    @property
    def has_changes(self) -> bool:
        return bool(self._sets)

    # -- statement shape -----------------------------------------------------

    def prefix_with(self, *prefixes: str) -> UpdateBuilder:
        return self._evolve(_prefixes=(*self._prefixes, *prefixes))

    def set(self, column: str, value: Any) -> UpdateBuilder:
        """Add ``SET column = value``.  An absent ``Nullable`` is ignored."""
        if isinstance(value, Nullable) and value.is_absent:
            return self
        return self._evolve(_sets={**self._sets, column: bound_value(value)})

    def set_map(self, clauses: Mapping[str, Any]) -> UpdateBuilder:
        """Add a SET entry per mapping item; an empty mapping changes nothing."""
        builder = self
        for column, value in clauses.items():
            builder = builder.set(column, value)
        return builder

    def set_record(self, record: Any, *excluded: str) -> UpdateBuilder:
        """Add SET entries for every set field of a tagged update record."""
        try:
            return self.set_map(to_update_map(record, *excluded))
        except MappingError as e:
            return self._with_error(e)

    def where(self, pred: Any, *args: Any) -> UpdateBuilder:
        """Add a WHERE predicate (see ``SelectBuilder.where``)."""
        try:
            expr = to_predicate(pred, *args)
        except (MappingError, ValueError) as e:
            return self._with_error(e)
        if expr is None:
            return self
        return self._evolve(_wheres=(*self._wheres, expr))

    # -- rendering -----------------------------------------------------------

    def statement(self) -> Update:
        if not self._sets:
            raise EmptyStatementError("update", "at least one Set clause")
        stmt = update(make_table(self._table, *self._sets)).values(self._sets)
        if self._prefixes:
            stmt = stmt.prefix_with(*self._prefixes)
        for expr in self._wheres:
            stmt = stmt.where(expr)
        return stmt

    # -- execution -----------------------------------------------------------

    async def do(self) -> None:
        await self.do_result()

    async def do_result(self) -> ExecResult:
        """Execute, or return ``EmptyResult`` when there is nothing to set."""
        if self._error is not None:
            raise self._error
        if not self._sets:
            self._config.logger.info("Skipping write to DB - no updates set")
            return EmptyResult()
        return CursorExecResult.from_result(await self._execute())


__all__ = ["UpdateBuilder"]
