"""DELETE builder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete

from ..exceptions import MappingError
from ..results import CursorExecResult
from .base import BaseBuilder, make_table, to_predicate

if TYPE_CHECKING:
    from sqlalchemy import Delete

    from ..config import SqxConfig
    from ..results import ExecResult


class DeleteBuilder(BaseBuilder):
    """Immutable DELETE builder."""

    def __init__(self, table: str, config: SqxConfig) -> None:
        super().__init__(config)
        self._stmt: Delete = delete(make_table(table))

    def prefix_with(self, *prefixes: str) -> DeleteBuilder:
        return self._evolve(_stmt=self._stmt.prefix_with(*prefixes))

    def where(self, pred: Any, *args: Any) -> DeleteBuilder:
        """Add a WHERE predicate (see ``SelectBuilder.where``)."""
        try:
            expr = to_predicate(pred, *args)
        except (MappingError, ValueError) as e:
            return self._with_error(e)
        if expr is None:
            return self
        return self._evolve(_stmt=self._stmt.where(expr))

    def statement(self) -> Delete:
        return self._stmt

    async def do(self) -> None:
        await self.do_result()

    async def do_result(self) -> ExecResult:
        return CursorExecResult.from_result(await self._execute())


__all__ = ["DeleteBuilder"]
