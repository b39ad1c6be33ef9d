"""The connection-like handle builders execute against."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlalchemy.engine import Result
    from sqlalchemy.sql.base import Executable


@runtime_checkable
class Queryable(Protocol):
    """
    Anything that can execute a SQLAlchemy statement asynchronously.

    ``AsyncConnection`` and ``AsyncSession`` both qualify, so builders work
    the same against the root connection or an open transaction.  Writes,
    multi-row and single-row reads all go through ``execute``; the builder
    reads what it needs from the returned ``Result``.

    Nested transactions and savepoints are not managed here.
    """

    async def execute(self, statement: Executable, /) -> Result[Any]: ...


__all__ = ["Queryable"]
