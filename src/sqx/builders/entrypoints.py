"""
Entry points for the fluent builders.

``read`` starts typed SELECTs, ``write`` starts INSERT / UPDATE / DELETE and
``typed_write`` starts batch inserts from records::

    config = SqxConfig(queryable=conn)

    widgets = await read(Widget, config).select("*").from_("widgets").all()
    await write(config).delete("widgets").where(Eq(widget_id=wid)).do()
    await typed_write(Widget, config).insert_many("widgets").from_items(ws).do()
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..config import SqxConfig
from .delete import DeleteBuilder
from .insert import InsertBuilder, InsertManyBuilder
from .select import SelectBuilder
from .update import UpdateBuilder

if TYPE_CHECKING:
    import logging

    from sqlalchemy import Select

    from ..queryable import Queryable

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class _Context:
    config: SqxConfig = field(default_factory=SqxConfig)

    def _evolve_config(self, **changes: Any) -> Any:
        return replace(self, config=self.config.evolve(**changes))

    def with_queryable(self, queryable: Queryable) -> Any:
        return self._evolve_config(queryable=queryable)

    def with_logger(self, logger: logging.Logger) -> Any:
        return self._evolve_config(logger=logger)


@dataclass(frozen=True, slots=True)
class ReadContext(_Context, Generic[T]):
    into: type[T] = dict  # type: ignore[assignment]

    def select(self, *columns: Any) -> SelectBuilder[T]:
        return SelectBuilder(self.into, self.config).columns(*columns)

    def from_statement(self, stmt: Select[Any]) -> SelectBuilder[T]:
        """Start from an existing SQLAlchemy ``Select``."""
        return SelectBuilder(self.into, self.config, stmt)


@dataclass(frozen=True, slots=True)
class WriteContext(_Context):
    def insert(self, table: str) -> InsertBuilder:
        return InsertBuilder(table, self.config)

    def update(self, table: str) -> UpdateBuilder:
        return UpdateBuilder(table, self.config)

    def delete(self, table: str) -> DeleteBuilder:
        return DeleteBuilder(table, self.config)


@dataclass(frozen=True, slots=True)
class TypedWriteContext(_Context, Generic[T]):
    into: type[T] = dict  # type: ignore[assignment]

    def insert_many(self, table: str) -> InsertManyBuilder[T]:
        return InsertManyBuilder(table, self.config)


def read(into: type[T], config: SqxConfig | None = None) -> ReadContext[T]:
    """Start a SELECT whose rows are scanned into *into*."""
    return ReadContext(config=config or SqxConfig(), into=into)


def write(config: SqxConfig | None = None) -> WriteContext:
    """Start an INSERT, UPDATE or DELETE."""
    return WriteContext(config=config or SqxConfig())


def typed_write(into: type[T], config: SqxConfig | None = None) -> TypedWriteContext[T]:
    """Start a batch INSERT of records of type *into*."""
    return TypedWriteContext(config=config or SqxConfig(), into=into)


__all__ = [
    "ReadContext",
    "TypedWriteContext",
    "WriteContext",
    "read",
    "typed_write",
    "write",
]
