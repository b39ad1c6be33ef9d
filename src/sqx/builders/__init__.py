"""Fluent SELECT / INSERT / UPDATE / DELETE builders over SQLAlchemy Core."""

from __future__ import annotations

from .base import BaseBuilder
from .delete import DeleteBuilder
from .entrypoints import (
    ReadContext,
    TypedWriteContext,
    WriteContext,
    read,
    typed_write,
    write,
)
from .insert import InsertBuilder, InsertManyBuilder
from .select import SelectBuilder
from .update import UpdateBuilder

__all__ = [
    "BaseBuilder",
    "DeleteBuilder",
    "InsertBuilder",
    "InsertManyBuilder",
    "ReadContext",
    "SelectBuilder",
    "TypedWriteContext",
    "UpdateBuilder",
    "WriteContext",
    "read",
    "typed_write",
    "write",
]
