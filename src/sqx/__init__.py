"""sqx - tag-driven SQL helpers over SQLAlchemy Core."""

from __future__ import annotations

from sqlalchemy import and_, or_

from .builders import (
    DeleteBuilder,
    InsertBuilder,
    InsertManyBuilder,
    SelectBuilder,
    UpdateBuilder,
    read,
    typed_write,
    write,
)
from .config import SqxConfig
from .exceptions import (
    DuplicateColumnTagError,
    EmptyStatementError,
    MappingError,
    MissingQueryableError,
    NoTaggableFieldsError,
    NotAPointerError,
    NotAStructPointerError,
    QueryError,
    RowMappingError,
    SqxError,
    TooManyRowsError,
)
from .mapping import (
    Clause,
    Eq,
    NotEq,
    Nullable,
    column,
    contains_updates,
    model_column,
    new_null,
    new_nullable,
    to_clause,
    to_clause_alias,
    to_set_map,
    to_set_map_alias,
    to_update_map,
)
from .placeholder import AT_P, COLON, DOLLAR, QUESTION, PlaceholderFormat
from .queryable import Queryable
from .results import EmptyResult, ExecResult

__version__ = "0.1.0"

__all__ = [
    # Mapping
    "column",
    "model_column",
    "to_set_map",
    "to_set_map_alias",
    "to_update_map",
    "contains_updates",
    "to_clause",
    "to_clause_alias",
    "Nullable",
    "new_nullable",
    "new_null",
    # Predicates
    "Clause",
    "Eq",
    "NotEq",
    "and_",
    "or_",
    # Builders
    "read",
    "write",
    "typed_write",
    "SelectBuilder",
    "InsertBuilder",
    "InsertManyBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    # Configuration
    "SqxConfig",
    "PlaceholderFormat",
    "QUESTION",
    "DOLLAR",
    "COLON",
    "AT_P",
    # Execution
    "Queryable",
    "ExecResult",
    "EmptyResult",
    # Exceptions
    "SqxError",
    "MappingError",
    "NotAPointerError",
    "NotAStructPointerError",
    "DuplicateColumnTagError",
    "NoTaggableFieldsError",
    "RowMappingError",
    "QueryError",
    "TooManyRowsError",
    "EmptyStatementError",
    "MissingQueryableError",
]
