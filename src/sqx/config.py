"""Builder configuration.

There is no process-wide default: a ``SqxConfig`` is handed to the entry
points and every builder can override parts of it per call
(``with_queryable``, ``with_logger``, ``with_placeholder``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from .placeholder import QUESTION, PlaceholderFormat

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

    from .queryable import Queryable


@dataclass(frozen=True, slots=True)
class SqxConfig:
    """Dependencies shared by the builders created from it.

    Attributes:
        queryable: Connection or session statements run against.
        logger: Logger for warnings and ``debug()`` output.
        placeholder: Placeholder format used by ``to_sql()`` / ``debug()``.
        dialect: ``qmark`` dialect used by ``to_sql()`` / ``debug()``;
            ``None`` uses SQLAlchemy's default dialect.
    """

    queryable: Queryable | None = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("sqx"))
    placeholder: PlaceholderFormat = QUESTION
    dialect: Dialect | None = None

    def evolve(self, **changes: Any) -> SqxConfig:
        return replace(self, **changes)


__all__ = ["SqxConfig"]
