"""
Shared machinery for the fluent builders.

Builders are immutable: every method returns a new builder and leaves the
receiver untouched, so a partially built query can be reused as a template.
The first error met while building (e.g. from a ``Clause`` or a record that
failed to map) is carried along and raised when the builder is rendered or
executed.
"""

from __future__ import annotations

import copy
import itertools
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import bindparam, column, table, text

from ..exceptions import MissingQueryableError
from ..mapping.clause import Clause, Eq
from ..placeholder import PlaceholderFormat, render

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, TableClause
    from sqlalchemy.engine import Result
    from sqlalchemy.sql.elements import ClauseElement, TextClause

    from ..config import SqxConfig
    from ..queryable import Queryable

logger = logging.getLogger(__name__)

B = TypeVar("B", bound="BaseBuilder")

_bind_names = itertools.count(1)


def make_table(name: str, *columns: str, alias: str | None = None) -> Any:
    """Lightweight ``TableClause`` for *name* (``"schema.table"`` allowed)."""
    schema, _, table_name = name.rpartition(".")
    tbl: TableClause = table(
        table_name, *(column(c) for c in columns), schema=schema or None
    )
    return tbl.alias(alias) if alias else tbl


def _split_on_placeholders(sql: str) -> list[str]:
    """Split *sql* on single ``?`` markers; ``??`` stays in the text."""
    parts: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(sql):
        if sql[i] != "?":
            current.append(sql[i])
        elif sql[i + 1 : i + 2] == "?":
            current.append("??")
            i += 1
        else:
            parts.append("".join(current))
            current = []
        i += 1
    parts.append("".join(current))
    return parts


def text_with_args(sql: str, *args: Any) -> TextClause:
    """Turn ``"a = ? AND b IN ?"`` plus positional args into bound ``text()``.

    List and tuple arguments are bound as expanding parameters.  ``??`` is
    an escaped literal question mark and binds nothing.
    """
    parts = _split_on_placeholders(sql)
    if len(parts) - 1 != len(args):
        raise ValueError(
            f"expected {len(parts) - 1} argument(s) for {sql!r}, got {len(args)}"
        )
    if not args:
        return text(sql)

    names = [f"sqx_{next(_bind_names)}" for _ in args]
    rebuilt = parts[0] + "".join(
        f":{name}{part}" for name, part in zip(names, parts[1:], strict=True)
    )
    params = [
        bindparam(name, value, expanding=isinstance(value, list | tuple))
        for name, value in zip(names, args, strict=True)
    ]
    return text(rebuilt).bindparams(*params)


def to_predicate(pred: Any, *args: Any) -> ColumnElement[bool] | TextClause | None:
    """
    Coerce a ``where`` / ``having`` argument into a SQLAlchemy predicate.

    Accepts ``None`` or ``""`` (ignored), a :class:`Clause` (its error is
    raised; empty clauses are ignored), an ``Eq`` / ``NotEq`` or plain
    mapping, a SQL string with ``?`` placeholders, or any SQLAlchemy
    expression.
    """
    if pred is None or (isinstance(pred, str) and not pred):
        return None
    if isinstance(pred, Clause):
        if pred.is_empty:
            return None
        return pred.to_expression()
    if isinstance(pred, Mapping):
        eq = pred if isinstance(pred, Eq) else Eq(pred)
        return eq.to_expression() if eq else None
    if isinstance(pred, str):
        return text_with_args(pred, *args)
    return pred  # type: ignore[no-any-return]


class BaseBuilder:
    """Configuration, deferred-error and rendering plumbing for builders."""

    def __init__(self, config: SqxConfig) -> None:
        self._config = config
        self._error: Exception | None = None

    # -- copy-on-write -------------------------------------------------------

    def _evolve(self: B, **attrs: Any) -> B:
        new = copy.copy(self)
        for name, value in attrs.items():
            setattr(new, name, value)
        return new

    def _with_error(self: B, error: Exception) -> B:
        if self._error is not None:
            return self
        return self._evolve(_error=error)

    @property
    def error(self) -> Exception | None:
        """The first error met while building, if any."""
        return self._error

    # -- per-call configuration ----------------------------------------------

    def with_queryable(self: B, queryable: Queryable) -> B:
        return self._evolve(_config=self._config.evolve(queryable=queryable))

    def with_logger(self: B, logger: logging.Logger) -> B:
        return self._evolve(_config=self._config.evolve(logger=logger))

    def with_placeholder(self: B, placeholder: PlaceholderFormat) -> B:
        return self._evolve(_config=self._config.evolve(placeholder=placeholder))

    # -- rendering -----------------------------------------------------------

    def statement(self) -> ClauseElement:
        """The SQLAlchemy statement this builder describes."""
        raise NotImplementedError

    def _checked_statement(self) -> ClauseElement:
        if self._error is not None:
            raise self._error
        return self.statement()

    def to_sql(self) -> tuple[str, list[Any]]:
        """Render SQL text and positional arguments (raises deferred errors)."""
        return render(
            self._checked_statement(), self._config.placeholder, self._config.dialect
        )

    def debug(self: B) -> B:
        """Log the rendered SQL at DEBUG level and return ``self`` unchanged."""
        try:
            sql, args = self.to_sql()
            self._config.logger.debug(
                "%r", {"sql": sql, "args": args, "error": None}
            )
        except Exception as e:  # noqa: BLE001
            # Debug output reports any build or render error instead of raising
            self._config.logger.debug("%r", {"sql": "", "args": [], "error": e})
        return self

    # -- execution -----------------------------------------------------------

    async def _execute(self) -> Result[Any]:
        statement = self._checked_statement()
        queryable = self._config.queryable
        if queryable is None:
            raise MissingQueryableError
        logger.debug("Executing %s", type(self).__name__)
        return await queryable.execute(statement)  # type: ignore[arg-type]


__all__ = ["BaseBuilder", "make_table", "text_with_args", "to_predicate"]
