"""
Placeholder formats and SQL rendering.

Statements are compiled by SQLAlchemy with ``qmark`` parameters and ``IN``
lists expanded, which yields plain ``?`` markers and a positional argument
list.  A :class:`PlaceholderFormat` then rewrites the markers for the target
driver:

=========  ===============
QUESTION   ``?``
DOLLAR     ``$1, $2, ...``
COLON      ``:1, :2, ...``
AT_P       ``@p1, @p2, ...``
=========  ===============

``??`` is an escaped literal question mark and is rendered as ``?`` by the
positional formats.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy.engine.default import DefaultDialect

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect
    from sqlalchemy.sql.elements import ClauseElement


class PlaceholderFormat(Protocol):
    def replace_placeholders(self, sql: str) -> str: ...


class QuestionFormat:
    """Leave ``?`` placeholders untouched."""

    def replace_placeholders(self, sql: str) -> str:
        return sql

    def __repr__(self) -> str:
        return "QUESTION"


class PositionalFormat:
    """Replace each ``?`` with ``<prefix><n>``, counting from 1."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def replace_placeholders(self, sql: str) -> str:
        out: list[str] = []
        n = 0
        i = 0
        while i < len(sql):
            char = sql[i]
            if char != "?":
                out.append(char)
            elif sql[i + 1 : i + 2] == "?":
                out.append("?")
                i += 1
            else:
                n += 1
                out.append(f"{self.prefix}{n}")
            i += 1
        return "".join(out)

    def __repr__(self) -> str:
        return f"PositionalFormat({self.prefix!r})"


QUESTION = QuestionFormat()
DOLLAR = PositionalFormat("$")
COLON = PositionalFormat(":")
AT_P = PositionalFormat("@p")


def default_dialect() -> Dialect:
    """Dialect used for rendering when none is configured."""
    dialect = DefaultDialect(paramstyle="qmark")
    dialect.supports_multivalues_insert = True
    dialect.insert_returning = True
    return dialect


def render(
    statement: ClauseElement,
    placeholder: PlaceholderFormat = QUESTION,
    dialect: Dialect | None = None,
) -> tuple[str, list[Any]]:
    """
    Compile a SQLAlchemy construct into SQL text and positional arguments.

    Args:
        statement: Any SQLAlchemy statement or column expression.
        placeholder: Output placeholder format.
        dialect: Dialect to compile with.  Must use the ``qmark`` paramstyle,
            e.g. ``postgresql.dialect(paramstyle="qmark")``.

    Returns:
        ``(sql, args)`` with ``args`` in placeholder order.
    """
    dialect = dialect or default_dialect()
    if dialect.paramstyle != "qmark":
        raise ValueError(
            f"dialect {dialect.name!r} uses paramstyle {dialect.paramstyle!r}; "
            "sqx renders with paramstyle='qmark'"
        )

    compiled = statement.compile(
        dialect=dialect, compile_kwargs={"render_postcompile": True}
    )
    params = compiled.params
    args = [params[name] for name in compiled.positiontup or ()]
    return placeholder.replace_placeholders(compiled.string), args


__all__ = [
    "AT_P",
    "COLON",
    "DOLLAR",
    "QUESTION",
    "PlaceholderFormat",
    "PositionalFormat",
    "QuestionFormat",
    "default_dialect",
    "render",
]
