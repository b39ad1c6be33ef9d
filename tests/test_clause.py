"""
Tests for equality clauses.

Covers:
- Eq / NotEq rendering (scalars, IN lists, NULL checks)
- to_clause from filter records
- Deferred errors (no tags, duplicate tags, non-records)
- Aliased clauses
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from sqlalchemy import literal_column, select, table

from sqx.exceptions import (
    DuplicateColumnTagError,
    NoTaggableFieldsError,
    NotAStructPointerError,
)
from sqx.mapping import (
    Clause,
    Eq,
    NotEq,
    Nullable,
    column,
    new_nullable,
    to_clause,
    to_clause_alias,
)
from sqx.placeholder import DOLLAR

# ---------------------------------------------------------------------------
# Test records
# ---------------------------------------------------------------------------


@dataclass
class Filter:
    value: str | None = column("first_col", default=None)
    values: list[str] | None = column("second_col", default=None)


@dataclass
class ThingyGetFilter:
    str_col: str | None = column("str_col", default=None)
    int_col: list[int] | None = column("int_col", default=None)


@dataclass
class NoTags:
    str_col: str | None = None
    int_col: list[int] | None = None


@dataclass
class Duplicated:
    field1: str | None = column("same_col", default=None)
    field2: str | None = column("same_col", default=None)


# ---------------------------------------------------------------------------
# Eq / NotEq
# ---------------------------------------------------------------------------


def test_round_trip_sql() -> None:
    clause = to_clause(Filter(value="example", values=["a", "b"]))
    sql, args = clause.to_sql()
    assert sql == "first_col = ? AND second_col IN (?, ?)"
    assert args == ["example", "a", "b"]


def test_eq_renders_null_check() -> None:
    sql, args = Eq(owner_id=None).to_sql()
    assert sql == "owner_id IS NULL"
    assert args == []


def test_eq_accepts_tuples() -> None:
    sql, args = Eq(widget_id=("a", "b", "c")).to_sql()
    assert sql == "widget_id IN (?, ?, ?)"
    assert args == ["a", "b", "c"]


def test_eq_unwraps_nullable() -> None:
    _, args = Eq(owner_id=new_nullable("o-1")).to_sql()
    assert args == ["o-1"]


def test_eq_with_positional_placeholders() -> None:
    sql, args = Eq(first_col="example", second_col=["a", "b"]).to_sql(DOLLAR)
    assert sql == "first_col = $1 AND second_col IN ($2, $3)"
    assert args == ["example", "a", "b"]


def test_empty_eq_has_no_args() -> None:
    _, args = Eq().to_sql()
    assert args == []


def test_not_eq_negates_each_entry() -> None:
    sql, args = NotEq(status="ok", owner_id=None, widget_id=["a", "b"]).to_sql()
    assert "status != ?" in sql
    assert "owner_id IS NOT NULL" in sql
    assert "widget_id NOT IN (?, ?)" in sql
    assert args == ["ok", "a", "b"]


def test_eq_is_usable_as_a_sqlalchemy_predicate() -> None:
    stmt = (
        select(literal_column("*"))
        .select_from(table("widgets"))
        .where(Eq(status="ok"))
    )
    assert "WHERE status = " in str(stmt)


# ---------------------------------------------------------------------------
# to_clause
# ---------------------------------------------------------------------------


def test_converts_all_fields() -> None:
    clause = to_clause(ThingyGetFilter(str_col="i am str", int_col=[1, 2]))
    assert clause.is_ok
    assert clause.contents == Eq(str_col="i am str", int_col=[1, 2])


def test_omits_unset_fields() -> None:
    clause = to_clause(ThingyGetFilter(str_col="still a str"))
    assert clause.contents == Eq(str_col="still a str")


def test_none_gives_empty_clause() -> None:
    clause = to_clause(None)
    assert clause.is_ok
    assert clause.is_empty
    assert clause.contents == Eq()


def test_all_unset_gives_empty_clause() -> None:
    clause = to_clause(ThingyGetFilter())
    assert clause.is_ok
    assert clause.is_empty


def test_no_tags_gives_deferred_error() -> None:
    clause = to_clause(NoTags(str_col="x"))
    assert not clause.is_ok
    assert isinstance(clause.error, NoTaggableFieldsError)
    assert str(clause.error) == "No db tags detected on NoTags"
    with pytest.raises(NoTaggableFieldsError):
        clause.to_sql()
    with pytest.raises(NoTaggableFieldsError):
        clause.unwrap()


def test_duplicate_tags_give_deferred_error() -> None:
    clause = to_clause(Duplicated(field1="value1", field2="value2"))
    assert isinstance(clause.error, DuplicateColumnTagError)


def test_non_record_gives_deferred_error() -> None:
    clause = to_clause({"str_col": "x"})
    assert isinstance(clause.error, NotAStructPointerError)


def test_exclusions_apply() -> None:
    clause = to_clause(ThingyGetFilter(str_col="a", int_col=[1]), "int_col")
    assert clause.contents == Eq(str_col="a")


# ---------------------------------------------------------------------------
# Clause
# ---------------------------------------------------------------------------


def test_clause_holds_exactly_one_of_contents_or_error() -> None:
    with pytest.raises(ValueError):
        Clause()
    with pytest.raises(ValueError):
        Clause(contents=Eq(), error=RuntimeError("boom"))


def test_alias_prefixes_keys() -> None:
    clause = to_clause_alias("table", ThingyGetFilter(str_col="i am str", int_col=[100]))
    assert clause.contents == Eq({"table.str_col": "i am str", "table.int_col": [100]})
    sql, _ = clause.to_sql()
    assert sql == "table.str_col = ? AND table.int_col IN (?)"


def test_alias_passes_errors_through() -> None:
    error = NoTaggableFieldsError("NoTags")
    assert Clause.failed(error).alias("table").error is error
    assert isinstance(to_clause_alias("t", NoTags()).error, NoTaggableFieldsError)


def test_clause_is_not_hashable() -> None:
    with pytest.raises(TypeError, match="unhashable type: 'Clause'"):
        hash(to_clause(None))


def test_eq_skips_absent_nullable() -> None:
    sql, args = Eq(status="ok", owner_id=Nullable.absent()).to_sql()
    assert sql == "status = ?"
    assert args == ["ok"]

    _, args = Eq(owner_id=Nullable.absent()).to_sql()
    assert args == []


def test_eq_binds_explicit_null_as_null_check() -> None:
    sql, _ = Eq(owner_id=Nullable.null()).to_sql()
    assert sql == "owner_id IS NULL"
