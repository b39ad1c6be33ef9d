"""
Tests for set-map building and update detection.

Covers:
- Set fields only, with exclusions
- excludeOnInsert handling for insert vs. update payloads
- Nullable unwrapping (explicit NULL vs. absent)
- Aliased keys
- contains_updates agreeing with to_update_map
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from sqx.exceptions import DuplicateColumnTagError, NotAPointerError, NotAStructPointerError
from sqx.mapping import (
    Nullable,
    column,
    contains_updates,
    model_column,
    new_null,
    new_nullable,
    to_set_map,
    to_set_map_alias,
    to_update_map,
)

# ---------------------------------------------------------------------------
# Test records
# ---------------------------------------------------------------------------


@dataclass
class ThingyUpdate:
    str_col: str | None = column("str_col", default=None)
    int_col: int | None = column("int_col", default=None)


@dataclass
class Widget:
    id: str = column("widget_id")
    status: str = column("status")
    created_at: str | None = column("created_at", exclude_on_insert=True, default=None)


@dataclass
class OwnerUpdate:
    status: str | None = column("status", default=None)
    owner_id: Nullable[str] = column("owner_id", default=Nullable.absent())
    ptr_col: Nullable[str | None] = column("ptr_col", default=Nullable.absent())


@dataclass
class NoTags:
    str_col: str | None = None


@dataclass
class Duplicated:
    first: str | None = column("same_col", default=None)
    second: str | None = column("same_col", default=None)


class ThingyModel(BaseModel):
    str_col: str | None = model_column("str_col", default=None)
    tags: list[str] | None = model_column("tags_col", default=None)


# ---------------------------------------------------------------------------
# to_set_map
# ---------------------------------------------------------------------------


def test_converts_all_set_fields() -> None:
    assert to_set_map(ThingyUpdate(str_col="i am str", int_col=100)) == {
        "str_col": "i am str",
        "int_col": 100,
    }


def test_omits_excluded_columns() -> None:
    record = ThingyUpdate(str_col="still a str")
    assert to_set_map(record, "str_ptr_col_null", "int_col") == {
        "str_col": "still a str"
    }


def test_zero_values_are_set() -> None:
    assert to_set_map(ThingyUpdate(str_col="", int_col=0)) == {
        "str_col": "",
        "int_col": 0,
    }


def test_none_record_gives_empty_map() -> None:
    assert to_set_map(None) == {}


def test_unset_record_gives_empty_map() -> None:
    assert to_set_map(ThingyUpdate()) == {}


def test_record_without_tags_gives_empty_map() -> None:
    assert to_set_map(NoTags(str_col="ignored")) == {}


def test_pydantic_record() -> None:
    assert to_set_map(ThingyModel(tags=["a", "b"])) == {"tags_col": ["a", "b"]}


def test_exclude_on_insert_is_dropped_by_default() -> None:
    widget = Widget(id="w1", status="great", created_at="2024-01-01")
    assert to_set_map(widget) == {"widget_id": "w1", "status": "great"}


def test_exclude_on_insert_can_be_kept() -> None:
    widget = Widget(id="w1", status="great", created_at="2024-01-01")
    assert to_set_map(widget, exclude_on_insert=False)["created_at"] == "2024-01-01"
    assert to_update_map(widget)["created_at"] == "2024-01-01"


def test_nullable_values_are_unwrapped() -> None:
    assert to_update_map(OwnerUpdate(owner_id=new_nullable("owner-id"))) == {
        "owner_id": "owner-id"
    }
    assert to_update_map(OwnerUpdate(owner_id=new_null())) == {"owner_id": None}
    assert to_update_map(OwnerUpdate(status="ok")) == {"status": "ok"}


def test_alias_prefixes_keys() -> None:
    record = ThingyUpdate(str_col="i am str", int_col=100)
    assert to_set_map_alias("table", record) == {
        "table.str_col": "i am str",
        "table.int_col": 100,
    }


def test_errors_propagate() -> None:
    with pytest.raises(DuplicateColumnTagError):
        to_set_map(Duplicated(first="a"))
    with pytest.raises(NotAPointerError):
        to_set_map(ThingyUpdate)
    with pytest.raises(NotAStructPointerError):
        to_set_map({"str_col": "a"})


# ---------------------------------------------------------------------------
# contains_updates
# ---------------------------------------------------------------------------


def test_contains_updates_when_fields_are_set() -> None:
    assert contains_updates(ThingyUpdate(str_col="i am str", int_col=1))


def test_contains_updates_for_explicit_null() -> None:
    assert contains_updates(OwnerUpdate(ptr_col=new_null()))


def test_contains_no_updates_when_unset() -> None:
    assert not contains_updates(OwnerUpdate())
    assert not contains_updates(None)


def test_contains_updates_honours_exclusions() -> None:
    assert not contains_updates(OwnerUpdate(status="ok"), "status")


def test_contains_updates_rejects_non_records() -> None:
    with pytest.raises(NotAStructPointerError):
        contains_updates("not a record")
    with pytest.raises(NotAPointerError):
        contains_updates(OwnerUpdate)


@pytest.mark.parametrize(
    "record",
    [
        None,
        ThingyUpdate(),
        ThingyUpdate(int_col=0),
        OwnerUpdate(),
        OwnerUpdate(owner_id=new_null()),
        OwnerUpdate(status="ok", owner_id=new_nullable("o")),
        Widget(id="w1", status="s"),
        NoTags(str_col="x"),
    ],
)
def test_contains_updates_matches_update_map(record: object) -> None:
    assert contains_updates(record) == bool(to_update_map(record))
