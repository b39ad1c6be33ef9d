"""Tests for converting result rows into typed values."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from sqx.exceptions import DuplicateColumnTagError, RowMappingError
from sqx.mapping import column, model_column, scan_row, scan_rows


@dataclass
class Widget:
    id: str = column("widget_id")
    status: str = column("status")
    owner_id: str | None = column("owner_id", default=None)


class WidgetModel(BaseModel):
    id: str = model_column("widget_id")
    enabled: bool = model_column("enabled")


@dataclass
class Duplicated:
    first: str | None = column("same_col", default=None)
    second: str | None = column("same_col", default=None)


ROW = {"widget_id": "w1", "status": "great", "enabled": 1, "owner_id": None}


def test_scan_into_dataclass_ignores_unknown_columns() -> None:
    assert scan_row(ROW, Widget) == Widget(id="w1", status="great")


def test_scan_into_pydantic_model_validates() -> None:
    model = scan_row(ROW, WidgetModel)
    assert model == WidgetModel(id="w1", enabled=True)
    assert model.enabled is True


def test_scan_into_dict() -> None:
    assert scan_row(ROW, dict) == ROW


def test_scan_scalar_uses_first_column() -> None:
    assert scan_row({"n": 3}, int) == 3
    assert scan_row({"n": "3"}, int) == 3


def test_scan_rows() -> None:
    rows = [ROW, {**ROW, "widget_id": "w2"}]
    assert [w.id for w in scan_rows(rows, Widget)] == ["w1", "w2"]


def test_missing_required_column_raises_row_mapping_error() -> None:
    with pytest.raises(RowMappingError, match="Widget") as exc_info:
        scan_row({"status": "great"}, Widget)
    assert isinstance(exc_info.value.__cause__, TypeError)


def test_failed_scalar_conversion_raises_row_mapping_error() -> None:
    with pytest.raises(RowMappingError):
        scan_row({"n": "not a number"}, int)


def test_duplicate_tags_are_not_wrapped() -> None:
    with pytest.raises(DuplicateColumnTagError):
        scan_row({"same_col": "x"}, Duplicated)
