"""
Column tag vocabulary.

Tags live in field metadata and mirror the two tags the mapper reads:

- ``db``: column name. Required for a field to participate. ``"-"`` skips
  the field.
- ``sqx``: comma-separated behaviour flags. The only recognised flag is
  ``excludeOnInsert``; ``"-"`` means no flags.

Dataclasses keep tags in ``field(metadata=...)``; pydantic models keep them
in ``Field(json_schema_extra=...)``.  ``column()`` and ``model_column()``
build either form::

    @dataclass
    class Widget:
        id: str = column("widget_id")
        created_at: datetime | None = column("created_at", exclude_on_insert=True, default=None)

    class WidgetModel(BaseModel):
        id: str = model_column("widget_id")
"""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import Field

DB_TAG = "db"
SQX_TAG = "sqx"
SKIP = "-"
EXCLUDE_ON_INSERT = "excludeOnInsert"


def _tags(name: str, exclude_on_insert: bool) -> dict[str, str]:
    tags = {DB_TAG: name}
    if exclude_on_insert:
        tags[SQX_TAG] = EXCLUDE_ON_INSERT
    return tags


def column(name: str, *, exclude_on_insert: bool = False, **field_kwargs: Any) -> Any:
    """Declare a tagged dataclass field.

    Extra keyword arguments (``default``, ``default_factory``, ``repr`` ...)
    are passed through to :func:`dataclasses.field`.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata.update(_tags(name, exclude_on_insert))
    return dataclasses.field(metadata=metadata, **field_kwargs)


def model_column(
    name: str, *, exclude_on_insert: bool = False, **field_kwargs: Any
) -> Any:
    """Declare a tagged pydantic field (see :func:`column`)."""
    extra = dict(field_kwargs.pop("json_schema_extra", None) or {})
    extra.update(_tags(name, exclude_on_insert))
    return Field(json_schema_extra=extra, **field_kwargs)


def parse_flags(raw: str | None) -> frozenset[str]:
    """Split a ``sqx`` tag into its flags."""
    if not raw or raw == SKIP:
        return frozenset()
    return frozenset(flag.strip() for flag in raw.split(",") if flag.strip())


__all__ = [
    "DB_TAG",
    "EXCLUDE_ON_INSERT",
    "SKIP",
    "SQX_TAG",
    "column",
    "model_column",
    "parse_flags",
]
