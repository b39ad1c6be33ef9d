"""Classify extracted field values as set or unset."""

from __future__ import annotations

from typing import Any

from .nullable import Nullable


def is_unset(value: Any) -> bool:
    """Return True if *value* does not participate in a set map or clause.

    ``None`` and an absent :class:`Nullable` are unset.  An explicit-null
    ``Nullable`` is set: it binds SQL NULL.
    """
    if value is None:
        return True
    return isinstance(value, Nullable) and value.is_absent


def bound_value(value: Any) -> Any:
    """Unwrap a :class:`Nullable` into the value bound to the statement."""
    if isinstance(value, Nullable):
        return value.value
    return value


__all__ = ["bound_value", "is_unset"]
