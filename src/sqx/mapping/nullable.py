"""Tri-state wrapper for nullable columns in update payloads.

A plain ``None`` cannot tell "leave this column alone" apart from "set this
column to NULL".  ``Nullable`` makes the three states explicit::

    @dataclass
    class WidgetUpdate:
        owner_id: Nullable[str] = column("owner_id", default=Nullable.absent())

    WidgetUpdate()                                  # owner_id not touched
    WidgetUpdate(owner_id=new_null())               # SET owner_id = NULL
    WidgetUpdate(owner_id=new_nullable("u-1"))      # SET owner_id = 'u-1'
"""

from __future__ import annotations

import enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class NullableState(enum.Enum):
    ABSENT = "absent"
    NULL = "null"
    VALUE = "value"


class Nullable(Generic[T]):
    """Immutable value that is absent, explicitly NULL, or a concrete value."""

    __slots__ = ("_state", "_value")

    def __init__(self, state: NullableState, value: T | None = None) -> None:
        if state is not NullableState.VALUE and value is not None:
            raise ValueError(f"Nullable in state {state.value!r} cannot hold a value")
        self._state = state
        self._value = value

    @classmethod
    def absent(cls) -> Nullable[T]:
        return cls(NullableState.ABSENT)

    @classmethod
    def null(cls) -> Nullable[T]:
        return cls(NullableState.NULL)

    @classmethod
    def of(cls, value: T) -> Nullable[T]:
        return cls(NullableState.VALUE, value)

    @property
    def state(self) -> NullableState:
        return self._state

    @property
    def is_absent(self) -> bool:
        return self._state is NullableState.ABSENT

    @property
    def is_null(self) -> bool:
        return self._state is NullableState.NULL

    @property
    def value(self) -> T | None:
        """The bound value: ``None`` for explicit NULL.

        Raises ``ValueError`` when absent, since an absent field has no value
        to bind.
        """
        if self._state is NullableState.ABSENT:
            raise ValueError("absent Nullable has no value")
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nullable):
            return NotImplemented
        return self._state is other._state and self._value == other._value

    def __hash__(self) -> int:
        try:
            return hash((self._state, self._value))
        except TypeError:
            return hash((self._state, id(self._value)))

    def __repr__(self) -> str:
        if self._state is NullableState.VALUE:
            return f"Nullable.of({self._value!r})"
        return f"Nullable.{self._state.value}()"


def new_nullable(value: T) -> Nullable[T]:
    """Set a nullable column to a concrete value in an update."""
    return Nullable.of(value)


def new_null() -> Nullable[Any]:
    """Set a nullable column to SQL NULL in an update."""
    return Nullable.null()


__all__ = ["Nullable", "NullableState", "new_null", "new_nullable"]
