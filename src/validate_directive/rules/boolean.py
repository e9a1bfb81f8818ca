"""Boolean validator."""

from __future__ import annotations

from typing import Any

from .base import Schema, State

_TRUTHY = frozenset({"true"})
_FALSY = frozenset({"false"})


class BooleanSchema(Schema):
    kind = "boolean"

    def _coerce(self, value: Any, state: State) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and state.prefs.convert:
            normalized = value.strip().lower()
            if normalized in _TRUTHY:
                return True
            if normalized in _FALSY:
                return False
        state.fail("boolean.base", value)


def boolean() -> BooleanSchema:
    return BooleanSchema()
