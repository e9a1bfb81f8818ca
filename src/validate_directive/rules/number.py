"""Number validator: bounds, sign, integer and precision rules."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from .base import Schema, State
from .errors import SchemaDefinitionError

MAX_SAFE_INTEGER = 2**53 - 1


def _decimal_places(value: float | int) -> int:
    exponent = Decimal(str(value)).normalize().as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def _require_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SchemaDefinitionError(f"{name} must be a number, got {value!r}")


class NumberSchema(Schema):
    """Validates ``int``/``float`` values (booleans are rejected)."""

    kind = "number"
    operations = Schema.operations | frozenset(
        {
            "greater",
            "integer",
            "less",
            "max",
            "min",
            "multiple",
            "negative",
            "port",
            "positive",
            "precision",
            "sign",
            "unsafe",
        }
    )

    def __init__(self) -> None:
        super().__init__()
        self._unsafe = False

    def _coerce(self, value: Any, state: State) -> Any:
        if isinstance(value, str) and state.prefs.convert:
            try:
                value = float(Decimal(value.strip()))
            except InvalidOperation:
                state.fail("number.base", value)
            if value.is_integer():
                value = int(value)
        if isinstance(value, bool) or not isinstance(value, int | float):
            state.fail("number.base", value)
        if isinstance(value, float) and math.isnan(value):
            state.fail("number.base", value)
        if isinstance(value, float) and math.isinf(value):
            state.fail("number.infinity", value)
        if not self._unsafe and abs(value) > MAX_SAFE_INTEGER:
            state.fail("number.unsafe", value)
        return value

    # -- comparisons ----------------------------------------------------------

    def _compare(self, name: str, limit: Any, compare: Any) -> NumberSchema:
        _require_number(name, limit)

        def check(value: Any, state: State) -> Any:
            if not compare(value, limit):
                state.fail(f"number.{name}", value, limit=limit)
            return value

        return self._with_rule(name, check, limit=limit)

    def greater(self, limit: float) -> NumberSchema:
        return self._compare("greater", limit, lambda v, n: v > n)

    def less(self, limit: float) -> NumberSchema:
        return self._compare("less", limit, lambda v, n: v < n)

    def max(self, limit: float) -> NumberSchema:
        return self._compare("max", limit, lambda v, n: v <= n)

    def min(self, limit: float) -> NumberSchema:
        return self._compare("min", limit, lambda v, n: v >= n)

    # -- shape ----------------------------------------------------------------

    def integer(self) -> NumberSchema:
        def check(value: Any, state: State) -> Any:
            if isinstance(value, float) and not value.is_integer():
                state.fail("number.integer", value)
            return value

        return self._with_rule("integer", check)

    def multiple(self, base: float) -> NumberSchema:
        _require_number("multiple", base)
        if base <= 0:
            raise SchemaDefinitionError("multiple must be a positive number")

        def check(value: Any, state: State) -> Any:
            if not math.isclose(math.remainder(value, base), 0, abs_tol=1e-9):
                state.fail("number.multiple", value, multiple=base)
            return value

        return self._with_rule("multiple", check, base=base)

    def precision(self, limit: int) -> NumberSchema:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise SchemaDefinitionError("precision must be a positive integer")

        def check(value: Any, state: State) -> Any:
            if _decimal_places(value) <= limit:
                return value
            if state.prefs.convert:
                return round(value, limit)
            state.fail("number.precision", value, limit=limit)

        return self._with_rule("precision", check, limit=limit)

    # -- sign -----------------------------------------------------------------

    def negative(self) -> NumberSchema:
        def check(value: Any, state: State) -> Any:
            if value >= 0:
                state.fail("number.negative", value)
            return value

        return self._with_rule("sign", check, sign="negative")

    def positive(self) -> NumberSchema:
        def check(value: Any, state: State) -> Any:
            if value <= 0:
                state.fail("number.positive", value)
            return value

        return self._with_rule("sign", check, sign="positive")

    def sign(self, sign: str) -> NumberSchema:
        if sign == "negative":
            return self.negative()
        if sign == "positive":
            return self.positive()
        raise SchemaDefinitionError(f"Invalid sign: {sign!r}")

    def port(self) -> NumberSchema:
        def check(value: Any, state: State) -> Any:
            if not (isinstance(value, int) or value.is_integer()) or not (
                0 <= value <= 65535
            ):
                state.fail("number.port", value)
            return value

        return self._with_rule("port", check)

    def unsafe(self, enabled: bool = True) -> NumberSchema:
        """Allow (or forbid) numbers outside the safe integer range."""
        other = self.clone()
        other._unsafe = bool(enabled)
        return other


def number() -> NumberSchema:
    return NumberSchema()
