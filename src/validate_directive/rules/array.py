"""Array validator: item schema, size, ordering and uniqueness rules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .base import Schema, State
from .errors import SchemaDefinitionError

_ORDERS = ("ascending", "descending")
_MISSING = object()


def _reach(item: Any, path: str | None) -> Any:
    """Follow a dotted *path* (``a.b.0``) into nested mappings and lists."""
    if not path:
        return item
    current = item
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, str):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return _MISSING
        else:
            return _MISSING
        if current is _MISSING:
            return _MISSING
    return current


def _require_limit(name: str, limit: Any) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise SchemaDefinitionError(f"{name} limit must be a positive integer")


class ArraySchema(Schema):
    kind = "array"
    operations = Schema.operations | frozenset(
        {"items", "length", "max", "min", "sort", "unique"}
    )

    def __init__(self) -> None:
        super().__init__()
        self._items: Schema | None = None

    @property
    def item_schema(self) -> Schema | None:
        return self._items

    def requests_conversion(self, seen: set[int] | None = None) -> bool:
        if super().requests_conversion(seen):
            return True
        return self._items is not None and self._items.requests_conversion(seen)

    def _coerce(self, value: Any, state: State) -> Any:
        if not isinstance(value, list | tuple):
            state.fail("array.base", value)
        if self._items is None:
            return list(value)
        return [
            self._items.validate(item, state.child(index))
            for index, item in enumerate(value)
        ]

    def items(self, schema: Schema) -> ArraySchema:
        """Validate every element against *schema*."""
        if not isinstance(schema, Schema):
            raise SchemaDefinitionError("items must be given a schema")
        other = self.clone()
        other._items = schema
        return other

    # -- size -----------------------------------------------------------------

    def _size_rule(self, name: str, limit: int, compare: Any) -> ArraySchema:
        _require_limit(name, limit)

        def check(value: list[Any], state: State) -> list[Any]:
            if not compare(len(value), limit):
                state.fail(f"array.{name}", value, limit=limit)
            return value

        return self._with_rule(name, check, limit=limit)

    def length(self, limit: int) -> ArraySchema:
        return self._size_rule("length", limit, lambda n, lim: n == lim)

    def max(self, limit: int) -> ArraySchema:
        return self._size_rule("max", limit, lambda n, lim: n <= lim)

    def min(self, limit: int) -> ArraySchema:
        return self._size_rule("min", limit, lambda n, lim: n >= lim)

    # -- ordering -------------------------------------------------------------

    def sort(self, options: Mapping[str, Any] | None = None) -> ArraySchema:
        """
        Require the array to be sorted, or sort it when converting.

        Options:
            order: ``ascending`` (default) or ``descending``.
            by: Dotted path of the item value to sort on.
        """
        options = dict(options or {})
        order = options.get("order") or "ascending"
        by = options.get("by")
        if order not in _ORDERS:
            raise SchemaDefinitionError(f"Unknown sort order {order!r}")
        reverse = order == "descending"

        def check(value: list[Any], state: State) -> list[Any]:
            keyed = [(_reach(item, by), item) for item in value]
            if any(k is _MISSING for k, _ in keyed):
                state.fail("array.sort.mismatching", value)
            try:
                ordered = sorted(keyed, key=lambda pair: pair[0], reverse=reverse)
            except TypeError:
                state.fail("array.sort.mismatching", value)
            if state.prefs.convert:
                return [item for _, item in ordered]
            if [item for _, item in ordered] != value:
                state.fail("array.sort", value, order=order, by=by or "value")
            return value

        return self._with_rule("sort", check, order=order, by=by)

    def unique(self, comparator: str | None = None) -> ArraySchema:
        """Reject duplicate items, optionally compared on a dotted path."""

        def check(value: list[Any], state: State) -> list[Any]:
            seen: list[tuple[int, Any]] = []
            for pos, item in enumerate(value):
                compared = _reach(item, comparator)
                for dupe_pos, other in seen:
                    if other == compared:
                        context: dict[str, Any] = {
                            "pos": pos,
                            "dupe_pos": dupe_pos,
                            "dupe_value": value[dupe_pos],
                        }
                        if comparator:
                            context["path"] = comparator
                        state.child(pos).fail("array.unique", item, **context)
                seen.append((pos, compared))
            return value

        return self._with_rule("unique", check, comparator=comparator)


def array() -> ArraySchema:
    return ArraySchema()
