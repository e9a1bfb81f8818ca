"""
Object validator.

An :class:`ObjectSchema` validates a mapping against a *tree* of per-key
schemas.  The tree is held by reference: keys added to it after the schema
was built (as happens while compiling self-referencing input types) are
honoured at validation time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import Schema, State
from .errors import SchemaDefinitionError


def _peer_names(name: str, peers: tuple[Any, ...]) -> list[str]:
    if not peers:
        raise SchemaDefinitionError(f"{name} requires at least one peer")
    for peer in peers:
        if not isinstance(peer, str):
            raise SchemaDefinitionError(f"{name} peers must be strings, got {peer!r}")
    return list(peers)


def _present(value: Mapping[str, Any], peers: list[str]) -> list[str]:
    return [peer for peer in peers if peer in value]


class ObjectSchema(Schema):
    kind = "object"
    operations = Schema.operations | frozenset(
        {
            "and_",
            "length",
            "max",
            "min",
            "nand",
            "or_",
            "oxor",
            "with_",
            "without",
            "xor",
        }
    )

    def __init__(self, tree: dict[str, Schema] | None = None) -> None:
        super().__init__()
        self._tree = tree if tree is not None else {}

    @property
    def tree(self) -> dict[str, Schema]:
        return self._tree

    def requests_conversion(self, seen: set[int] | None = None) -> bool:
        if super().requests_conversion(seen):
            return True
        seen = set() if seen is None else seen
        if id(self._tree) in seen:
            return False
        seen.add(id(self._tree))
        return any(child.requests_conversion(seen) for child in self._tree.values())

    def _coerce(self, value: Any, state: State) -> Any:
        if not isinstance(value, Mapping):
            state.fail("object.base", value)
        result: dict[str, Any] = {}
        for key, item in value.items():
            child = state.child(key)
            schema = self._tree.get(key)
            if schema is not None:
                result[key] = schema.validate(item, child)
            elif state.prefs.allow_unknown:
                result[key] = item
            else:
                child.fail("object.unknown", item)
        return result

    # -- size -----------------------------------------------------------------

    def _size_rule(self, name: str, limit: int, compare: Any) -> ObjectSchema:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise SchemaDefinitionError(f"{name} limit must be a positive integer")

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            if not compare(len(value), limit):
                state.fail(f"object.{name}", value, limit=limit)
            return value

        return self._with_rule(name, check, limit=limit)

    def length(self, limit: int) -> ObjectSchema:
        return self._size_rule("length", limit, lambda n, lim: n == lim)

    def max(self, limit: int) -> ObjectSchema:
        return self._size_rule("max", limit, lambda n, lim: n <= lim)

    def min(self, limit: int) -> ObjectSchema:
        return self._size_rule("min", limit, lambda n, lim: n >= lim)

    # -- peer dependencies ----------------------------------------------------

    def and_(self, *peers: str) -> ObjectSchema:
        """All of *peers* must be present together, or none of them."""
        names = _peer_names("and", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            present = _present(value, names)
            if present and len(present) != len(names):
                missing = [p for p in names if p not in present]
                state.fail("object.and", value, present=present, missing=missing)
            return value

        return self._with_rule("and", check, peers=names)

    def nand(self, *peers: str) -> ObjectSchema:
        """*peers* must not all be present at once."""
        names = _peer_names("nand", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            if len(_present(value, names)) == len(names):
                state.fail("object.nand", value, main=names[0], peers=names[1:])
            return value

        return self._with_rule("nand", check, peers=names)

    def or_(self, *peers: str) -> ObjectSchema:
        """At least one of *peers* must be present."""
        names = _peer_names("or", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            if not _present(value, names):
                state.fail("object.missing", value, peers=names)
            return value

        return self._with_rule("or", check, peers=names)

    def oxor(self, *peers: str) -> ObjectSchema:
        """At most one of *peers* may be present."""
        names = _peer_names("oxor", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            present = _present(value, names)
            if len(present) > 1:
                state.fail("object.oxor", value, peers=names, present=present)
            return value

        return self._with_rule("oxor", check, peers=names)

    def xor(self, *peers: str) -> ObjectSchema:
        """Exactly one of *peers* must be present."""
        names = _peer_names("xor", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            present = _present(value, names)
            if not present:
                state.fail("object.missing", value, peers=names)
            if len(present) > 1:
                state.fail("object.xor", value, peers=names, present=present)
            return value

        return self._with_rule("xor", check, peers=names)

    def with_(self, key: str, *peers: str) -> ObjectSchema:
        """When *key* is present every one of *peers* must be too."""
        names = _peer_names("with", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            if key in value:
                for peer in names:
                    if peer not in value:
                        state.fail("object.with", value, main=key, peer=peer)
            return value

        return self._with_rule("with", check, key=key, peers=names)

    def without(self, key: str, *peers: str) -> ObjectSchema:
        """When *key* is present none of *peers* may be."""
        names = _peer_names("without", peers)

        def check(value: dict[str, Any], state: State) -> dict[str, Any]:
            if key in value:
                for peer in names:
                    if peer in value:
                        state.fail("object.without", value, main=key, peer=peer)
            return value

        return self._with_rule("without", check, key=key, peers=names)


def object_(tree: dict[str, Schema] | None = None) -> ObjectSchema:
    return ObjectSchema(tree)
