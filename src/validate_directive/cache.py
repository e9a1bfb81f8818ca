"""Per input-object-type validator trees, shared by every usage of the type."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from .rules import Schema

logger = logging.getLogger(__name__)

FieldTree = dict[str, Schema]


class CompositeCache:
    """
    Maps input object type names to their field validator trees.

    A tree is reserved before the type's fields are compiled, so a field
    whose type refers back to an enclosing type finds the (partially built)
    tree instead of recursing.  ``filling()`` marks a type whose fields are
    being compiled; the compiler never starts a second fill of such a type.
    """

    def __init__(self) -> None:
        self._trees: dict[str, FieldTree] = {}
        self._filling: set[str] = set()

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._trees

    def __len__(self) -> int:
        return len(self._trees)

    def reserve(self, type_name: str) -> tuple[FieldTree, bool]:
        """Return the tree for *type_name*, creating it if needed.

        The second element is ``True`` when the tree was created by this call.
        """
        tree = self._trees.get(type_name)
        if tree is not None:
            return tree, False
        tree = self._trees[type_name] = {}
        logger.debug("Reserved validator tree for input type %s", type_name)
        return tree, True

    def get(self, type_name: str) -> FieldTree | None:
        return self._trees.get(type_name)

    def is_filling(self, type_name: str) -> bool:
        return type_name in self._filling

    @contextmanager
    def filling(self, type_name: str) -> Iterator[FieldTree]:
        """Mark *type_name* as in progress while its fields are compiled."""
        tree, _ = self.reserve(type_name)
        self._filling.add(type_name)
        try:
            yield tree
        finally:
            self._filling.discard(type_name)
