"""Literal argument nodes of a directive application to native values."""

from __future__ import annotations

from typing import Any

from graphql import (
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    ValueNode,
)


def decode_value(node: ValueNode) -> Any:
    """
    Decode a literal value node.

    Ints and floats become numbers, lists and input objects are decoded
    recursively, ``null`` becomes ``None``.  Every other literal (string,
    boolean, enum symbol) yields its raw ``value`` unchanged.
    """
    match node:
        case IntValueNode(value=raw):
            return int(raw)
        case FloatValueNode(value=raw):
            return float(raw)
        case ListValueNode(values=values):
            return [decode_value(item) for item in values]
        case ObjectValueNode(fields=fields):
            return {f.name.value: decode_value(f.value) for f in fields}
        case NullValueNode():
            return None
        case _:
            return getattr(node, "value", None)
