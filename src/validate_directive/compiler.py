"""
Type-to-validator compiler.

Turns the declared GraphQL input type of an argument or input field plus the
arguments of its ``@validate`` application into a validator, recursing into
list item types and input object types.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from graphql import (
    ArgumentNode,
    DirectiveNode,
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLList,
    GraphQLScalarType,
    Node,
    get_nullable_type,
    is_enum_type,
    is_input_object_type,
    is_list_type,
)

from .cache import CompositeCache, FieldTree
from .decoder import decode_value
from .dispatch import is_array_scoped, lookup, resolve_operation
from .exceptions import (
    InvalidArgumentError,
    ListOperationError,
    NonStringEnumError,
    OperationNotApplicableError,
    TypeCastOrderError,
    UnsupportedTypeError,
)
from .rules import (
    Schema,
    SchemaDefinitionError,
    array,
    boolean,
    number,
    object_,
    string,
)

logger = logging.getLogger(__name__)

_SCALARS = {
    "String": string,
    "ID": string,
    "Int": lambda: number().integer(),
    "Float": number,
    "Boolean": boolean,
}


def find_directive(node: Node | None, name: str) -> DirectiveNode | None:
    """Return the first application of directive *name* on an AST *node*."""
    for directive in getattr(node, "directives", None) or ():
        if directive.name.value == name:
            return directive
    return None


class AnnotationCompiler:
    """
    Builds validators for one schema.

    Args:
        cache: Trees of the input object types seen so far; shared with the
            directive visitor so annotated input fields land in the same tree.
        directive_name: Name of the directive read from input object types.
    """

    def __init__(self, cache: CompositeCache, directive_name: str = "validate") -> None:
        self.cache = cache
        self.directive_name = directive_name

    def compile(
        self,
        type_ref: GraphQLInputType,
        arguments: Sequence[ArgumentNode],
        field_name: str,
        target_tree: FieldTree,
    ) -> Schema:
        """
        Compile *type_ref* with directive *arguments* and store the result.

        The validator is stored under *field_name* in *target_tree* and
        returned.

        Raises:
            CompilationError: For unsupported types, misplaced type casts and
                arguments that do not apply to the field's validator kind.
        """
        nullable = get_nullable_type(type_ref)

        if is_list_type(nullable):
            node = self._compile_list(nullable, arguments, field_name)
            arguments = [a for a in arguments if is_array_scoped(a.name.value)]
        elif is_input_object_type(nullable):
            node = self._compile_input_object(nullable, field_name)
        elif is_enum_type(nullable):
            node = self._compile_enum(nullable)
        else:
            node = self._compile_scalar(nullable)

        node = self._apply_arguments(node, arguments, field_name)
        target_tree[field_name] = node
        logger.debug(
            "Compiled %s validator for %s (%d directive arguments)",
            node.kind,
            field_name,
            len(arguments),
        )
        return node

    # -- type kinds -----------------------------------------------------------

    def _compile_list(
        self,
        list_type: GraphQLList[Any],
        arguments: Sequence[ArgumentNode],
        field_name: str,
    ) -> Schema:
        item_arguments = [a for a in arguments if not is_array_scoped(a.name.value)]
        item = self.compile(list_type.of_type, item_arguments, field_name, {})
        return array().items(item)

    def _compile_input_object(
        self, input_type: GraphQLInputObjectType, field_name: str
    ) -> Schema:
        tree, created = self.cache.reserve(input_type.name)
        if self.cache.is_filling(input_type.name):
            logger.debug(
                "Input type %s is being compiled; reusing its tree", input_type.name
            )
        else:
            with self.cache.filling(input_type.name):
                for name, field in input_type.fields.items():
                    if name not in tree:
                        self.compile(field.type, (), name, tree)

        node: Schema = object_(tree)
        directive = find_directive(input_type.ast_node, self.directive_name)
        if directive is not None and directive.arguments:
            node = self._apply_arguments(node, directive.arguments, field_name)
        if created:
            logger.debug("Built validator tree for input type %s", input_type.name)
        return node

    def _compile_enum(self, enum_type: GraphQLEnumType) -> Schema:
        values = []
        for name, enum_value in enum_type.values.items():
            value = name if enum_value.value is None else enum_value.value
            if not isinstance(value, str):
                raise NonStringEnumError(enum_type.name, value)
            values.append(value)
        return string().valid(*values)

    def _compile_scalar(self, scalar_type: GraphQLScalarType) -> Schema:
        factory = _SCALARS.get(scalar_type.name)
        if factory is None:
            raise UnsupportedTypeError(scalar_type.name)
        return factory()

    # -- directive arguments --------------------------------------------------

    def _apply_arguments(
        self,
        node: Schema,
        arguments: Sequence[ArgumentNode],
        field_name: str,
    ) -> Schema:
        # A misplaced cast fails before any other argument is looked at.
        for argument in arguments[1:]:
            spec = lookup(argument.name.value)
            if spec is not None and spec.type_cast is not None:
                raise TypeCastOrderError(decode_value(argument.value), field_name)

        for argument in arguments:
            name = argument.name.value
            value = decode_value(argument.value)
            spec = lookup(name)

            if spec is not None and spec.type_cast is not None:
                node = spec.type_cast(value)
                continue

            try:
                operation = resolve_operation(name, value)
            except (SchemaDefinitionError, re.error) as exc:
                raise InvalidArgumentError(name, field_name, str(exc)) from exc
            allowed = operation.allowed_kinds
            if operation.method not in node.operations or (
                allowed is not None and node.kind not in allowed
            ):
                if allowed is not None and "array" in allowed and node.kind != "array":
                    raise ListOperationError(name, field_name, node.kind)
                raise OperationNotApplicableError(name, field_name, node.kind)

            try:
                node = getattr(node, operation.method)(*operation.args)
            except (SchemaDefinitionError, re.error) as exc:
                raise InvalidArgumentError(name, field_name, str(exc)) from exc
        return node
