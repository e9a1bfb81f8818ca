"""
The ``@validate`` schema directive.

``ValidateDirective.visit_schema`` walks a built ``GraphQLSchema`` and, for
every argument definition and input field definition carrying the directive,
compiles the directive's arguments into the validator tree of the field's
resolver or of the enclosing input type.

Usage::

    schema = build_validated_schema(
        '''
        type Query {
          hello(name: String @validate(case: LOWER, maxLength: {limit: 8})): String
        }
        ''',
        {"Query": {"hello": lambda root, info, name: f"hello {name}"}},
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from graphql import (
    DirectiveNode,
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLSchema,
    build_schema,
    is_input_object_type,
    is_object_type,
)

from .cache import CompositeCache, FieldTree
from .compiler import AnnotationCompiler, find_directive
from .config import ValidateDirectiveConfig
from .exceptions import ResolverBindingError
from .interceptor import ResolverInterceptor
from .sdl import create_directive_sdl

logger = logging.getLogger(__name__)

ResolverMap = Mapping[str, Mapping[str, Callable[..., Any]]]


class ValidateDirective:
    """
    Applies ``@validate`` annotations of one schema.

    An instance keeps the input type trees it has compiled, so apply it to a
    single schema only.
    """

    def __init__(self, config: ValidateDirectiveConfig | None = None) -> None:
        self.config = config or ValidateDirectiveConfig()
        self.cache = CompositeCache()
        self.interceptor = ResolverInterceptor(self.config)
        self.compiler = AnnotationCompiler(self.cache, self.config.directive_name)

    @property
    def name(self) -> str:
        return self.config.directive_name

    @property
    def sdl(self) -> str:
        """Directive definition to prepend to the type definitions."""
        return create_directive_sdl(self.name)

    def visit_schema(self, schema: GraphQLSchema) -> GraphQLSchema:
        """Install validation for every annotation in *schema*, in place."""
        for type_name, named_type in schema.type_map.items():
            if type_name.startswith("__"):
                continue
            if is_object_type(named_type):
                for field in named_type.fields.values():
                    for arg_name, argument in field.args.items():
                        directive = find_directive(argument.ast_node, self.name)
                        if directive is not None:
                            self.visit_argument_definition(
                                arg_name, argument, field, directive
                            )
            elif is_input_object_type(named_type):
                for field_name, input_field in named_type.fields.items():
                    directive = find_directive(input_field.ast_node, self.name)
                    if directive is not None:
                        self.visit_input_field_definition(
                            field_name, input_field, named_type, directive
                        )
        logger.debug(
            "Applied @%s: %d input type trees compiled", self.name, len(self.cache)
        )
        return schema

    def visit_argument_definition(
        self,
        arg_name: str,
        argument: GraphQLArgument,
        field: GraphQLField,
        directive: DirectiveNode,
    ) -> FieldTree:
        tree = self.interceptor.install(field)
        self.compiler.compile(argument.type, directive.arguments, arg_name, tree)
        return tree

    def visit_input_field_definition(
        self,
        field_name: str,
        input_field: GraphQLInputField,
        input_type: GraphQLInputObjectType,
        directive: DirectiveNode,
    ) -> FieldTree:
        tree, _ = self.cache.reserve(input_type.name)
        self.compiler.compile(input_field.type, directive.arguments, field_name, tree)
        return tree


def bind_resolvers(schema: GraphQLSchema, resolvers: ResolverMap) -> None:
    """
    Set ``resolve`` on the fields named in *resolvers*.

    Raises:
        ResolverBindingError: If a type or field does not exist.
    """
    object_types = [n for n, t in schema.type_map.items() if is_object_type(t)]
    for type_name, field_resolvers in resolvers.items():
        object_type = schema.get_type(type_name)
        if not is_object_type(object_type):
            raise ResolverBindingError(type_name, object_types)
        fields = object_type.fields
        for field_name, resolver in field_resolvers.items():
            if field_name not in fields:
                raise ResolverBindingError(field_name, list(fields), owner=type_name)
            fields[field_name].resolve = resolver


def build_validated_schema(
    type_defs: str,
    resolvers: ResolverMap | None = None,
    *,
    config: ValidateDirectiveConfig | None = None,
) -> GraphQLSchema:
    """
    Build a schema from SDL with the directive definitions prepended, bind
    *resolvers* and install argument validation.

    Raises:
        CompilationError: If an annotation cannot be compiled.
        ResolverBindingError: If *resolvers* names an unknown type or field.
    """
    directive = ValidateDirective(config)
    schema = build_schema(f"{directive.sdl}\n{type_defs}")
    bind_resolvers(schema, resolvers or {})
    return directive.visit_schema(schema)
