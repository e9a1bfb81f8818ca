"""
Resolver interception.

Every field with at least one validated argument gets its resolver replaced,
once, by a :class:`ValidatedResolver` that checks the incoming arguments
before delegating to the original resolver.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from graphql import GraphQLField, GraphQLResolveInfo, default_field_resolver

from .config import ValidateDirectiveConfig
from .exceptions import ArgumentValidationError
from .rules import ValidationFailure, attempt, object_

if TYPE_CHECKING:
    from collections.abc import Callable

    from .cache import FieldTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class ValidatedResolver:
    """
    A resolver bundled with the validator tree of its arguments.

    The tree starts empty and is filled by the compiler as the field's
    annotated arguments are visited.
    """

    original: Callable[..., Any]
    tree: FieldTree = field(default_factory=dict)
    config: ValidateDirectiveConfig = field(default_factory=ValidateDirectiveConfig)

    def __call__(self, root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        schema = object_(self.tree)
        try:
            converted = attempt(
                args,
                schema,
                allow_unknown=self.config.allow_unknown,
                convert=self.config.convert,
            )
        except ValidationFailure as exc:
            logger.debug(
                "Rejected arguments of %s.%s: %s",
                info.parent_type.name,
                info.field_name,
                exc,
            )
            raise ArgumentValidationError(
                exc.details, code=self.config.error_code
            ) from exc

        if self.config.convert or schema.requests_conversion():
            args = converted
        return self.original(root, info, **args)


class ResolverInterceptor:
    """Installs :class:`ValidatedResolver` wrappers on schema fields."""

    def __init__(self, config: ValidateDirectiveConfig | None = None) -> None:
        self.config = config or ValidateDirectiveConfig()

    def wrap(self, resolver: Callable[..., Any] | None) -> ValidatedResolver:
        """Wrap *resolver*; an already wrapped resolver is returned unchanged."""
        if isinstance(resolver, ValidatedResolver):
            return resolver
        return ValidatedResolver(
            original=resolver or default_field_resolver, config=self.config
        )

    def install(self, graphql_field: GraphQLField) -> FieldTree:
        """Wrap the resolver of *graphql_field* in place and return its tree."""
        resolver = graphql_field.resolve
        wrapped = self.wrap(resolver)
        if wrapped is not resolver:
            graphql_field.resolve = wrapped
            logger.debug(
                "Installed argument validation on resolver %r", wrapped.original
            )
        return wrapped.tree
