"""
Exception hierarchy of the ``@validate`` directive.

Everything derives from ``ValidateDirectiveError`` and provides ``to_dict()``
for API-friendly error responses.  ``CompilationError`` subclasses are raised
while the schema is being built and abort construction;
``ArgumentValidationError`` is raised per call from a wrapped resolver.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any

from .rules import ErrorDetail


class ValidateDirectiveError(Exception):
    """Base exception for all directive errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


# -- compile time --------------------------------------------------------------


class CompilationError(ValidateDirectiveError):
    """An annotation could not be compiled into a validator."""


class UnsupportedTypeError(CompilationError):
    """A scalar type has no validator kind."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"type '{type_name}' is unsupported")

    def to_dict(self) -> dict[str, Any]:
        return {"error": "UNSUPPORTED_TYPE", "type": self.type_name}


class OperationNotApplicableError(CompilationError):
    """An annotation argument does not apply to the field's validator kind."""

    def __init__(self, argument: str, field_name: str, kind: str | None = None) -> None:
        self.argument = argument
        self.field_name = field_name
        self.kind = kind
        super().__init__(f"'{argument}' cannot be used to validate '{field_name}'")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATION_NOT_APPLICABLE",
            "argument": self.argument,
            "field": self.field_name,
            "kind": self.kind,
        }


class ListOperationError(OperationNotApplicableError):
    """An array-scoped argument was applied to a field that is not a list."""


class TypeCastOrderError(CompilationError):
    """A type cast was not the first argument of its annotation."""

    def __init__(self, cast: Any, field_name: str) -> None:
        self.cast = cast
        self.field_name = field_name
        super().__init__(f"type cast '{cast}' must be first directive argument")


class UnknownTypeCastError(CompilationError):
    def __init__(self, cast: Any, known: list[str]) -> None:
        self.cast = cast
        self.known = known
        super().__init__(
            f"unrecognized type cast '{cast}'. Valid casts: {', '.join(known)}"
        )


class NonStringEnumError(CompilationError):
    def __init__(self, enum_name: str, value: Any) -> None:
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"enum '{enum_name}': only string values are supported")


class InvalidArgumentError(CompilationError):
    """A directive argument value was rejected by the rule it configures."""

    def __init__(self, argument: str, field_name: str, reason: str) -> None:
        self.argument = argument
        self.field_name = field_name
        self.reason = reason
        super().__init__(
            f"invalid value for '{argument}' on '{field_name}': {reason}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_ARGUMENT",
            "argument": self.argument,
            "field": self.field_name,
            "reason": self.reason,
        }


# -- binding -------------------------------------------------------------------


class ResolverBindingError(ValidateDirectiveError):
    """
    A resolver map names a type or field the schema does not have.

    Suggests close matches for likely typos.
    """

    def __init__(
        self, name: str, available: list[str], owner: str | None = None
    ) -> None:
        self.name = name
        self.owner = owner
        self.suggestions = get_close_matches(name, available, n=3, cutoff=0.6)

        where = f" on type '{owner}'" if owner else ""
        message = f"Cannot bind resolver '{name}'{where}: no such "
        message += "field." if owner else "type."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RESOLVER_BINDING",
            "name": self.name,
            "type": self.owner,
            "suggestions": self.suggestions,
        }


# -- runtime -------------------------------------------------------------------


class ArgumentValidationError(ValidateDirectiveError):
    """
    Field arguments failed validation.

    ``extensions`` is picked up by graphql-core and copied onto the
    located ``GraphQLError`` returned to the client.
    """

    def __init__(
        self, details: list[ErrorDetail], code: str = "BAD_USER_INPUT"
    ) -> None:
        self.details = details
        self.code = code
        self.extensions: dict[str, Any] = {
            "code": code,
            "details": [d.model_dump() for d in details],
        }
        super().__init__(". ".join(d.message for d in details))

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, **self.extensions}
