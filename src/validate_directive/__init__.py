from .cache import CompositeCache
from .compiler import AnnotationCompiler, find_directive
from .config import ValidateDirectiveConfig
from .decoder import decode_value
from .directive import ValidateDirective, bind_resolvers, build_validated_schema
from .dispatch import (
    DISPATCH_TABLE,
    OperationSpec,
    ResolvedOperation,
    resolve_operation,
)
from .exceptions import (
    ArgumentValidationError,
    CompilationError,
    InvalidArgumentError,
    ListOperationError,
    NonStringEnumError,
    OperationNotApplicableError,
    ResolverBindingError,
    TypeCastOrderError,
    UnknownTypeCastError,
    UnsupportedTypeError,
    ValidateDirectiveError,
)
from .interceptor import ResolverInterceptor, ValidatedResolver
from .sdl import create_directive_sdl

__all__ = [
    # Directive
    "ValidateDirective",
    "ValidateDirectiveConfig",
    "build_validated_schema",
    "bind_resolvers",
    "create_directive_sdl",
    # Compilation
    "AnnotationCompiler",
    "CompositeCache",
    "DISPATCH_TABLE",
    "OperationSpec",
    "ResolvedOperation",
    "resolve_operation",
    "decode_value",
    "find_directive",
    # Interception
    "ResolverInterceptor",
    "ValidatedResolver",
    # Exceptions
    "ValidateDirectiveError",
    "CompilationError",
    "UnsupportedTypeError",
    "OperationNotApplicableError",
    "ListOperationError",
    "TypeCastOrderError",
    "UnknownTypeCastError",
    "NonStringEnumError",
    "InvalidArgumentError",
    "ResolverBindingError",
    "ArgumentValidationError",
]
