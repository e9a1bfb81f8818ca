"""
Directive argument name → validator operation.

``DISPATCH_TABLE`` is read-only and built once at import time.  Each
``OperationSpec`` may restrict the validator kinds the operation applies to,
rename the operation, reshape the decoded argument into positional arguments,
or replace the validator altogether (a type cast).  Arguments without an
entry call the operation of the same name with the decoded value.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .exceptions import UnknownTypeCastError
from .rules import Schema, SchemaDefinitionError, date

ArgumentMapper = Callable[[Any], tuple[Any, ...]]
TypeCast = Callable[[Any], Schema]


@dataclass(frozen=True, slots=True)
class OperationSpec:
    """How one directive argument is applied to a validator."""

    allowed_kinds: frozenset[str] | None = None
    rename: str | None = None
    argument_mapper: ArgumentMapper | None = None
    type_cast: TypeCast | None = None

    @property
    def array_scoped(self) -> bool:
        return self.allowed_kinds is not None and "array" in self.allowed_kinds


@dataclass(frozen=True, slots=True)
class ResolvedOperation:
    """A directive argument resolved to a concrete method call."""

    argument: str
    method: str
    args: tuple[Any, ...]
    allowed_kinds: frozenset[str] | None = None


# -- argument mappers ----------------------------------------------------------


def _flag(_value: Any) -> tuple[Any, ...]:
    return ()


def _lowercase(value: str) -> tuple[Any, ...]:
    return (value.lower(),)


def _spread(value: list[str]) -> tuple[Any, ...]:
    return tuple(value)


def _key_and_peers(value: Mapping[str, Any]) -> tuple[Any, ...]:
    return (value["key"], *(value.get("peers") or ()))


def _string_length(value: Mapping[str, Any]) -> tuple[Any, ...]:
    return (value["limit"], value.get("encoding"))


_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL.sub("_", name).lower()


def _options(value: Mapping[str, Any] | None) -> tuple[Any, ...]:
    return ({_snake_case(k): v for k, v in (value or {}).items()},)


def _lower_symbols(value: Any) -> Any:
    if isinstance(value, list):
        return [_lower_symbols(v) for v in value]
    return value.lower() if isinstance(value, str) else value


_GUID_SEPARATORS: Mapping[str, Any] = MappingProxyType(
    {"NONE": False, "COLON": ":", "DASH": "-", "COLON_OR_DASH": True}
)


def _guid_options(value: Mapping[str, Any] | None) -> tuple[Any, ...]:
    (opts,) = _options(value)
    if opts.get("version") is not None:
        opts["version"] = _lower_symbols(opts["version"])
    if opts.get("separator") is not None:
        opts["separator"] = _GUID_SEPARATORS[opts["separator"]]
    return (opts,)


def _ip_options(value: Mapping[str, Any] | None) -> tuple[Any, ...]:
    (opts,) = _options(value)
    for key in ("version", "cidr"):
        if opts.get(key) is not None:
            opts[key] = _lower_symbols(opts[key])
    return (opts,)


_REGEX_FLAGS: Mapping[str, re.RegexFlag | int] = MappingProxyType(
    {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "u": 0, "g": 0}
)


def _pattern(value: Mapping[str, Any]) -> tuple[Any, ...]:
    flags = 0
    for char in value.get("flags") or "":
        if char not in _REGEX_FLAGS:
            raise SchemaDefinitionError(f"Unsupported regular expression flag {char!r}")
        flags |= _REGEX_FLAGS[char]
    compiled = re.compile(value["pattern"], flags)
    return (compiled, {"name": value.get("name"), "invert": bool(value.get("invert"))})


def _sort(value: Mapping[str, Any] | None) -> tuple[Any, ...]:
    opts = dict(value or {})
    if opts.get("order") is not None:
        opts["order"] = opts["order"].lower()
    return (opts,)


def _unique(value: Mapping[str, Any] | None) -> tuple[Any, ...]:
    return ((value or {}).get("comparator"),)


# -- type casts ----------------------------------------------------------------

_TYPE_CASTS: Mapping[str, Callable[[], Schema]] = MappingProxyType(
    {"DATE": lambda: date().prefs({"convert": True})}
)


def _type_cast(value: Any) -> Schema:
    factory = _TYPE_CASTS.get(value)
    if factory is None:
        raise UnknownTypeCastError(value, sorted(_TYPE_CASTS))
    return factory()


# -- table ---------------------------------------------------------------------

_ARRAY = frozenset({"array"})
_DATE = frozenset({"date"})
_NUMBER = frozenset({"number"})
_OBJECT = frozenset({"object"})
_STRING = frozenset({"string"})

DISPATCH_TABLE: Mapping[str, OperationSpec] = MappingProxyType(
    {
        # Array validation.
        "arrayLength": OperationSpec(allowed_kinds=_ARRAY, rename="length"),
        "arrayMax": OperationSpec(allowed_kinds=_ARRAY, rename="max"),
        "arrayMin": OperationSpec(allowed_kinds=_ARRAY, rename="min"),
        "arrayPrefs": OperationSpec(allowed_kinds=_ARRAY, rename="prefs"),
        "sort": OperationSpec(allowed_kinds=_ARRAY, argument_mapper=_sort),
        "unique": OperationSpec(allowed_kinds=_ARRAY, argument_mapper=_unique),
        # Date validation.
        "dateGreater": OperationSpec(allowed_kinds=_DATE, rename="greater"),
        "dateLess": OperationSpec(allowed_kinds=_DATE, rename="less"),
        "dateMax": OperationSpec(allowed_kinds=_DATE, rename="max"),
        "dateMin": OperationSpec(allowed_kinds=_DATE, rename="min"),
        "iso": OperationSpec(allowed_kinds=_DATE, argument_mapper=_flag),
        "timestamp": OperationSpec(argument_mapper=_lowercase),
        # Number validation.
        "greater": OperationSpec(allowed_kinds=_NUMBER),
        "less": OperationSpec(allowed_kinds=_NUMBER),
        "max": OperationSpec(allowed_kinds=_NUMBER),
        "min": OperationSpec(allowed_kinds=_NUMBER),
        "integer": OperationSpec(argument_mapper=_flag),
        "negative": OperationSpec(argument_mapper=_flag),
        "port": OperationSpec(argument_mapper=_flag),
        "positive": OperationSpec(argument_mapper=_flag),
        "sign": OperationSpec(argument_mapper=_lowercase),
        # Object validation.
        "and": OperationSpec(rename="and_", argument_mapper=_spread),
        "nand": OperationSpec(argument_mapper=_spread),
        "or": OperationSpec(rename="or_", argument_mapper=_spread),
        "oxor": OperationSpec(argument_mapper=_spread),
        "xor": OperationSpec(argument_mapper=_spread),
        "with": OperationSpec(rename="with_", argument_mapper=_key_and_peers),
        "without": OperationSpec(argument_mapper=_key_and_peers),
        "objectLength": OperationSpec(allowed_kinds=_OBJECT, rename="length"),
        "objectMax": OperationSpec(allowed_kinds=_OBJECT, rename="max"),
        "objectMin": OperationSpec(allowed_kinds=_OBJECT, rename="min"),
        # String validation.
        "alphanum": OperationSpec(argument_mapper=_flag),
        "base64": OperationSpec(argument_mapper=_options),
        "case": OperationSpec(argument_mapper=_lowercase),
        "creditCard": OperationSpec(rename="credit_card", argument_mapper=_flag),
        "dataUri": OperationSpec(rename="data_uri", argument_mapper=_options),
        "domain": OperationSpec(argument_mapper=_options),
        "email": OperationSpec(argument_mapper=_options),
        "guid": OperationSpec(argument_mapper=_guid_options),
        "hex": OperationSpec(argument_mapper=_flag),
        "hostname": OperationSpec(argument_mapper=_flag),
        "ip": OperationSpec(argument_mapper=_ip_options),
        "isoDate": OperationSpec(rename="iso_date", argument_mapper=_flag),
        "isoDuration": OperationSpec(rename="iso_duration", argument_mapper=_flag),
        "length": OperationSpec(allowed_kinds=_STRING, argument_mapper=_string_length),
        "lowercase": OperationSpec(argument_mapper=_flag),
        "maxLength": OperationSpec(
            allowed_kinds=_STRING, rename="max", argument_mapper=_string_length
        ),
        "minLength": OperationSpec(
            allowed_kinds=_STRING, rename="min", argument_mapper=_string_length
        ),
        "pattern": OperationSpec(argument_mapper=_pattern),
        "regex": OperationSpec(rename="pattern", argument_mapper=_pattern),
        "token": OperationSpec(argument_mapper=_flag),
        "uppercase": OperationSpec(argument_mapper=_flag),
        "uuid": OperationSpec(rename="guid", argument_mapper=_guid_options),
        # Helpers.
        "type": OperationSpec(type_cast=_type_cast),
    }
)


def lookup(argument: str) -> OperationSpec | None:
    return DISPATCH_TABLE.get(argument)


def is_array_scoped(argument: str) -> bool:
    """True if *argument* targets the array itself rather than its items."""
    spec = DISPATCH_TABLE.get(argument)
    return spec is not None and spec.array_scoped


def resolve_operation(argument: str, value: Any) -> ResolvedOperation:
    """
    Resolve a directive argument to the method to call and its arguments.

    Type casts are not resolved here; check ``lookup(argument).type_cast``
    first.
    """
    spec = DISPATCH_TABLE.get(argument)
    if spec is None:
        return ResolvedOperation(argument=argument, method=argument, args=(value,))
    method = spec.rename or argument
    args = spec.argument_mapper(value) if spec.argument_mapper else (value,)
    return ResolvedOperation(
        argument=argument,
        method=method,
        args=args,
        allowed_kinds=spec.allowed_kinds,
    )
