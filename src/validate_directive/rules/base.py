"""
Core of the rule runtime.

A :class:`Schema` is an immutable validator for one kind of value.  Every
refinement operation (``max``, ``lowercase``, ``and_``...) returns a clone
carrying one more rule, so a schema can be shared freely once built.

Validation walks the value depth-first with a :class:`State` that records the
current path and the effective preferences, and stops at the first violated
rule by raising :class:`~validate_directive.rules.errors.ValidationFailure`.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, NoReturn, TypeVar

from .errors import (
    MESSAGES,
    ErrorDetail,
    SchemaDefinitionError,
    ValidationFailure,
    render_message,
)

S = TypeVar("S", bound="Schema")

RuleCheck = Callable[[Any, "State"], Any]


@dataclass(frozen=True, slots=True)
class Preferences:
    """Validation options in effect for a value.

    Attributes:
        convert: Allow rules to coerce the value (parse strings, trim,
            change case...) instead of rejecting it.
        allow_unknown: Allow object keys without a schema.
    """

    convert: bool = False
    allow_unknown: bool = False

    def merge(self, overrides: Mapping[str, Any]) -> Preferences:
        known = {k: bool(v) for k, v in overrides.items() if k in _PREF_NAMES}
        return replace(self, **known) if known else self


_PREF_NAMES = frozenset({"convert", "allow_unknown"})


@dataclass(frozen=True, slots=True)
class State:
    """Position of the value being validated inside the root value."""

    path: tuple[str | int, ...] = ()
    prefs: Preferences = field(default_factory=Preferences)

    def child(self, key: str | int) -> State:
        return State(path=(*self.path, key), prefs=self.prefs)

    @property
    def key(self) -> str | int | None:
        return self.path[-1] if self.path else None

    @property
    def label(self) -> str:
        return format_label(self.path)

    def fail(
        self,
        code: str,
        value: Any,
        *,
        message_key: str | None = None,
        **context: Any,
    ) -> NoReturn:
        """Raise a :class:`ValidationFailure` for the value at this position."""
        ctx: dict[str, Any] = {"label": self.label, "value": value, **context}
        if self.path:
            ctx["key"] = self.key
        template = MESSAGES[message_key or code]
        detail = ErrorDetail(
            message=render_message(template, ctx),
            path=list(self.path),
            type=code,
            context=ctx,
        )
        raise ValidationFailure([detail])


def format_label(path: Iterable[str | int]) -> str:
    """Render a path as ``a.b[0].c``; the root value is labelled ``value``."""
    label = ""
    for part in path:
        if isinstance(part, int):
            label += f"[{part}]"
        else:
            label += f".{part}" if label else part
    return label or "value"


@dataclass(frozen=True, slots=True)
class Rule:
    """A named check applied after the base type check."""

    name: str
    check: RuleCheck
    args: dict[str, Any] = field(default_factory=dict)


class Schema:
    """Base validator; accepts any value.

    Subclasses set :attr:`kind`, extend :attr:`operations` with their
    refinement methods and override :meth:`_coerce` for the base type check.
    """

    kind: ClassVar[str] = "any"
    operations: ClassVar[frozenset[str]] = frozenset({"prefs", "valid"})

    def __init__(self) -> None:
        self._rules: tuple[Rule, ...] = ()
        self._prefs: dict[str, Any] = {}
        self._valids: tuple[Any, ...] | None = None

    def __repr__(self) -> str:
        rules = ", ".join(r.name for r in self._rules)
        return f"<{type(self).__name__} kind={self.kind} rules=[{rules}]>"

    # -- building -----------------------------------------------------------

    def clone(self: S) -> S:
        other = copy.copy(self)
        other._prefs = dict(self._prefs)
        return other

    def _with_rule(self: S, name: str, check: RuleCheck, **args: Any) -> S:
        other = self.clone()
        other._rules = (*self._rules, Rule(name=name, check=check, args=args))
        return other

    def has_rule(self, name: str) -> bool:
        return any(r.name == name for r in self._rules)

    def prefs(self: S, options: Mapping[str, Any] | None = None) -> S:
        """Override validation preferences for this value and its children."""
        if options is not None and not isinstance(options, Mapping):
            raise SchemaDefinitionError("prefs must be given as a mapping")
        other = self.clone()
        other._prefs.update(options or {})
        return other

    def valid(self: S, *values: Any) -> S:
        """Only allow the given values."""
        other = self.clone()
        other._valids = tuple(values)
        return other

    @property
    def preferences(self) -> dict[str, Any]:
        return dict(self._prefs)

    def requests_conversion(self, seen: set[int] | None = None) -> bool:
        """True if this schema (or a child) enables value conversion."""
        return bool(self._prefs.get("convert"))

    # -- validation ---------------------------------------------------------

    def validate(self, value: Any, state: State) -> Any:
        if value is None:
            return None
        if self._prefs:
            state = replace(state, prefs=state.prefs.merge(self._prefs))
        value = self._coerce(value, state)
        if self._valids is not None and value not in self._valids:
            state.fail("any.only", value, valids=list(self._valids))
        for rule in self._rules:
            value = rule.check(value, state)
        return value

    def _coerce(self, value: Any, state: State) -> Any:
        return value


def any_() -> Schema:
    return Schema()


def attempt(
    value: Any,
    schema: Schema,
    *,
    allow_unknown: bool = False,
    convert: bool = True,
) -> Any:
    """
    Validate *value* against *schema* and return the (possibly converted) value.

    Raises:
        ValidationFailure: On the first violated rule.
    """
    state = State(prefs=Preferences(convert=convert, allow_unknown=allow_unknown))
    return schema.validate(value, state)
