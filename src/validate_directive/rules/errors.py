"""
Failure reporting for the rule runtime.

Every violated rule produces an :class:`ErrorDetail` identified by a dotted
``type`` code (``string.lowercase``, ``array.length``...).  Messages are
rendered from :data:`MESSAGES` with the detail's context; the quoted label
at the start of each message is the formatted path of the offending value.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MESSAGES: dict[str, str] = {
    # any
    "any.only": '"{label}" must be one of {valids}',
    # string
    "string.base": '"{label}" must be a string',
    "string.empty": '"{label}" is not allowed to be empty',
    "string.alphanum": '"{label}" must only contain alpha-numeric characters',
    "string.base64": '"{label}" must be a valid base64 string',
    "string.creditCard": '"{label}" must be a credit card',
    "string.dataUri": '"{label}" must be a valid dataUri string',
    "string.domain": '"{label}" must contain a valid domain name',
    "string.email": '"{label}" must be a valid email',
    "string.guid": '"{label}" must be a valid GUID',
    "string.hex": '"{label}" must only contain hexadecimal characters',
    "string.hexAlign": (
        '"{label}" hex decoded representation must be byte aligned'
    ),
    "string.hostname": '"{label}" must be a valid hostname',
    "string.ip": '"{label}" must be a valid ip address with a {cidr} CIDR',
    "string.ipVersion": (
        '"{label}" must be a valid ip address of one of the following '
        "versions {version} with a {cidr} CIDR"
    ),
    "string.isoDate": '"{label}" must be in iso format',
    "string.isoDuration": '"{label}" must be a valid ISO 8601 duration',
    "string.length": '"{label}" length must be {limit} characters long',
    "string.lowercase": '"{label}" must only contain lowercase characters',
    "string.max": (
        '"{label}" length must be less than or equal to {limit} characters long'
    ),
    "string.min": '"{label}" length must be at least {limit} characters long',
    "string.normalize": '"{label}" must be unicode normalized in the {form} form',
    "string.pattern.base": (
        '"{label}" with value "{value}" fails to match the required '
        "pattern: {regex}"
    ),
    "string.pattern.name": (
        '"{label}" with value "{value}" fails to match the {name} pattern'
    ),
    "string.pattern.invert.base": (
        '"{label}" with value "{value}" matches the inverted pattern: {regex}'
    ),
    "string.pattern.invert.name": (
        '"{label}" with value "{value}" matches the inverted {name} pattern'
    ),
    "string.token": (
        '"{label}" must only contain alpha-numeric and underscore characters'
    ),
    "string.trim": '"{label}" must not have leading or trailing whitespace',
    "string.uppercase": '"{label}" must only contain uppercase characters',
    # number
    "number.base": '"{label}" must be a number',
    "number.infinity": '"{label}" cannot be infinity',
    "number.greater": '"{label}" must be greater than {limit}',
    "number.integer": '"{label}" must be an integer',
    "number.less": '"{label}" must be less than {limit}',
    "number.max": '"{label}" must be less than or equal to {limit}',
    "number.min": '"{label}" must be greater than or equal to {limit}',
    "number.multiple": '"{label}" must be a multiple of {multiple}',
    "number.negative": '"{label}" must be a negative number',
    "number.port": '"{label}" must be a valid port',
    "number.positive": '"{label}" must be a positive number',
    "number.precision": '"{label}" must have no more than {limit} decimal places',
    "number.unsafe": '"{label}" must be a safe number',
    # date
    "date.base": '"{label}" must be a valid date',
    "date.format.iso": '"{label}" must be in ISO 8601 date format',
    "date.format.javascript": (
        '"{label}" must be in timestamp or number of milliseconds format'
    ),
    "date.format.unix": '"{label}" must be in timestamp or number of seconds format',
    "date.greater": '"{label}" must be greater than {limit}',
    "date.less": '"{label}" must be less than {limit}',
    "date.max": '"{label}" must be less than or equal to {limit}',
    "date.min": '"{label}" must be greater than or equal to {limit}',
    # boolean
    "boolean.base": '"{label}" must be a boolean',
    # array
    "array.base": '"{label}" must be an array',
    "array.length": '"{label}" must contain {limit} items',
    "array.max": '"{label}" must contain less than or equal to {limit} items',
    "array.min": '"{label}" must contain at least {limit} items',
    "array.sort": '"{label}" must be sorted in {order} order by {by}',
    "array.sort.mismatching": (
        '"{label}" cannot be sorted due to mismatching types'
    ),
    "array.unique": '"{label}" contains a duplicate value',
    # object
    "object.base": '"{label}" must be of type object',
    "object.unknown": '"{label}" is not allowed',
    "object.and": (
        '"{label}" contains {present} without its required peers {missing}'
    ),
    "object.length": '"{label}" must have {limit} keys',
    "object.max": '"{label}" must have less than or equal to {limit} keys',
    "object.min": '"{label}" must have at least {limit} keys',
    "object.missing": '"{label}" must contain at least one of {peers}',
    "object.nand": '"{main}" must not exist simultaneously with {peers}',
    "object.oxor": (
        '"{label}" contains a conflict between optional exclusive peers {peers}'
    ),
    "object.with": '"{main}" missing required peer "{peer}"',
    "object.without": '"{main}" conflict with forbidden peer "{peer}"',
    "object.xor": '"{label}" contains a conflict between exclusive peers {peers}',
}


def _stringify(value: Any) -> str:
    if isinstance(value, list | tuple):
        return "[" + ", ".join(_stringify(v) for v in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def render_message(template: str, context: dict[str, Any]) -> str:
    """Fill *template* with *context*, formatting lists as ``[a, b]``."""
    return template.format_map({k: _stringify(v) for k, v in context.items()})


class ErrorDetail(BaseModel):
    """A single rule violation."""

    model_config = ConfigDict(frozen=True)

    message: str
    path: list[str | int] = Field(default_factory=list)
    type: str
    context: dict[str, Any] = Field(default_factory=dict)


class ValidationFailure(Exception):
    """Raised by :func:`~validate_directive.rules.attempt` on the first violation."""

    def __init__(self, details: list[ErrorDetail]) -> None:
        self.details = details
        super().__init__(". ".join(d.message for d in details))

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_FAILURE",
            "details": [d.model_dump() for d in self.details],
        }


class SchemaDefinitionError(ValueError):
    """A rule was given an argument it cannot work with."""
