"""
Composable value validators.

Build a schema from the constructors below, refine it with chained
operations and run it with :func:`attempt`::

    schema = object_({"name": string().lowercase(), "tags": array().max(3)})
    attempt({"name": "ada"}, schema)
"""

from .array import ArraySchema, array
from .base import Preferences, Schema, State, any_, attempt, format_label
from .boolean import BooleanSchema, boolean
from .date import DateSchema, date, parse_date
from .errors import ErrorDetail, SchemaDefinitionError, ValidationFailure
from .number import NumberSchema, number
from .object import ObjectSchema, object_
from .string import StringSchema, string

__all__ = [
    "ArraySchema",
    "BooleanSchema",
    "DateSchema",
    "ErrorDetail",
    "NumberSchema",
    "ObjectSchema",
    "Preferences",
    "Schema",
    "SchemaDefinitionError",
    "State",
    "StringSchema",
    "ValidationFailure",
    "any_",
    "array",
    "attempt",
    "boolean",
    "date",
    "format_label",
    "number",
    "object_",
    "parse_date",
    "string",
]
