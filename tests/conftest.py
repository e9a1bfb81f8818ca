"""Shared fixtures: a schema exercising every directive argument."""

from __future__ import annotations

from typing import Any

import pytest
from graphql import ExecutionResult, GraphQLSchema, graphql_sync

from validate_directive import ArgumentValidationError, build_validated_schema

TYPE_DEFS = """
enum TestEnum { A B C }

input LittleCatC {
  foo: TestEnum @validate(case: UPPER, length: { limit: 1 })
  string: String @validate(case: LOWER)
}

input LittleCatA {
  underHat: LittleCatB @validate
}

input TestInput {
  boolean: Boolean
  port: Int @validate(port: TRUE)
  cat: LittleCatA @validate
}

input LittleCatB {
  underHat: [LittleCatC]
  ints: [Int]
}

type Query {
  validate(
    boolean: Boolean @validate

    # Date validation.
    dateGreater: String @validate(type: DATE, dateGreater: "1-1-1974")
    dateLess: String @validate(type: DATE, dateLess: "12-31-1973")
    dateMax: String @validate(type: DATE, dateMax: "12-31-1973")
    dateMin: String @validate(type: DATE, dateMin: "1-1-1974")
    iso: String @validate(type: DATE, iso: TRUE)
    timestamp: Int @validate(type: DATE, timestamp: UNIX)

    # Number validation.
    greater: Float @validate(greater: 5)
    integer: Float @validate(integer: TRUE)
    less: Float @validate(less: 10)
    max: Float @validate(max: 3)
    min: Float @validate(min: -5)
    multiple: Float @validate(multiple: 2)
    negative: Float @validate(negative: TRUE)
    port: Float @validate(port: TRUE)
    positive: Float @validate(positive: TRUE)
    precision: Float @validate(precision: 2)
    sign: Float @validate(sign: NEGATIVE)
    unsafeAllowed: Float @validate(unsafe: true)
    unsafeNotAllowed: Float @validate(unsafe: false)
    doubleInteger: Int @validate(integer: TRUE)

    # String validation.
    alphanum: String @validate(alphanum: TRUE)
    base64: String @validate(base64: { paddingRequired: false })
    case: String @validate(case: UPPER)
    creditCard: String @validate(creditCard: TRUE)
    dataUri: String @validate(dataUri: { paddingRequired: true })
    domain: String @validate(domain: { minDomainSegments: 2 })
    email: String @validate(email: { allowUnicode: false })
    guid: String @validate(guid: { version: [UUIDV1] })
    hex: String @validate(hex: true)
    hostname: String @validate(hostname: TRUE)
    ip: String @validate(ip: { version: [IPV6], cidr: OPTIONAL })
    isoDate: String @validate(isoDate: TRUE)
    isoDuration: String @validate(isoDuration: TRUE)
    length: String @validate(length: { limit: 4, encoding: "utf8" })
    lowercase: String @validate(lowercase: TRUE)
    maxLength: String @validate(maxLength: { limit: 3, encoding: "utf8" })
    minLength: String @validate(minLength: { limit: 4, encoding: "utf8" })
    normalize: String @validate(normalize: NFC)
    pattern: String @validate(pattern: { pattern: "^abc+$", flags: "i", name: "xyz" })
    regex: String @validate(regex: { pattern: "^abc+$", invert: true })
    token: String @validate(token: TRUE)
    trim: String @validate(trim: true)
    uppercase: String @validate(uppercase: TRUE)
    uuid: String @validate(uuid: { separator: COLON })

    # Object validation.
    object: TestInput @validate
    objectNoValidation: TestInput
    objectLength: TestInput @validate(objectLength: 2)
    objectMax: TestInput @validate(objectMax: 2)
    objectMin: TestInput @validate(objectMin: 2)
    and: TestInput @validate(and: ["boolean", "port"])
    nand: TestInput @validate(nand: ["boolean", "port"])
    or: TestInput @validate(or: ["boolean", "port"])
    oxor: TestInput @validate(oxor: ["boolean", "port"])
    xor: TestInput @validate(xor: ["boolean", "port"])
    with: TestInput @validate(with: { key: "boolean", peers: ["port"] })
    without: TestInput @validate(without: { key: "boolean", peers: ["port"] })
  ): Boolean
  nonNullable(foo: String! @validate(case: LOWER)): Boolean
  listType(
    foo: [String] @validate(case: LOWER)
    arrayLength: [String] @validate(case: LOWER, arrayLength: 3)
    arrayMax: [Int] @validate(arrayMax: 3)
    arrayMin: [Int] @validate(arrayMin: 1)
    sort: [TestInput] @validate(sort: { order: ASCENDING, by: "port" })
    sortDescending: [TestInput] @validate(sort: { order: DESCENDING, by: "port" })
    uniqueBoolean: [Boolean] @validate(unique: {})
    uniqueObject: [TestInput] @validate(unique: { comparator: "cat.underHat.ints.0" })
  ): Boolean
  enumType(
    foo: TestEnum @validate(alphanum: TRUE, case: UPPER, length: { limit: 1 })
  ): Boolean
  typeConversion(
    stringToDate: String @validate(type: DATE)
    integerToDate: Int @validate(type: DATE)
  ): String
  echoString(trim: String @validate(prefs: { convert: true }, trim: true)): String
}

type Mutation {
  validate(port: Int @validate(port: TRUE)): Int
}
"""


def _returns_true(root: Any, info: Any, **args: Any) -> bool:
    return True


def _type_conversion(root: Any, info: Any, **args: Any) -> str:
    return ",".join(f"{name}={value.isoformat()}" for name, value in args.items())


RESOLVERS = {
    "Query": {
        "validate": _returns_true,
        "nonNullable": _returns_true,
        "listType": _returns_true,
        "enumType": _returns_true,
        "typeConversion": _type_conversion,
        "echoString": lambda root, info, trim=None: trim,
    },
    "Mutation": {
        "validate": lambda root, info, **args: 5,
    },
}


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_validated_schema(TYPE_DEFS, RESOLVERS)


@pytest.fixture
def run(schema):
    """Execute a query against the shared schema."""

    def _run(query: str, variables: dict[str, Any] | None = None) -> ExecutionResult:
        return graphql_sync(schema, query, variable_values=variables)

    return _run


@pytest.fixture
def first_detail():
    """Extract the first structured failure detail of a rejected call."""

    def _first_detail(result: ExecutionResult) -> dict[str, Any]:
        assert result.errors, "expected the call to be rejected"
        error = result.errors[0].original_error
        assert isinstance(error, ArgumentValidationError)
        return error.details[0].model_dump()

    return _first_detail
