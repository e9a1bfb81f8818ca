"""Input object validation through the directive."""

from __future__ import annotations

import pytest
from graphql import graphql_sync

from validate_directive import build_validated_schema


@pytest.fixture
def check(run):
    """Call ``validate`` with a single TestInput argument."""

    def _check(argument: str, value):
        query = f"query ($v: TestInput) {{ validate({argument}: $v) }}"
        return run(query, {"v": value})

    return _check


def test_boolean_argument(run):
    assert run("{ validate(boolean: true) }").errors is None


# -- Fields -----------------------------------------------------------------


def test_annotated_field_is_validated(check, first_detail):
    assert check("object", {"port": 80}).errors is None

    assert first_detail(check("object", {"port": 70000})) == {
        "context": {"key": "port", "label": "object.port", "value": 70000},
        "message": '"object.port" must be a valid port',
        "path": ["object", "port"],
        "type": "number.port",
    }


def test_nested_types_are_validated(check, first_detail):
    value = {"cat": {"underHat": {"underHat": [{"string": "ABC"}]}}}
    detail = first_detail(check("object", value))
    assert detail["type"] == "string.lowercase"
    assert detail["path"] == ["object", "cat", "underHat", "underHat", 0, "string"]
    assert detail["context"]["label"] == "object.cat.underHat.underHat[0].string"


def test_nested_enum_field(check):
    value = {"cat": {"underHat": {"underHat": [{"foo": "A", "string": "abc"}]}}}
    assert check("object", value).errors is None


def test_unannotated_argument_is_not_validated(check):
    assert check("objectNoValidation", {"port": 70000}).errors is None


# -- Size -------------------------------------------------------------------


def test_object_length(check, first_detail):
    assert check("objectLength", {"boolean": True, "port": 80}).errors is None

    detail = first_detail(check("objectLength", {"port": 80}))
    assert detail["type"] == "object.length"
    assert detail["message"] == '"objectLength" must have 2 keys'


def test_object_max(check, first_detail):
    assert check("objectMax", {"port": 80}).errors is None

    detail = first_detail(check("objectMax", {"boolean": True, "port": 80, "cat": {}}))
    assert detail["type"] == "object.max"
    assert detail["context"]["limit"] == 2


def test_object_min(check, first_detail):
    assert check("objectMin", {"boolean": True, "port": 80}).errors is None

    detail = first_detail(check("objectMin", {"port": 80}))
    assert detail["type"] == "object.min"
    assert detail["message"] == '"objectMin" must have at least 2 keys'


# -- Peers ------------------------------------------------------------------


BOTH = {"boolean": True, "port": 80}
ONE = {"boolean": True}


@pytest.mark.parametrize(
    ("argument", "value"),
    [
        ("and", {}),
        ("and", BOTH),
        ("nand", ONE),
        ("or", ONE),
        ("oxor", {}),
        ("oxor", ONE),
        ("xor", ONE),
        ("with", BOTH),
        ("with", {"port": 80}),
        ("without", ONE),
        ("without", {"port": 80}),
    ],
)
def test_peer_rules_pass(check, argument, value):
    assert check(argument, value).errors is None


def test_and(check, first_detail):
    detail = first_detail(check("and", ONE))
    assert detail["type"] == "object.and"
    assert detail["context"]["present"] == ["boolean"]
    assert detail["context"]["missing"] == ["port"]
    assert detail["message"] == (
        '"and" contains [boolean] without its required peers [port]'
    )


def test_nand(check, first_detail):
    detail = first_detail(check("nand", BOTH))
    assert detail["type"] == "object.nand"
    assert detail["message"] == '"boolean" must not exist simultaneously with [port]'


def test_or(check, first_detail):
    detail = first_detail(check("or", {}))
    assert detail["type"] == "object.missing"
    assert detail["message"] == '"or" must contain at least one of [boolean, port]'


def test_oxor(check, first_detail):
    detail = first_detail(check("oxor", BOTH))
    assert detail["type"] == "object.oxor"
    assert detail["context"]["present"] == ["boolean", "port"]


def test_xor(check, first_detail):
    assert first_detail(check("xor", {}))["type"] == "object.missing"
    assert first_detail(check("xor", BOTH))["type"] == "object.xor"


def test_with(check, first_detail):
    detail = first_detail(check("with", ONE))
    assert detail["type"] == "object.with"
    assert detail["message"] == '"boolean" missing required peer "port"'


def test_without(check, first_detail):
    detail = first_detail(check("without", BOTH))
    assert detail["type"] == "object.without"
    assert detail["message"] == '"boolean" conflict with forbidden peer "port"'


def test_explicit_null_counts_as_present(check, first_detail):
    detail = first_detail(check("nand", {"boolean": None, "port": None}))
    assert detail["type"] == "object.nand"


# -- Type-level annotations -------------------------------------------------


def test_input_type_annotation():
    schema = build_validated_schema(
        """
        input Pair @validate(and: ["a", "b"]) {
          a: Int
          b: Int @validate(max: 10)
        }
        type Query { pair(value: Pair @validate): Boolean }
        """,
        {"Query": {"pair": lambda root, info, value: True}},
    )

    result = graphql_sync(schema, "{ pair(value: { a: 1, b: 2 }) }")
    assert result.errors is None

    result = graphql_sync(schema, "{ pair(value: { a: 1 }) }")
    assert result.errors[0].extensions["details"][0]["type"] == "object.and"

    result = graphql_sync(schema, "{ pair(value: { a: 1, b: 11 }) }")
    assert result.errors[0].extensions["details"][0]["path"] == ["value", "b"]
