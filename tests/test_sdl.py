"""Tests for the directive SDL."""

from __future__ import annotations

from graphql import build_schema, graphql_sync, is_non_null_type

from validate_directive import (
    ValidateDirective,
    ValidateDirectiveConfig,
    build_validated_schema,
    create_directive_sdl,
)


def test_default_sdl_builds():
    schema = build_schema(f"{create_directive_sdl()}\ntype Query {{ ok: Boolean }}")
    directive = schema.get_directive("validate")
    assert directive is not None
    assert {"arrayLength", "sort", "dateGreater", "uuid", "prefs", "type"} <= set(
        directive.args
    )
    assert schema.get_type("ValidateFlag") is not None
    assert schema.get_type("ValidateSortInput") is not None


def test_directive_locations():
    schema = build_schema(f"{create_directive_sdl()}\ntype Query {{ ok: Boolean }}")
    directive = schema.get_directive("validate")
    locations = {location.name for location in directive.locations}
    assert locations == {
        "ARGUMENT_DEFINITION",
        "INPUT_FIELD_DEFINITION",
        "INPUT_OBJECT",
    }


def test_custom_directive_name():
    sdl = create_directive_sdl("check")
    assert "directive @check(" in sdl
    assert "enum CheckFlag" in sdl
    assert "Validate" not in sdl


def test_directive_exposes_its_sdl():
    directive = ValidateDirective(ValidateDirectiveConfig(directive_name="check"))
    assert directive.name == "check"
    assert directive.sdl == create_directive_sdl("check")


def test_schema_with_custom_directive_name():
    schema = build_validated_schema(
        "type Query { hello(name: String @check(lowercase: TRUE)): String }",
        {"Query": {"hello": lambda root, info, name: name}},
        config=ValidateDirectiveConfig(directive_name="check"),
    )
    assert graphql_sync(schema, '{ hello(name: "ada") }').data == {"hello": "ada"}

    result = graphql_sync(schema, '{ hello(name: "ADA") }')
    assert result.errors[0].extensions["details"][0]["type"] == "string.lowercase"


def test_pattern_input_requires_a_pattern():
    schema = build_schema(f"{create_directive_sdl()}\ntype Query {{ ok: Boolean }}")
    fields = schema.get_type("ValidatePatternInput").fields
    assert is_non_null_type(fields["pattern"].type)
    assert not is_non_null_type(fields["flags"].type)
