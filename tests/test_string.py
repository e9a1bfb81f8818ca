"""String validation through the directive."""

from __future__ import annotations

import pytest
from graphql import graphql_sync

from validate_directive import build_validated_schema

V1_GUID = "d9428888-122b-11e1-b85c-61cd3cbb3210"
V4_GUID = "3b241101-e2bb-4255-8caf-4136c566a962"


@pytest.fixture
def check(run):
    """Call ``validate`` with a single String argument."""

    def _check(argument: str, value):
        query = f"query ($v: String) {{ validate({argument}: $v) }}"
        return run(query, {"v": value})

    return _check


@pytest.mark.parametrize(
    ("argument", "value"),
    [
        ("alphanum", "abc123"),
        ("base64", "VE9PTUFOWVNFQ1JFVFM"),
        ("case", "ABC"),
        ("creditCard", "4111111111111111"),
        ("dataUri", "data:text/plain;base64,SGVsbG8="),
        ("domain", "example.com"),
        ("email", "someone@example.com"),
        ("guid", V1_GUID),
        ("hex", "0123abcdef"),
        ("hostname", "www.example.com"),
        ("hostname", "2001:db8::1"),
        ("ip", "2001:db8::/32"),
        ("isoDate", "2018-11-28T18:25:32+00:00"),
        ("isoDuration", "P3Y6M4DT12H30M5S"),
        ("length", "abcd"),
        ("lowercase", "abc"),
        ("maxLength", "abc"),
        ("minLength", "abcd"),
        ("normalize", "\u00e9"),
        ("pattern", "ABCCC"),
        ("regex", "xyz"),
        ("token", "a_b_1"),
        ("trim", "abc"),
        ("uppercase", "ABC"),
        ("uuid", V1_GUID.replace("-", ":")),
    ],
)
def test_valid_values_pass(check, argument, value):
    result = check(argument, value)
    assert result.errors is None
    assert result.data == {"validate": True}


@pytest.mark.parametrize(
    ("argument", "value", "code"),
    [
        ("alphanum", "abc-123", "string.alphanum"),
        ("base64", "not base64!", "string.base64"),
        ("case", "abc", "string.uppercase"),
        ("creditCard", "4111111111111112", "string.creditCard"),
        ("dataUri", "data:text/plain;base64,SGVsbG8", "string.dataUri"),
        ("dataUri", "no uri here", "string.dataUri"),
        ("domain", "localhost", "string.domain"),
        ("email", "someone@localhost", "string.email"),
        ("guid", V4_GUID, "string.guid"),
        ("hex", "xyz", "string.hex"),
        ("hostname", "not_a_host!", "string.hostname"),
        ("isoDate", "2018-13-45", "string.isoDate"),
        ("isoDuration", "3 days", "string.isoDuration"),
        ("length", "abc", "string.length"),
        ("length", "abcé", "string.length"),
        ("lowercase", "ABC", "string.lowercase"),
        ("maxLength", "abcd", "string.max"),
        ("minLength", "abc", "string.min"),
        ("token", "a-b", "string.token"),
        ("trim", " abc ", "string.trim"),
        ("uppercase", "abc", "string.uppercase"),
        ("uuid", V1_GUID, "string.guid"),
    ],
)
def test_invalid_values_fail(check, first_detail, argument, value, code):
    detail = first_detail(check(argument, value))
    assert detail["type"] == code
    assert detail["path"] == [argument]
    assert detail["context"]["value"] == value


def test_empty_string_passes_rules_without_length(check):
    assert check("lowercase", "").errors is None
    assert check("pattern", "").errors is not None


def test_empty_string_below_minimum_length(check, first_detail):
    detail = first_detail(check("minLength", ""))
    assert detail["type"] == "string.empty"
    assert detail["message"] == '"minLength" is not allowed to be empty'


def test_null_passes(check):
    assert check("lowercase", None).errors is None


# -- Messages and context ---------------------------------------------------


def test_length_counts_encoded_bytes(check, first_detail):
    assert first_detail(check("length", "abcé")) == {
        "context": {
            "encoding": "utf8",
            "key": "length",
            "label": "length",
            "limit": 4,
            "value": "abcé",
        },
        "message": '"length" length must be 4 characters long',
        "path": ["length"],
        "type": "string.length",
    }


def test_ip_version_failure(check, first_detail):
    detail = first_detail(check("ip", "192.168.0.1"))
    assert detail["type"] == "string.ipVersion"
    assert detail["context"]["version"] == ["ipv6"]
    assert detail["context"]["cidr"] == "optional"
    assert detail["message"] == (
        '"ip" must be a valid ip address of one of the following versions '
        "[ipv6] with a optional CIDR"
    )


def test_named_pattern_failure(check, first_detail):
    detail = first_detail(check("pattern", "abd"))
    assert detail["type"] == "string.pattern.name"
    assert detail["message"] == (
        '"pattern" with value "abd" fails to match the xyz pattern'
    )


def test_inverted_pattern_failure(check, first_detail):
    detail = first_detail(check("regex", "abcc"))
    assert detail["type"] == "string.pattern.invert.base"
    assert detail["message"] == (
        '"regex" with value "abcc" matches the inverted pattern: ^abc+$'
    )


def test_normalize_failure_reports_form(check, first_detail):
    detail = first_detail(check("normalize", "e\u0301"))
    assert detail["type"] == "string.normalize"
    assert detail["context"]["form"] == "NFC"


# -- Other fields -----------------------------------------------------------


def test_prefs_convert_forwards_trimmed_value(run):
    result = run('{ echoString(trim: "  padded  ") }')
    assert result.errors is None
    assert result.data == {"echoString": "padded"}


def test_non_nullable_argument(run, first_detail):
    assert run('{ nonNullable(foo: "abc") }').errors is None

    detail = first_detail(run('{ nonNullable(foo: "ABC") }'))
    assert detail["type"] == "string.lowercase"
    assert detail["path"] == ["foo"]


def test_enum_argument(run):
    result = run("{ enumType(foo: A) }")
    assert result.errors is None
    assert result.data == {"enumType": True}


def test_bare_string_argument_accepts_empty():
    schema = build_validated_schema(
        "type Query { f(s: String @validate): String }",
        {"Query": {"f": lambda root, info, s: s}},
    )
    result = graphql_sync(schema, '{ f(s: "") }')
    assert result.errors is None
    assert result.data == {"f": ""}


def test_unannotated_input_field_accepts_empty():
    schema = build_validated_schema(
        """
        input In {
          name: String
          code: String @validate(uppercase: TRUE)
        }
        type Query { f(input: In @validate): Boolean }
        """,
        {"Query": {"f": lambda root, info, input: True}},
    )
    result = graphql_sync(schema, '{ f(input: { name: "", code: "X" }) }')
    assert result.errors is None
    assert result.data == {"f": True}

    result = graphql_sync(schema, '{ f(input: { name: "", code: "x" }) }')
    assert result.errors[0].extensions["details"][0]["path"] == ["input", "code"]
