"""Tests for parameter schema translation."""

import pytest
from pydantic import ValidationError

from actionkit_mcp.catalog import ActionDescriptor
from actionkit_mcp.errors import UnsupportedTypeError
from actionkit_mcp.schema import (
    STRING_LENGTH,
    PropertyKind,
    StringLengthMode,
    translate,
)
from tests.fixtures.actionkit_responses import GITHUB_CREATE_ISSUE, SLACK_SEND_MESSAGE


def make_descriptor(properties, required=(), name="test_action"):
    return ActionDescriptor.model_validate({
        "name": name,
        "description": "Test action",
        "parameters": {
            "type": "object",
            "properties": properties,
            "required": list(required),
        },
    })


@pytest.fixture
def ab_schema():
    """a: required string, b: optional boolean."""
    return translate(make_descriptor(
        {"a": {"type": "string"}, "b": {"type": "boolean"}},
        required=["a"],
    ))


class TestRequiredOptional:
    """Tests for required/optional semantics."""

    def test_accepts_required_only(self, ab_schema):
        assert ab_schema.validate({"a": "x"}) == {"a": "x"}

    def test_accepts_explicit_null_for_optional(self, ab_schema):
        assert ab_schema.validate({"a": "x", "b": None}) == {"a": "x", "b": None}

    def test_accepts_optional_value(self, ab_schema):
        assert ab_schema.validate({"a": "x", "b": True}) == {"a": "x", "b": True}

    def test_rejects_missing_required(self, ab_schema):
        with pytest.raises(ValidationError):
            ab_schema.validate({})

    def test_rejects_none_arguments_when_required(self, ab_schema):
        with pytest.raises(ValidationError):
            ab_schema.validate(None)

    def test_rejects_wrong_type(self, ab_schema):
        with pytest.raises(ValidationError):
            ab_schema.validate({"a": 123})

    def test_rejects_null_for_required(self, ab_schema):
        with pytest.raises(ValidationError):
            ab_schema.validate({"a": None})

    def test_rules_record_required_flag(self, ab_schema):
        assert ab_schema.rules["a"].required is True
        assert ab_schema.rules["b"].required is False
        assert ab_schema.required == ["a"]

    def test_unknown_keys_are_dropped(self, ab_schema):
        assert ab_schema.validate({"a": "x", "extra": 1}) == {"a": "x"}


class TestTypeKinds:
    """Tests for the four supported type kinds."""

    def test_string_max_length(self):
        schema = translate(make_descriptor({"s": {"type": "string"}}, required=["s"]))

        assert schema.validate({"s": "y" * STRING_LENGTH}) == {"s": "y" * STRING_LENGTH}
        with pytest.raises(ValidationError):
            schema.validate({"s": "y" * (STRING_LENGTH + 1)})

    def test_string_exact_length_mode(self):
        schema = translate(
            make_descriptor({"s": {"type": "string"}}, required=["s"]),
            StringLengthMode.EXACT,
        )

        assert schema.validate({"s": "y" * STRING_LENGTH})
        with pytest.raises(ValidationError):
            schema.validate({"s": "short"})

    def test_exact_mode_optional_may_be_omitted(self):
        schema = translate(
            make_descriptor({"s": {"type": "string"}}),
            "exact",
        )
        assert schema.validate({}) == {}

    def test_object_is_carried_as_string(self):
        schema = translate(make_descriptor({"o": {"type": "object"}}, required=["o"]))

        assert schema.rules["o"].kind == PropertyKind.OBJECT
        assert schema.validate({"o": '{"k": 1}'}) == {"o": '{"k": 1}'}
        with pytest.raises(ValidationError):
            schema.validate({"o": {"k": 1}})

    def test_boolean_is_strict(self):
        schema = translate(make_descriptor({"flag": {"type": "boolean"}}, required=["flag"]))

        assert schema.validate({"flag": False}) == {"flag": False}
        with pytest.raises(ValidationError):
            schema.validate({"flag": "yes"})

    def test_array_of_strings(self):
        schema = translate(make_descriptor({"tags": {"type": "array"}}, required=["tags"]))

        assert schema.validate({"tags": []}) == {"tags": []}
        assert schema.validate({"tags": ["a", "b"] * 300}) == {"tags": ["a", "b"] * 300}
        with pytest.raises(ValidationError):
            schema.validate({"tags": [1, 2]})

    def test_optional_array_accepts_null(self):
        schema = translate(make_descriptor({"tags": {"type": "array"}}))
        assert schema.validate({"tags": None}) == {"tags": None}

    @pytest.mark.parametrize("kind", ["integer", "number", "null", "date"])
    def test_unsupported_kind_raises(self, kind):
        descriptor = make_descriptor({"ok": {"type": "string"}, "bad": {"type": kind}})

        with pytest.raises(UnsupportedTypeError) as exc_info:
            translate(descriptor)

        assert exc_info.value.action_name == "test_action"
        assert exc_info.value.property_name == "bad"
        assert exc_info.value.kind == kind

    def test_missing_type_raises(self):
        with pytest.raises(UnsupportedTypeError):
            translate(make_descriptor({"untyped": {"description": "no type"}}))

    def test_type_union_raises(self):
        descriptor = make_descriptor({"maybe": {"type": ["string", "null"]}})

        with pytest.raises(UnsupportedTypeError) as exc_info:
            translate(descriptor)

        assert exc_info.value.kind == ["string", "null"]


class TestTranslation:
    """Tests for schema generation as a whole."""

    def test_idempotent(self):
        descriptor = ActionDescriptor.model_validate(GITHUB_CREATE_ISSUE)
        first = translate(descriptor)
        second = translate(descriptor)

        cases = [
            {"repo": "o/r", "title": "t"},
            {"repo": "o/r", "title": "t", "labels": ["bug"], "draft": None},
            {"repo": "o/r"},
            {"repo": "o/r", "title": 5},
        ]
        for case in cases:
            outcomes = []
            for schema in (first, second):
                try:
                    outcomes.append(schema.validate(case))
                except ValidationError:
                    outcomes.append("invalid")
            assert outcomes[0] == outcomes[1]

        assert first.json_schema() == second.json_schema()

    def test_names_clashing_with_model_attributes(self):
        schema = translate(make_descriptor(
            {"model_config": {"type": "string"}, "json": {"type": "boolean"}, "first-name": {"type": "string"}},
            required=["model_config"],
        ))

        result = schema.validate({"model_config": "a", "json": True, "first-name": "b"})
        assert result == {"model_config": "a", "json": True, "first-name": "b"}

    def test_json_schema_uses_original_names(self):
        schema = translate(ActionDescriptor.model_validate(SLACK_SEND_MESSAGE))
        json_schema = schema.json_schema()

        assert json_schema["type"] == "object"
        assert set(json_schema["properties"]) == {"channel", "urgent"}
        assert json_schema["required"] == ["channel"]
        assert json_schema["properties"]["channel"]["description"] == "Channel ID"

    def test_required_must_name_declared_parameters(self):
        with pytest.raises(ValueError, match="unknown parameters: missing"):
            translate(make_descriptor({"a": {"type": "string"}}, required=["a", "missing"]))

    def test_empty_parameters(self):
        schema = translate(make_descriptor({}))

        assert schema.rules == {}
        assert schema.validate({}) == {}
        assert schema.validate(None) == {}

    def test_rules_are_read_only(self, ab_schema):
        with pytest.raises(TypeError):
            ab_schema.rules["c"] = ab_schema.rules["a"]
