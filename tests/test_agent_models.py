import pytest
from pydantic import ValidationError

from agentstore.models.agent import (
    AGENT_FIELD_RULES,
    AgentCreateRequest,
    AgentRunRequest,
    check_run_input,
)

VALID = {
    "name": "Travel Bot",
    "description": "Plans trips and itineraries",
    "system_prompt": "You are a helpful travel assistant that suggests destinations.",
}


@pytest.mark.parametrize(
    "field,low,high,label",
    [
        ("name", 3, 100, "Name"),
        ("description", 10, 500, "Description"),
        ("system_prompt", 20, 2000, "System prompt"),
    ],
)
def test_length_bounds(field, low, high, label):
    rule = AGENT_FIELD_RULES[field]

    assert rule.check("x" * low) is None
    assert rule.check("x" * high) is None
    assert rule.check("x" * (low - 1)) == f"{label} must be at least {low} characters"
    assert rule.check("x" * (high + 1)) == f"{label} must not exceed {high} characters"


@pytest.mark.parametrize("value", [None, "", 42, ["Travel Bot"]])
def test_missing_or_non_string_is_required(value):
    assert AGENT_FIELD_RULES["name"].check(value) == "Name is required and must be a string"


def test_lengths_measured_after_trim():
    rule = AGENT_FIELD_RULES["name"]
    assert rule.check("   ab   ") == "Name must be at least 3 characters"
    assert rule.check("  " + "x" * 100 + "  ") is None


def test_create_request_trims_fields():
    body = AgentCreateRequest.model_validate(
        {k: f"  {v}\n" for k, v in VALID.items()}
    )
    assert body.name == "Travel Bot"
    assert body.description == VALID["description"]
    assert body.system_prompt == VALID["system_prompt"]


def test_create_request_reports_every_field():
    with pytest.raises(ValidationError) as exc:
        AgentCreateRequest.model_validate({"name": "ab"})

    errors = {e["loc"][0]: e for e in exc.value.errors()}
    assert set(errors) == {"name", "description", "system_prompt"}
    assert {e["type"] for e in errors.values()} == {"agent_field"}
    assert errors["name"]["msg"] == "Name must be at least 3 characters"
    assert errors["description"]["msg"] == "Description is required and must be a string"


def test_create_request_ignores_unknown_fields():
    body = AgentCreateRequest.model_validate({**VALID, "id": "forged"})
    assert not hasattr(body, "id")


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "Input message is required"),
        ("", "Input message is required"),
        (7, "Input message is required"),
        ("   \n", "Input message cannot be empty"),
        ("x" * 5001, "Input message is too long (max 5000 characters)"),
        ("x" * 5000, None),
        ("  " + "x" * 5000 + "  ", None),
    ],
)
def test_run_input_rules(value, expected):
    assert check_run_input(value) == expected


def test_run_request_trims_input():
    assert AgentRunRequest.model_validate({"input": "  hello  "}).input == "hello"
