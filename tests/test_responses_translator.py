"""Tests for the Responses API translator."""

import json

import pytest

from zaiproxy.responses.translator import (
    FALLBACK_USER_MESSAGE,
    build_messages,
    chat_response_to_response,
    content_part_text,
    convert_input_item,
    responses_to_chat_request,
)

DEFAULT_MODEL = "glm-4.7"


# =============================================================================
# Message building
# =============================================================================


def test_empty_input_without_instructions_gets_fallback():
    request = responses_to_chat_request({"input": []}, DEFAULT_MODEL)

    assert request["messages"] == [{"role": "user", "content": FALLBACK_USER_MESSAGE}]
    assert FALLBACK_USER_MESSAGE == "Please respond."


def test_instructions_and_string_input():
    request = responses_to_chat_request(
        {"instructions": "Be terse.", "input": "Hi"}, DEFAULT_MODEL
    )

    assert request["messages"] == [
        {"role": "system", "content": "Be terse."},
        {"role": "user", "content": "Hi"},
    ]


def test_empty_or_non_string_instructions_are_ignored():
    assert build_messages("", "Hi") == [{"role": "user", "content": "Hi"}]
    assert build_messages(["nope"], "Hi") == [{"role": "user", "content": "Hi"}]


def test_instructions_only_still_gets_a_user_turn():
    assert build_messages("Be terse.", None) == [
        {"role": "system", "content": "Be terse."},
        {"role": "user", "content": FALLBACK_USER_MESSAGE},
    ]


def test_fallback_added_when_no_user_role_survives():
    messages = build_messages(None, [{"role": "assistant", "content": "Earlier answer"}])

    assert messages == [
        {"role": "assistant", "content": "Earlier answer"},
        {"role": "user", "content": FALLBACK_USER_MESSAGE},
    ]


def test_bare_string_items_become_user_messages():
    assert build_messages(None, ["one", "two"]) == [
        {"role": "user", "content": "one"},
        {"role": "user", "content": "two"},
    ]


def test_role_message_roles_are_normalized():
    messages = build_messages(
        None,
        [
            {"role": "developer", "content": "Rules"},
            {"role": "user", "content": "Question"},
            {"role": "function", "content": "{\"ok\":true}"},
        ],
    )

    assert [m["role"] for m in messages] == ["system", "user", "tool"]


def test_role_message_content_parts_are_concatenated():
    item = {
        "role": "user",
        "content": [
            {"type": "input_text", "text": "Hello "},
            {"type": "text", "text": "world"},
            "!",
        ],
    }

    assert convert_input_item(item) == {"role": "user", "content": "Hello world!"}


def test_unknown_content_parts_are_serialized_not_dropped():
    image = {"type": "input_image", "image_url": "https://example.test/cat.png"}
    item = {"role": "user", "content": [{"type": "input_text", "text": "Look: "}, image]}

    message = convert_input_item(item)

    assert message["content"] == "Look: " + json.dumps(image, separators=(",", ":"))


def test_content_part_text_arms():
    assert content_part_text({"type": "text", "text": "a"}) == "a"
    assert content_part_text({"type": "input_text", "text": "b"}) == "b"
    assert content_part_text({"type": "text"}) == ""
    assert content_part_text("c") == "c"
    assert content_part_text({"type": "refusal", "refusal": "no"}) == '{"type":"refusal","refusal":"no"}'


def test_assistant_message_without_content_is_kept():
    message = convert_input_item({"role": "assistant"})

    assert message is not None
    assert message["role"] == "assistant"
    assert message["content"] == '""'


def test_role_without_content_is_skipped_for_non_assistants():
    assert convert_input_item({"role": "user"}) is None


@pytest.mark.parametrize("item_type", ["text", "input_text"])
def test_text_items_become_user_messages(item_type):
    assert convert_input_item({"type": item_type, "text": "hey"}) == {
        "role": "user",
        "content": "hey",
    }


def test_text_item_without_text_is_skipped():
    assert convert_input_item({"type": "input_text", "text": ""}) is None


def test_typed_message_item_with_parts():
    item = {
        "type": "message",
        "content": [
            {"type": "input_text", "text": "a"},
            {"type": "input_image", "image_url": "x"},
            {"type": "text", "text": "b"},
        ],
    }

    assert convert_input_item(item) == {"role": "user", "content": "ab"}


def test_typed_message_item_with_object_content_is_serialized():
    item = {"type": "message", "content": {"text": "odd"}}

    assert convert_input_item(item) == {"role": "user", "content": '{"text":"odd"}'}


@pytest.mark.parametrize(
    ("content", "expected"),
    [([], ""), ({}, "{}")],
)
def test_typed_message_item_with_empty_container_is_kept(content, expected):
    item = {"type": "message", "content": content}

    assert convert_input_item(item) == {"role": "user", "content": expected}


def test_empty_typed_message_is_a_user_turn_not_the_fallback():
    request = responses_to_chat_request(
        {"input": [{"type": "message", "content": []}]}, DEFAULT_MODEL
    )

    assert request["messages"] == [{"role": "user", "content": ""}]


def test_role_message_with_empty_object_content_is_serialized():
    message = convert_input_item({"role": "user", "content": {}})

    assert message == {"role": "user", "content": "{}"}


def test_non_string_part_text_is_stringified():
    role_item = {
        "role": "user",
        "content": [{"type": "text", "text": 5}, {"type": "input_text", "text": "!"}],
    }
    typed_item = {
        "type": "message",
        "content": [{"type": "input_text", "text": 5}, {"type": "text", "text": None}],
    }

    assert convert_input_item(role_item)["content"] == "5!"
    assert convert_input_item(typed_item)["content"] == "5"
    assert content_part_text({"type": "text", "text": True}) == "true"
    assert content_part_text({"type": "text", "text": 0}) == ""


@pytest.mark.parametrize(
    "item",
    [
        {"type": "function_call_output", "call_id": "c1", "output": "42"},
        {"type": "message", "content": ""},
        {"something": "else"},
        42,
        None,
    ],
)
def test_unsupported_items_are_skipped(item):
    assert convert_input_item(item) is None


def test_final_pass_normalizes_every_role():
    # Normalized once while classifying; the final pass leaves "system" alone
    messages = build_messages(
        None,
        [
            {"type": "message", "role": "developer", "content": "sys"},
            "hello",
        ],
    )

    assert messages == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hello"},
    ]


# =============================================================================
# Parameter copying
# =============================================================================


def test_model_defaults_and_optional_fields_absent():
    request = responses_to_chat_request({"input": "Hi"}, DEFAULT_MODEL)

    assert set(request) == {"model", "messages"}
    assert request["model"] == DEFAULT_MODEL


def test_sampling_params_copied():
    request = responses_to_chat_request(
        {"input": "Hi", "model": "glm-4.5", "temperature": 0.2, "top_p": 0.5, "max_tokens": 10},
        DEFAULT_MODEL,
    )

    assert request["model"] == "glm-4.5"
    assert request["temperature"] == 0.2
    assert request["top_p"] == 0.5
    assert request["max_tokens"] == 10


def test_max_output_tokens_wins_over_max_tokens():
    request = responses_to_chat_request(
        {"input": "Hi", "max_tokens": 10, "max_output_tokens": 99}, DEFAULT_MODEL
    )
    assert request["max_tokens"] == 99
    assert "max_output_tokens" not in request


def test_text_format_becomes_response_format():
    schema = {"type": "json_schema", "name": "answer", "schema": {"type": "object"}}
    request = responses_to_chat_request({"input": "Hi", "text": {"format": schema}}, DEFAULT_MODEL)

    assert request["response_format"] == schema


def test_response_format_wins_over_text_format():
    request = responses_to_chat_request(
        {
            "input": "Hi",
            "text": {"format": {"type": "json_schema"}},
            "response_format": {"type": "json_object"},
        },
        DEFAULT_MODEL,
    )

    assert request["response_format"] == {"type": "json_object"}


def test_empty_response_format_still_wins_over_text_format():
    request = responses_to_chat_request(
        {
            "input": "Hi",
            "text": {"format": {"type": "json_schema"}},
            "response_format": {},
        },
        DEFAULT_MODEL,
    )

    assert request["response_format"] == {}


@pytest.mark.parametrize("response_format", [None, False, ""])
def test_unset_response_format_keeps_text_format(response_format):
    request = responses_to_chat_request(
        {
            "input": "Hi",
            "text": {"format": {"type": "json_schema"}},
            "response_format": response_format,
        },
        DEFAULT_MODEL,
    )

    assert request["response_format"] == {"type": "json_schema"}


def test_non_object_text_format_is_ignored():
    request = responses_to_chat_request({"input": "Hi", "text": {"format": "json"}}, DEFAULT_MODEL)
    assert "response_format" not in request


def test_tools_copied_only_when_list():
    tools = [{"type": "function", "function": {"name": "lookup"}}]

    assert responses_to_chat_request({"input": "Hi", "tools": tools}, DEFAULT_MODEL)["tools"] == tools
    assert responses_to_chat_request({"input": "Hi", "tools": []}, DEFAULT_MODEL)["tools"] == []
    assert "tools" not in responses_to_chat_request(
        {"input": "Hi", "tools": {"name": "lookup"}}, DEFAULT_MODEL
    )


@pytest.mark.parametrize("tool_choice", ["auto", "none", None, {"type": "function", "name": "f"}])
def test_tool_choice_copied_whenever_given(tool_choice):
    request = responses_to_chat_request({"input": "Hi", "tool_choice": tool_choice}, DEFAULT_MODEL)

    assert "tool_choice" in request
    assert request["tool_choice"] == tool_choice


# =============================================================================
# Chat Completions → Responses API
# =============================================================================


def test_text_response_envelope():
    completion = {
        "id": "chatcmpl-9",
        "created": 1700000000,
        "model": "glm-4.7",
        "choices": [{"message": {"content": "42"}}],
        "usage": {"total_tokens": 3},
    }

    response = chat_response_to_response(completion, {"model": "glm-4.5"})

    assert response["id"] == "chatcmpl-9"
    assert response["object"] == "response"
    assert response["created"] == 1700000000
    assert response["model"] == "glm-4.7"
    assert response["output_text"] == "42"
    assert response["status"] == "completed"
    assert response["usage"] == {"total_tokens": 3}
    item = response["output"][0]
    assert item["type"] == "message"
    assert item["id"].startswith("msg-")
    assert item["role"] == "assistant"
    assert item["status"] == "completed"
    assert item["content"] == [{"type": "output_text", "text": "42"}]


def test_minimal_backend_response():
    response = chat_response_to_response({"choices": [{"message": {"content": "42"}}]}, {"model": "glm-4.7"})

    assert response["output_text"] == "42"
    assert response["output"][0]["content"][0]["text"] == "42"
    assert response["id"].startswith("resp-")
    assert response["model"] == "glm-4.7"
    assert "usage" not in response


@pytest.mark.parametrize("completion", [{}, {"choices": []}, {"choices": [{}]}, {"choices": "bad"}])
def test_missing_choices_produce_empty_text(completion):
    response = chat_response_to_response(completion, {"model": "glm-4.7"})

    assert response["output_text"] == ""
    assert response["output"][0]["content"][0]["text"] == ""


def test_tool_calls_replace_message_output():
    completion = {
        "choices": [{
            "message": {
                "content": "Calling tools",
                "tool_calls": [
                    {"id": "call_1", "type": "function", "function": {"name": "lookup", "arguments": "{\"q\":\"x\"}"}},
                    {"id": "call_2", "type": "function", "function": {"name": "fetch", "arguments": "{}"}},
                ],
            },
        }],
    }

    response = chat_response_to_response(completion, {"model": "glm-4.7"})

    assert [item["type"] for item in response["output"]] == ["function_call", "function_call"]
    assert response["output"][0] == {
        "type": "function_call",
        "id": "call_1",
        "call_id": "call_1",
        "name": "lookup",
        "arguments": "{\"q\":\"x\"}",
    }
    assert response["output"][1]["name"] == "fetch"
    # output_text and status are left as built from the message content
    assert response["output_text"] == "Calling tools"
    assert response["status"] == "completed"


def test_empty_tool_calls_keep_message_output():
    completion = {"choices": [{"message": {"content": "hi", "tool_calls": []}}]}

    response = chat_response_to_response(completion, {"model": "glm-4.7"})

    assert [item["type"] for item in response["output"]] == ["message"]
