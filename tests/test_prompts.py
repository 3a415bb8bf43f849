import json

from langchain_core.messages import HumanMessage, SystemMessage

from promptfiles.prompts import RESPONSE_SCHEMA, build_instruction, build_request, format_instructions, format_messages


def test_build_instruction_prefixes_prompt():
    assert build_instruction("a todo app") == "Based on the following request, generate the necessary code files:\n\na todo app"


def test_build_request_empty_prompt_is_forwarded():
    request = build_request("")
    assert request.prompt == ""
    assert request.instruction.endswith(":\n\n")


def test_build_request_schema_is_static():
    """Test that the declared schema does not depend on the prompt"""
    first = build_request("one")
    second = build_request("something else entirely")

    assert first.response_schema == second.response_schema == RESPONSE_SCHEMA
    assert first.response_mime_type == "application/json"


def test_response_schema_shape():
    items = RESPONSE_SCHEMA["items"]
    assert RESPONSE_SCHEMA["type"] == "array"
    assert items["type"] == "object"
    assert set(items["properties"]) == {"file_name", "source_code"}
    assert all(prop["type"] == "string" for prop in items["properties"].values())
    assert items["required"] == ["file_name", "source_code"]


def test_format_messages_with_native_schema():
    """Test that schema-aware models only receive the instruction"""
    request = build_request("make a CLI")
    messages = format_messages(request, supports_response_schema=True)

    assert len(messages) == 1
    assert isinstance(messages[0], HumanMessage)
    assert messages[0].content == request.instruction


def test_format_messages_embeds_schema_in_system_prompt():
    request = build_request("make a CLI")
    messages = format_messages(request, supports_response_schema=False, supports_system_prompt=True)

    assert len(messages) == 2
    assert isinstance(messages[0], SystemMessage)
    assert '"file_name"' in messages[0].content
    assert messages[1].content == request.instruction


def test_format_messages_without_system_prompt():
    """Test prompt formatting when system prompts aren't supported"""
    messages = format_messages(build_request("make a CLI"), supports_response_schema=False, supports_system_prompt=False)

    assert len(messages) == 1
    assert isinstance(messages[0], HumanMessage)
    assert "<instructions>" in messages[0].content
    assert "<question>" in messages[0].content


def test_format_messages_keeps_braces_literal():
    """Test that braces in a prompt are not treated as template variables"""
    request = build_request('return {"status": "ok"} from {endpoint}')
    messages = format_messages(request, supports_response_schema=False)

    assert '{"status": "ok"} from {endpoint}' in messages[-1].content


def test_format_instructions_contains_schema():
    text = format_instructions(build_request("x"))
    start = text.index("{")
    end = text.rindex("}") + 1
    assert json.loads(text[start:end]) == RESPONSE_SCHEMA
