"""Request building for file generation."""

import json
from typing import Any

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate

from promptfiles.components.types import GenerationRequest
from promptfiles.constants import RESPONSE_MIME_TYPE

INSTRUCTION_PREFIX = "Based on the following request, generate the necessary code files:"

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "array",
    "description": "List of all of the filenames and source code in the files.",
    "items": {
        "type": "object",
        "description": "Object representing file.",
        "properties": {
            "file_name": {
                "type": "string",
                "description": "Name of the file: relative_path/file_name.file_extension",
            },
            "source_code": {
                "type": "string",
                "description": "Source code located in the file.",
            },
        },
        "required": ["file_name", "source_code"],
    },
}

FORMAT_INSTRUCTIONS = """You must respond with a JSON array and nothing else.
The array must match the following JSON schema:
{schema}

Each element describes one file. Put the path relative to the project root in "file_name" and the complete file content in "source_code"."""


def build_instruction(prompt: str) -> str:
    return f"{INSTRUCTION_PREFIX}\n\n{prompt}"


def build_request(prompt: str) -> GenerationRequest:
    """Wrap a raw user prompt into a generation request.

    The schema is static and does not depend on the prompt.
    """
    return GenerationRequest(
        prompt=prompt,
        instruction=build_instruction(prompt),
        response_schema=RESPONSE_SCHEMA,
        response_mime_type=RESPONSE_MIME_TYPE,
    )


def format_instructions(request: GenerationRequest) -> str:
    return FORMAT_INSTRUCTIONS.format(schema=json.dumps(request.response_schema, indent=2))


def format_messages(request: GenerationRequest, supports_response_schema: bool = True, supports_system_prompt: bool = True) -> list[BaseMessage]:
    """Render chat messages for a generation request.

    Args:
        request: The generation request
        supports_response_schema: Whether the model enforces the schema natively
        supports_system_prompt: Whether the model supports system prompts

    Returns:
        List of formatted messages for the model
    """
    # Request text is passed as template variables so braces in user prompts stay literal
    if supports_response_schema:
        chat_prompt = ChatPromptTemplate.from_messages([("user", "{instruction}")])
        return chat_prompt.format_messages(instruction=request.instruction)

    if supports_system_prompt:
        chat_prompt = ChatPromptTemplate.from_messages([("system", "{format_instructions}"), ("user", "{instruction}")])
    else:
        chat_prompt = ChatPromptTemplate.from_messages([("user", "<instructions>{format_instructions}</instructions>\n\n<question>{instruction}</question>")])

    return chat_prompt.format_messages(instruction=request.instruction, format_instructions=format_instructions(request))
