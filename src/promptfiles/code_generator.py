"""Remote file generation through a chat model."""

import logging
from typing import Any, Optional

from pydantic import SecretStr

from promptfiles.components.models import ModelRegistry
from promptfiles.components.types import GenerationRequest
from promptfiles.prompts import format_messages

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when the remote model does not produce a usable response."""

    pass


class EmptyResponseError(GenerationError):
    """Raised when the model returns no output."""

    pass


class MalformedResponseError(GenerationError):
    """Raised when the response has no readable text part."""

    pass


class FileGeneratorAgent:
    """Sends generation requests to a model and returns its raw text."""

    def __init__(
        self,
        model_registry: ModelRegistry,
        model_name: str,
        api_key: SecretStr,
        timeout: Optional[float] = None,
    ):
        self.model_registry = model_registry
        self.model_name = model_name
        self.api_key = api_key
        self.timeout = timeout

    def generate(self, request: GenerationRequest) -> str:
        """Run one blocking generation call.

        Args:
            request: Instruction and declared response schema

        Returns:
            The response text, expected to hold a JSON array of file records

        Raises:
            ValueError: If the model is not configured
            GenerationError: If the client cannot be created or the call fails
            EmptyResponseError: If the model returned nothing
            MalformedResponseError: If the response carries no text part
        """
        messages = format_messages(
            request,
            supports_response_schema=self.model_registry.supports_response_schema(self.model_name),
            supports_system_prompt=self.model_registry.supports_system_prompt(self.model_name),
        )

        try:
            model = self.model_registry.get_model(self.model_name, self.api_key, request, self.timeout)
        except Exception as e:
            raise GenerationError(f"Error creating client: {e}") from e

        logger.info("Requesting files from %s", self.model_name)
        try:
            response = model.invoke(messages)
        except Exception as e:
            raise GenerationError(f"Error generating content: {e}") from e

        return self._extract_text(response)

    def _extract_text(self, response: Any) -> str:
        """Return the first text part of a model response."""
        content = getattr(response, "content", response)
        if content is None:
            raise EmptyResponseError("No response received")

        if isinstance(content, str):
            if not content.strip():
                raise EmptyResponseError("No response received")
            return content

        if isinstance(content, list):
            if not content:
                raise MalformedResponseError("Response contains no parts")
            part = content[0]
            if isinstance(part, str):
                text = part
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                text = part["text"]
            else:
                raise MalformedResponseError(f"Unexpected response part: {type(part).__name__}")
            if not text.strip():
                raise EmptyResponseError("No response received")
            return text

        raise MalformedResponseError(f"Unexpected response content: {type(content).__name__}")
