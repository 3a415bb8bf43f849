"""Output parsers for file generation responses."""

import json
import re

from langchain_core.output_parsers import BaseOutputParser
from pydantic import TypeAdapter, ValidationError

from promptfiles.components.types import FileRecord

_FILE_RECORDS = TypeAdapter(list[FileRecord])
_CODE_FENCE = re.compile(r"\A```[\w-]*\s*\n(?P<body>.*?)\n?```\Z", re.DOTALL)


class ParseError(Exception):
    """Raised when response parsing fails."""

    pass


class FileRecordsParser(BaseOutputParser[list[FileRecord]]):
    """Parser for a JSON array of file records.

    Parsing is all-or-nothing: a single invalid element rejects the whole
    response.
    """

    def parse(self, text: str) -> list[FileRecord]:
        """Parse the response text into file records."""
        content = self._strip_code_fence(text.strip())

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON response: {e}") from e

        try:
            return _FILE_RECORDS.validate_python(data)
        except ValidationError as e:
            raise ParseError(f"Response does not match the file schema: {e}") from e

    def _strip_code_fence(self, text: str) -> str:
        """Remove a surrounding Markdown code fence if present."""
        match = _CODE_FENCE.match(text)
        if match:
            return match.group("body").strip()
        return text

    @property
    def _type(self) -> str:
        return "file_records"
